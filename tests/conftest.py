from __future__ import annotations

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Garante que o pacote api seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from api.app import create_app  # noqa: E402
from api.core import config as core_config  # noqa: E402


@pytest.fixture()
def data_dir(tmp_path, monkeypatch):
    """Aponta DATA_DIR para um diretório temporário e reseta o cache de settings."""
    target = tmp_path / "db"
    monkeypatch.setenv("DATA_DIR", str(target))
    core_config.get_settings.cache_clear()
    yield target
    core_config.get_settings.cache_clear()


@pytest.fixture()
def client(data_dir):
    with TestClient(create_app()) as c:
        yield c
