#!/usr/bin/env python3
"""
Cadastrar um usuario diretamente no arquivo JSON (ex.: primeiro admin).

Uso:
  python scripts/add_user.py --user admin --name "Admin" --email admin@dominio.com [--pwd segredo] [--level admin]
"""
from __future__ import annotations

import argparse
import secrets
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from api.core.config import get_settings  # noqa: E402
from api.repositories.json_storage import json_stores  # noqa: E402
from api.services.errors import EntityError  # noqa: E402
from api.services.user_service import UserService  # noqa: E402


def gen_password(length: int = 12) -> str:
    return secrets.token_urlsafe(length)[:length]


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Cadastrar usuario no arquivo users.json")
    ap.add_argument("--user", required=True, help="Login do usuario")
    ap.add_argument("--name", required=True, help="Nome exibido")
    ap.add_argument("--email", required=True, help="E-mail de contato")
    ap.add_argument("--pwd", help="Senha (default: aleatoria de 12 caracteres)")
    ap.add_argument("--level", default="admin", choices=["admin", "user"])
    ap.add_argument("--data-dir", help="Diretorio dos JSON (default: DATA_DIR)")
    args = ap.parse_args(argv)

    data_dir = args.data_dir or get_settings().data_dir
    svc = UserService(json_stores(data_dir)["users"])
    pwd = (args.pwd or "").strip() or gen_password()
    try:
        created = svc.create(
            {"name": args.name, "contact_email": args.email, "user": args.user, "pwd": pwd, "level": args.level}
        )
    except EntityError as exc:
        sys.stderr.write(f"Erro: {exc.message}\n")
        return 1
    print("OK: usuario cadastrado")
    print(f"  ID: {created['id']}")
    print(f"  User: {created['user']} ({created['level']})")
    if not args.pwd:
        print(f"  Senha gerada: {pwd}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
