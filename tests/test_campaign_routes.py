from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.core.config import get_settings
from api.repositories.json_storage import COLLECTION_FILES, InMemoryCollectionStore

BLACK_FRIDAY = {
    "supplier_id": "7a6cc1282c5f6ec0235acd2bfa780145aa2a67fd",
    "name": "Black Friday",
    "start_date": "2023-08-15 16:00:00",
    "end_date": "2023-08-20 23:59:59",
    "discount_percentage": "20",
}


@pytest.fixture()
def memory_client(data_dir):
    stores = {name: InMemoryCollectionStore() for name in COLLECTION_FILES}
    with TestClient(create_app(get_settings(), stores=stores)) as c:
        yield c, stores


def test_create_campaign(client):
    resp = client.post("/campaing", json=BLACK_FRIDAY)
    assert resp.status_code == 201
    body = resp.json()
    assert body["start_date"] == "2023-08-15 16:00:00"
    assert body["end_date"] == "2023-08-20 23:59:59"
    assert body["discount_percentage"] == 20.0


def test_overlapping_campaign_conflicts(client):
    client.post("/campaing", json=BLACK_FRIDAY)
    resp = client.post(
        "/campaing",
        json={**BLACK_FRIDAY, "name": "black friday", "start_date": "2023-08-20 23:59:59", "end_date": "2023-08-25"},
    )
    assert resp.status_code == 409
    assert "error" in resp.json()


def test_non_overlapping_campaign_succeeds(client):
    client.post("/campaing", json=BLACK_FRIDAY)
    later = client.post("/campaing", json={**BLACK_FRIDAY, "start_date": "2023-08-21", "end_date": "2023-08-25"})
    other_name = client.post("/campaing", json={**BLACK_FRIDAY, "name": "Cyber Monday"})
    other_supplier = client.post("/campaing", json={**BLACK_FRIDAY, "supplier_id": "outro"})

    assert later.status_code == 201
    assert other_name.status_code == 201
    assert other_supplier.status_code == 201


@pytest.mark.parametrize(
    "override, message",
    [
        ({"start_date": "amanha"}, "Datas invalidas"),
        ({"start_date": "2023-08-21", "end_date": "2023-08-20"}, "start_date deve ser <= end_date"),
        ({"discount_percentage": "120"}, "discount_percentage deve ser entre 0 e 100"),
        ({"discount_percentage": "-1"}, "discount_percentage deve ser entre 0 e 100"),
    ],
)
def test_campaign_validation(client, override, message):
    resp = client.post("/campaing", json={**BLACK_FRIDAY, **override})
    assert resp.status_code == 400
    assert resp.json() == {"error": message}


def test_campaign_missing_fields(client):
    payload = dict(BLACK_FRIDAY)
    payload.pop("discount_percentage")
    assert client.post("/campaing", json=payload).status_code == 400


def test_campaign_list_filters(client):
    client.post("/campaing", json=BLACK_FRIDAY)
    client.post("/campaing", json={**BLACK_FRIDAY, "name": "Natal", "start_date": "2023-12-01", "end_date": "2023-12-25", "supplier_id": "s2"})

    def names(**params):
        return [c["name"] for c in client.get("/campaing", params=params).json()]

    assert names(name="friday") == ["Black Friday"]
    assert names(supplier_id="s2") == ["Natal"]
    assert names(start_from="2023-09-01") == ["Natal"]
    assert names(start_to="2023-08-15 16:00:00") == ["Black Friday"]
    assert names(end_from="2023-12-25") == ["Natal"]
    assert names(end_to="2023-08-20 23:59:59") == ["Black Friday"]


def test_campaign_update_conflict_and_404(client):
    client.post("/campaing", json=BLACK_FRIDAY)
    cid = client.post("/campaing", json={**BLACK_FRIDAY, "start_date": "2023-09-01", "end_date": "2023-09-05"}).json()["id"]

    assert client.put(f"/campaing/{cid}", json={"start_date": "2023-08-19"}).status_code == 409
    assert client.put(f"/campaing/{cid}", json={"start_date": "2023-09-02"}).json()["start_date"] == "2023-09-02 00:00:00"
    assert client.put("/campaing/nao-existe", json={"name": "x"}).status_code == 404


def test_correctly_spelled_alias_shares_collection(client):
    cid = client.post("/campaing", json=BLACK_FRIDAY).json()["id"]
    assert client.get(f"/campaign/{cid}").json()["name"] == "Black Friday"
    assert client.delete(f"/campaign/{cid}").status_code == 204
    assert client.get("/campaing").json() == []


def test_injected_memory_stores_skip_the_filesystem(memory_client, data_dir):
    client, stores = memory_client
    assert client.post("/campaing", json=BLACK_FRIDAY).status_code == 201
    assert len(stores["campaigns"].read_all()) == 1
    assert not (data_dir / "campaign.json").exists()


def test_index_lists_resources(client):
    body = client.get("/").json()
    assert body["ok"] is True
    assert body["resources"] == ["users", "supplier", "store", "product", "order", "campaing"]


def test_service_lookup_rejects_missing_service_only():
    from types import SimpleNamespace

    from api.routers.crud import get_service

    class EmptyService:
        def __len__(self):
            return 0

    svc = EmptyService()
    request = SimpleNamespace(app=SimpleNamespace(state=SimpleNamespace(services={"campaigns": svc})))
    assert get_service(request, "campaigns") is svc
    with pytest.raises(RuntimeError):
        get_service(request, "orders")
