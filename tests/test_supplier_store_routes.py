from __future__ import annotations

import json


def test_store_example_create_then_duplicate_cnpj(client, data_dir):
    before = client.get("/store").json()
    resp = client.post("/store", json={"store_name": "A", "cnpj": "123", "contact_email": "a@b.com"})

    assert resp.status_code == 201
    body = resp.json()
    assert body["id"] not in {s["id"] for s in before}
    assert body["status"] == "on"
    assert body["phone_number"] == ""
    assert body["address"] == ""

    dup = client.post("/store", json={"store_name": "B", "cnpj": "123", "contact_email": "b@b.com"})
    assert dup.status_code == 409
    assert dup.json() == {"error": "Ja existe loja com esse CNPJ"}

    stored = json.loads((data_dir / "store.json").read_text(encoding="utf-8"))
    assert [s["store_name"] for s in stored] == ["A"]


def test_store_filters_and_phone_normalization(client):
    client.post("/store", json={"store_name": "Centro", "cnpj": "1", "contact_email": "c@l.com", "phone_number": "(11) 4002-8922"})
    client.post("/store", json={"store_name": "Shopping Sul", "cnpj": "2", "contact_email": "s@l.com", "status": "off"})

    assert [s["store_name"] for s in client.get("/store", params={"status": "off"}).json()] == ["Shopping Sul"]
    centro = client.get("/store", params={"store_name": "cen"}).json()
    assert len(centro) == 1
    assert centro[0]["phone_number"] == "1140028922"


def test_store_update_validates_and_keeps_fields(client):
    sid = client.post("/store", json={"store_name": "A", "cnpj": "1", "contact_email": "a@b.com", "address": "Rua 1"}).json()["id"]
    client.post("/store", json={"store_name": "B", "cnpj": "2", "contact_email": "b@b.com"})

    assert client.put(f"/store/{sid}", json={"contact_email": "nope"}).status_code == 400
    assert client.put(f"/store/{sid}", json={"cnpj": "2"}).status_code == 409

    resp = client.put(f"/store/{sid}", json={"store_name": "A2", "status": "invalid"})
    assert resp.status_code == 200
    assert resp.json()["store_name"] == "A2"
    assert resp.json()["address"] == "Rua 1"
    assert resp.json()["status"] == "on"


def test_supplier_duplicate_pair_is_case_insensitive(client):
    payload = {"supplier_name": "Acme", "contact_email": "vendas@acme.com", "phone_number": "+55 11 9999-0000"}
    first = client.post("/supplier", json=payload)
    assert first.status_code == 201
    assert first.json()["phone_number"] == "551199990000"
    assert first.json()["supplier_category"] == ""

    second = client.post("/supplier", json={"supplier_name": "ACME", "contact_email": "Vendas@Acme.com"})
    assert second.status_code == 409

    # same name, different e-mail is fine
    assert client.post("/supplier", json={"supplier_name": "Acme", "contact_email": "compras@acme.com"}).status_code == 201


def test_supplier_requires_full_domain_email(client):
    resp = client.post("/supplier", json={"supplier_name": "Heeler", "contact_email": "j.heeler@gmail"})
    assert resp.status_code == 400
    assert "error" in resp.json()


def test_supplier_filters(client):
    client.post("/supplier", json={"supplier_name": "Graos Ltda", "supplier_category": "Cafe", "contact_email": "a@g.com"})
    client.post("/supplier", json={"supplier_name": "Leite Bom", "supplier_category": "Laticinios", "contact_email": "b@l.com"})

    assert [s["supplier_name"] for s in client.get("/supplier", params={"supplier_category": "caf"}).json()] == ["Graos Ltda"]
    assert [s["supplier_name"] for s in client.get("/supplier", params={"supplier_name": "BOM"}).json()] == ["Leite Bom"]


def test_supplier_update_rechecks_pair(client):
    a = client.post("/supplier", json={"supplier_name": "A", "contact_email": "a@x.com"}).json()["id"]
    client.post("/supplier", json={"supplier_name": "B", "contact_email": "b@x.com"})

    assert client.put(f"/supplier/{a}", json={"supplier_name": "b", "contact_email": "B@x.com"}).status_code == 409
    assert client.put(f"/supplier/{a}", json={"supplier_category": "Nova"}).json()["supplier_category"] == "Nova"


def test_put_unknown_id_is_404_regardless_of_payload(client):
    for path in ("/store", "/supplier", "/product", "/order", "/campaing", "/users"):
        assert client.put(f"{path}/nao-existe", json={}).status_code == 404
        assert client.put(f"{path}/nao-existe", json={"contact_email": "bad", "price": "-1"}).status_code == 404


def test_get_unknown_id_returns_error_body(client):
    resp = client.get("/supplier/nao-existe")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Fornecedor nao encontrado"}
