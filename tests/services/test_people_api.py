# tests/services/test_people_api.py
from __future__ import annotations

from sqlalchemy.exc import OperationalError

from personcore.database.repos.family_relationship_repo import SqlAlchemyFamilyRelationshipRepo


def _payload(refs, **overrides):
    body = {
        "name": "Siti Aminah",
        "dob": "1990-01-15",
        "sex": "Female",
        "religion_id": refs["Islam"],
        "phones": ["0811"],
        "address": {
            "ktp": {"name": "Jl. Merdeka 1", "rt": "001", "rw": "002"},
            "residence_same_as_ktp": True,
        },
        "card_identity": {"nik": "3201010101900001", "loyalty": "L-1"},
        "family_relationship": {"name": "Aminah", "family_role_id": refs["Ibu"]},
    }
    body.update(overrides)
    return body


def test_health(api_client):
    r = api_client.get("/api/health")
    assert r.status_code == 200
    assert r.json()["ok"] is True


def test_openapi_lists_routes(api_client):
    paths = api_client.get("/api/openapi.json").json()["paths"]
    assert "/api/people" in paths
    assert "/api/people/{person_id}" in paths
    assert "/api/family-relationships/{relationship_id}" in paths
    assert "/api/references/{category}" in paths


def test_store_then_get(api_client, refs):
    r = api_client.post("/api/people", json=_payload(refs))
    assert r.status_code == 201, r.text
    created = r.json()
    assert created["religion"]["label"] == "Islam"
    assert created["card_identity"] == {"nik": "3201010101900001"}
    assert created["address"]["residence"]["payload"]["name"] == "Jl. Merdeka 1"
    assert created["family_relationship"]["family_role"]["label"] == "Ibu"

    r = api_client.get(f"/api/people/{created['id']}")
    assert r.status_code == 200
    assert r.json()["name"] == "Siti Aminah"
    assert r.json()["age"] == created["age"]

    r = api_client.get("/api/people", params={"q": "siti"})
    assert [p["id"] for p in r.json()] == [created["id"]]


def test_update_and_cached_read_is_fresh(api_client, refs):
    created = api_client.post("/api/people", json=_payload(refs)).json()
    assert api_client.get(f"/api/people/{created['id']}").json()["pob"] is None

    r = api_client.put(f"/api/people/{created['id']}", json={"pob": "Bandung"})
    assert r.status_code == 200, r.text
    assert r.json()["name"] == "Siti Aminah"

    assert api_client.get(f"/api/people/{created['id']}").json()["pob"] == "Bandung"


def test_validation_errors_are_422(api_client, refs):
    r = api_client.post("/api/people", json={"first_name": "Budi"})
    assert r.status_code == 422
    assert "name" in r.json()["errors"]

    r = api_client.post("/api/people", json={"name": "A", "dob": "1990/01/15"})
    assert r.status_code == 422
    assert "dob" in r.json()["errors"]

    body = _payload(refs)
    body["family_relationship"]["family_role"] = {"name": "Ibu Tiri"}
    r = api_client.post("/api/people", json=body)
    assert r.status_code == 422
    assert "family_relationship.family_role_id" in r.json()["errors"]

    assert api_client.get("/api/people").json() == []


def test_update_unknown_person_is_404(api_client):
    r = api_client.put("/api/people/01ARZ3NDEKTSV4RRFFQ69G5FAV", json={"name": "Ghost"})
    assert r.status_code == 404
    assert api_client.get("/api/people/01ARZ3NDEKTSV4RRFFQ69G5FAV").status_code == 404


def test_storage_error_is_opaque_500(api_client, refs, monkeypatch):
    def boom(self, record):
        raise OperationalError("UPSERT", {}, Exception("secret connection detail"))

    monkeypatch.setattr(SqlAlchemyFamilyRelationshipRepo, "upsert", boom)
    r = api_client.post("/api/people", json=_payload(refs))
    assert r.status_code == 500
    assert r.json() == {"detail": "Storage error"}
    assert api_client.get("/api/people").json() == []


def test_family_relationship_routes(api_client, refs):
    mother = api_client.post("/api/people", json={"name": "Aminah"}).json()
    body = _payload(refs)
    body["family_relationship"].update({"reference_type": "Person", "reference_id": mother["id"]})
    child = api_client.post("/api/people", json=body).json()

    listed = api_client.get("/api/family-relationships", params={"people_id": child["id"]}).json()
    assert len(listed) == 1
    assert listed[0]["reference"] is None

    r = api_client.get(f"/api/family-relationships/{listed[0]['id']}")
    assert r.status_code == 200
    assert r.json()["reference"] == {"type": "Person", "id": mother["id"], "name": "Aminah"}

    assert api_client.get("/api/family-relationships/01ARZ3NDEKTSV4RRFFQ69G5FAV").status_code == 404


def test_unregistered_link_type_is_422(api_client, refs):
    body = _payload(refs)
    body["family_relationship"].update({"reference_type": "User", "reference_id": "42"})
    r = api_client.post("/api/people", json=body)
    assert r.status_code == 422
    assert "family_relationship.reference_type" in r.json()["errors"]


def test_reference_routes(api_client, refs):
    r = api_client.get("/api/references/Religion")
    assert [x["label"] for x in r.json()] == ["Islam", "Katolik"]

    r = api_client.get(f"/api/references/FamilyRole/{refs['Ibu']}")
    assert r.json()["label"] == "Ibu"

    assert api_client.get("/api/references/Planet").status_code == 404
    assert api_client.get(f"/api/references/Religion/{refs['Ibu']}").status_code == 404
