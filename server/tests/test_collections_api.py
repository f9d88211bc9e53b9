from __future__ import annotations

import csv
import io

from jose import jwt

from parishdesk.core.config import settings
from parishdesk.main import app
from parishdesk.schemas.collections import CollectionName
from parishdesk.services.records import accessor_for
from parishdesk.stores import StoreError, get_store
from parishdesk.stores.memory import MemoryDocumentStore


def _baptism(name: str, **extra) -> dict:
    return {"child_sName": name, "baptismDate": "2026-06-14", "userId": f"user-{name}", **extra}


def test_requests_without_token_are_rejected(client):
    response = client.get("/collections/priests")
    assert response.status_code == 401


def test_create_and_browse_newest_first(client, authorize, super_admin):
    authorize(super_admin)
    ids = []
    for name in ("Ana", "Ben", "Cara"):
        response = client.post("/collections/baptismAppointment", json=_baptism(name))
        assert response.status_code == 201, response.text
        ids.append(response.json()["id"])

    browse = client.get("/collections/baptismAppointment")
    assert browse.status_code == 200
    body = browse.json()
    assert body["total"] == 3
    assert body["page"] == 1
    assert body["page_size"] == 10
    assert [item["id"] for item in body["items"]] == list(reversed(ids))
    assert body["items"][0]["status"] == "pending"
    assert body["items"][0]["dateTimeStamp"]


def test_browse_query_and_page_size(client, authorize, super_admin, store):
    accessor = accessor_for(store, CollectionName.ANNOUNCEMENTS)
    for index in range(23):
        accessor.create({"content": f"Notice {index}"})
    authorize(super_admin)

    page_two = client.get("/collections/announcements", params={"page": 2, "page_size": 15})
    assert page_two.status_code == 200
    assert page_two.json()["total"] == 23
    assert len(page_two.json()["items"]) == 8

    searched = client.get("/collections/announcements", params={"q": "notice 2"})
    assert {item["content"] for item in searched.json()["items"]} == {"Notice 2", "Notice 20", "Notice 21", "Notice 22"}


def test_browse_rejects_unknown_month_and_page_size(client, authorize, super_admin):
    authorize(super_admin)
    assert client.get("/collections/priests", params={"month": "Smarch"}).status_code == 422
    assert client.get("/collections/priests", params={"page_size": 12}).status_code == 422
    assert client.get("/collections/unknownThing").status_code == 422


def test_create_validates_against_record_model(client, authorize, super_admin):
    authorize(super_admin)
    response = client.post("/collections/baptismAppointment", json={"baptismDate": "2026-01-01"})
    assert response.status_code == 422

    bad_email = client.post("/collections/priests", json={"name": "Fr. X", "email": "not-an-email"})
    assert bad_email.status_code == 422


def test_non_super_admin_cannot_write_or_read_private_collections(client, authorize, priest_user):
    authorize(priest_user)
    assert client.get("/collections/baptismAppointment").status_code == 403
    assert client.post("/collections/announcements", json={"content": "Hi"}).status_code == 403
    assert client.get("/collections/announcements").status_code == 200


def test_get_patch_delete_record(client, authorize, super_admin):
    authorize(super_admin)
    record_id = client.post("/collections/announcements", json={"content": "Old"}).json()["id"]

    patched = client.patch(f"/collections/announcements/{record_id}", json={"content": "New", "id": "x"})
    assert patched.status_code == 200
    assert patched.json()["content"] == "New"
    assert patched.json()["id"] == record_id
    assert patched.json()["updated"]

    assert client.get(f"/collections/announcements/{record_id}").json()["content"] == "New"

    deleted = client.delete(f"/collections/announcements/{record_id}")
    assert deleted.status_code == 204
    assert client.get(f"/collections/announcements/{record_id}").status_code == 404
    assert client.delete(f"/collections/announcements/{record_id}").status_code == 404


def test_patch_missing_record_is_404(client, authorize, super_admin):
    authorize(super_admin)
    response = client.patch("/collections/priests/nope", json={"name": "Fr. Nobody"})
    assert response.status_code == 404
    assert response.json()["path"] == "priests/nope"


def test_search_by_field(client, authorize, super_admin, store):
    accessor = accessor_for(store, CollectionName.PRIESTS)
    accessor.create({"name": "Fr. A", "email": "a@example.com", "authId": "uid-a"})
    accessor.create({"name": "Fr. B", "email": "b@example.com", "authId": "uid-b"})
    authorize(super_admin)

    response = client.get("/collections/priests/search", params={"field": "authId", "value": "uid-b"})

    assert response.status_code == 200
    assert [item["name"] for item in response.json()] == ["Fr. B"]


def test_bulk_delete_removes_only_selected(client, authorize, super_admin, store):
    accessor = accessor_for(store, CollectionName.ANNOUNCEMENTS)
    ids = [accessor.create({"content": f"Notice {index}"}) for index in range(4)]
    authorize(super_admin)

    response = client.post("/collections/announcements/bulk-delete", json={"ids": [ids[0], ids[2], "ghost"]})

    assert response.status_code == 200
    assert sorted(response.json()["deleted"]) == sorted([ids[0], ids[2]])
    remaining = [record["id"] for record in accessor.fetch_all()]
    assert remaining == [ids[1], ids[3]]


def test_bulk_delete_needs_ids(client, authorize, super_admin):
    authorize(super_admin)
    assert client.post("/collections/announcements/bulk-delete", json={"ids": []}).status_code == 422


def test_export_csv_has_all_records(client, authorize, super_admin, store):
    accessor = accessor_for(store, CollectionName.BAPTISM_APPOINTMENT)
    for index in range(37):
        accessor.create(_baptism(f"Child {index}", mother_sName=f"Mother {index}"))
    authorize(super_admin)

    response = client.get("/collections/baptismAppointment/export.csv")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert 'filename="Baptism Appointments.csv"' in response.headers["content-disposition"]
    rows = list(csv.reader(io.StringIO(response.text)))
    assert rows[0] == [
        "child_sName",
        "mother_sName",
        "father_sName",
        "birthdate",
        "birthPlace",
        "parentsContactNumber",
        "baptismDate",
        "baptismSponsors",
        "status",
    ]
    assert len(rows) == 38
    assert rows[1][:2] == ["Child 0", "Mother 0"]


def test_store_failure_maps_to_502(client, authorize, super_admin):
    class BrokenStore(MemoryDocumentStore):
        def get(self, path):
            raise StoreError("connection reset")

    app.dependency_overrides[get_store] = lambda: BrokenStore()
    authorize(super_admin)

    response = client.get("/collections/priests")

    assert response.status_code == 502
    assert response.json()["code"] == "store_unavailable"


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_bearer_token_identifies_the_caller(client):
    token = jwt.encode(
        {"sub": "uid-1", "name": "Secretary", "is_super_admin": True},
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALG,
    )

    bad = client.get("/auth/whoami", headers={"Authorization": "Bearer nope"})
    assert bad.status_code == 401

    good = client.get("/auth/whoami", headers={"Authorization": f"Bearer {token}"})
    assert good.status_code == 200
    assert good.json()["is_super_admin"] is True
    assert good.json()["priest_id"] is None
