from __future__ import annotations

from parishdesk.schemas.collections import CollectionName
from parishdesk.services.records import accessor_for


def _seed_baptisms(store, statuses):
    accessor = accessor_for(store, CollectionName.BAPTISM_APPOINTMENT)
    return [
        accessor.create(
            {"child_sName": f"Child {index}", "baptismDate": "2026-06-14", "userId": f"parent-{index}", "status": status}
        )
        for index, status in enumerate(statuses)
    ]


def test_approving_one_baptism_leaves_the_others_alone(client, authorize, super_admin, store):
    ids = _seed_baptisms(store, ["pending", "approved", "pending"])
    authorize(super_admin)

    response = client.post(f"/appointments/baptismAppointment/{ids[0]}/approve")
    assert response.status_code == 200, response.text
    assert response.json()["status"] == "approved"

    records = accessor_for(store, CollectionName.BAPTISM_APPOINTMENT).fetch_all()
    assert [record["status"] for record in records] == ["approved", "approved", "pending"]
    assert "updated" in records[0]
    assert "updated" not in records[1]
    assert "updated" not in records[2]


def test_reject_sends_notification_to_the_requester(client, authorize, super_admin, store):
    record_id = accessor_for(store, CollectionName.WEDDING_APPOINTMENT).create(
        {"bride": "Ana", "groom": "Paolo", "userId": "couple-1"}
    )
    authorize(super_admin)

    client.post(f"/appointments/weddingAppointment/{record_id}/reject")

    notifications = accessor_for(store, CollectionName.NOTIFICATION).fetch_all()
    assert len(notifications) == 1
    notice = notifications[0]
    assert notice["userId"] == "couple-1"
    assert notice["message"] == "Wedding Appointment has been rejected"
    assert notice["title"] == "Wedding Appointment"
    assert notice["type"] == "WeddingAppointment"
    assert notice["fromAdmin"] is True
    assert notice["read"] is False


def test_baptism_and_confirmation_decisions_do_not_notify(client, authorize, super_admin, store):
    ids = _seed_baptisms(store, ["pending"])
    confirmation_id = accessor_for(store, CollectionName.CONFIRMATION_APPOINTMENT).create(
        {"name": "Rosa", "userId": "parent-5"}
    )
    authorize(super_admin)

    assert client.post(f"/appointments/baptismAppointment/{ids[0]}/approve").status_code == 200
    assert client.post(f"/appointments/confirmationAppointment/{confirmation_id}/reject").status_code == 200

    assert accessor_for(store, CollectionName.NOTIFICATION).fetch_all() == []

def test_already_decided_appointment_conflicts(client, authorize, super_admin, store):
    ids = _seed_baptisms(store, ["approved"])
    authorize(super_admin)

    response = client.post(f"/appointments/baptismAppointment/{ids[0]}/reject")

    assert response.status_code == 409
    assert accessor_for(store, CollectionName.NOTIFICATION).fetch_all() == []


def test_approve_missing_or_wrong_collection(client, authorize, super_admin):
    authorize(super_admin)
    assert client.post("/appointments/baptismAppointment/ghost/approve").status_code == 404
    assert client.post("/appointments/announcements/ghost/approve").status_code == 404


def test_only_super_admin_decides(client, authorize, priest_user, store):
    ids = _seed_baptisms(store, ["pending"])
    authorize(priest_user)
    assert client.post(f"/appointments/baptismAppointment/{ids[0]}/approve").status_code == 403


def _seed_mass(store, **extra) -> str:
    return accessor_for(store, CollectionName.MASS_APPOINTMENTS).create(
        {"name": "Cruz", "date": "2026-11-01", "time": "09:00", "massIntentions": "Thanksgiving", **extra}
    )


def test_assign_priest_with_confirmation_request(
    client, authorize, super_admin, priest_user, priest_id, store
):
    mass_id = _seed_mass(store)
    authorize(super_admin)

    assigned = client.post(
        f"/appointments/massAppointments/{mass_id}/assign-priest",
        json={"priest_id": priest_id, "send_confirmation_request": True},
    )
    assert assigned.status_code == 200, assigned.text
    assert assigned.json()["priestId"] == priest_id
    assert assigned.json()["priestConfirmationStatus"] == "pending"

    authorize(priest_user)
    answered = client.post(f"/appointments/massAppointments/{mass_id}/priest-confirmation", json={"accept": True})
    assert answered.status_code == 200
    assert answered.json()["priestConfirmationStatus"] == "approved"

    again = client.post(f"/appointments/massAppointments/{mass_id}/priest-confirmation", json={"accept": False})
    assert again.status_code == 409


def test_assign_priest_without_request_is_approved_immediately(client, authorize, super_admin, priest_id, store):
    mass_id = _seed_mass(store)
    authorize(super_admin)

    response = client.post(
        f"/appointments/massAppointments/{mass_id}/assign-priest",
        json={"priest_id": priest_id},
    )

    assert response.json()["priestConfirmationStatus"] == "approved"


def test_assign_unknown_priest_is_404(client, authorize, super_admin, store):
    mass_id = _seed_mass(store)
    authorize(super_admin)

    response = client.post(
        f"/appointments/massAppointments/{mass_id}/assign-priest",
        json={"priest_id": "ghost"},
    )
    assert response.status_code == 404


def test_assign_priest_only_on_liturgy_collections(client, authorize, super_admin, priest_id):
    authorize(super_admin)
    response = client.post(
        "/appointments/weddingAppointment/any/assign-priest",
        json={"priest_id": priest_id},
    )
    assert response.status_code == 404


def test_priest_cannot_answer_someone_elses_assignment(
    client, authorize, other_priest_user, other_priest_id, priest_id, store
):
    mass_id = _seed_mass(store, priestId=priest_id, priestConfirmationStatus="pending")
    authorize(other_priest_user)

    response = client.post(f"/appointments/massAppointments/{mass_id}/priest-confirmation", json={"accept": True})

    assert response.status_code == 403


def test_priest_browses_only_their_accepted_or_pending_assignments(
    client, authorize, priest_user, priest_id, other_priest_id, store
):
    mine = _seed_mass(store, priestId=priest_id, priestConfirmationStatus="approved")
    _seed_mass(store, priestId=priest_id, priestConfirmationStatus="rejected")
    _seed_mass(store, priestId=other_priest_id, priestConfirmationStatus="approved")
    pending = _seed_mass(store, priestId=priest_id, priestConfirmationStatus="pending")
    _seed_mass(store)
    authorize(priest_user)

    response = client.get("/collections/massAppointments")

    assert response.status_code == 200
    assert [item["id"] for item in response.json()["items"]] == [pending, mine]


def test_priest_without_priest_record_sees_no_assignments(client, authorize, priest_user, store):
    _seed_mass(store, priestId="someone")
    authorize(priest_user)

    assert client.get("/collections/massAppointments").json()["total"] == 0
    assert client.get("/priests/me").status_code == 404


def test_priests_me_and_whoami(client, authorize, priest_user, priest_id):
    authorize(priest_user)

    me = client.get("/priests/me")
    assert me.status_code == 200
    assert me.json()["id"] == priest_id

    whoami = client.get("/auth/whoami")
    assert whoami.json() == {
        "id": priest_user.id,
        "name": priest_user.name,
        "is_super_admin": False,
        "priest_id": priest_id,
    }
