"""Table layouts for each collection, as shown on the dashboard screens."""

from __future__ import annotations

from parishdesk.schemas.collections import CollectionName
from parishdesk.services.browser import Column, ComputedColumn, FieldColumn


def _status_label(record) -> str:
    return str(record.get("status") or "pending") if isinstance(record, dict) else ""


def _actions(record) -> list[str]:
    # what the row offers, the client draws the buttons
    if not isinstance(record, dict):
        return []
    status = record.get("status")
    if status in (None, "", "pending"):
        return ["approve", "reject"]
    if status == "ready":
        return ["release"]
    return []


def _request_actions(record) -> list[str]:
    if not isinstance(record, dict):
        return []
    status = record.get("status")
    if status in (None, "", "pending"):
        return ["ready"]
    if status == "ready":
        return ["release"]
    return []


STATUS = ComputedColumn(title="Status", accessor="status", render=_status_label, align="center")
ACTIONS = ComputedColumn(title="Actions", render=_actions, align="center")
REQUEST_ACTIONS = ComputedColumn(title="Actions", render=_request_actions, align="center")
PRIEST = FieldColumn("priestId", "Priest", align="center")

_LITURGY = [
    FieldColumn("appointment"),
    FieldColumn("fullName"),
    FieldColumn("place"),
    FieldColumn("time"),
    FieldColumn("date", "Day"),
    PRIEST,
    STATUS,
    ACTIONS,
]

TABLE_COLUMNS: dict[CollectionName, list[Column]] = {
    CollectionName.PRIESTS: [
        FieldColumn("name"),
        FieldColumn("email"),
        FieldColumn("dateTimeStamp", "Created"),
    ],
    CollectionName.ANNOUNCEMENTS: [
        FieldColumn("content"),
        FieldColumn("dateTimeStamp", "Created"),
    ],
    CollectionName.MASS_APPOINTMENTS: [
        FieldColumn("name"),
        FieldColumn("massIntentions", "Mass Intentions"),
        FieldColumn("date"),
        FieldColumn("time"),
        PRIEST,
        STATUS,
        ACTIONS,
    ],
    CollectionName.CHURCH_LITURGY_APPOINTMENT: list(_LITURGY),
    CollectionName.HOUSE_LITURGY_APPOINTMENT: list(_LITURGY),
    CollectionName.BAPTISM_APPOINTMENT: [
        FieldColumn("child_sName", "Child's Name"),
        FieldColumn("mother_sName", "Mother's Name"),
        FieldColumn("father_sName", "Father's Name"),
        FieldColumn("birthdate", "Date of birth"),
        FieldColumn("birthPlace", "Birth place"),
        FieldColumn("parentsContactNumber", "Contact Number"),
        FieldColumn("baptismDate", "Date of baptism"),
        FieldColumn("baptismSponsors", "Sponsors"),
        STATUS,
        ACTIONS,
    ],
    CollectionName.BAPTISM_REQUEST_FORM: [
        FieldColumn("name", "Name"),
        FieldColumn("mother", "Mother's Name"),
        FieldColumn("father", "Father's Name"),
        FieldColumn("contactNumber", "Contact Number"),
        FieldColumn("dateOfBaptism", "Date of Baptism"),
        FieldColumn("purpose", "Purpose"),
        FieldColumn("releasedTo", "Released To"),
        REQUEST_ACTIONS,
    ],
    CollectionName.CONFIRMATION_APPOINTMENT: [
        FieldColumn("name", "Name"),
        FieldColumn("motherName", "Mother's Name"),
        FieldColumn("fatherName", "Father's Name"),
        FieldColumn("churchPlace", "Church"),
        FieldColumn("birthPlace", "Birth place"),
        FieldColumn("guardianNumber", "Contact Number"),
        FieldColumn("baptismDate", "Date of Baptism"),
        FieldColumn("sponsorName", "Sponsor"),
        STATUS,
        ACTIONS,
    ],
    CollectionName.CONFIRMATION_REQUEST_FORM: [
        FieldColumn("name", "Name"),
        FieldColumn("mother", "Mother's Name"),
        FieldColumn("father", "Father's Name"),
        FieldColumn("contactNumber", "Contact Number"),
        FieldColumn("dateOfConfirmation", "Date of Confirmation"),
        FieldColumn("purpose", "Purpose"),
        FieldColumn("releasedTo", "Released To"),
        REQUEST_ACTIONS,
    ],
    CollectionName.WEDDING_ANNOUNCEMENTS: [
        FieldColumn("content"),
        FieldColumn("expiration"),
        FieldColumn("dateTimeStamp"),
    ],
    CollectionName.WEDDING_APPOINTMENT: [
        FieldColumn("bride"),
        FieldColumn("brideAge", "Bride Age"),
        FieldColumn("groom"),
        FieldColumn("groomAge", "Groom Age"),
        FieldColumn("contactNumber", "Contact Number"),
        FieldColumn("dateWedding", "Date of Wedding"),
        FieldColumn("dateConfirmation", "Confirmation Date"),
        FieldColumn("dateInterview", "Interview Date"),
        FieldColumn("dateCounseling", "Counseling Date"),
        FieldColumn("venue"),
        STATUS,
        ACTIONS,
    ],
    CollectionName.WEDDING_REQUEST_FORM: [
        FieldColumn("bridesName", "Bride's Name"),
        FieldColumn("groomsName", "Groom's Name"),
        FieldColumn("contactNumber", "Contact Number"),
        FieldColumn("dateOfWedding", "Date of Wedding"),
        FieldColumn("releasedTo", "Released To"),
        REQUEST_ACTIONS,
    ],
    CollectionName.FUNERAL_APPOINTMENT: [
        FieldColumn("nameOfTheDeceased", "Name of Deceased"),
        FieldColumn("nameOfInformant", "Name of Informant"),
        FieldColumn("phoneNumberOfInformant", "Informant Contact"),
        FieldColumn("dateOfBurial", "Date of Burial"),
        STATUS,
        ACTIONS,
    ],
    CollectionName.FUNERAL_REQUEST_FORM: [
        FieldColumn("nameOfTheDeceased", "Name of Deceased"),
        FieldColumn("nameOfInformant", "Name of Informant"),
        FieldColumn("phoneNumberOfInformant", "Informant Contact"),
        FieldColumn("address"),
        FieldColumn("dateOfBirth", "Date of Birth"),
        FieldColumn("causeOfDeath", "Cause of Death"),
        FieldColumn("dateOfBurial", "Date of Burial"),
        FieldColumn("dateOfDeath", "Date of Death"),
        FieldColumn("releasedTo", "Released To"),
        REQUEST_ACTIONS,
    ],
    CollectionName.NOTIFICATION: [
        FieldColumn("title"),
        FieldColumn("message"),
        FieldColumn("timestamp"),
        FieldColumn("read"),
    ],
}

TABLE_TITLES: dict[CollectionName, str] = {
    CollectionName.PRIESTS: "Priests",
    CollectionName.ANNOUNCEMENTS: "Announcements",
    CollectionName.MASS_APPOINTMENTS: "Eucharistic Liturgy Appointments",
    CollectionName.CHURCH_LITURGY_APPOINTMENT: "Church Liturgy Appointments",
    CollectionName.HOUSE_LITURGY_APPOINTMENT: "House Liturgy Appointments",
    CollectionName.BAPTISM_APPOINTMENT: "Baptism Appointments",
    CollectionName.BAPTISM_REQUEST_FORM: "Baptism Request Forms",
    CollectionName.CONFIRMATION_APPOINTMENT: "Confirmation Appointments",
    CollectionName.CONFIRMATION_REQUEST_FORM: "Confirmation Request Forms",
    CollectionName.WEDDING_ANNOUNCEMENTS: "Wedding Announcements",
    CollectionName.WEDDING_APPOINTMENT: "Wedding Appointments",
    CollectionName.WEDDING_REQUEST_FORM: "Wedding Request Forms",
    CollectionName.FUNERAL_APPOINTMENT: "Funeral Appointments",
    CollectionName.FUNERAL_REQUEST_FORM: "Funeral Request Forms",
    CollectionName.NOTIFICATION: "Notifications",
}


def columns_for(collection: CollectionName) -> list[Column]:
    return TABLE_COLUMNS[collection]


def title_for(collection: CollectionName) -> str:
    return TABLE_TITLES[collection]
