from __future__ import annotations

from enum import Enum

from parishdesk.schemas.records import (
    AnnouncementRecord,
    BaptismAppointmentRecord,
    BaptismRequestFormRecord,
    BaseRecord,
    ConfirmationAppointmentRecord,
    ConfirmationRequestFormRecord,
    FuneralRecord,
    LiturgyAppointmentRecord,
    MassAppointmentRecord,
    NotificationRecord,
    PriestRecord,
    WeddingAnnouncementRecord,
    WeddingAppointmentRecord,
    WeddingRequestFormRecord,
)


class CollectionName(str, Enum):
    PRIESTS = "priests"
    ANNOUNCEMENTS = "announcements"
    MASS_APPOINTMENTS = "massAppointments"
    HOUSE_LITURGY_APPOINTMENT = "houseLiturgyAppointment"
    CHURCH_LITURGY_APPOINTMENT = "churchLiturgyAppointment"
    BAPTISM_APPOINTMENT = "baptismAppointment"
    BAPTISM_REQUEST_FORM = "baptismRequestForm"
    CONFIRMATION_APPOINTMENT = "confirmationAppointment"
    CONFIRMATION_REQUEST_FORM = "confirmationRequestForm"
    WEDDING_ANNOUNCEMENTS = "weddingAnnouncements"
    WEDDING_APPOINTMENT = "weddingAppointment"
    WEDDING_REQUEST_FORM = "weddingRequestForm"
    FUNERAL_APPOINTMENT = "funeralAppointment"
    FUNERAL_REQUEST_FORM = "funeralRequestForm"
    NOTIFICATION = "notification"


COLLECTION_MODELS: dict[CollectionName, type[BaseRecord]] = {
    CollectionName.PRIESTS: PriestRecord,
    CollectionName.ANNOUNCEMENTS: AnnouncementRecord,
    CollectionName.MASS_APPOINTMENTS: MassAppointmentRecord,
    CollectionName.HOUSE_LITURGY_APPOINTMENT: LiturgyAppointmentRecord,
    CollectionName.CHURCH_LITURGY_APPOINTMENT: LiturgyAppointmentRecord,
    CollectionName.BAPTISM_APPOINTMENT: BaptismAppointmentRecord,
    CollectionName.BAPTISM_REQUEST_FORM: BaptismRequestFormRecord,
    CollectionName.CONFIRMATION_APPOINTMENT: ConfirmationAppointmentRecord,
    CollectionName.CONFIRMATION_REQUEST_FORM: ConfirmationRequestFormRecord,
    CollectionName.WEDDING_ANNOUNCEMENTS: WeddingAnnouncementRecord,
    CollectionName.WEDDING_APPOINTMENT: WeddingAppointmentRecord,
    CollectionName.WEDDING_REQUEST_FORM: WeddingRequestFormRecord,
    CollectionName.FUNERAL_APPOINTMENT: FuneralRecord,
    CollectionName.FUNERAL_REQUEST_FORM: FuneralRecord,
    CollectionName.NOTIFICATION: NotificationRecord,
}

APPOINTMENT_COLLECTIONS = frozenset(
    {
        CollectionName.MASS_APPOINTMENTS,
        CollectionName.HOUSE_LITURGY_APPOINTMENT,
        CollectionName.CHURCH_LITURGY_APPOINTMENT,
        CollectionName.BAPTISM_APPOINTMENT,
        CollectionName.CONFIRMATION_APPOINTMENT,
        CollectionName.WEDDING_APPOINTMENT,
        CollectionName.FUNERAL_APPOINTMENT,
    }
)

PRIEST_ASSIGNABLE_COLLECTIONS = frozenset(
    {
        CollectionName.MASS_APPOINTMENTS,
        CollectionName.HOUSE_LITURGY_APPOINTMENT,
        CollectionName.CHURCH_LITURGY_APPOINTMENT,
    }
)

# Baptism and confirmation decisions are relayed by the office, not pushed to the app.
DECISION_NOTIFIED_COLLECTIONS = APPOINTMENT_COLLECTIONS - {
    CollectionName.BAPTISM_APPOINTMENT,
    CollectionName.CONFIRMATION_APPOINTMENT,
}

REQUEST_FORM_COLLECTIONS = frozenset(
    {
        CollectionName.BAPTISM_REQUEST_FORM,
        CollectionName.CONFIRMATION_REQUEST_FORM,
        CollectionName.WEDDING_REQUEST_FORM,
        CollectionName.FUNERAL_REQUEST_FORM,
    }
)

NOTIFICATION_TYPES: dict[CollectionName, str] = {
    CollectionName.MASS_APPOINTMENTS: "MassAppointment",
    CollectionName.HOUSE_LITURGY_APPOINTMENT: "HouseLiturgyAppointment",
    CollectionName.CHURCH_LITURGY_APPOINTMENT: "ChurchLiturgyAppointment",
    CollectionName.BAPTISM_APPOINTMENT: "BaptismAppointment",
    CollectionName.BAPTISM_REQUEST_FORM: "BaptismRequestForm",
    CollectionName.CONFIRMATION_APPOINTMENT: "ConfirmationAppointment",
    CollectionName.CONFIRMATION_REQUEST_FORM: "ConfirmationRequestForm",
    CollectionName.WEDDING_ANNOUNCEMENTS: "WeddingAnnouncement",
    CollectionName.WEDDING_APPOINTMENT: "WeddingAppointment",
    CollectionName.WEDDING_REQUEST_FORM: "WeddingRequestForm",
    CollectionName.FUNERAL_REQUEST_FORM: "FuneralRequestForm",
    CollectionName.FUNERAL_APPOINTMENT: "FuneralAppointment",
}

# Collections that staff (not only super admins) may browse. Priests see the
# appointment lists filtered down to their own assignments.
PRIEST_VISIBLE_COLLECTIONS = PRIEST_ASSIGNABLE_COLLECTIONS | {
    CollectionName.ANNOUNCEMENTS,
    CollectionName.WEDDING_ANNOUNCEMENTS,
    CollectionName.PRIESTS,
}


def model_for(collection: CollectionName) -> type[BaseRecord]:
    return COLLECTION_MODELS[collection]
