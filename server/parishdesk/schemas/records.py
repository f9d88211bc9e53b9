from __future__ import annotations

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

RESERVED_FIELDS = frozenset({"id", "dateTimeStamp", "updated"})


class StatusEnum(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class RequestFormStatusEnum(str, Enum):
    PENDING = "pending"
    READY = "ready"
    RELEASED = "released"


class PriestConfirmationStatusEnum(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


NotificationType = Literal[
    "MassAppointment",
    "HouseLiturgyAppointment",
    "ChurchLiturgyAppointment",
    "BaptismAppointment",
    "BaptismRequestForm",
    "ConfirmationAppointment",
    "ConfirmationRequestForm",
    "WeddingAnnouncement",
    "WeddingAppointment",
    "WeddingRequestForm",
    "FuneralRequestForm",
    "FuneralAppointment",
]


class BaseRecord(BaseModel):
    """Fields every stored document may carry.

    ``id`` comes from the store key and the two timestamps are stamped by the
    record accessor, so they are ignored on input.
    """

    id: Optional[str] = None
    userId: Optional[str] = None
    dateTimeStamp: Optional[str] = None
    updated: Optional[str] = None

    model_config = ConfigDict(extra="allow")

    def to_document(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True, exclude=set(RESERVED_FIELDS))


class RequestFormRelease(BaseModel):
    releasedTo: Optional[str] = None
    releasedDate: Optional[str] = None


class PriestAppointment(BaseModel):
    priestId: Optional[str] = None
    priestConfirmationStatus: Optional[PriestConfirmationStatusEnum] = None


class PriestRecord(BaseRecord):
    authId: Optional[str] = None
    name: str = Field(..., min_length=1, max_length=150)
    email: EmailStr


class MassAppointmentRecord(BaseRecord, PriestAppointment):
    name: Optional[str] = None
    date: str
    time: str
    massIntentions: str
    status: Optional[StatusEnum] = StatusEnum.PENDING


class LiturgyAppointmentRecord(BaseRecord, PriestAppointment):
    appointment: Optional[str] = None
    date: str
    fullName: str
    place: Optional[str] = None
    time: str
    status: Optional[StatusEnum] = StatusEnum.PENDING


class BaptismAppointmentRecord(BaseRecord):
    child_sName: str
    father_sName: Optional[str] = None
    address: Optional[str] = None
    baptismDate: str
    baptismPlace: Optional[str] = None
    baptismSponsors: Optional[str] = None
    birthPlace: Optional[str] = None
    birthdate: Optional[str] = None
    parentsContactNumber: Optional[str] = None
    status: Optional[StatusEnum] = StatusEnum.PENDING


class ConfirmationAppointmentRecord(BaseRecord):
    name: str
    baptismDate: Optional[str] = None
    birthPlace: Optional[str] = None
    birthdate: Optional[str] = None
    churchPlace: Optional[str] = None
    email: Optional[str] = None
    fatherName: Optional[str] = None
    motherName: Optional[str] = None
    guardianNumber: Optional[str] = None
    number: Optional[str] = None
    sponsorName: Optional[str] = None
    sponsorRelation: Optional[str] = None
    purpose: Optional[str] = None
    status: Optional[StatusEnum] = StatusEnum.PENDING


class WeddingAppointmentRecord(BaseRecord):
    bride: str
    groom: str
    brideAge: Optional[str] = None
    groomAge: Optional[str] = None
    confirmedBy: Optional[str] = None
    contactNumber: Optional[str] = None
    date: Optional[str] = None
    dateConfirmation: Optional[str] = None
    dateCounseling: Optional[str] = None
    dateInterview: Optional[str] = None
    dateWedding: Optional[str] = None
    timeConfirmation: Optional[str] = None
    timeInterview: Optional[str] = None
    timeWedding: Optional[str] = None
    venue: Optional[str] = None
    status: Optional[StatusEnum] = StatusEnum.PENDING


class BaptismRequestFormRecord(BaseRecord, RequestFormRelease):
    name: str
    contactNumber: Optional[str] = None
    dateOfBaptism: Optional[str] = None
    dateOfBirth: Optional[str] = None
    father: Optional[str] = None
    mother: Optional[str] = None
    placeOfBaptism: Optional[str] = None
    purpose: Optional[str] = None
    status: Optional[RequestFormStatusEnum] = RequestFormStatusEnum.PENDING


class ConfirmationRequestFormRecord(BaseRecord, RequestFormRelease):
    name: str
    contactNumber: Optional[str] = None
    dateOfConfirmation: Optional[str] = None
    father: Optional[str] = None
    mother: Optional[str] = None
    purpose: Optional[str] = None
    status: Optional[RequestFormStatusEnum] = RequestFormStatusEnum.PENDING


class WeddingRequestFormRecord(BaseRecord, RequestFormRelease):
    bridesName: str
    groomsName: str
    address: Optional[str] = None
    contactNumber: Optional[str] = None
    dateOfWedding: Optional[str] = None
    status: Optional[RequestFormStatusEnum] = RequestFormStatusEnum.PENDING


class FuneralRecord(BaseRecord, RequestFormRelease):
    """Shared by funeral appointments and funeral certificate requests."""

    nameOfTheDeceased: str
    address: Optional[str] = None
    causeOfDeath: Optional[str] = None
    dateOfBirth: Optional[str] = None
    dateOfBurial: Optional[str] = None
    dateOfDeath: Optional[str] = None
    funeralStatus: Optional[str] = None
    nameOfInformant: Optional[str] = None
    phoneNumberOfInformant: Optional[str] = None
    relationToTheDeceased: Optional[str] = None
    nearestKin: Optional[str] = None
    religion: Optional[str] = None
    status: Optional[str] = "pending"


class AnnouncementRecord(BaseRecord):
    content: str = Field(..., min_length=1)


class WeddingAnnouncementRecord(BaseRecord):
    content: str = Field(..., min_length=1)
    expiration: str


class NotificationRecord(BaseRecord):
    message: str
    timestamp: str
    title: str
    type: NotificationType
    read: bool = False
    fromAdmin: bool = False
