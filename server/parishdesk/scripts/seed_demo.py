from __future__ import annotations

import argparse
import logging

from parishdesk.core.db import Base, SessionLocal, engine
from parishdesk.core.logging_config import configure_logging
from parishdesk.schemas.collections import CollectionName
from parishdesk.schemas.records import (
    AnnouncementRecord,
    BaptismAppointmentRecord,
    BaptismRequestFormRecord,
    LiturgyAppointmentRecord,
    MassAppointmentRecord,
    PriestRecord,
    WeddingAnnouncementRecord,
    WeddingAppointmentRecord,
)
from parishdesk.services.records import accessor_for
from parishdesk.stores import DocumentStore, build_store

logger = logging.getLogger(__name__)

DEMO_PRIESTS = [
    ("Fr. Miguel Santos", "miguel.santos@example.com", "priest-auth-1"),
    ("Fr. Antonio Reyes", "antonio.reyes@example.com", "priest-auth-2"),
]

DEMO_ANNOUNCEMENTS = [
    "Parish office is closed on Monday for the feast day.",
    "Confirmation seminar starts next Saturday after the 9 AM Mass.",
]


def ensure_priests(store: DocumentStore) -> dict[str, str]:
    accessor = accessor_for(store, CollectionName.PRIESTS)
    priests: dict[str, str] = {}
    for name, email, auth_id in DEMO_PRIESTS:
        existing = accessor.search_by_field("authId", auth_id)
        if existing:
            priests[name] = existing[0]["id"]
            continue
        priests[name] = accessor.create(PriestRecord(name=name, email=email, authId=auth_id))
    return priests


def ensure_announcements(store: DocumentStore) -> None:
    accessor = accessor_for(store, CollectionName.ANNOUNCEMENTS)
    for content in DEMO_ANNOUNCEMENTS:
        if not accessor.search_by_field("content", content):
            accessor.create(AnnouncementRecord(content=content))

    notices = accessor_for(store, CollectionName.WEDDING_ANNOUNCEMENTS)
    content = "Banns of marriage: Paolo Cruz and Ana Dizon, first reading."
    if not notices.search_by_field("content", content):
        notices.create(WeddingAnnouncementRecord(content=content, expiration="2099-12-31T00:00:00Z"))


def ensure_appointments(store: DocumentStore, priests: dict[str, str]) -> None:
    first_priest = next(iter(priests.values()), None)
    samples = [
        (
            CollectionName.MASS_APPOINTMENTS,
            MassAppointmentRecord(
                userId="demo-user-1",
                name="Dela Cruz Family",
                date="2026-11-01",
                time="09:00",
                massIntentions="Thanksgiving",
                priestId=first_priest,
            ),
        ),
        (
            CollectionName.HOUSE_LITURGY_APPOINTMENT,
            LiturgyAppointmentRecord(
                userId="demo-user-2",
                appointment="House Blessing",
                fullName="Maria Lopez",
                place="12 Mabini St.",
                date="2026-11-07",
                time="15:00",
            ),
        ),
        (
            CollectionName.BAPTISM_APPOINTMENT,
            BaptismAppointmentRecord(
                userId="demo-user-3",
                child_sName="Juan Bautista",
                father_sName="Pedro Bautista",
                baptismDate="2026-11-15",
                baptismSponsors="Jose Rizal, Gabriela Silang",
            ),
        ),
        (
            CollectionName.WEDDING_APPOINTMENT,
            WeddingAppointmentRecord(userId="demo-user-4", bride="Ana Dizon", groom="Paolo Cruz", venue="Main Church"),
        ),
        (
            CollectionName.BAPTISM_REQUEST_FORM,
            BaptismRequestFormRecord(userId="demo-user-3", name="Lucia Ramos", purpose="School enrollment"),
        ),
    ]
    for collection, record in samples:
        accessor = accessor_for(store, collection)
        if not accessor.search_by_field("userId", record.userId):
            accessor.create(record)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Load demo parish records into the configured store.")
    parser.add_argument("--skip-appointments", action="store_true", help="Only seed priests and announcements")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    configure_logging()
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        store = build_store(db)
        priests = ensure_priests(store)
        ensure_announcements(store)
        if not args.skip_appointments:
            ensure_appointments(store, priests)
        logger.info("demo_seeded", extra={"priests": len(priests)})
    finally:
        db.close()


if __name__ == "__main__":
    main()
