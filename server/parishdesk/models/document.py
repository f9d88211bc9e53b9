from __future__ import annotations

from sqlalchemy import JSON, Column, DateTime, String
from sqlalchemy.sql import func

from parishdesk.core.db import Base


class StoredDocument(Base):
    """One schemaless document addressed by ``collection/key``."""

    __tablename__ = "documents"

    collection = Column(String(64), primary_key=True)
    key = Column(String(64), primary_key=True)
    body = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self) -> str:  # pragma: no cover
        return f"<StoredDocument {self.collection}/{self.key}>"
