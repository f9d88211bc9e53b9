from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    id: str
    name: str
    is_super_admin: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SessionUser":
        return cls(
            id=str(data["id"]),
            name=str(data.get("name") or ""),
            is_super_admin=bool(data.get("is_super_admin", False)),
        )


class SessionContext:
    """Holds the signed-in staff member for one process.

    Nothing is read or written implicitly: call ``load()`` at startup,
    ``login()`` after the identity provider hands back a user, and ``clear()``
    on logout.
    """

    def __init__(self, path: Path | str | None = None) -> None:
        self.path = Path(path) if path is not None else None
        self.user: SessionUser | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def to_json(self) -> str:
        payload = {"user": self.user.to_dict() if self.user else None}
        return json.dumps(payload, indent=2)

    @classmethod
    def from_json(cls, raw: str, path: Path | str | None = None) -> "SessionContext":
        context = cls(path)
        data = json.loads(raw)
        user = data.get("user") if isinstance(data, dict) else None
        if user is not None and not isinstance(user, dict):
            raise ValueError("Session user must be a JSON object")
        context.user = SessionUser.from_dict(user) if user else None
        return context

    def load(self) -> SessionUser | None:
        if self.path is None or not self.path.exists():
            self.user = None
            return None
        try:
            restored = SessionContext.from_json(self.path.read_text(encoding="utf-8"), self.path)
        except (ValueError, KeyError, TypeError):
            logger.warning("session_file_unreadable", extra={"path": str(self.path)})
            self.user = None
            return None
        self.user = restored.user
        return self.user

    def save(self) -> None:
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(self.to_json(), encoding="utf-8")

    def login(self, user: SessionUser) -> None:
        self.user = user
        self.save()
        logger.info("session_started", extra={"user_id": user.id})

    def clear(self) -> None:
        previous = self.user
        self.user = None
        if self.path is not None and self.path.exists():
            self.path.unlink()
        if previous is not None:
            logger.info("session_cleared", extra={"user_id": previous.id})
