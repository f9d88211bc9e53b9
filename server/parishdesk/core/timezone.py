from datetime import datetime
from zoneinfo import ZoneInfo

from parishdesk.core.config import settings


def local_timezone() -> ZoneInfo:
    """Parish office timezone, used for month filters and dashboard years."""

    return ZoneInfo(settings.TIMEZONE)


def local_now() -> datetime:
    return datetime.now(local_timezone())
