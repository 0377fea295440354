from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

from finboard.core.config import settings


def reporting_tz() -> ZoneInfo:
    return ZoneInfo(settings.reporting_timezone)


def now_reporting() -> datetime:
    return datetime.now(tz=reporting_tz())


def today_reporting() -> date:
    return now_reporting().date()


def utcnow() -> datetime:
    # naive UTC, matches the DateTime columns
    return datetime.now(timezone.utc).replace(tzinfo=None)
