from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo

from littlesteps.core.config import get_settings


def storage_zone() -> ZoneInfo:
    try:
        return ZoneInfo(get_settings().app_timezone)
    except Exception:
        return ZoneInfo("UTC")


def to_storage_time(moment: datetime) -> datetime:
    """Normalize to a naive wall-clock datetime in the storage timezone.

    Naive inputs are taken to already be in the storage timezone. Dates are
    filtered on their calendar components, so storage and filtering must agree
    on one zone.
    """
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(storage_zone()).replace(tzinfo=None)


def parse_moment(value: str | datetime | date) -> datetime:
    if isinstance(value, datetime):
        return to_storage_time(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    text = value.strip()
    if not text:
        raise ValueError("Empty date value")
    return to_storage_time(datetime.fromisoformat(text))


def parse_calendar_date(value: str | datetime | date) -> date:
    return parse_moment(value).date()


def today_in_storage_zone() -> date:
    return datetime.now(UTC).astimezone(storage_zone()).date()
