"""Per-family event log.

Events are append-only. Listing is newest-first by the parent-supplied
``date``; events sharing a date come back in reverse insertion order (``seq``),
so repeated reads of an unchanged timeline always page identically. Paging is
offset based and reports no total: a short page means the end was reached.
Pages fetched while other family members are writing may overlap at their
boundaries, so callers merge pages by event id.
"""

from dataclasses import dataclass
from datetime import datetime
import json
import logging
import math

from sqlalchemy import extract
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from littlesteps.core.dates import parse_moment
from littlesteps.core.errors import FamilyNotFoundError, InputValidationError, PersistenceError
from littlesteps.core.tenancy import TenantId
from littlesteps.models.event import Event, EventType
from littlesteps.models.family import Family
from littlesteps.services.media.base import MediaStore
from littlesteps.services.media.keys import MediaKey, extension_for
from littlesteps.services.profile_service import refresh_growth_cache

logger = logging.getLogger(__name__)

DEFAULT_AUTHOR = "Mom"


@dataclass(frozen=True, slots=True)
class EventFilters:
    year: int | None = None
    month: int | None = None
    day: int | None = None

    def clauses(self) -> list:
        clauses = []
        if self.year is not None:
            clauses.append(extract("year", Event.date) == self.year)
        if self.month is not None:
            clauses.append(extract("month", Event.date) == self.month)
        if self.day is not None:
            clauses.append(extract("day", Event.date) == self.day)
        return clauses


@dataclass(frozen=True, slots=True)
class GrowthFields:
    height: float | None = None
    weight: float | None = None

    @property
    def has_values(self) -> bool:
        return self.height is not None or self.weight is not None


@dataclass(frozen=True, slots=True)
class MediaUpload:
    data: bytes
    content_type: str
    filename: str | None = None


def _clean_optional_text(value: str | None) -> str | None:
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None


def parse_event_type(value: str | None) -> EventType:
    cleaned = (value or "").strip().upper()
    if not cleaned:
        raise InputValidationError("Event type is required.")
    try:
        return EventType(cleaned)
    except ValueError as exc:
        allowed = ", ".join(item.value for item in EventType)
        raise InputValidationError(
            f"Unsupported event type '{value}'. Use one of: {allowed}."
        ) from exc


def parse_event_date(value: str | None) -> datetime:
    if value is None or not value.strip():
        raise InputValidationError("Event date is required.")
    try:
        return parse_moment(value)
    except ValueError as exc:
        raise InputValidationError(f"Invalid event date '{value}'.") from exc


def parse_growth_value(raw: str | float | None, field_name: str) -> float | None:
    if raw is None:
        return None
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return None
    try:
        value = float(raw)
    except (TypeError, ValueError) as exc:
        raise InputValidationError(f"Invalid {field_name} '{raw}'.") from exc
    if not math.isfinite(value) or value <= 0:
        raise InputValidationError(f"{field_name.capitalize()} must be a positive number.")
    return value


def decode_tags(event: Event) -> list[str]:
    try:
        tags = json.loads(event.tags or "[]")
    except ValueError:
        return []
    if not isinstance(tags, list):
        return []
    return [str(tag) for tag in tags]


async def list_events(
    session: AsyncSession,
    tenant: TenantId,
    *,
    page: int,
    page_size: int,
    filters: EventFilters | None = None,
) -> list[Event]:
    page = max(1, page)
    page_size = max(1, page_size)
    conditions = [Event.family_id == tenant.value]
    if filters:
        conditions.extend(filters.clauses())

    try:
        result = await session.execute(
            select(Event)
            .where(*conditions)
            .order_by(Event.date.desc(), Event.seq.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
    except SQLAlchemyError as exc:
        raise PersistenceError("Could not load timeline.") from exc
    return list(result.scalars().all())


async def _ensure_family_exists(session: AsyncSession, tenant: TenantId) -> None:
    try:
        family = await session.get(Family, tenant.value)
    except SQLAlchemyError as exc:
        raise PersistenceError("Could not load family.") from exc
    if family is None:
        raise FamilyNotFoundError("No family is registered for this identifier.")


async def add_event(
    session: AsyncSession,
    tenant: TenantId,
    media_store: MediaStore,
    *,
    event_type: str | None,
    date: str | None,
    title: str | None = None,
    description: str | None = None,
    author: str | None = None,
    media: MediaUpload | None = None,
    height: str | float | None = None,
    weight: str | float | None = None,
) -> Event:
    """Record one timeline event.

    Media bytes are written before the event row so a stored event never
    points at a missing object. A failed media write aborts the whole call;
    a failed row insert can leave an unreferenced object behind, which is
    not reclaimed.
    """
    resolved_type = parse_event_type(event_type)
    event_date = parse_event_date(date)
    growth: GrowthFields | None = None
    if resolved_type == EventType.GROWTH:
        growth = GrowthFields(
            height=parse_growth_value(height, "height"),
            weight=parse_growth_value(weight, "weight"),
        )

    await _ensure_family_exists(session, tenant)

    media_key: str | None = None
    if media is not None and media.data:
        key = MediaKey.build(
            tenant,
            event_date,
            extension_for(media.filename, media.content_type),
        )
        await media_store.put(key, media.data, media.content_type)
        media_key = str(key)

    event = Event(
        family_id=tenant.value,
        type=resolved_type,
        date=event_date,
        title=_clean_optional_text(title),
        description=_clean_optional_text(description),
        media_key=media_key,
        height=growth.height if growth else None,
        weight=growth.weight if growth else None,
        author=(_clean_optional_text(author) or DEFAULT_AUTHOR)[:120],
        tags=json.dumps([]),
    )
    session.add(event)
    try:
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        raise PersistenceError("Could not save timeline event.") from exc
    await session.refresh(event)
    # Detach so a rollback inside the growth refresh cannot expire it.
    session.expunge(event)

    if growth is not None and growth.has_values:
        refreshed = await refresh_growth_cache(
            session,
            tenant,
            height=growth.height,
            weight=growth.weight,
        )
        if not refreshed:
            logger.warning("Profile growth cache not refreshed after event %s", event.id)

    return event
