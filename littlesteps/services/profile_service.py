import logging
import math
from datetime import UTC, date, datetime
from typing import Any

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from littlesteps.core.errors import InputValidationError, PersistenceError, ProfileNotFoundError
from littlesteps.core.tenancy import TenantId
from littlesteps.models.profile import Profile

logger = logging.getLogger(__name__)

DAYS_PER_MONTH = 30.44
EDITABLE_PROFILE_FIELDS = ("name", "birth_date", "gender", "current_height", "current_weight")
NON_NULLABLE_PROFILE_FIELDS = {"name", "birth_date", "current_height", "current_weight"}


def _current_time() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


def age_in_months(birth_date: date, today: date) -> int:
    return max(0, math.floor((today - birth_date).days / DAYS_PER_MONTH))


async def get_profile(session: AsyncSession, tenant: TenantId) -> Profile:
    try:
        result = await session.execute(select(Profile).where(Profile.family_id == tenant.value))
    except SQLAlchemyError as exc:
        raise PersistenceError("Could not load profile.") from exc
    profile = result.scalar_one_or_none()
    if not profile:
        raise ProfileNotFoundError("Profile not found for this family.")
    return profile


async def update_profile(
    session: AsyncSession,
    tenant: TenantId,
    changes: dict[str, Any],
) -> Profile:
    """Apply a partial update.

    ``changes`` holds only the fields the caller supplied; keys it does not
    carry are left untouched. Unknown keys are ignored, so an update with no
    recognized field is a successful no-op.
    """
    profile = await get_profile(session, tenant)
    applied = {key: value for key, value in changes.items() if key in EDITABLE_PROFILE_FIELDS}
    if not applied:
        return profile

    for key, value in applied.items():
        if value is None and key in NON_NULLABLE_PROFILE_FIELDS:
            raise InputValidationError(f"Profile field '{key}' cannot be cleared.")
        if key == "name":
            value = " ".join(str(value).strip().split())
            if not value:
                raise InputValidationError("Baby name cannot be empty.")
        setattr(profile, key, value)

    profile.updated_at = _current_time()
    session.add(profile)
    try:
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        raise PersistenceError("Could not update profile.") from exc
    await session.refresh(profile)
    return profile


async def set_profile_photo(session: AsyncSession, tenant: TenantId, photo_key: str) -> Profile:
    profile = await get_profile(session, tenant)
    profile.photo_key = photo_key
    profile.updated_at = _current_time()
    session.add(profile)
    try:
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        raise PersistenceError("Could not update profile photo.") from exc
    await session.refresh(profile)
    return profile


async def _apply_growth_values(
    session: AsyncSession,
    tenant: TenantId,
    values: dict[str, float],
) -> int:
    result = await session.execute(
        update(Profile)
        .where(Profile.family_id == tenant.value)
        .values(**values, updated_at=_current_time())
    )
    await session.commit()
    return result.rowcount or 0


async def refresh_growth_cache(
    session: AsyncSession,
    tenant: TenantId,
    *,
    height: float | None,
    weight: float | None,
) -> bool:
    """Copy the latest growth measurements onto the profile.

    The profile's current height/weight are a cache of the newest GROWTH
    values. Each supplied value overwrites its column and a missing value
    leaves the column as it is. This runs after the event itself is
    committed and never raises: on failure the cache stays stale until the
    next successful growth event. Concurrent writers race with last-write-wins.
    """
    values: dict[str, float] = {}
    if height is not None:
        values["current_height"] = height
    if weight is not None:
        values["current_weight"] = weight
    if not values:
        return False

    try:
        updated = await _apply_growth_values(session, tenant, values)
    except SQLAlchemyError as exc:
        logger.warning("Growth cache refresh failed for family %s: %s", tenant, exc)
        try:
            await session.rollback()
        except SQLAlchemyError:
            logger.warning("Rollback after growth cache failure also failed for %s", tenant)
        return False
    return updated > 0
