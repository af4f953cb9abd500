import logging
from datetime import date

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from littlesteps.core.config import get_settings
from littlesteps.core.errors import InputValidationError, PersistenceError
from littlesteps.models.family import Family
from littlesteps.models.profile import Gender, Profile

logger = logging.getLogger(__name__)


def clean_baby_name(value: str | None) -> str:
    return " ".join(str(value or "").strip().split())


async def create_family(
    session: AsyncSession,
    *,
    name: str,
    birth_date: date,
    gender: Gender | None = None,
    height: float | None = None,
    weight: float | None = None,
) -> tuple[Family, Profile]:
    """Register a family together with its initial profile in one commit."""
    settings = get_settings()
    cleaned_name = clean_baby_name(name)
    if not cleaned_name:
        raise InputValidationError("Baby name is required.")

    family = Family()
    profile = Profile(
        family_id=family.id,
        name=cleaned_name[:120],
        birth_date=birth_date,
        gender=gender,
        current_height=height if height is not None else settings.default_height_cm,
        current_weight=weight if weight is not None else settings.default_weight_kg,
    )
    session.add(family)
    session.add(profile)
    try:
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        raise PersistenceError("Could not create family.") from exc

    await session.refresh(family)
    await session.refresh(profile)
    logger.info("Created family %s", family.id)
    return family, profile
