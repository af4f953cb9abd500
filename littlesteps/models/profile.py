from datetime import UTC, date, datetime
from enum import Enum

from sqlmodel import Field, SQLModel


def utc_now_naive() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


class Gender(str, Enum):
    BOY = "boy"
    GIRL = "girl"
    OTHER = "other"


class Profile(SQLModel, table=True):
    __tablename__ = "profiles"

    family_id: str = Field(foreign_key="families.id", primary_key=True, max_length=64)
    name: str = Field(nullable=False, max_length=120)
    birth_date: date = Field(nullable=False)
    gender: Gender | None = Field(default=None)
    photo_key: str | None = Field(default=None, max_length=255)
    current_height: float = Field(nullable=False)
    current_weight: float = Field(nullable=False)
    created_at: datetime = Field(default_factory=utc_now_naive, nullable=False)
    updated_at: datetime = Field(default_factory=utc_now_naive, nullable=False)
