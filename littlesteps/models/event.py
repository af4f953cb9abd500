from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4

from sqlalchemy import Column, Index, String
from sqlmodel import Field, SQLModel


def utc_now_naive() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


def new_event_token() -> str:
    return str(uuid4())


class EventType(str, Enum):
    PHOTO = "PHOTO"
    MILESTONE = "MILESTONE"
    GROWTH = "GROWTH"
    NOTE = "NOTE"


class Event(SQLModel, table=True):
    __tablename__ = "events"
    __table_args__ = (Index("ix_events_family_date_seq", "family_id", "date", "seq"),)

    # Insertion order; breaks ties between events sharing the same date.
    seq: int | None = Field(default=None, primary_key=True)
    id: str = Field(
        default_factory=new_event_token,
        unique=True,
        index=True,
        nullable=False,
        max_length=64,
    )
    family_id: str = Field(foreign_key="families.id", nullable=False, index=True, max_length=64)
    type: EventType = Field(nullable=False)
    date: datetime = Field(nullable=False, index=True)
    title: str | None = Field(default=None, max_length=255)
    description: str | None = Field(default=None, max_length=5000)
    media_key: str | None = Field(default=None, max_length=255)
    height: float | None = Field(default=None)
    weight: float | None = Field(default=None)
    author: str = Field(nullable=False, max_length=120)
    tags: str = Field(default="[]", sa_column=Column(String(1000), nullable=False, default="[]"))
    created_at: datetime = Field(default_factory=utc_now_naive, nullable=False)
