from datetime import UTC, datetime
from uuid import uuid4

from sqlmodel import Field, SQLModel


def utc_now_naive() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


def new_family_token() -> str:
    return str(uuid4())


class Family(SQLModel, table=True):
    __tablename__ = "families"

    id: str = Field(default_factory=new_family_token, primary_key=True, max_length=64)
    created_at: datetime = Field(default_factory=utc_now_naive, nullable=False)
