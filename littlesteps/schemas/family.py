from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator

from littlesteps.core.dates import parse_calendar_date
from littlesteps.models.profile import Gender


class FamilyCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    baby_name: str = Field(alias="babyName", min_length=1, max_length=120)
    birth_date: date = Field(alias="birthDate")
    gender: Gender | None = None
    height: float | None = Field(default=None, gt=0)
    weight: float | None = Field(default=None, gt=0)

    @field_validator("birth_date", mode="before")
    @classmethod
    def _coerce_birth_date(cls, value: object) -> object:
        if isinstance(value, str):
            try:
                return parse_calendar_date(value)
            except ValueError as exc:
                raise ValueError("birthDate must be an ISO date or datetime") from exc
        return value

    @field_validator("gender", mode="before")
    @classmethod
    def _blank_gender_is_absent(cls, value: object) -> object:
        if isinstance(value, str):
            cleaned = value.strip().lower()
            return cleaned or None
        return value


class FamilyCreateResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    family_id: str = Field(alias="familyId")
    name: str
