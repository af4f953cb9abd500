from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator

from littlesteps.core.dates import parse_calendar_date
from littlesteps.models.profile import Gender


class ProfileUpdateRequest(BaseModel):
    """Partial profile edit.

    Only fields present in the request body are applied; read them with
    ``model_dump(exclude_unset=True)`` so an omitted field is never confused
    with an explicit null.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str | None = Field(default=None, max_length=120)
    birth_date: date | None = Field(default=None, alias="birthDate")
    gender: Gender | None = None
    current_height: float | None = Field(default=None, gt=0, alias="currentHeight")
    current_weight: float | None = Field(default=None, gt=0, alias="currentWeight")

    @field_validator("birth_date", mode="before")
    @classmethod
    def _coerce_birth_date(cls, value: object) -> object:
        if isinstance(value, str):
            try:
                return parse_calendar_date(value)
            except ValueError as exc:
                raise ValueError("birthDate must be an ISO date or datetime") from exc
        return value

    def changes(self) -> dict[str, object]:
        return self.model_dump(exclude_unset=True)


class ProfileResponse(BaseModel):
    family_id: str
    name: str
    birth_date: str
    gender: str | None = None
    photo_url: str | None = None
    current_height: float
    current_weight: float


class AvatarUploadResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    photo_url: str = Field(alias="photoUrl")
