from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SerializerFunctionWrapHandler, model_serializer


class GrowthData(BaseModel):
    height: float | None = None
    weight: float | None = None


class TimelineEventResponse(BaseModel):
    """Wire shape of one timeline event.

    Every key is always present, nulls included, except ``growthData``,
    which is left out entirely for events without measurements.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    type: str
    date: str
    title: str | None = None
    description: str | None = None
    media_url: str | None = Field(default=None, alias="mediaUrl")
    growth_data: GrowthData | None = Field(default=None, alias="growthData")
    tags: list[str] = Field(default_factory=list)
    author: str

    @model_serializer(mode="wrap")
    def _omit_missing_growth(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        if self.growth_data is None:
            data.pop("growthData", None)
            data.pop("growth_data", None)
        return data
