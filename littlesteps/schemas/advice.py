from pydantic import BaseModel, ConfigDict, Field


class JournalComposeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    image_base64: str | None = Field(default=None, alias="imageBase64")
    context: str | None = Field(default=None, max_length=4000)
    lang: str | None = None


class MilestoneAdviceRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    age_in_months: int | None = Field(default=None, ge=0, le=600, alias="ageInMonths")
    lang: str | None = None


class AdviceTextResponse(BaseModel):
    text: str
