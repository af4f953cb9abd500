from pydantic import BaseModel, Field

SUPPORTED_LANGUAGES: dict[str, str] = {
    "en": "English",
    "zh": "Simplified Chinese",
    "ja": "Japanese",
    "ko": "Korean",
}


class ImageInput(BaseModel):
    data: bytes
    mime_type: str = "image/jpeg"


class JournalPrompt(BaseModel):
    context_text: str = ""
    language: str = "en"
    image: ImageInput | None = None


class MilestonePrompt(BaseModel):
    age_in_months: int = Field(ge=0)
    language: str = "en"
