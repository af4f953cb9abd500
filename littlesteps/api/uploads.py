from fastapi import HTTPException, UploadFile, status

from littlesteps.core.config import get_settings
from littlesteps.services.timeline_service import MediaUpload

settings = get_settings()


def normalize_content_type(value: str | None) -> str:
    if not value:
        return "application/octet-stream"
    return value.split(";")[0].strip().lower() or "application/octet-stream"


async def read_media_upload(upload: UploadFile | None) -> MediaUpload | None:
    """Read an uploaded file into memory; empty or missing uploads yield None."""
    if upload is None:
        return None
    data = await upload.read()
    if not data:
        return None
    if len(data) > settings.media_max_upload_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_CONTENT_TOO_LARGE,
            detail=f"File is too large. Limit is {settings.media_max_upload_mb} MB.",
        )
    return MediaUpload(
        data=data,
        content_type=normalize_content_type(upload.content_type),
        filename=upload.filename,
    )
