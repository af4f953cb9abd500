from fastapi import APIRouter, Depends, Header, HTTPException, status
from fastapi.responses import Response

from littlesteps.core.errors import MediaNotFoundError, PersistenceError
from littlesteps.services.media.base import MediaStore
from littlesteps.services.media.keys import InvalidMediaKey, MediaKey
from littlesteps.services.media.store_factory import get_media_store

router = APIRouter(prefix="/api/media", tags=["media"])

CACHE_CONTROL = "private, max-age=31536000, immutable"


def _etag_matches(if_none_match: str | None, etag: str) -> bool:
    if not if_none_match:
        return False
    candidates = {value.strip() for value in if_none_match.split(",")}
    weak_etag = f"W/{etag}"
    return "*" in candidates or etag in candidates or weak_etag in candidates


@router.get("/{key:path}")
async def read_media(
    key: str,
    if_none_match: str | None = Header(default=None),
    media_store: MediaStore = Depends(get_media_store),
) -> Response:
    not_found = HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Object Not Found",
    )
    try:
        media_key = MediaKey.parse(key)
    except InvalidMediaKey as exc:
        raise not_found from exc

    try:
        stored = await media_store.get(media_key)
    except MediaNotFoundError as exc:
        raise not_found from exc
    except PersistenceError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Media storage is unavailable.",
        ) from exc

    etag = f'"{stored.fingerprint}"'
    headers = {"ETag": etag, "Cache-Control": CACHE_CONTROL}
    if _etag_matches(if_none_match, etag):
        return Response(status_code=status.HTTP_304_NOT_MODIFIED, headers=headers)
    return Response(content=stored.data, media_type=stored.content_type, headers=headers)
