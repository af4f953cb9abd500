from functools import lru_cache

from fastapi import HTTPException, status

from littlesteps.core.config import get_settings
from littlesteps.services.media.base import MediaStore
from littlesteps.services.media.local_store import LocalMediaStore
from littlesteps.services.media.memory_store import MemoryMediaStore


@lru_cache
def _build_media_store(backend: str, root: str) -> MediaStore:
    if backend == "local":
        return LocalMediaStore(root)
    if backend == "memory":
        return MemoryMediaStore()
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Unsupported media backend '{backend}'",
    )


def get_media_store() -> MediaStore:
    settings = get_settings()
    return _build_media_store(settings.media_backend.lower().strip(), settings.media_root)
