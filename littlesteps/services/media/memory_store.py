from littlesteps.core.errors import MediaNotFoundError
from littlesteps.services.media.base import MediaStore, StoredMedia, fingerprint_for
from littlesteps.services.media.keys import MediaKey


class MemoryMediaStore(MediaStore):
    def __init__(self) -> None:
        self._objects: dict[str, StoredMedia] = {}

    async def put(self, key: MediaKey, data: bytes, content_type: str) -> str:
        fingerprint = fingerprint_for(data)
        self._objects[str(key)] = StoredMedia(
            data=bytes(data),
            content_type=content_type,
            fingerprint=fingerprint,
        )
        return fingerprint

    async def get(self, key: MediaKey) -> StoredMedia:
        stored = self._objects.get(str(key))
        if stored is None:
            raise MediaNotFoundError(f"Media object '{key}' was not found.")
        return stored
