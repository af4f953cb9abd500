from abc import ABC, abstractmethod
from dataclasses import dataclass
import hashlib

from littlesteps.services.media.keys import MediaKey


def fingerprint_for(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


@dataclass(frozen=True, slots=True)
class StoredMedia:
    data: bytes
    content_type: str
    fingerprint: str


class MediaStore(ABC):
    @abstractmethod
    async def put(self, key: MediaKey, data: bytes, content_type: str) -> str:
        """Write ``data`` under ``key``, overwriting any existing object.

        Returns the content fingerprint.
        """
        raise NotImplementedError

    @abstractmethod
    async def get(self, key: MediaKey) -> StoredMedia:
        raise NotImplementedError
