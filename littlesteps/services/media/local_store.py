import json
import logging
import os
from pathlib import Path
import tempfile

from starlette.concurrency import run_in_threadpool

from littlesteps.core.errors import MediaNotFoundError, PersistenceError
from littlesteps.services.media.base import MediaStore, StoredMedia, fingerprint_for
from littlesteps.services.media.keys import MediaKey

logger = logging.getLogger(__name__)

METADATA_SUFFIX = ".meta.json"


def _atomic_write(path: Path, payload: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=".upload-")
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(payload)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)
        raise


class LocalMediaStore(MediaStore):
    """Filesystem-backed store laid out exactly like the key.

    Each object sits next to a JSON sidecar holding its content type and
    fingerprint, so reads never rehash the bytes.
    """

    def __init__(self, root: str | Path):
        self.root = Path(root).resolve()

    def _path_for(self, key: MediaKey) -> Path:
        path = (self.root / key.family_id / key.day_bucket / key.filename).resolve()
        if self.root not in path.parents:
            raise MediaNotFoundError(f"Media object '{key}' was not found.")
        return path

    def _write(self, key: MediaKey, data: bytes, content_type: str) -> str:
        path = self._path_for(key)
        fingerprint = fingerprint_for(data)
        metadata = {
            "content_type": content_type,
            "fingerprint": fingerprint,
            "size": len(data),
        }
        _atomic_write(path, data)
        _atomic_write(
            path.with_name(path.name + METADATA_SUFFIX),
            json.dumps(metadata).encode("utf-8"),
        )
        return fingerprint

    def _read(self, key: MediaKey) -> StoredMedia:
        path = self._path_for(key)
        metadata_path = path.with_name(path.name + METADATA_SUFFIX)
        if not path.is_file():
            raise MediaNotFoundError(f"Media object '{key}' was not found.")
        data = path.read_bytes()
        content_type = "application/octet-stream"
        fingerprint = ""
        if metadata_path.is_file():
            metadata = json.loads(metadata_path.read_text(encoding="utf-8"))
            content_type = str(metadata.get("content_type") or content_type)
            fingerprint = str(metadata.get("fingerprint") or "")
        if not fingerprint:
            fingerprint = fingerprint_for(data)
        return StoredMedia(data=data, content_type=content_type, fingerprint=fingerprint)

    async def put(self, key: MediaKey, data: bytes, content_type: str) -> str:
        try:
            return await run_in_threadpool(self._write, key, data, content_type)
        except OSError as exc:
            logger.exception("Media write failed for %s", key)
            raise PersistenceError("Could not store media object.") from exc

    async def get(self, key: MediaKey) -> StoredMedia:
        try:
            return await run_in_threadpool(self._read, key)
        except (OSError, ValueError) as exc:
            raise PersistenceError("Could not read media object.") from exc
