from datetime import date, datetime
from pathlib import Path

import pytest
from httpx import AsyncClient

from littlesteps.core.errors import MediaNotFoundError
from littlesteps.core.tenancy import TenantId
from littlesteps.services.media.base import fingerprint_for
from littlesteps.services.media.keys import (
    UNDATED_BUCKET,
    InvalidMediaKey,
    MediaKey,
    day_bucket_for,
    extension_for,
)
from littlesteps.services.media.local_store import LocalMediaStore
from littlesteps.services.media.memory_store import MemoryMediaStore

FAMILY = TenantId("0b7c5a52-4d0e-4a0c-9d59-6f1c9f5c2a11")


def test_keys_for_same_family_and_day_never_collide() -> None:
    keys = {str(MediaKey.build(FAMILY, date(2024, 3, 15), "jpg")) for _ in range(2000)}
    assert len(keys) == 2000
    assert all(key.startswith(f"{FAMILY.value}/2024-03-15/") for key in keys)


def test_key_round_trips_through_parse() -> None:
    key = MediaKey.build(FAMILY, datetime(2024, 3, 15, 23, 59), "png")
    parsed = MediaKey.parse(str(key))
    assert parsed == key
    assert parsed.family_id == FAMILY.value


def test_day_bucket_falls_back_for_unparsable_dates() -> None:
    assert day_bucket_for("2024-02-29T10:00:00") == "2024-02-29"
    assert day_bucket_for("sometime last spring") == UNDATED_BUCKET
    assert day_bucket_for(None) == UNDATED_BUCKET


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "only-one-segment.jpg",
        f"{FAMILY.value}/2024-03-15",
        f"{FAMILY.value}/../{'a' * 32}.jpg",
        f"../2024-03-15/{'a' * 32}.jpg",
        f"{FAMILY.value}/2024-03-15/not-hex.jpg",
        f"{FAMILY.value}/2024-03-15/{'a' * 32}.tar.gz",
        f"{FAMILY.value}/15-03-2024/{'a' * 32}.jpg",
        f"{FAMILY.value}/2024-03-15/sub/{'a' * 32}.jpg",
    ],
)
def test_parse_rejects_malformed_keys(raw: str) -> None:
    with pytest.raises(InvalidMediaKey):
        MediaKey.parse(raw)


def test_extension_prefers_filename_then_content_type() -> None:
    assert extension_for("IMG_0001.HEIC", "image/heic") == "heic"
    assert extension_for("no-extension", "image/png") == "png"
    assert extension_for("weird.???", None) == "bin"
    assert extension_for(None, None) == "bin"


@pytest.mark.asyncio
async def test_local_store_round_trip_and_stable_fingerprint(tmp_path: Path) -> None:
    store = LocalMediaStore(tmp_path)
    key = MediaKey.build(FAMILY, date(2024, 1, 2), "jpg")
    data = b"\xff\xd8\xff\xe0 pretend jpeg"

    fingerprint = await store.put(key, data, "image/jpeg")
    assert fingerprint == fingerprint_for(data)
    assert (tmp_path / FAMILY.value / "2024-01-02" / key.filename).read_bytes() == data

    first = await store.get(key)
    second = await store.get(key)
    assert first.data == data
    assert first.content_type == "image/jpeg"
    assert first.fingerprint == second.fingerprint == fingerprint

    await store.put(key, b"replacement", "image/jpeg")
    replaced = await store.get(key)
    assert replaced.data == b"replacement"
    assert replaced.fingerprint != fingerprint


@pytest.mark.asyncio
async def test_stores_report_missing_objects(tmp_path: Path) -> None:
    key = MediaKey.build(FAMILY, date(2024, 1, 2), "jpg")
    with pytest.raises(MediaNotFoundError):
        await LocalMediaStore(tmp_path).get(key)
    with pytest.raises(MediaNotFoundError):
        await MemoryMediaStore().get(key)


@pytest.mark.asyncio
async def test_memory_store_round_trip() -> None:
    store = MemoryMediaStore()
    key = MediaKey.build(FAMILY, None, "gif")
    await store.put(key, b"GIF89a", "image/gif")
    stored = await store.get(key)
    assert stored.data == b"GIF89a"
    assert stored.content_type == "image/gif"
    assert key.day_bucket == UNDATED_BUCKET


@pytest.mark.asyncio
async def test_media_endpoint_supports_conditional_get(
    client: AsyncClient,
    media_store: LocalMediaStore,
) -> None:
    key = MediaKey.build(FAMILY, date(2024, 8, 1), "png")
    await media_store.put(key, b"png-bytes", "image/png")

    response = await client.get(f"/api/media/{key}")
    assert response.status_code == 200
    assert response.content == b"png-bytes"
    etag = response.headers["etag"]
    assert etag == f'"{fingerprint_for(b"png-bytes")}"'

    cached = await client.get(f"/api/media/{key}", headers={"If-None-Match": etag})
    assert cached.status_code == 304
    assert cached.content == b""

    stale = await client.get(f"/api/media/{key}", headers={"If-None-Match": '"other"'})
    assert stale.status_code == 200


@pytest.mark.asyncio
async def test_media_endpoint_hides_missing_and_malformed_keys(client: AsyncClient) -> None:
    missing = MediaKey.build(FAMILY, date(2024, 8, 1), "png")
    assert (await client.get(f"/api/media/{missing}")).status_code == 404
    assert (await client.get("/api/media/not/a/valid-key.png")).status_code == 404
    assert (await client.get("/api/media/just-a-file.png")).status_code == 404
