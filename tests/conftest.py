from collections.abc import AsyncIterator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

from littlesteps.core.db import get_session
from littlesteps.main import app
from littlesteps.models import event as _event  # noqa: F401
from littlesteps.models import family as _family  # noqa: F401
from littlesteps.models import profile as _profile  # noqa: F401
from littlesteps.services.media.local_store import LocalMediaStore
from littlesteps.services.media.store_factory import get_media_store


@pytest.fixture
def media_store(tmp_path: Path) -> LocalMediaStore:
    return LocalMediaStore(tmp_path / "media")


@pytest.fixture
async def session_maker() -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield maker

    await engine.dispose()


@pytest.fixture
async def client(
    session_maker: async_sessionmaker[AsyncSession],
    media_store: LocalMediaStore,
) -> AsyncIterator[AsyncClient]:
    async def override_get_session() -> AsyncIterator[AsyncSession]:
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_media_store] = lambda: media_store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as test_client:
        yield test_client

    app.dependency_overrides.clear()
