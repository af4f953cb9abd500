from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from littlesteps.api.deps import get_tenant
from littlesteps.api.uploads import read_media_upload
from littlesteps.core.config import get_settings
from littlesteps.core.dates import storage_zone
from littlesteps.core.db import get_session
from littlesteps.core.errors import FamilyNotFoundError, InputValidationError, PersistenceError
from littlesteps.core.tenancy import TenantId
from littlesteps.models.event import Event
from littlesteps.schemas.timeline import GrowthData, TimelineEventResponse
from littlesteps.services.media.base import MediaStore
from littlesteps.services.media.store_factory import get_media_store
from littlesteps.services.media.urls import media_url_for_key
from littlesteps.services.timeline_service import (
    EventFilters,
    add_event,
    decode_tags,
    list_events,
)

router = APIRouter(prefix="/api/timeline", tags=["timeline"])
settings = get_settings()


def to_event_response(event: Event) -> TimelineEventResponse:
    growth_data = None
    if event.height is not None or event.weight is not None:
        growth_data = GrowthData(height=event.height, weight=event.weight)
    return TimelineEventResponse(
        id=event.id,
        type=event.type.value if hasattr(event.type, "value") else str(event.type),
        date=event.date.replace(tzinfo=storage_zone()).isoformat(),
        title=event.title,
        description=event.description,
        media_url=media_url_for_key(event.media_key),
        growth_data=growth_data,
        tags=decode_tags(event),
        author=event.author,
    )


@router.get(
    "",
    response_model=list[TimelineEventResponse],
)
async def read_timeline(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=settings.default_page_size, ge=1, le=settings.max_page_size),
    year: int | None = Query(default=None, ge=1, le=9999),
    month: int | None = Query(default=None, ge=1, le=12),
    day: int | None = Query(default=None, ge=1, le=31),
    tenant: TenantId = Depends(get_tenant),
    session: AsyncSession = Depends(get_session),
) -> list[TimelineEventResponse]:
    try:
        events = await list_events(
            session,
            tenant,
            page=page,
            page_size=limit,
            filters=EventFilters(year=year, month=month, day=day),
        )
    except PersistenceError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch timeline.",
        ) from exc
    return [to_event_response(event) for event in events]


@router.post(
    "",
    response_model=TimelineEventResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_timeline_event(
    type: str | None = Form(default=None),
    date: str | None = Form(default=None),
    title: str | None = Form(default=None),
    description: str | None = Form(default=None),
    author: str | None = Form(default=None),
    height: str | None = Form(default=None),
    weight: str | None = Form(default=None),
    file: UploadFile | None = File(default=None),
    tenant: TenantId = Depends(get_tenant),
    session: AsyncSession = Depends(get_session),
    media_store: MediaStore = Depends(get_media_store),
) -> TimelineEventResponse:
    try:
        media = await read_media_upload(file)
        event = await add_event(
            session,
            tenant,
            media_store,
            event_type=type,
            date=date,
            title=title,
            description=description,
            author=author,
            media=media,
            height=height,
            weight=weight,
        )
    except InputValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc
    except FamilyNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    except PersistenceError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save record.",
        ) from exc

    return to_event_response(event)
