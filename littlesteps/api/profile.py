from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from littlesteps.api.deps import get_tenant
from littlesteps.api.uploads import read_media_upload
from littlesteps.core.dates import today_in_storage_zone
from littlesteps.core.db import get_session
from littlesteps.core.errors import InputValidationError, PersistenceError, ProfileNotFoundError
from littlesteps.core.tenancy import TenantId
from littlesteps.models.profile import Profile
from littlesteps.schemas.profile import (
    AvatarUploadResponse,
    ProfileResponse,
    ProfileUpdateRequest,
)
from littlesteps.services.media.base import MediaStore
from littlesteps.services.media.keys import MediaKey, extension_for
from littlesteps.services.media.store_factory import get_media_store
from littlesteps.services.media.urls import media_url_for_key
from littlesteps.services.profile_service import get_profile, set_profile_photo, update_profile

router = APIRouter(prefix="/api/profile", tags=["profile"])


def _to_profile_response(profile: Profile) -> ProfileResponse:
    return ProfileResponse(
        family_id=profile.family_id,
        name=profile.name,
        birth_date=profile.birth_date.isoformat(),
        gender=profile.gender.value if hasattr(profile.gender, "value") else profile.gender,
        photo_url=media_url_for_key(profile.photo_key),
        current_height=profile.current_height,
        current_weight=profile.current_weight,
    )


def _profile_not_found(exc: ProfileNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


def _persistence_failure(exc: PersistenceError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Profile storage is unavailable.",
    )


@router.get("", response_model=ProfileResponse)
async def read_profile(
    tenant: TenantId = Depends(get_tenant),
    session: AsyncSession = Depends(get_session),
) -> ProfileResponse:
    try:
        profile = await get_profile(session, tenant)
    except ProfileNotFoundError as exc:
        raise _profile_not_found(exc) from exc
    except PersistenceError as exc:
        raise _persistence_failure(exc) from exc
    return _to_profile_response(profile)


@router.put("", response_model=ProfileResponse)
async def edit_profile(
    payload: ProfileUpdateRequest,
    tenant: TenantId = Depends(get_tenant),
    session: AsyncSession = Depends(get_session),
) -> ProfileResponse:
    try:
        profile = await update_profile(session, tenant, payload.changes())
    except ProfileNotFoundError as exc:
        raise _profile_not_found(exc) from exc
    except InputValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc
    except PersistenceError as exc:
        raise _persistence_failure(exc) from exc
    return _to_profile_response(profile)


@router.post("/avatar", response_model=AvatarUploadResponse)
async def upload_avatar(
    file: UploadFile = File(...),
    tenant: TenantId = Depends(get_tenant),
    session: AsyncSession = Depends(get_session),
    media_store: MediaStore = Depends(get_media_store),
) -> AvatarUploadResponse:
    upload = await read_media_upload(file)
    if upload is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Avatar file is empty.",
        )

    try:
        # Confirms the profile exists before anything is written.
        await get_profile(session, tenant)
        key = MediaKey.build(
            tenant,
            today_in_storage_zone(),
            extension_for(upload.filename, upload.content_type),
        )
        await media_store.put(key, upload.data, upload.content_type)
        profile = await set_profile_photo(session, tenant, str(key))
    except ProfileNotFoundError as exc:
        raise _profile_not_found(exc) from exc
    except PersistenceError as exc:
        raise _persistence_failure(exc) from exc

    return AvatarUploadResponse(photo_url=media_url_for_key(profile.photo_key) or "")
