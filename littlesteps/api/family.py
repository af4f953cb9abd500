from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from littlesteps.core.db import get_session
from littlesteps.core.errors import InputValidationError, PersistenceError
from littlesteps.schemas.family import FamilyCreateRequest, FamilyCreateResponse
from littlesteps.services.family_service import create_family

router = APIRouter(prefix="/api/family", tags=["family"])


@router.post("", response_model=FamilyCreateResponse, status_code=status.HTTP_201_CREATED)
async def register_family(
    payload: FamilyCreateRequest,
    session: AsyncSession = Depends(get_session),
) -> FamilyCreateResponse:
    try:
        family, profile = await create_family(
            session,
            name=payload.baby_name,
            birth_date=payload.birth_date,
            gender=payload.gender,
            height=payload.height,
            weight=payload.weight,
        )
    except InputValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc
    except PersistenceError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create family.",
        ) from exc

    return FamilyCreateResponse(family_id=family.id, name=profile.name)
