from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from littlesteps.api.deps import get_advice_provider, get_tenant
from littlesteps.core.dates import today_in_storage_zone
from littlesteps.core.db import get_session
from littlesteps.core.errors import PersistenceError, ProfileNotFoundError
from littlesteps.core.tenancy import TenantId
from littlesteps.schemas.advice import (
    AdviceTextResponse,
    JournalComposeRequest,
    MilestoneAdviceRequest,
)
from littlesteps.services.llm.advice_service import (
    MILESTONE_FALLBACK_TEXT,
    compose_journal_entry_safely,
    decode_image_payload,
    milestone_advice_safely,
)
from littlesteps.services.llm.base import AdviceProvider
from littlesteps.services.llm.settings_service import normalize_language
from littlesteps.services.llm.types import JournalPrompt, MilestonePrompt
from littlesteps.services.profile_service import age_in_months, get_profile

router = APIRouter(prefix="/api/ai", tags=["ai"])


@router.post(
    "/journal",
    response_model=AdviceTextResponse,
    dependencies=[Depends(get_tenant)],
)
async def compose_journal(
    payload: JournalComposeRequest,
    provider: AdviceProvider = Depends(get_advice_provider),
) -> AdviceTextResponse:
    prompt = JournalPrompt(
        context_text=" ".join((payload.context or "").split()),
        language=normalize_language(payload.lang),
        image=decode_image_payload(payload.image_base64),
    )
    text = await compose_journal_entry_safely(provider, prompt)
    return AdviceTextResponse(text=text)


@router.post("/milestones", response_model=AdviceTextResponse)
async def suggest_milestones(
    payload: MilestoneAdviceRequest,
    tenant: TenantId = Depends(get_tenant),
    provider: AdviceProvider = Depends(get_advice_provider),
    session: AsyncSession = Depends(get_session),
) -> AdviceTextResponse:
    age = payload.age_in_months
    if age is None:
        try:
            profile = await get_profile(session, tenant)
        except (ProfileNotFoundError, PersistenceError):
            return AdviceTextResponse(text=MILESTONE_FALLBACK_TEXT)
        age = age_in_months(profile.birth_date, today_in_storage_zone())

    prompt = MilestonePrompt(age_in_months=age, language=normalize_language(payload.lang))
    text = await milestone_advice_safely(provider, prompt)
    return AdviceTextResponse(text=text)
