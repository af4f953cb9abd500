import logging

from fastapi import Header, HTTPException, status

from littlesteps.core.config import get_settings
from littlesteps.core.errors import AdviceUnavailableError, MissingTenantError
from littlesteps.core.tenancy import TenantId, resolve_tenant
from littlesteps.services.llm.base import AdviceProvider
from littlesteps.services.llm.provider_factory import (
    UnavailableAdviceProvider,
    get_advice_provider_for_env,
)

logger = logging.getLogger(__name__)
settings = get_settings()


async def get_tenant(
    family_token: str | None = Header(default=None, alias=settings.family_header_name),
) -> TenantId:
    try:
        return resolve_tenant(family_token)
    except MissingTenantError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Missing {settings.family_header_name} header",
        ) from exc


async def get_advice_provider() -> AdviceProvider:
    try:
        return get_advice_provider_for_env()
    except AdviceUnavailableError as exc:
        logger.warning("Advice provider unavailable: %s", exc)
        return UnavailableAdviceProvider(str(exc))
