from fastapi import APIRouter

from littlesteps.api.ai import router as ai_router
from littlesteps.api.family import router as family_router
from littlesteps.api.media import router as media_router
from littlesteps.api.profile import router as profile_router
from littlesteps.api.timeline import router as timeline_router

api_router = APIRouter()
api_router.include_router(ai_router)
api_router.include_router(family_router)
api_router.include_router(media_router)
api_router.include_router(profile_router)
api_router.include_router(timeline_router)
