"""Best-effort access to the text-generation capability.

Generation is slow and may be unconfigured or failing. Callers get prose or a
placeholder, never an exception, and nothing here is retried.
"""

import asyncio
import base64
import binascii
import logging
import re

from littlesteps.core.errors import AdviceUnavailableError
from littlesteps.services.llm.base import AdviceProvider
from littlesteps.services.llm.settings_service import get_env_runtime_config
from littlesteps.services.llm.types import ImageInput, JournalPrompt, MilestonePrompt

logger = logging.getLogger(__name__)

JOURNAL_UNAVAILABLE_TEXT = "AI service currently unavailable."
JOURNAL_FAILED_TEXT = "Could not generate entry."
MILESTONE_FALLBACK_TEXT = ""

DATA_URL_PATTERN = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?:;[^,]*)?,", re.I)


def decode_image_payload(image_base64: str | None) -> ImageInput | None:
    """Decode a bare or ``data:`` URL base64 image; undecodable input yields None."""
    if not image_base64 or not image_base64.strip():
        return None
    raw = image_base64.strip()
    mime_type = "image/jpeg"
    match = DATA_URL_PATTERN.match(raw)
    if match:
        mime_type = (match.group("mime") or mime_type).lower()
        raw = raw[match.end():]
    elif "," in raw:
        raw = raw.split(",", 1)[1]
    try:
        data = base64.b64decode(raw, validate=True)
    except (binascii.Error, ValueError):
        logger.warning("Ignoring undecodable journal image payload")
        return None
    if not data:
        return None
    return ImageInput(data=data, mime_type=mime_type)


async def _run_with_timeout(coro, timeout_seconds: float) -> str:
    return await asyncio.wait_for(coro, timeout=timeout_seconds)


async def compose_journal_entry_safely(
    provider: AdviceProvider,
    prompt: JournalPrompt,
) -> str:
    timeout_seconds = get_env_runtime_config().timeout_seconds
    try:
        text = await _run_with_timeout(provider.compose_journal_entry(prompt), timeout_seconds)
    except AdviceUnavailableError as exc:
        logger.warning("Journal generation unavailable: %s", exc)
        return JOURNAL_UNAVAILABLE_TEXT
    except asyncio.TimeoutError:
        logger.warning("Journal generation timed out after %.1fs", timeout_seconds)
        return JOURNAL_FAILED_TEXT
    except Exception as exc:
        logger.warning("Journal generation failed: %s", exc)
        return JOURNAL_FAILED_TEXT
    return (text or "").strip() or JOURNAL_FAILED_TEXT


async def milestone_advice_safely(
    provider: AdviceProvider,
    prompt: MilestonePrompt,
) -> str:
    timeout_seconds = get_env_runtime_config().timeout_seconds
    try:
        text = await _run_with_timeout(provider.milestone_advice(prompt), timeout_seconds)
    except AdviceUnavailableError as exc:
        logger.warning("Milestone advice unavailable: %s", exc)
        return MILESTONE_FALLBACK_TEXT
    except asyncio.TimeoutError:
        logger.warning("Milestone advice timed out after %.1fs", timeout_seconds)
        return MILESTONE_FALLBACK_TEXT
    except Exception as exc:
        logger.warning("Milestone advice failed: %s", exc)
        return MILESTONE_FALLBACK_TEXT
    return (text or "").strip()
