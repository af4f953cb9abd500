from enum import Enum

from littlesteps.core.config import get_settings
from littlesteps.services.llm.types import SUPPORTED_LANGUAGES


class LLMProvider(str, Enum):
    MOCK = "mock"
    OPENAI = "openai"
    GEMINI = "gemini"
    CEREBRAS = "cerebras"


class LLMRuntimeConfig:
    def __init__(
        self,
        provider: LLMProvider,
        model: str,
        api_key: str | None,
        timeout_seconds: float,
    ):
        self.provider = provider
        self.model = model
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds


def _provider_from_env() -> LLMProvider:
    try:
        return LLMProvider(get_settings().llm_provider.lower().strip())
    except ValueError:
        return LLMProvider.MOCK


def _default_model_for(provider: LLMProvider) -> str:
    settings = get_settings()
    if provider == LLMProvider.OPENAI:
        return settings.openai_model
    if provider == LLMProvider.GEMINI:
        return settings.gemini_model
    if provider == LLMProvider.CEREBRAS:
        return settings.cerebras_model
    return settings.llm_model


def _default_api_key_for(provider: LLMProvider) -> str | None:
    settings = get_settings()
    if provider == LLMProvider.OPENAI:
        return settings.openai_api_key
    if provider == LLMProvider.GEMINI:
        return settings.gemini_api_key
    if provider == LLMProvider.CEREBRAS:
        return settings.cerebras_api_key
    return None


def normalize_language(value: str | None, default: str | None = None) -> str:
    fallback = default or get_settings().default_language
    cleaned = (value or "").strip().lower()
    # Accept region-tagged codes such as "zh-CN".
    cleaned = cleaned.split("-")[0].split("_")[0]
    if cleaned in SUPPORTED_LANGUAGES:
        return cleaned
    return fallback if fallback in SUPPORTED_LANGUAGES else "en"


def get_env_runtime_config() -> LLMRuntimeConfig:
    settings = get_settings()
    provider = _provider_from_env()
    model = _default_model_for(provider).strip() or settings.llm_model
    api_key = _default_api_key_for(provider)
    return LLMRuntimeConfig(
        provider=provider,
        model=model,
        api_key=api_key.strip() if api_key else None,
        timeout_seconds=max(1.0, settings.advice_timeout_seconds),
    )
