from littlesteps.core.errors import AdviceUnavailableError
from littlesteps.services.llm.base import AdviceProvider
from littlesteps.services.llm.cerebras_provider import CerebrasAdviceProvider
from littlesteps.services.llm.gemini_provider import GeminiAdviceProvider
from littlesteps.services.llm.mock_provider import MockAdviceProvider
from littlesteps.services.llm.openai_provider import OpenAIAdviceProvider
from littlesteps.services.llm.settings_service import LLMProvider, get_env_runtime_config
from littlesteps.services.llm.types import ImageInput


class UnavailableAdviceProvider(AdviceProvider):
    def __init__(self, reason: str):
        self.reason = reason

    async def generate_text(self, prompt: str, image: ImageInput | None = None) -> str:
        raise AdviceUnavailableError(self.reason)


def get_advice_provider_for_env() -> AdviceProvider:
    runtime = get_env_runtime_config()

    if runtime.provider == LLMProvider.MOCK:
        return MockAdviceProvider()
    if not runtime.api_key:
        raise AdviceUnavailableError(
            f"{runtime.provider.value} API key is missing. "
            f"Set {runtime.provider.value.upper()}_API_KEY in backend .env."
        )
    if runtime.provider == LLMProvider.OPENAI:
        return OpenAIAdviceProvider(api_key=runtime.api_key, model=runtime.model)
    if runtime.provider == LLMProvider.GEMINI:
        return GeminiAdviceProvider(api_key=runtime.api_key, model=runtime.model)
    if runtime.provider == LLMProvider.CEREBRAS:
        return CerebrasAdviceProvider(api_key=runtime.api_key, model=runtime.model)
    raise AdviceUnavailableError(f"Unsupported LLM provider '{runtime.provider}'")
