import base64

import httpx

from littlesteps.core.errors import AdviceUnavailableError
from littlesteps.services.llm.base import AdviceProvider
from littlesteps.services.llm.types import ImageInput


class GeminiAdviceProvider(AdviceProvider):
    def __init__(self, api_key: str, model: str):
        self.api_key = api_key
        self.model = model

    async def generate_text(self, prompt: str, image: ImageInput | None = None) -> str:
        parts: list[dict[str, object]] = []
        if image is not None:
            parts.append(
                {
                    "inlineData": {
                        "data": base64.b64encode(image.data).decode("ascii"),
                        "mimeType": image.mime_type,
                    }
                }
            )
        parts.append({"text": prompt})
        payload = {
            "contents": [{"role": "user", "parts": parts}],
            "generationConfig": {"temperature": 0.8},
        }
        timeout = httpx.Timeout(30.0, connect=10.0)
        endpoint = (
            f"https://generativelanguage.googleapis.com/v1beta/models/{self.model}:generateContent"
            f"?key={self.api_key}"
        )
        async with httpx.AsyncClient(timeout=timeout) as client:
            response = await client.post(endpoint, json=payload)
            response.raise_for_status()
            data = response.json()
        try:
            content_parts = data["candidates"][0]["content"]["parts"]
        except (KeyError, IndexError, TypeError) as exc:
            raise AdviceUnavailableError("Gemini returned no candidates.") from exc
        return "".join(
            part.get("text", "") for part in content_parts if isinstance(part, dict)
        ).strip()
