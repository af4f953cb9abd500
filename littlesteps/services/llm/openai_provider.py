import base64

import httpx

from littlesteps.services.llm.base import AdviceProvider
from littlesteps.services.llm.types import ImageInput


class OpenAIAdviceProvider(AdviceProvider):
    def __init__(self, api_key: str, model: str):
        self.api_key = api_key
        self.model = model

    async def generate_text(self, prompt: str, image: ImageInput | None = None) -> str:
        content: str | list[dict[str, object]] = prompt
        if image is not None:
            encoded = base64.b64encode(image.data).decode("ascii")
            content = [
                {"type": "text", "text": prompt},
                {
                    "type": "image_url",
                    "image_url": {"url": f"data:{image.mime_type};base64,{encoded}"},
                },
            ]
        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": content}],
            "temperature": 0.8,
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}
        timeout = httpx.Timeout(30.0, connect=10.0)
        async with httpx.AsyncClient(timeout=timeout) as client:
            response = await client.post(
                "https://api.openai.com/v1/chat/completions",
                json=payload,
                headers=headers,
            )
            response.raise_for_status()
            return (response.json()["choices"][0]["message"]["content"] or "").strip()
