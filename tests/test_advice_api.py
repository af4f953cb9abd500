import asyncio
import base64

import pytest
from httpx import AsyncClient

from littlesteps.api.deps import get_advice_provider
from littlesteps.core.errors import AdviceUnavailableError
from littlesteps.services.llm.advice_service import (
    JOURNAL_FAILED_TEXT,
    JOURNAL_UNAVAILABLE_TEXT,
    decode_image_payload,
)
from littlesteps.services.llm.base import AdviceProvider
from littlesteps.services.llm.provider_factory import UnavailableAdviceProvider
from littlesteps.services.llm.types import ImageInput, JournalPrompt, MilestonePrompt


class RecordingProvider(AdviceProvider):
    def __init__(self) -> None:
        self.journal_prompts: list[JournalPrompt] = []
        self.milestone_prompts: list[MilestonePrompt] = []

    async def generate_text(self, prompt: str, image: ImageInput | None = None) -> str:
        return "unused"

    async def compose_journal_entry(self, prompt: JournalPrompt) -> str:
        self.journal_prompts.append(prompt)
        return "  A lovely afternoon in the park.  "

    async def milestone_advice(self, prompt: MilestonePrompt) -> str:
        self.milestone_prompts.append(prompt)
        return f"- milestones for {prompt.age_in_months} months"


class BrokenProvider(AdviceProvider):
    async def generate_text(self, prompt: str, image: ImageInput | None = None) -> str:
        raise RuntimeError("upstream exploded")


class SlowProvider(AdviceProvider):
    async def generate_text(self, prompt: str, image: ImageInput | None = None) -> str:
        raise asyncio.TimeoutError()


async def register_family(client: AsyncClient, birth_date: str = "2024-01-01") -> str:
    response = await client.post(
        "/api/family",
        json={"babyName": "Baby A", "birthDate": birth_date},
    )
    assert response.status_code == 201
    return response.json()["familyId"]


@pytest.mark.asyncio
async def test_journal_passes_context_image_and_language(client: AsyncClient) -> None:
    from littlesteps.main import app

    provider = RecordingProvider()
    app.dependency_overrides[get_advice_provider] = lambda: provider
    try:
        family_id = await register_family(client)
        image = base64.b64encode(b"\x89PNG fake").decode("ascii")
        response = await client.post(
            "/api/ai/journal",
            headers={"X-Family-ID": family_id},
            json={
                "imageBase64": f"data:image/png;base64,{image}",
                "context": "  first   picnic ",
                "lang": "ja",
            },
        )
        assert response.status_code == 200
        assert response.json() == {"text": "A lovely afternoon in the park."}

        prompt = provider.journal_prompts[0]
        assert prompt.context_text == "first picnic"
        assert prompt.language == "ja"
        assert prompt.image is not None
        assert prompt.image.data == b"\x89PNG fake"
        assert prompt.image.mime_type == "image/png"
    finally:
        app.dependency_overrides.pop(get_advice_provider, None)


@pytest.mark.asyncio
async def test_journal_degrades_to_placeholders(client: AsyncClient) -> None:
    from littlesteps.main import app

    family_id = await register_family(client)
    headers = {"X-Family-ID": family_id}
    cases = [
        (BrokenProvider(), JOURNAL_FAILED_TEXT),
        (SlowProvider(), JOURNAL_FAILED_TEXT),
        (UnavailableAdviceProvider("no key"), JOURNAL_UNAVAILABLE_TEXT),
    ]
    try:
        for provider, expected in cases:
            app.dependency_overrides[get_advice_provider] = lambda provider=provider: provider
            response = await client.post(
                "/api/ai/journal",
                headers=headers,
                json={"context": "bath time"},
            )
            assert response.status_code == 200
            assert response.json() == {"text": expected}
    finally:
        app.dependency_overrides.pop(get_advice_provider, None)


@pytest.mark.asyncio
async def test_milestones_use_supplied_age_or_profile_birth_date(client: AsyncClient) -> None:
    from littlesteps.main import app

    provider = RecordingProvider()
    app.dependency_overrides[get_advice_provider] = lambda: provider
    try:
        family_id = await register_family(client, birth_date="2000-01-01")
        headers = {"X-Family-ID": family_id}

        supplied = await client.post(
            "/api/ai/milestones",
            headers=headers,
            json={"ageInMonths": 6, "lang": "zh-CN"},
        )
        assert supplied.status_code == 200
        assert supplied.json() == {"text": "- milestones for 6 months"}
        assert provider.milestone_prompts[0].language == "zh"

        derived = await client.post("/api/ai/milestones", headers=headers, json={"lang": "xx"})
        assert derived.status_code == 200
        assert provider.milestone_prompts[1].age_in_months > 12 * 20
        assert provider.milestone_prompts[1].language == "en"

        unknown = await client.post(
            "/api/ai/milestones",
            headers={"X-Family-ID": "unknown-family"},
            json={},
        )
        assert unknown.status_code == 200
        assert unknown.json() == {"text": ""}
    finally:
        app.dependency_overrides.pop(get_advice_provider, None)


@pytest.mark.asyncio
async def test_milestones_failure_returns_empty_text(client: AsyncClient) -> None:
    from littlesteps.main import app

    app.dependency_overrides[get_advice_provider] = lambda: BrokenProvider()
    try:
        family_id = await register_family(client)
        response = await client.post(
            "/api/ai/milestones",
            headers={"X-Family-ID": family_id},
            json={"ageInMonths": 3},
        )
        assert response.status_code == 200
        assert response.json() == {"text": ""}
    finally:
        app.dependency_overrides.pop(get_advice_provider, None)


@pytest.mark.asyncio
async def test_mock_provider_is_used_by_default(client: AsyncClient) -> None:
    family_id = await register_family(client)
    response = await client.post(
        "/api/ai/milestones",
        headers={"X-Family-ID": family_id},
        json={"ageInMonths": 5},
    )
    assert response.status_code == 200
    assert "Rolls both ways" in response.json()["text"]


@pytest.mark.asyncio
async def test_advice_endpoints_require_family_header(client: AsyncClient) -> None:
    assert (await client.post("/api/ai/journal", json={"context": "x"})).status_code == 400
    assert (await client.post("/api/ai/milestones", json={"ageInMonths": 2})).status_code == 400


def test_decode_image_payload_variants() -> None:
    encoded = base64.b64encode(b"jpeg-bytes").decode("ascii")
    assert decode_image_payload(encoded) == ImageInput(data=b"jpeg-bytes", mime_type="image/jpeg")
    assert decode_image_payload(f"data:image/webp;base64,{encoded}") == ImageInput(
        data=b"jpeg-bytes",
        mime_type="image/webp",
    )
    assert decode_image_payload(None) is None
    assert decode_image_payload("   ") is None
    assert decode_image_payload("%%% not base64 %%%") is None


@pytest.mark.asyncio
async def test_unavailable_provider_raises_advice_unavailable() -> None:
    provider = UnavailableAdviceProvider("Gemini API key is missing.")
    with pytest.raises(AdviceUnavailableError):
        await provider.milestone_advice(MilestonePrompt(age_in_months=4))
