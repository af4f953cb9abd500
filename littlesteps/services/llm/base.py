from abc import ABC, abstractmethod

from littlesteps.services.llm.prompts import build_journal_prompt, build_milestone_prompt
from littlesteps.services.llm.types import ImageInput, JournalPrompt, MilestonePrompt


class AdviceProvider(ABC):
    @abstractmethod
    async def generate_text(self, prompt: str, image: ImageInput | None = None) -> str:
        raise NotImplementedError

    async def compose_journal_entry(self, prompt: JournalPrompt) -> str:
        return await self.generate_text(build_journal_prompt(prompt), prompt.image)

    async def milestone_advice(self, prompt: MilestonePrompt) -> str:
        return await self.generate_text(build_milestone_prompt(prompt))
