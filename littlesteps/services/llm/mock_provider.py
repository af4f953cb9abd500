import re

from littlesteps.services.llm.base import AdviceProvider
from littlesteps.services.llm.types import ImageInput, JournalPrompt, MilestonePrompt

MILESTONES_BY_AGE: list[tuple[int, list[str]]] = [
    (3, ["Lifts head during tummy time", "Follows moving objects", "Social smiles"]),
    (6, ["Rolls both ways", "Reaches for toys", "Babbles with vowel sounds"]),
    (9, ["Sits without support", "Responds to own name", "Picks up small things"]),
    (12, ["Pulls to stand", "Waves bye-bye", "Says a first word"]),
    (18, ["Walks alone", "Points to show interest", "Uses several words"]),
    (24, ["Kicks a ball", "Puts two words together", "Plays pretend"]),
]
FALLBACK_MILESTONES = ["Climbs and runs", "Speaks in short sentences", "Plays with other kids"]


def _milestones_for(age_in_months: int) -> list[str]:
    for upper_bound, milestones in MILESTONES_BY_AGE:
        if age_in_months <= upper_bound:
            return milestones
    return FALLBACK_MILESTONES


class MockAdviceProvider(AdviceProvider):
    """Deterministic, offline provider used in development and tests."""

    async def generate_text(self, prompt: str, image: ImageInput | None = None) -> str:
        summary = re.sub(r"\s+", " ", prompt).strip()[:120]
        return f"Journal note: {summary}"

    async def compose_journal_entry(self, prompt: JournalPrompt) -> str:
        context = " ".join(prompt.context_text.split()) or "a quiet everyday moment"
        opening = "What a picture-perfect day! " if prompt.image else ""
        return (
            f"{opening}Today we treasured {context}. "
            "Every little step makes our hearts grow bigger."
        )

    async def milestone_advice(self, prompt: MilestonePrompt) -> str:
        return "\n".join(f"- {item}" for item in _milestones_for(prompt.age_in_months))
