from littlesteps.services.llm.types import SUPPORTED_LANGUAGES, JournalPrompt, MilestonePrompt


def _language_name(language: str) -> str:
    return SUPPORTED_LANGUAGES.get(language, SUPPORTED_LANGUAGES["en"])


def build_journal_prompt(prompt: JournalPrompt) -> str:
    photo_line = (
        "Please describe the photo and the moment cheerfully.\n" if prompt.image else ""
    )
    return (
        "You are a warm, loving assistant helping a parent write a baby journal.\n"
        f'Context provided by parent: "{prompt.context_text}".\n'
        f"{photo_line}"
        "Write a short, sentimental, and cute journal entry (max 3 sentences).\n"
        "Tone: Emotional, Happy, Cherishing.\n"
        f"Write the entry in {_language_name(prompt.language)}."
    )


def build_milestone_prompt(prompt: MilestonePrompt) -> str:
    return (
        f"My baby is {prompt.age_in_months} months old. "
        "What are 3 key developmental milestones I should look out for right now? "
        "Keep it brief and bulleted. Return as Markdown. "
        f"Answer in {_language_name(prompt.language)}."
    )
