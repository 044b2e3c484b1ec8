from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Mapping, Sequence, Tuple

from mention_gateway.models import Category


class PromptTemplate(ABC):
    """Interface for a command classification prompt template."""

    @abstractmethod
    def render(self, command: str, original_tweet: str) -> str:
        """Return the full prompt string."""
        raise NotImplementedError


# -------------------------
# Rubric
# -------------------------

CATEGORY_DESCRIPTIONS: Mapping[Category, str] = {
    Category.SCREENSHOT_RESEARCH: "if they want analysis of an image/screenshot",
    Category.IMPERSONATION: "if they want to generate a response in someone's style",
    Category.VIRAL_THREAD: "if they want a thread or series of tweets",
    Category.FACT_CHECKER: "if they want fact-checking or verification",
    Category.SENTIMENT: "if they want emotional or sentiment analysis",
    Category.MEME_CREATOR: "if they want a meme response",
    Category.GENERIC: "if they want explanation or context or any simple activity",
}

WORKED_EXAMPLES: Tuple[Tuple[str, Category], ...] = (
    ("make this into a meme", Category.MEME_CREATOR),
    ("is this true?", Category.FACT_CHECKER),
    ("explain this tweet", Category.GENERIC),
    ("roast this tweet", Category.GENERIC),
    ("what's the sentiment here", Category.SENTIMENT),
    ("make a thread about this", Category.VIRAL_THREAD),
)


@dataclass(frozen=True)
class CommandClassificationTemplate(PromptTemplate):
    descriptions: Mapping[Category, str] = field(default_factory=lambda: CATEGORY_DESCRIPTIONS)
    examples: Sequence[Tuple[str, Category]] = WORKED_EXAMPLES

    def render(self, command: str, original_tweet: str) -> str:
        rubric = "\n".join(
            f"    - {category.value} ({description})"
            for category, description in self.descriptions.items()
        )
        examples = "\n".join(
            f'    - "{text}" → {category.value}' for text, category in self.examples
        )
        return f"""\
Analyze the following user command and categorize it into exactly one of these categories:
{rubric}

    User Command: {command}
    Original Tweet Context: {original_tweet}

    Examples:
{examples}

    Respond with only the category name, nothing else.
"""
