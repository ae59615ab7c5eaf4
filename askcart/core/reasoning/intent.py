"""
Intent detection over the shopper's message.
Pure keyword matching; runs without the language model.
"""

from abc import ABC, abstractmethod
from enum import Enum


class Intent(str, Enum):
    COMPARE = "compare"
    SUPPORT = "support"
    SEARCH = "search"
    GENERAL = "general"


# Checked in order, first match wins
INTENT_KEYWORDS: tuple[tuple[Intent, tuple[str, ...]], ...] = (
    (Intent.COMPARE, ("compare", "vs", "difference")),
    (Intent.SUPPORT, ("return", "shipping", "policy")),
    (Intent.SEARCH, ("looking for", "need", "want")),
)


class IntentClassifier(ABC):
    """Assigns a coarse intent label to a user message."""

    @abstractmethod
    def classify(self, message: str) -> Intent:
        pass


class KeywordIntentClassifier(IntentClassifier):
    """Substring keyword test, priority compare > support > search > general."""

    def __init__(
        self,
        keywords: tuple[tuple[Intent, tuple[str, ...]], ...] = INTENT_KEYWORDS,
    ):
        self.keywords = keywords

    def classify(self, message: str) -> Intent:
        text = message.lower()
        for intent, words in self.keywords:
            if any(word in text for word in words):
                return intent
        return Intent.GENERAL


def parse_intent(value: str | None, default: Intent = Intent.GENERAL) -> Intent:
    """Coerce a model-provided label to an Intent."""
    try:
        return Intent(str(value).strip().lower())
    except ValueError:
        return default
