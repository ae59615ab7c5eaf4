"""
Provider-neutral LLM interface.
The reasoning client talks only to BaseLLM, so Gemini, GigaChat or a test
double can stand behind it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class LLMResponse:
    """One completion returned by a provider."""

    content: str
    tokens_used: int | None = None
    model: str | None = None

    @property
    def text(self) -> str:
        """Content with surrounding whitespace removed ("" when missing)."""
        return (self.content or "").strip()


class BaseLLM(ABC):
    """A chat-completion provider. Implementations keep no conversation state."""

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float = 0.3,
        max_tokens: int = 1024,
        json_mode: bool = False,
    ) -> LLMResponse:
        """
        Complete a single prompt.

        Args:
            prompt: Turn-specific text (history and the shopper's message)
            system_prompt: Persona and catalog context
            temperature: Sampling temperature (0-1)
            max_tokens: Maximum tokens to generate
            json_mode: Ask the provider for a JSON document

        Returns:
            LLMResponse with generated content

        Raises:
            Any provider or transport error; callers translate it.
        """

    @property
    @abstractmethod
    def name(self) -> str:
        """Short provider name used in logs."""
