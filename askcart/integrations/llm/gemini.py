"""
Gemini LLM provider implementation.
Uses the google-genai SDK's async client.
"""

from google import genai
from google.genai import types

from askcart.integrations.llm.base import BaseLLM, LLMResponse


class GeminiLLM(BaseLLM):
    """Google Gemini LLM provider."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gemini-2.5-flash",
    ):
        self.api_key = api_key
        self.model = model

        if not self.api_key:
            raise ValueError(
                "Gemini API key not provided. "
                "Set GEMINI_API_KEY in .env file."
            )

        self._client = genai.Client(api_key=self.api_key)

    def _config(
        self,
        system_prompt: str | None,
        temperature: float,
        max_tokens: int,
        json_mode: bool = False,
    ) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            system_instruction=system_prompt,
            temperature=temperature,
            max_output_tokens=max_tokens,
            response_mime_type="application/json" if json_mode else None,
        )

    async def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float = 0.3,
        max_tokens: int = 1024,
        json_mode: bool = False,
    ) -> LLMResponse:
        """Generate response using Gemini."""
        response = await self._client.aio.models.generate_content(
            model=self.model,
            contents=prompt,
            config=self._config(system_prompt, temperature, max_tokens, json_mode),
        )

        usage = response.usage_metadata
        return LLMResponse(
            content=response.text or "",
            tokens_used=usage.total_token_count if usage else None,
            model=self.model,
        )

    @property
    def name(self) -> str:
        return "gemini"
