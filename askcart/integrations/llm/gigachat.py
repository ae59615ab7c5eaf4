"""
GigaChat LLM provider implementation.
Uses Sber's GigaChat API through the SDK's async client.
"""

from gigachat import GigaChat
from gigachat.models import Chat, Messages, MessagesRole

from askcart.integrations.llm.base import BaseLLM, LLMResponse

JSON_INSTRUCTION = "Respond with a single valid JSON object and nothing else."


class GigaChatLLM(BaseLLM):
    """GigaChat LLM provider."""

    def __init__(
        self,
        credentials: str | None = None,
        scope: str = "GIGACHAT_API_PERS",
        model: str = "GigaChat",
        verify_ssl_certs: bool = False,
    ):
        self.credentials = credentials
        self.scope = scope
        self.model = model
        self.verify_ssl_certs = verify_ssl_certs

        if not self.credentials:
            raise ValueError(
                "GigaChat credentials not provided. "
                "Set GIGACHAT_CREDENTIALS in .env file."
            )

    def _get_client(self) -> GigaChat:
        """Create GigaChat client."""
        return GigaChat(
            credentials=self.credentials,
            scope=self.scope,
            model=self.model,
            verify_ssl_certs=self.verify_ssl_certs,
        )

    def _build_messages(
        self,
        prompt: str,
        system_prompt: str | None,
    ) -> list[Messages]:
        messages = []

        if system_prompt:
            messages.append(
                Messages(role=MessagesRole.SYSTEM, content=system_prompt)
            )

        messages.append(Messages(role=MessagesRole.USER, content=prompt))
        return messages

    async def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float = 0.3,
        max_tokens: int = 1024,
        json_mode: bool = False,
    ) -> LLMResponse:
        """Generate response using GigaChat."""
        if json_mode:
            # No native JSON mode; ask for it in the system prompt
            system_prompt = f"{system_prompt}\n\n{JSON_INSTRUCTION}" if system_prompt else JSON_INSTRUCTION

        async with self._get_client() as client:
            response = await client.achat(
                Chat(
                    messages=self._build_messages(prompt, system_prompt),
                    temperature=temperature,
                    max_tokens=max_tokens,
                )
            )

        return LLMResponse(
            content=response.choices[0].message.content,
            tokens_used=response.usage.total_tokens if response.usage else None,
            model=response.model,
        )

    @property
    def name(self) -> str:
        return "gigachat"
