"""
LLM provider factory and initialization.
"""

from askcart.config import Settings, settings as default_settings
from askcart.integrations.llm.base import BaseLLM, LLMResponse


def get_llm_provider(
    provider: str | None = None,
    settings: Settings | None = None,
) -> BaseLLM:
    """
    Get LLM provider instance.

    Args:
        provider: Provider name ('gemini', 'gigachat')
                  If None, uses settings.llm_provider
        settings: Settings to read credentials from (defaults to global settings)

    Returns:
        LLM provider instance
    """
    settings = settings or default_settings
    provider = provider or settings.llm_provider

    # Provider SDKs are imported lazily so only the configured one must be importable
    if provider == "gemini":
        from askcart.integrations.llm.gemini import GeminiLLM

        return GeminiLLM(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
        )
    elif provider == "gigachat":
        from askcart.integrations.llm.gigachat import GigaChatLLM

        return GigaChatLLM(
            credentials=settings.gigachat_credentials,
            scope=settings.gigachat_scope,
            model=settings.gigachat_model,
        )
    else:
        raise ValueError(f"Unknown LLM provider: {provider}")


__all__ = [
    "BaseLLM",
    "LLMResponse",
    "get_llm_provider",
]
