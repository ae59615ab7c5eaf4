"""
Reasoning client - turns a shopper message plus context into an assistant reply.
"""

import asyncio
import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from askcart.config import Settings
from askcart.core.errors import InvalidArgument, ReasoningUnavailable
from askcart.core.reasoning.intent import (
    Intent,
    IntentClassifier,
    KeywordIntentClassifier,
    parse_intent,
)
from askcart.core.reasoning.prompts import (
    build_chat_prompt,
    build_comparison_prompt,
    build_query_analysis_prompt,
    build_system_prompt,
)
from askcart.core.reasoning.recommendations import (
    NameMatchExtractor,
    RecommendationExtractor,
)
from askcart.db.models import Product
from askcart.integrations.llm import BaseLLM, get_llm_provider

logger = logging.getLogger(__name__)


@dataclass
class HistoryEntry:
    """A prior turn passed to the model."""

    role: str
    content: str


@dataclass
class ChatReply:
    """Assistant reply with the products it recommends."""

    content: str
    recommendations: list[Product]
    intent: Intent


@dataclass
class QueryAnalysis:
    """Structured reading of a product search query."""

    intent: Intent
    features: list[str] = field(default_factory=list)
    category: Optional[str] = None
    price_range: Optional[dict[str, float]] = None


class ReasoningClient:
    """
    Adapter over an LLM provider for the shopping assistant.

    The model call is the only suspension point and the only external failure
    point: any provider error, a timeout or empty output surfaces as
    ReasoningUnavailable. Nothing is retried here.

    Usage:
        client = ReasoningClient(llm, timeout=30)
        reply = await client.generate_reply("I need a laptop", [], products)
    """

    def __init__(
        self,
        llm: BaseLLM,
        timeout: float = 30.0,
        assistant_name: str = "AskCart AI",
        intent_classifier: IntentClassifier | None = None,
        extractor: RecommendationExtractor | None = None,
    ):
        self.llm = llm
        self.timeout = timeout
        self.assistant_name = assistant_name
        self.intent_classifier = intent_classifier or KeywordIntentClassifier()
        self.extractor = extractor or NameMatchExtractor()

    async def _complete(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float = 0.3,
        max_tokens: int = 1024,
        json_mode: bool = False,
    ) -> str:
        try:
            response = await asyncio.wait_for(
                self.llm.generate(
                    prompt=prompt,
                    system_prompt=system_prompt,
                    temperature=temperature,
                    max_tokens=max_tokens,
                    json_mode=json_mode,
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(f"{self.llm.name} did not answer within {self.timeout}s")
            raise ReasoningUnavailable("The assistant took too long to respond") from None
        except Exception as e:
            logger.error(f"{self.llm.name} request failed: {e}", exc_info=True)
            raise ReasoningUnavailable("Failed to generate AI response") from e

        content = response.text
        if not content:
            raise ReasoningUnavailable("The assistant returned an empty response")
        return content

    def classify_intent(self, message: str) -> Intent:
        return self.intent_classifier.classify(message)

    async def generate_reply(
        self,
        user_message: str,
        history: Sequence[HistoryEntry],
        candidate_products: Sequence[Product],
    ) -> ChatReply:
        """
        Generate an assistant reply.

        Args:
            user_message: The shopper's new message
            history: Prior turns, oldest first (without user_message)
            candidate_products: Catalog the model may recommend from

        Returns:
            ChatReply with text, up to N recommended products and intent

        Raises:
            ReasoningUnavailable: If the model call fails
        """
        # Intent does not depend on the model, compute it first
        intent = self.classify_intent(user_message)

        content = await self._complete(
            prompt=build_chat_prompt(user_message, history),
            system_prompt=build_system_prompt(self.assistant_name, candidate_products),
            temperature=0.4,
            max_tokens=1024,
        )

        recommendations = self.extractor.extract(content, candidate_products)
        logger.debug(
            f"Reply intent={intent.value}, recommended={[p.name for p in recommendations]}"
        )

        return ChatReply(content=content, recommendations=recommendations, intent=intent)

    async def compare_products(self, products: Sequence[Product]) -> str:
        """
        Generate a customer-facing comparison of two or more products.

        Raises:
            InvalidArgument: If fewer than 2 products are given
            ReasoningUnavailable: If the model call fails
        """
        if len(products) < 2:
            raise InvalidArgument("At least 2 products are required for comparison")

        return await self._complete(
            prompt=build_comparison_prompt(products),
            temperature=0.3,
            max_tokens=1536,
        )

    async def analyze_query(self, query: str) -> QueryAnalysis:
        """
        Extract category, price range and features from a search query.
        Falls back to keyword intent when the model is unavailable.
        """
        fallback = QueryAnalysis(intent=self.classify_intent(query))

        try:
            content = await self._complete(
                prompt=build_query_analysis_prompt(query),
                temperature=0.1,
                max_tokens=300,
                json_mode=True,
            )
        except ReasoningUnavailable:
            return fallback

        json_match = re.search(r"\{[\s\S]*\}", content)
        if not json_match:
            logger.warning(f"Query analysis returned no JSON: {content[:80]}")
            return fallback

        try:
            data: dict[str, Any] = json.loads(json_match.group())
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse query analysis JSON: {e}")
            return fallback

        features = data.get("features") or []
        price_range = data.get("priceRange")
        return QueryAnalysis(
            intent=parse_intent(data.get("intent"), default=fallback.intent),
            features=[str(f) for f in features] if isinstance(features, list) else [],
            category=data.get("category") or None,
            price_range=price_range if isinstance(price_range, dict) else None,
        )


def create_reasoning_client(
    settings: Settings,
    llm: BaseLLM | None = None,
) -> ReasoningClient:
    """Build the reasoning client from settings."""
    return ReasoningClient(
        llm=llm or get_llm_provider(settings=settings),
        timeout=settings.reasoning_timeout,
        assistant_name=settings.assistant_name,
        extractor=NameMatchExtractor(limit=settings.max_recommendations),
    )
