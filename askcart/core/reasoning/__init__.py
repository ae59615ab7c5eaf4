"""
Reasoning - LLM-backed replies, comparisons and query analysis.
"""

from askcart.core.reasoning.client import (
    ChatReply,
    HistoryEntry,
    QueryAnalysis,
    ReasoningClient,
    create_reasoning_client,
)
from askcart.core.reasoning.intent import Intent, IntentClassifier, KeywordIntentClassifier
from askcart.core.reasoning.recommendations import NameMatchExtractor, RecommendationExtractor

__all__ = [
    "ChatReply",
    "HistoryEntry",
    "Intent",
    "IntentClassifier",
    "KeywordIntentClassifier",
    "NameMatchExtractor",
    "QueryAnalysis",
    "ReasoningClient",
    "RecommendationExtractor",
    "create_reasoning_client",
]
