"""
Recommendation extraction from generated replies.
"""

from abc import ABC, abstractmethod
from typing import Sequence

from askcart.db.models import Product


class RecommendationExtractor(ABC):
    """Picks the catalog products a reply recommends."""

    @abstractmethod
    def extract(self, reply: str, candidates: Sequence[Product]) -> list[Product]:
        pass


class NameMatchExtractor(RecommendationExtractor):
    """
    A product counts as recommended when its display name appears in the reply.

    Case-insensitive substring match, first `limit` hits in catalog order.
    Imprecise: a name that is a common word matches anywhere, and a
    paraphrased name is missed.
    """

    def __init__(self, limit: int = 3):
        self.limit = limit

    def extract(self, reply: str, candidates: Sequence[Product]) -> list[Product]:
        text = reply.lower()
        matches = []
        for product in candidates:
            if len(matches) >= self.limit:
                break
            name = product.name.strip().lower()
            if name and name in text:
                matches.append(product)
        return matches
