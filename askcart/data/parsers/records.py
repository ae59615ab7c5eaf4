"""
Parsed catalog records and price normalization.
"""

import re
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional


@dataclass
class ParsedProduct:
    """Single product parsed from an import file. Price is in cents."""

    name: str
    price: int
    description: Optional[str] = None
    category: Optional[str] = None
    tags: list[str] = field(default_factory=list)
    specifications: Optional[dict[str, Any]] = None
    image_url: Optional[str] = None


@dataclass
class ParsedCatalog:
    """Products parsed from one file."""

    source: str
    products: list[ParsedProduct]


# Currency symbols and thousands separators
PRICE_NOISE = re.compile(r"[\s$€£,]")


def parse_price(value: Any) -> int:
    """
    Convert a major-unit price ("12.99", 12.99, "$1,299") to integer cents.

    Floats go through their decimal string form, so 19.99 becomes 1999
    rather than 1998.

    Raises:
        ValueError: If the value is empty, not numeric or negative
    """
    if value is None or isinstance(value, bool):
        raise ValueError(f"Invalid price: {value!r}")

    text = PRICE_NOISE.sub("", str(value))
    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise ValueError(f"Invalid price: {value!r}") from None

    if not amount.is_finite() or amount < 0:
        raise ValueError(f"Invalid price: {value!r}")

    cents = (amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(cents)


def parse_tags(value: Any) -> list[str]:
    """Tags come as a list or a comma-separated string."""
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(",")
    else:
        items = list(value)
    return [str(t).strip() for t in items if str(t).strip()]
