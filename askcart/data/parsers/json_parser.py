"""
JSON catalog parser.

Accepts either a list of product objects or {"products": [...]}. Each object
needs "name" and either "price" (major units, e.g. 12.99) or "priceCents".
"""

import json
import logging
from pathlib import Path
from typing import Any

from askcart.data.parsers.records import ParsedCatalog, ParsedProduct, parse_price, parse_tags

logger = logging.getLogger(__name__)


class JSONCatalogParser:
    """Parser for JSON product catalogs."""

    def parse(self, file_path: str | Path) -> ParsedCatalog:
        file_path = Path(file_path)

        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)

        if isinstance(data, dict):
            data = data.get("products", [])
        if not isinstance(data, list):
            raise ValueError(f"{file_path.name}: expected a list of products")

        products = []
        for index, item in enumerate(data):
            if not isinstance(item, dict):
                raise ValueError(f"{file_path.name}: item {index} is not an object")
            products.append(self._parse_item(item, index))

        logger.info(f"Parsed {len(products)} products from {file_path.name}")
        return ParsedCatalog(source=file_path.name, products=products)

    def _parse_item(self, item: dict[str, Any], index: int) -> ParsedProduct:
        name = str(item.get("name") or "").strip()
        if not name:
            raise ValueError(f"Item {index}: missing product name")

        cents = item.get("priceCents", item.get("price_cents"))
        if cents is not None:
            if isinstance(cents, bool) or not isinstance(cents, int) or cents < 0:
                raise ValueError(f"{name}: priceCents must be a non-negative integer")
            price = cents
        else:
            try:
                price = parse_price(item.get("price"))
            except ValueError as e:
                raise ValueError(f"{name}: {e}") from None

        specifications = item.get("specifications")
        return ParsedProduct(
            name=name,
            price=price,
            description=item.get("description"),
            category=item.get("category"),
            tags=parse_tags(item.get("tags")),
            specifications=specifications if isinstance(specifications, dict) else None,
            image_url=item.get("imageUrl") or item.get("image_url"),
        )


def parse_json_catalog(file_path: str | Path) -> ParsedCatalog:
    """Convenience function to parse a JSON catalog."""
    return JSONCatalogParser().parse(file_path)
