"""
XLSX catalog parser.
Reads a sheet with a header row: name, price, description, category, tags, image_url.
"""

import logging
from pathlib import Path
from typing import Any

import pandas as pd

from askcart.data.parsers.records import ParsedCatalog, ParsedProduct, parse_price, parse_tags

logger = logging.getLogger(__name__)


class XLSXCatalogParser:
    """Parser for spreadsheet product catalogs."""

    REQUIRED_COLUMNS = ("name", "price")

    # Accepted header spellings -> canonical column
    COLUMN_ALIASES = {
        "product": "name",
        "title": "name",
        "imageurl": "image_url",
        "image": "image_url",
    }

    def parse(self, file_path: str | Path) -> ParsedCatalog:
        """
        Parse XLSX catalog file.

        Args:
            file_path: Path to XLSX file

        Returns:
            ParsedCatalog with all products
        """
        file_path = Path(file_path)

        # Read as text so prices keep their written form
        df = pd.read_excel(file_path, dtype=str)
        df.columns = [self._normalize_column(c) for c in df.columns]

        missing = [c for c in self.REQUIRED_COLUMNS if c not in df.columns]
        if missing:
            raise ValueError(f"{file_path.name}: missing columns {', '.join(missing)}")

        products: list[ParsedProduct] = []
        for idx, row in df.iterrows():
            name = self._cell(row, "name")
            if not name:
                # Blank rows between sections
                continue

            try:
                price = parse_price(self._cell(row, "price"))
            except ValueError as e:
                raise ValueError(f"Row {idx + 2} ({name}): {e}") from None

            products.append(
                ParsedProduct(
                    name=name,
                    price=price,
                    description=self._cell(row, "description"),
                    category=self._cell(row, "category"),
                    tags=parse_tags(self._cell(row, "tags")),
                    image_url=self._cell(row, "image_url"),
                )
            )

        logger.info(f"Parsed {len(products)} products from {file_path.name}")
        return ParsedCatalog(source=file_path.name, products=products)

    def _normalize_column(self, column: Any) -> str:
        key = str(column).strip().lower().replace(" ", "_")
        return self.COLUMN_ALIASES.get(key, key)

    def _cell(self, row: pd.Series, column: str) -> str | None:
        if column not in row.index:
            return None
        value = row[column]
        if pd.isna(value):
            return None
        value = str(value).strip()
        return value or None


def parse_xlsx_catalog(file_path: str | Path) -> ParsedCatalog:
    """Convenience function to parse XLSX catalog."""
    return XLSXCatalogParser().parse(file_path)
