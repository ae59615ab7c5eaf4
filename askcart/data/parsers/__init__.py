"""
Catalog parsers for different file formats.
"""

from pathlib import Path

from askcart.data.parsers.json_parser import JSONCatalogParser, parse_json_catalog
from askcart.data.parsers.records import ParsedCatalog, ParsedProduct, parse_price
from askcart.data.parsers.xlsx_parser import XLSXCatalogParser, parse_xlsx_catalog


def parse_file(file_path: str | Path) -> ParsedCatalog:
    """
    Parse catalog file based on extension.

    Args:
        file_path: Path to JSON or XLSX file

    Returns:
        ParsedCatalog with extracted products

    Raises:
        ValueError: If file format is not supported
    """
    file_path = Path(file_path)
    suffix = file_path.suffix.lower()

    if suffix == ".json":
        return parse_json_catalog(file_path)
    elif suffix in [".xlsx", ".xls"]:
        return parse_xlsx_catalog(file_path)
    else:
        raise ValueError(f"Unsupported file format: {suffix}")


__all__ = [
    "JSONCatalogParser",
    "XLSXCatalogParser",
    "ParsedCatalog",
    "ParsedProduct",
    "parse_file",
    "parse_json_catalog",
    "parse_price",
    "parse_xlsx_catalog",
]
