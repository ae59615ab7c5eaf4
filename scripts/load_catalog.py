#!/usr/bin/env python3
"""
Script to load a product catalog into the database.

Usage:
    python scripts/load_catalog.py path/to/products.json
    python scripts/load_catalog.py path/to/products.xlsx
    python scripts/load_catalog.py products.json   # from data/catalog/
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from askcart.config import settings
from askcart.data.loaders.catalog_loader import load_catalog
from askcart.db.sqlite import Database


async def main(file_path: str) -> None:
    """Load catalog from file."""
    file_path = Path(file_path)

    # Bare file names are looked up in the catalog directory
    if not file_path.exists() and not file_path.is_absolute():
        file_path = settings.catalog_dir / file_path

    if not file_path.exists():
        print(f"Error: File not found: {file_path}")
        sys.exit(1)

    db = Database(settings.db_url)
    await db.init()

    print(f"Loading catalog from: {file_path}")
    print("-" * 50)

    try:
        stats = await load_catalog(db, file_path)

        print("✅ Successfully loaded catalog!")
        print(f"   Total products: {stats['total_products']}")
        print(f"   New products: {stats['new_products']}")
        print(f"   Updated products: {stats['updated_products']}")
        print(f"   Price changes: {stats['price_changes']}")

    except Exception as e:
        print(f"❌ Error loading catalog: {e}")
        raise
    finally:
        await db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Load product catalog into database")
    parser.add_argument("file", help="Path to catalog file (JSON or XLSX)")

    args = parser.parse_args()
    asyncio.run(main(args.file))
