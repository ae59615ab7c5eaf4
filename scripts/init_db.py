#!/usr/bin/env python3
"""
Script to initialize database tables.

Usage:
    python scripts/init_db.py
"""

import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from askcart.config import settings
from askcart.db.sqlite import Database


async def main() -> None:
    """Initialize the database."""
    db = Database(settings.db_url)

    print("Initializing database...")
    print("-" * 50)

    print(f"Creating tables at {settings.db_url}...")
    await db.init()
    print("✅ Database initialized successfully!")

    await db.close()


if __name__ == "__main__":
    asyncio.run(main())
