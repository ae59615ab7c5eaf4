"""
Catalog loader - imports parsed product files into the database.
"""

import logging
from pathlib import Path

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from askcart.data.parsers import ParsedProduct, parse_file
from askcart.db.models import Product, generate_id, utcnow
from askcart.db.sqlite import Database

logger = logging.getLogger(__name__)


class CatalogLoader:
    """Loads catalog files into the products table, upserting by name."""

    def __init__(self, db: Database):
        self.db = db

    async def load_file(self, file_path: str | Path) -> dict:
        """
        Load catalog from file into database.

        Args:
            file_path: Path to JSON or XLSX file

        Returns:
            Statistics about loaded data
        """
        file_path = Path(file_path)
        parsed = parse_file(file_path)

        stats = {
            "file": file_path.name,
            "total_products": len(parsed.products),
            "new_products": 0,
            "updated_products": 0,
            "price_changes": 0,
        }

        async with self.db.session() as session:
            for parsed_product in parsed.products:
                result = await self._process_product(session, parsed_product)

                if result["is_new"]:
                    stats["new_products"] += 1
                else:
                    stats["updated_products"] += 1
                if result["price_changed"]:
                    stats["price_changes"] += 1

        logger.info(
            f"Loaded {stats['total_products']} products from {file_path.name} "
            f"(new={stats['new_products']}, price changes={stats['price_changes']})"
        )
        return stats

    async def _process_product(
        self,
        session: AsyncSession,
        parsed_product: ParsedProduct,
    ) -> dict:
        """Create or update a single product."""
        result = {"is_new": False, "price_changed": False}

        stmt = select(Product).where(Product.name == parsed_product.name)
        db_product = (await session.execute(stmt)).scalars().first()

        if db_product is None:
            session.add(
                Product(
                    id=generate_id(),
                    name=parsed_product.name,
                    price=parsed_product.price,
                    description=parsed_product.description,
                    category=parsed_product.category,
                    tags=parsed_product.tags,
                    specifications=parsed_product.specifications,
                    image_url=parsed_product.image_url,
                    created_at=utcnow(),
                )
            )
            # Flush so a duplicate name later in the same file updates this row
            await session.flush()
            result["is_new"] = True
            return result

        if db_product.price != parsed_product.price:
            result["price_changed"] = True

        db_product.price = parsed_product.price
        if parsed_product.description is not None:
            db_product.description = parsed_product.description
        if parsed_product.category is not None:
            db_product.category = parsed_product.category
        if parsed_product.tags:
            db_product.tags = parsed_product.tags
        if parsed_product.specifications is not None:
            db_product.specifications = parsed_product.specifications
        if parsed_product.image_url is not None:
            db_product.image_url = parsed_product.image_url

        return result


async def load_catalog(db: Database, file_path: str | Path) -> dict:
    """Convenience function to load a catalog file."""
    return await CatalogLoader(db).load_file(file_path)
