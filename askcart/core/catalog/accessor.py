"""
Catalog accessor - lookup and search over the product catalog.
"""

from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import or_, select

from askcart.core.errors import InvalidArgument, NotFound
from askcart.db.models import Product, generate_id, utcnow
from askcart.db.sqlite import Database


def validate_price(price: Any) -> int:
    """Prices are integer minor units; floats are rejected outright."""
    if isinstance(price, bool) or not isinstance(price, int):
        raise InvalidArgument(
            f"Price must be an integer amount in minor units, got {price!r}"
        )
    if price < 0:
        raise InvalidArgument(f"Price must not be negative, got {price}")
    return price


class CatalogAccessor:
    """Read access to products, plus creation for catalog imports."""

    def __init__(self, db: Database, search_limit: int = 20):
        self.db = db
        self.search_limit = search_limit

    async def list(self) -> list[Product]:
        """Full catalog, newest first."""
        async with self.db.session() as session:
            stmt = select(Product).order_by(Product.created_at.desc(), Product.name)
            return list((await session.execute(stmt)).scalars().all())

    async def get(self, product_id: str) -> Product:
        async with self.db.session() as session:
            product = await session.get(Product, product_id)
        if product is None:
            raise NotFound(f"Product {product_id} not found")
        return product

    async def search(self, term: str, limit: Optional[int] = None) -> list[Product]:
        """
        Case-insensitive substring search over name and description.

        Args:
            term: Text to look for
            limit: Maximum results (capped at the configured search limit)
        """
        limit = min(limit or self.search_limit, self.search_limit)
        needle = term.strip()

        stmt = select(Product)
        if needle:
            stmt = stmt.where(
                or_(
                    Product.name.icontains(needle, autoescape=True),
                    Product.description.icontains(needle, autoescape=True),
                )
            )
        stmt = stmt.order_by(Product.created_at.desc(), Product.name).limit(limit)

        async with self.db.session() as session:
            return list((await session.execute(stmt)).scalars().all())

    async def add(
        self,
        name: str,
        price: int,
        description: Optional[str] = None,
        category: Optional[str] = None,
        specifications: Optional[dict[str, Any]] = None,
        tags: Optional[list[str]] = None,
        image_url: Optional[str] = None,
    ) -> Product:
        """Create a product."""
        if not name or not name.strip():
            raise InvalidArgument("Product name is required")
        validate_price(price)

        product = Product(
            id=generate_id(),
            name=name.strip(),
            description=description,
            price=price,
            category=category,
            specifications=specifications,
            tags=list(tags or []),
            image_url=image_url,
            created_at=utcnow(),
        )
        async with self.db.session() as session:
            session.add(product)
        return product
