"""
Product catalog access.
"""

from askcart.core.catalog.accessor import CatalogAccessor, validate_price

__all__ = ["CatalogAccessor", "validate_price"]
