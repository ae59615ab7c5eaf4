"""
Product catalog REST endpoints.
"""

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, ConfigDict, Field

from askcart.core.errors import NotFound, ReasoningUnavailable

router = APIRouter(prefix="/api/products", tags=["products"])
logger = logging.getLogger(__name__)


class CompareRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_ids: list[str] = Field(default_factory=list, alias="productIds")


@router.get("")
async def list_products(request: Request) -> list[dict[str, Any]]:
    catalog = request.app.state.services.catalog
    return [p.to_dict() for p in await catalog.list()]


@router.get("/search")
async def search_products(request: Request, q: str | None = None) -> list[dict[str, Any]]:
    if not q or not q.strip():
        raise HTTPException(status_code=400, detail="Query parameter required")

    catalog = request.app.state.services.catalog
    return [p.to_dict() for p in await catalog.search(q)]


@router.post("/compare")
async def compare_products(request: Request, body: CompareRequest) -> dict[str, Any]:
    if len(body.product_ids) < 2:
        raise HTTPException(
            status_code=400, detail="At least 2 product IDs required for comparison"
        )

    services = request.app.state.services

    products = []
    for product_id in body.product_ids:
        try:
            products.append(await services.catalog.get(product_id))
        except NotFound:
            logger.info(f"Comparison skipped unknown product {product_id}")

    if len(products) < 2:
        raise HTTPException(status_code=404, detail="Some products not found")

    try:
        comparison = await services.reasoning.compare_products(products)
    except ReasoningUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e)) from e

    return {"comparison": comparison, "products": [p.to_dict() for p in products]}


@router.get("/{product_id}")
async def get_product(request: Request, product_id: str) -> dict[str, Any]:
    catalog = request.app.state.services.catalog
    try:
        product = await catalog.get(product_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return product.to_dict()
