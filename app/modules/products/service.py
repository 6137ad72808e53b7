# app/modules/products/service.py
from typing import List
from fastapi import HTTPException
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
import logging

from .repository import ProductsRepository
from .schemas import ProductVariantResponse, CatalogDebugResponse, InventoryDistributionRow

logger = logging.getLogger(__name__)


class ProductsService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = ProductsRepository(db)

    async def list_products(self) -> List[ProductVariantResponse]:
        """Catalog listing used to seed the transfer form"""
        try:
            products = self.repository.list_products()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching products: {e}")
            raise HTTPException(status_code=500, detail="Failed to fetch products")

        logger.info(f"Found {len(products)} products in database (excluded Wine Bundle items)")
        if products:
            logger.debug(f"Sample products: {[p.product_title for p in products[:3]]}")

        return [ProductVariantResponse.model_validate(p) for p in products]

    async def search_products(self, q: str) -> List[ProductVariantResponse]:
        if not q:
            return []

        words = q.split()
        if not words:
            return []

        query_text = q.strip()
        logger.info(f"Searching for: {query_text!r} words={words}")

        try:
            products = self.repository.search_products(query_text, words)
        except SQLAlchemyError as e:
            logger.error(f"Error searching products: {e}")
            raise HTTPException(status_code=500, detail="Failed to search products")

        logger.info(f"Found {len(products)} search results for {query_text!r}")
        return [ProductVariantResponse.model_validate(p) for p in products]

    async def debug_summary(self) -> CatalogDebugResponse:
        try:
            total = self.repository.count_products()
            distribution = self.repository.get_inventory_distribution()
            samples = self.repository.get_sample_products()
        except SQLAlchemyError as e:
            logger.error(f"Debug endpoint error: {e}")
            raise HTTPException(status_code=500, detail="Debug failed")

        logger.info(f"Debug - Total products in database: {total}")
        logger.info(f"Debug - has_inventory distribution: {distribution}")

        sample_rows = [
            {
                "product_variant_id": p.product_variant_id,
                "product_title": p.product_title,
                "variant_title": p.variant_title,
                "volume_ml": p.volume_ml,
                "sku": p.sku,
                "has_inventory": p.has_inventory,
            }
            for p in samples
        ]

        return CatalogDebugResponse(
            total=total,
            has_inventory_distribution=[InventoryDistributionRow(**row) for row in distribution],
            sample_products=sample_rows,
        )
