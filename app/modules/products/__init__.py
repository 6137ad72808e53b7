# app/modules/products/__init__.py
"""
Products module - read-only access to the product catalog

- Listing of every transferable product variant (Wine Bundle items excluded)
- Ranked fuzzy search by product title
- Catalog diagnostics for debugging deployments

Architecture:
- router.py: Endpoints
- service.py: Error handling and logging around catalog access
- repository.py: Query construction
- schemas.py: Response models
"""

from .router import router, debug_router
from .service import ProductsService
from .repository import ProductsRepository

__all__ = [
    "router",
    "debug_router",
    "ProductsService",
    "ProductsRepository"
]
