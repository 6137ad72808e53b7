# app/modules/products/router.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional

from app.config.database import get_db
from app.config.settings import settings
from .service import ProductsService
from .schemas import ProductVariantResponse, CatalogDebugResponse

router = APIRouter()
debug_router = APIRouter()


@router.get("", response_model=List[ProductVariantResponse])
async def list_products(db: Session = Depends(get_db)):
    """All product variants for the search dropdown (Wine Bundle items excluded)"""
    service = ProductsService(db)
    return await service.list_products()


@router.get("/search", response_model=List[ProductVariantResponse])
async def search_products(q: Optional[str] = None, db: Session = Depends(get_db)):
    """
    Fuzzy product search

    **Ranking:**
    1. Title contains the whole query
    2. Title starts with the query
    3. Title ends with the query
    4. Title contains every word of the query

    At most 20 results, ties ordered by product and variant title.
    """
    service = ProductsService(db)
    return await service.search_products(q or "")


@debug_router.get("/products", response_model=CatalogDebugResponse, response_model_by_alias=True)
async def debug_products(db: Session = Depends(get_db)):
    """Catalog diagnostics, only served in debug mode"""
    if not settings.debug:
        raise HTTPException(status_code=404, detail="Not Found")
    service = ProductsService(db)
    return await service.debug_summary()
