# app/api/router.py
from fastapi import APIRouter
from app.modules.products.router import router as products_router, debug_router
from app.modules.transfers.router import router as transfers_router

api_router = APIRouter()

api_router.include_router(
    products_router,
    prefix="/products",
    tags=["Products"]
)

api_router.include_router(
    transfers_router,
    prefix="/transfer",
    tags=["Transfers"]
)

api_router.include_router(
    debug_router,
    prefix="/debug",
    tags=["Debug"]
)
