# app/core/middleware.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import time
import logging

from app.config.settings import settings

logger = logging.getLogger(__name__)

# Health probes would drown the request log
QUIET_PATHS = {"/health"}


def setup_middleware(app: FastAPI):
    """Configure all middleware for the application"""

    # The transfer form may be served from another origin than the API
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request, call_next):
        start_time = time.time()

        response = await call_next(request)

        if request.url.path in QUIET_PATHS:
            return response

        process_time = time.time() - start_time
        path = request.url.path
        if request.url.query:
            path = f"{path}?{request.url.query}"
        logger.info(
            f"{request.method} {path} - "
            f"Status: {response.status_code} - "
            f"Time: {process_time:.4f}s"
        )

        return response
