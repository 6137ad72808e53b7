# app/modules/transfer_form/client.py
import httpx
import logging
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class TransferSubmissionError(Exception):
    """Raised when the API rejects or fails a request"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class TransferApiClient:
    """Async client for the transfer API"""

    def __init__(
        self,
        base_url: str = "http://localhost:3030",
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30
    ):
        self.base_url = base_url
        self.client = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)

    async def close(self):
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.close()

    @staticmethod
    def _error_message(response: httpx.Response, fallback: str) -> str:
        try:
            return response.json().get("error") or fallback
        except ValueError:
            return fallback

    async def list_products(self) -> List[Dict[str, Any]]:
        response = await self.client.get("/api/products")
        if response.status_code != 200:
            raise TransferSubmissionError(
                self._error_message(response, "Failed to fetch products"),
                response.status_code
            )
        products = response.json()
        logger.info(f"Products loaded: {len(products)}")
        return products

    async def search_products(self, query: str) -> List[Dict[str, Any]]:
        response = await self.client.get("/api/products/search", params={"q": query})
        if response.status_code != 200:
            raise TransferSubmissionError(
                self._error_message(response, "Search failed"),
                response.status_code
            )
        return response.json()

    async def submit_transfer(self, form_data: Dict[str, Any]) -> Dict[str, Any]:
        response = await self.client.post("/api/transfer", json=form_data)
        if not response.is_success:
            raise TransferSubmissionError(
                self._error_message(response, "Transfer submission failed"),
                response.status_code
            )
        return response.json()
