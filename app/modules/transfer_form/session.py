# app/modules/transfer_form/session.py
import asyncio
import logging
from enum import Enum
from typing import Any, Dict, List, Optional

from .client import TransferApiClient, TransferSubmissionError
from .conversions import STANDARD_VOLUMES

logger = logging.getLogger(__name__)

OTHER_LOCATION = "Other"
MIN_QUERY_LENGTH = 2
SEARCH_DEBOUNCE_SECONDS = 0.3


class TransferFormError(Exception):
    """Form input that cannot be submitted as is"""


class LineItemState(str, Enum):
    EMPTY = "empty"
    SEARCHING = "searching"
    PRODUCT_SELECTED = "product-selected"


class LineItem:
    """One product row of the transfer form"""

    def __init__(self, item_id: int):
        self.item_id = item_id
        self.state = LineItemState.EMPTY
        self.query = ""

        self.product: Optional[str] = None
        self.product_id: Optional[str] = None
        self.sku: str = ""
        self.volume: Optional[int] = None

        self.bottles: Optional[int] = None
        self.cases: Optional[float] = None
        # New rows accept both units whatever the volume
        self.bottles_enabled = True
        self.cases_enabled = True

        self.results: List[Dict[str, Any]] = []
        self.results_visible = False
        self.search_error: Optional[str] = None
        self.search_seq = 0
        self._pending_search: Optional[asyncio.Task] = None

    @property
    def has_quantity(self) -> bool:
        return self.bottles is not None or self.cases is not None

    @property
    def is_complete(self) -> bool:
        return self.state == LineItemState.PRODUCT_SELECTED and self.has_quantity

    def cancel_pending_search(self):
        if self._pending_search is not None and not self._pending_search.done():
            self._pending_search.cancel()
        self._pending_search = None

    def clear_selection(self):
        self.product = None
        self.product_id = None
        self.sku = ""
        self.volume = None
        self.bottles_enabled = True
        self.cases_enabled = True

    def to_payload(self) -> Dict[str, Any]:
        return {
            "product": self.product,
            "productId": self.product_id,
            "sku": self.sku,
            "volume": self.volume,
            "bottles": self.bottles or 0,
            "cases": self.cases or 0,
        }


class TransferFormSession:
    """
    State of one open transfer form.

    Created when the form is opened and discarded with it. Every line item
    keeps its own search sequence so a slow response for an old query never
    replaces the results of a newer one.
    """

    def __init__(self, client: TransferApiClient, debounce_seconds: float = SEARCH_DEBOUNCE_SECONDS):
        self.client = client
        self.debounce_seconds = debounce_seconds
        self.products: List[Dict[str, Any]] = []
        self.items: Dict[int, LineItem] = {}
        self._next_item_id = 0
        self.transfer_from_choice = ""
        self.transfer_from_other = ""
        self.transfer_to_choice = ""
        self.transfer_to_other = ""
        self.notes = ""
        self.authorized_by = ""

    async def start(self):
        """Load the catalog and open the first row"""
        self.products = await self.client.list_products()
        self.add_item()

    def close(self):
        for item in self.items.values():
            item.cancel_pending_search()

    # ==================== LOCATIONS ====================

    def set_transfer_from(self, value: str, other: str = ""):
        self.transfer_from_choice = value
        self.transfer_from_other = other if value == OTHER_LOCATION else ""

    def set_transfer_to(self, value: str, other: str = ""):
        self.transfer_to_choice = value
        self.transfer_to_other = other if value == OTHER_LOCATION else ""

    @property
    def transfer_from(self) -> str:
        if self.transfer_from_choice == OTHER_LOCATION:
            return self.transfer_from_other.strip()
        return self.transfer_from_choice

    @property
    def transfer_to(self) -> str:
        if self.transfer_to_choice == OTHER_LOCATION:
            return self.transfer_to_other.strip()
        return self.transfer_to_choice

    # ==================== LINE ITEMS ====================

    def add_item(self) -> LineItem:
        self._next_item_id += 1
        item = LineItem(self._next_item_id)
        self.items[item.item_id] = item
        return item

    def get_item(self, item_id: int) -> LineItem:
        try:
            return self.items[item_id]
        except KeyError:
            raise TransferFormError(f"Unknown item {item_id}")

    def remove_item(self, item_id: int):
        item = self.get_item(item_id)
        if len(self.items) <= 1:
            raise TransferFormError("At least one item is required.")
        item.cancel_pending_search()
        del self.items[item_id]

    def set_bottles(self, item_id: int, value: Optional[int]):
        item = self.get_item(item_id)
        if not item.bottles_enabled:
            raise TransferFormError("Bottles cannot be entered for this product.")
        item.bottles = None if value is None else max(int(value), 0)

    def set_cases(self, item_id: int, value: Optional[float]):
        item = self.get_item(item_id)
        if not item.cases_enabled:
            raise TransferFormError("Cases cannot be entered for this product volume.")
        item.cases = None if value is None else max(float(value), 0.0)

    # ==================== PRODUCT SEARCH ====================

    def update_query(self, item_id: int, text: str) -> Optional[asyncio.Task]:
        """
        Product field input. Returns the debounced search task, if one was scheduled.

        Must be called from a running event loop.
        """
        item = self.get_item(item_id)
        item.query = text
        item.cancel_pending_search()
        query = text.strip()

        if item.state == LineItemState.PRODUCT_SELECTED:
            if text == item.product:
                return None
            item.clear_selection()
            item.state = LineItemState.EMPTY

        if query == "":
            item.clear_selection()
            item.bottles = None
            item.cases = None
            item.results = []
            item.results_visible = False
            item.state = LineItemState.EMPTY
            return None

        if len(query) < MIN_QUERY_LENGTH:
            item.results_visible = False
            if item.state == LineItemState.SEARCHING:
                item.state = LineItemState.EMPTY
            return None

        item.state = LineItemState.SEARCHING
        item._pending_search = asyncio.get_running_loop().create_task(
            self._debounced_search(item, query)
        )
        return item._pending_search

    async def _debounced_search(self, item: LineItem, query: str):
        await asyncio.sleep(self.debounce_seconds)
        await self.run_search(item.item_id, query)

    async def focus_product(self, item_id: int) -> bool:
        """Refocusing the product field repeats the search right away"""
        item = self.get_item(item_id)
        query = item.query.strip()
        if len(query) < MIN_QUERY_LENGTH or item.state == LineItemState.PRODUCT_SELECTED:
            return False
        item.state = LineItemState.SEARCHING
        return await self.run_search(item_id, query)

    async def run_search(self, item_id: int, query: str) -> bool:
        """Search and show the results. Returns False when the response was stale."""
        item = self.get_item(item_id)
        item.search_seq += 1
        seq = item.search_seq
        logger.debug(f"Searching for {query!r} item={item_id} seq={seq}")

        try:
            results = await self.client.search_products(query)
        except TransferSubmissionError as e:
            if seq == item.search_seq:
                item.search_error = e.message
                item.results = []
                item.results_visible = False
            logger.error(f"Search error: {e.message}")
            return False

        if seq != item.search_seq or item.item_id not in self.items:
            logger.debug(f"Dropping stale results for {query!r} item={item_id} seq={seq}")
            return False
        if item.state != LineItemState.SEARCHING:
            return False

        item.search_error = None
        item.results = results
        item.results_visible = True
        return True

    def select_product(self, item_id: int, variant: Dict[str, Any]):
        item = self.get_item(item_id)
        item.cancel_pending_search()
        # Responses still in flight belong to the old query
        item.search_seq += 1

        title = variant["product_title"]
        variant_title = variant.get("variant_title")
        item.product = f"{title} - {variant_title}" if variant_title else title
        item.query = item.product
        item.product_id = variant.get("product_variant_id")
        item.sku = variant.get("sku") or ""
        volume = variant.get("volume_ml")
        item.volume = int(volume) if volume else None
        item.state = LineItemState.PRODUCT_SELECTED
        item.results_visible = False

        if item.volume in STANDARD_VOLUMES:
            item.bottles_enabled = True
            item.cases_enabled = True
        elif item.volume:
            item.bottles_enabled = True
            item.cases_enabled = False
            item.cases = None

    # ==================== SUBMISSION ====================

    def validate(self) -> Optional[str]:
        """Message describing the first problem, or None when the form can be sent"""
        if not self.transfer_from or not self.transfer_to:
            return "Please select both transfer locations."
        if self.transfer_from == self.transfer_to:
            return "Transfer locations must be different."
        if not any(item.is_complete for item in self.items.values()):
            return "Please add at least one item with a product and amount."
        return None

    def collect(self) -> Dict[str, Any]:
        return {
            "transferFrom": self.transfer_from,
            "transferTo": self.transfer_to,
            "items": [item.to_payload() for item in self.items.values() if item.is_complete],
            "notes": self.notes.strip(),
            "authorizedBy": self.authorized_by.strip(),
        }

    async def submit(self) -> Dict[str, Any]:
        error = self.validate()
        if error:
            raise TransferFormError(error)

        response = await self.client.submit_transfer(self.collect())
        if not response.get("success"):
            raise TransferSubmissionError(response.get("error") or "Transfer submission failed")

        logger.info(f"Transfer submitted: {response['transferDoc']['transferId']}")
        self.reset()
        return response

    def reset(self):
        self.close()
        self.set_transfer_from("")
        self.set_transfer_to("")
        self.items = {}
        self.notes = ""
        self.authorized_by = ""
        self.add_item()
