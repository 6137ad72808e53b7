# app/modules/transfers/service.py
from datetime import datetime, timezone
from typing import List
from fastapi import HTTPException
import logging

from .notifications import TransferNotifier, NotificationDeliveryError
from .schemas import (
    TransferRequestCreate, TransferItemCreate, TransferDocument,
    TransferDocumentItem, TransferSummary, TransferResponse
)

logger = logging.getLogger(__name__)


def compose_transfer_document(
    transfer_from: str,
    transfer_to: str,
    items: List[TransferItemCreate],
    notes: str = "",
    authorized_by: str = "",
    now: datetime = None
) -> TransferDocument:
    """
    Build the transfer document sent to inventory staff.

    Quantities are taken exactly as entered: bottles and cases are summed
    separately and never converted into each other.
    """
    now = now or datetime.now(timezone.utc)
    transfer_id = f"TR-{int(now.timestamp() * 1000)}"
    timestamp = now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")

    total_bottles = 0
    total_cases = 0
    formatted_items = []
    for item in items:
        bottles = item.bottles or 0
        cases = item.cases or 0
        total_bottles += bottles
        total_cases += cases
        formatted_items.append(TransferDocumentItem(
            product=item.product,
            sku=item.sku or "",
            bottles=bottles,
            cases=cases,
            volume=item.volume
        ))

    return TransferDocument(
        transfer_id=transfer_id,
        timestamp=timestamp,
        transfer_from=transfer_from,
        transfer_to=transfer_to,
        items=formatted_items,
        notes=notes or "",
        authorized_by=authorized_by or "",
        summary=TransferSummary(
            total_bottles=total_bottles,
            total_cases=total_cases,
            total_items=len(formatted_items)
        )
    )


class TransfersService:
    def __init__(self, notifier: TransferNotifier):
        self.notifier = notifier

    def validate_request(self, transfer_data: TransferRequestCreate) -> List[TransferItemCreate]:
        """Check locations and return the line items that belong in the document"""
        transfer_from = (transfer_data.transfer_from or "").strip()
        transfer_to = (transfer_data.transfer_to or "").strip()

        if not transfer_from or not transfer_to:
            raise HTTPException(status_code=400, detail="Both transfer locations are required")

        if transfer_from == transfer_to:
            raise HTTPException(status_code=400, detail="Transfer locations must be different")

        items = [item for item in transfer_data.items if item.is_complete]
        if not items:
            raise HTTPException(
                status_code=400,
                detail="At least one item with a product and amount is required"
            )
        return items

    async def submit_transfer(self, transfer_data: TransferRequestCreate) -> TransferResponse:
        items = self.validate_request(transfer_data)

        transfer_doc = compose_transfer_document(
            transfer_data.transfer_from.strip(),
            transfer_data.transfer_to.strip(),
            items,
            notes=(transfer_data.notes or "").strip(),
            authorized_by=(transfer_data.authorized_by or "").strip()
        )
        logger.info(
            f"Transfer {transfer_doc.transfer_id}: {transfer_doc.transfer_from} -> "
            f"{transfer_doc.transfer_to}, {transfer_doc.summary.total_items} items"
        )

        try:
            await self.notifier.send_transfer_email(transfer_doc)
        except NotificationDeliveryError as e:
            logger.error(f"Error submitting transfer {transfer_doc.transfer_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to submit transfer request")

        return TransferResponse(transfer_doc=transfer_doc)
