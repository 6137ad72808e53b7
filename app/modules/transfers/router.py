# app/modules/transfers/router.py
from fastapi import APIRouter, Depends

from app.shared.schemas.common import ErrorResponse

from .notifications import TransferNotifier, get_notifier
from .service import TransfersService
from .schemas import TransferRequestCreate, TransferResponse

router = APIRouter()


@router.post(
    "",
    response_model=TransferResponse,
    response_model_by_alias=True,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)
async def submit_transfer(
    transfer_data: TransferRequestCreate,
    notifier: TransferNotifier = Depends(get_notifier)
):
    """
    Submit a transfer request

    **Process:**
    1. Validate locations (present and different) and keep items with a product and amount
    2. Compose the transfer document (ID, timestamp, totals)
    3. Email the document to inventory staff
    4. Return the document; nothing is stored
    """
    service = TransfersService(notifier)
    return await service.submit_transfer(transfer_data)
