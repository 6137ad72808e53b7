# app/modules/transfers/__init__.py
"""
Transfers module - inventory transfer requests between locations

Transfers are not stored: a submission is turned into a transfer document
that is emailed to inventory staff and echoed back to the caller.

Architecture:
- router.py: Endpoint
- service.py: Validation and transfer document composition
- notifications.py: Email rendering, recipient routing and delivery
- schemas.py: Request/response models
"""

from .router import router
from .service import TransfersService
from .notifications import TransferNotifier, NotificationDeliveryError

__all__ = [
    "router",
    "TransfersService",
    "TransferNotifier",
    "NotificationDeliveryError"
]
