# app/modules/transfer_form/__init__.py
"""
Transfer form module - client side of the transfer workflow

One TransferFormSession per open form: it owns the line items, the location
selection and the pending product searches, and talks to the API through
TransferApiClient.
"""

from .client import TransferApiClient, TransferSubmissionError
from .conversions import UnitConversionError, calculate_bottles, calculate_cases
from .session import LineItem, LineItemState, TransferFormSession, TransferFormError

__all__ = [
    "TransferApiClient",
    "TransferSubmissionError",
    "calculate_bottles",
    "calculate_cases",
    "UnitConversionError",
    "LineItem",
    "LineItemState",
    "TransferFormSession",
    "TransferFormError"
]
