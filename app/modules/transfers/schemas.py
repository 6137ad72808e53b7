# app/modules/transfers/schemas.py
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Union

from app.shared.schemas.common import BaseResponse


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class TransferItemCreate(CamelModel):
    product: Optional[str] = None
    product_id: Optional[Union[str, int]] = Field(None, alias="productId")
    sku: Optional[str] = None
    volume: Optional[Union[str, int]] = None
    bottles: Optional[int] = Field(None, ge=0)
    cases: Optional[float] = Field(None, ge=0)

    @property
    def is_complete(self) -> bool:
        """Product selected and at least one quantity given"""
        return bool(self.product) and (self.bottles is not None or self.cases is not None)


class TransferRequestCreate(CamelModel):
    transfer_from: Optional[str] = Field(None, alias="transferFrom")
    transfer_to: Optional[str] = Field(None, alias="transferTo")
    items: List[TransferItemCreate] = Field(default_factory=list)
    notes: Optional[str] = None
    authorized_by: Optional[str] = Field(None, alias="authorizedBy")


class TransferDocumentItem(CamelModel):
    product: str
    sku: str = ""
    bottles: int = 0
    cases: float = 0
    volume: Optional[Union[str, int]] = None


class TransferSummary(CamelModel):
    total_bottles: int = Field(..., alias="totalBottles")
    total_cases: float = Field(..., alias="totalCases")
    total_items: int = Field(..., alias="totalItems")


class TransferDocument(CamelModel):
    transfer_id: str = Field(..., alias="transferId")
    timestamp: str
    transfer_from: str = Field(..., alias="transferFrom")
    transfer_to: str = Field(..., alias="transferTo")
    items: List[TransferDocumentItem]
    notes: str = ""
    authorized_by: str = Field("", alias="authorizedBy")
    summary: TransferSummary


class TransferResponse(BaseResponse):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str = "Transfer request submitted successfully"
    transfer_doc: TransferDocument = Field(..., alias="transferDoc")
