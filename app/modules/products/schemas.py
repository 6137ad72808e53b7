# app/modules/products/schemas.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional, Union


class ProductVariantResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    product_variant_id: Union[str, int]
    product_title: str
    variant_title: Optional[str] = None
    volume_ml: Optional[int] = None
    sku: Optional[str] = None
    sub_title: Optional[str] = None


class InventoryDistributionRow(BaseModel):
    has_inventory: Optional[bool] = None
    count: int


class CatalogDebugResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total: int
    has_inventory_distribution: List[InventoryDistributionRow] = Field(
        ..., alias="hasInventoryDistribution"
    )
    sample_products: List[Dict[str, Any]] = Field(..., alias="sampleProducts")
    message: str = "Check server console for detailed output"
