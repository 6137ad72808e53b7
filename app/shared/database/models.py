# app/shared/database/models.py
from sqlalchemy import Column, Integer, String, Boolean
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# =====================================================
# PRODUCT CATALOG (read-only, owned by the catalog ETL)
# =====================================================

class ProductVariant(Base):
    """Sellable product variant from the catalog dimension table"""
    __tablename__ = "dim_product_variant"

    product_variant_id = Column(String(64), primary_key=True)
    product_title = Column(String(255), nullable=False, index=True)
    variant_title = Column(String(255))
    volume_ml = Column(Integer)
    sku = Column(String(100))
    sub_title = Column(String(255))
    has_inventory = Column(Boolean)

    def __repr__(self):
        return f"<ProductVariant {self.product_variant_id} {self.product_title!r}>"
