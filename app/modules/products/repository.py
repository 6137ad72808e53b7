# app/modules/products/repository.py
from sqlalchemy.orm import Session
from sqlalchemy import and_, or_, case, func, select
from typing import List, Dict, Any

from app.shared.database.models import ProductVariant

SEARCH_LIMIT = 20
BUNDLE_MARKER = "Wine Bundle"


def _escape_like(value: str) -> str:
    """Escape LIKE wildcards so the user's text only matches literally"""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class ProductsRepository:
    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def _not_bundle():
        return or_(
            ProductVariant.sub_title.is_(None),
            ~ProductVariant.sub_title.ilike(f"%{BUNDLE_MARKER}%")
        )

    def list_products(self) -> List[ProductVariant]:
        """All product variants except Wine Bundle items"""
        query = (
            select(ProductVariant)
            .where(self._not_bundle())
            .order_by(ProductVariant.product_title, ProductVariant.variant_title)
        )
        return list(self.db.scalars(query).all())

    def search_products(self, query_text: str, words: List[str]) -> List[ProductVariant]:
        """
        Ranked fuzzy title search.

        Every pattern is a bound parameter; wildcards in the user's text are escaped.
        """
        title = ProductVariant.product_title
        escaped = _escape_like(query_text)

        word_match = and_(*[title.ilike(f"%{_escape_like(w)}%", escape="\\") for w in words])
        contains = title.ilike(f"%{escaped}%", escape="\\")
        starts_with = title.ilike(f"{escaped}%", escape="\\")
        ends_with = title.ilike(f"%{escaped}", escape="\\")

        rank = case(
            (contains, 1),
            (starts_with, 2),
            (ends_with, 3),
            else_=4
        ).label("exact_match_rank")

        stmt = (
            select(ProductVariant, rank)
            .where(or_(word_match, contains, starts_with, ends_with))
            .where(self._not_bundle())
            .order_by(rank, ProductVariant.product_title, ProductVariant.variant_title)
            .limit(SEARCH_LIMIT)
        )
        return [row[0] for row in self.db.execute(stmt).all()]

    def count_products(self) -> int:
        return self.db.scalar(select(func.count()).select_from(ProductVariant))

    def get_inventory_distribution(self) -> List[Dict[str, Any]]:
        stmt = (
            select(ProductVariant.has_inventory, func.count().label("count"))
            .group_by(ProductVariant.has_inventory)
        )
        return [
            {"has_inventory": row.has_inventory, "count": row.count}
            for row in self.db.execute(stmt).all()
        ]

    def get_sample_products(self, limit: int = 10) -> List[ProductVariant]:
        return list(self.db.scalars(select(ProductVariant).limit(limit)).all())
