"""
Pytest configuration and fixtures for the transfer API
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["INVENTORY_OFFICER_EMAIL"] = "officer@example.com"
os.environ["INVENTORY_TECH_EMAIL"] = "tech@example.com"
os.environ["EMAIL_USER"] = "transfers@example.com"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.config.database import get_db
from app.main import app
from app.modules.transfers.notifications import (
    NotificationDeliveryError, TransferNotifier, get_notifier
)
from app.shared.database.models import Base, ProductVariant


CATALOG = [
    ("1", "Pinot Noir", "2021", 750, "PN-21", None, True),
    ("2", "Pinot Noir Reserve", "2020", 1500, "PNR-20", "Estate", True),
    ("3", "Estate Chardonnay", None, 750, "CH-NV", None, False),
    ("4", "Noir Rose of Pinot", "2022", 375, "RP-22", None, True),
    ("5", "Holiday Pinot Noir Trio", None, 2250, "HOL-3", "Holiday wine bundle", True),
    ("6", "Russian River Pinot Noir", "2019", 750, "RR-19", None, None),
    ("7", "Grenache", "2021", 3000, "GR-21", "Library", True),
]


class RecordingNotifier(TransferNotifier):
    """Collects transfer documents instead of talking to a mail relay"""

    def __init__(self):
        super().__init__()
        self.sent = []
        self.fail = False

    async def send_transfer_email(self, transfer_doc):
        if self.fail:
            raise NotificationDeliveryError("relay refused connection")
        self.sent.append(transfer_doc)


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    session = TestingSession()
    session.add_all([
        ProductVariant(
            product_variant_id=pid,
            product_title=title,
            variant_title=variant,
            volume_ml=volume,
            sku=sku,
            sub_title=sub_title,
            has_inventory=has_inventory,
        )
        for pid, title, variant, volume, sku, sub_title, has_inventory in CATALOG
    ])
    session.commit()

    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def api(db_session, notifier):
    """Application with the test catalog and the recording notifier wired in"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notifier] = lambda: notifier
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(api):
    return TestClient(api)
