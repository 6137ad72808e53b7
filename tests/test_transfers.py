"""
Tests for transfer submission and document composition
"""
from datetime import datetime, timezone

from app.modules.transfers.schemas import TransferItemCreate
from app.modules.transfers.service import compose_transfer_document


def test_submit_transfer_end_to_end(client, notifier):
    response = client.post("/api/transfer", json={
        "transferFrom": "A",
        "transferTo": "B",
        "items": [{"product": "Widget", "bottles": 5, "cases": 0}],
        "notes": "",
    })

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Transfer request submitted successfully"
    summary = body["transferDoc"]["summary"]
    assert summary["totalBottles"] == 5
    assert summary["totalCases"] == 0
    assert summary["totalItems"] == 1
    assert len(notifier.sent) == 1
    assert notifier.sent[0].transfer_id == body["transferDoc"]["transferId"]


def test_transfer_document_fields(client):
    doc = client.post("/api/transfer", json={
        "transferFrom": "Groskopf",
        "transferTo": "Donum - Tasting Room",
        "items": [
            {"product": "Pinot Noir - 2021", "productId": "1", "sku": "PN-21",
             "volume": "750", "bottles": 6, "cases": 1.5},
            {"product": "Grenache - 2021", "productId": "7", "sku": "GR-21",
             "volume": "3000", "bottles": 2, "cases": 0},
        ],
        "notes": "  Restock for weekend  ",
        "authorizedBy": "J. Smith",
    }).json()["transferDoc"]

    assert doc["transferId"].startswith("TR-")
    assert doc["timestamp"].endswith("Z")
    assert doc["transferFrom"] == "Groskopf"
    assert doc["notes"] == "Restock for weekend"
    assert doc["authorizedBy"] == "J. Smith"
    assert doc["items"][0] == {
        "product": "Pinot Noir - 2021", "sku": "PN-21", "bottles": 6, "cases": 1.5, "volume": "750"
    }
    assert doc["summary"] == {"totalBottles": 8, "totalCases": 1.5, "totalItems": 2}


def test_same_locations_rejected_before_composing(client, notifier):
    response = client.post("/api/transfer", json={
        "transferFrom": "Groskopf",
        "transferTo": "Groskopf",
        "items": [{"product": "Widget", "bottles": 1}],
    })

    assert response.status_code == 400
    assert response.json() == {"error": "Transfer locations must be different"}
    assert notifier.sent == []


def test_missing_location_rejected(client, notifier):
    response = client.post("/api/transfer", json={
        "transferFrom": "Groskopf",
        "items": [{"product": "Widget", "bottles": 1}],
    })

    assert response.status_code == 400
    assert "error" in response.json()
    assert notifier.sent == []


def test_no_valid_items_rejected(client, notifier):
    for items in [
        [],
        [{"product": "Widget"}],
        [{"product": "", "bottles": 3}],
    ]:
        response = client.post("/api/transfer", json={
            "transferFrom": "A", "transferTo": "B", "items": items,
        })
        assert response.status_code == 400
        assert response.json() == {"error": "At least one item with a product and amount is required"}
    assert notifier.sent == []


def test_incomplete_items_left_out_of_document(client):
    doc = client.post("/api/transfer", json={
        "transferFrom": "A",
        "transferTo": "B",
        "items": [
            {"product": "Widget", "bottles": 2},
            {"product": "Gadget"},
            {"product": "Gizmo", "cases": 0.5},
        ],
    }).json()["transferDoc"]

    assert [item["product"] for item in doc["items"]] == ["Widget", "Gizmo"]
    assert doc["summary"] == {"totalBottles": 2, "totalCases": 0.5, "totalItems": 2}


def test_malformed_body_returns_400(client):
    response = client.post("/api/transfer", json={
        "transferFrom": "A",
        "transferTo": "B",
        "items": [{"product": "Widget", "bottles": -3}],
    })

    assert response.status_code == 400
    assert "bottles" in response.json()["error"]


def test_mail_failure_returns_generic_error(client, notifier):
    notifier.fail = True

    response = client.post("/api/transfer", json={
        "transferFrom": "A",
        "transferTo": "B",
        "items": [{"product": "Widget", "bottles": 5}],
    })

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to submit transfer request"}


def test_compose_sums_units_independently():
    now = datetime(2024, 5, 1, 17, 30, 15, 250000, tzinfo=timezone.utc)
    items = [
        TransferItemCreate(product="Pinot Noir", bottles=12, cases=None),
        TransferItemCreate(product="Pinot Noir Reserve", bottles=None, cases=2),
    ]

    doc = compose_transfer_document("A", "B", items, now=now)

    assert doc.transfer_id == f"TR-{int(now.timestamp() * 1000)}"
    assert doc.timestamp == "2024-05-01T17:30:15.250Z"
    assert doc.summary.total_bottles == 12
    assert doc.summary.total_cases == 2
    assert doc.items[0].sku == ""
    assert doc.items[1].bottles == 0
    assert doc.notes == ""
    assert doc.authorized_by == ""


def test_health(client):
    assert client.get("/health").json()["status"] == "healthy"
