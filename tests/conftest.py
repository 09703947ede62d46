"""Pytest configuration and fixtures."""

import json

import pytest
import requests


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code=200, body=None, text=None):
        self.status_code = status_code
        if text is None:
            text = json.dumps(body) if body is not None else ""
        self.text = text
        self.content = text.encode("utf-8")

    def json(self):
        return json.loads(self.text)

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def config():
    return {
        "collector": {
            "endpoint": "https://collector.example.com/graphql",
            "timeout_seconds": 5,
            "user_agent": "shipment-card-tests",
        },
        "auth": {"token_env": "SHIPMENT_CARD_TEST_TOKEN"},
        "tracking": {"base_url": "https://track.example.com"},
    }


def make_payload(shipments):
    """Wrap shipment items in the collector's full response envelope."""
    return {
        "data": {
            "CRM": {
                "company": {
                    "associations": {
                        "p_shipments_collection__shipments_to_company": {"items": shipments}
                    }
                }
            }
        }
    }


def make_shipment(object_id, order_num, status="complete", kits=None, **extra):
    item = {
        "hs_object_id": object_id,
        "year": 2023,
        "order_num": order_num,
        "description": f"Order {order_num}",
        "status": {"value": status, "label": status.replace("_", " ").title()},
        "carrier": None,
        "tracking_num": None,
        "associations": {
            "p_kits_collection__shipments_to_kits": {"items": kits or []}
        },
    }
    item.update(extra)
    return item


def make_kit(kit_number, status="delivered", hold_reason=None):
    return {
        "year": 2023,
        "kit_number": kit_number,
        "status": {"value": status, "label": status.replace("_", " ").title()},
        "hold_reason": hold_reason,
    }


@pytest.fixture
def sample_payload():
    return make_payload([
        make_shipment(
            "101",
            "A1",
            status="delivered",
            kits=[make_kit("K-1"), make_kit("K-2", status="on_hold", hold_reason="Awaiting stock")],
            carrier={"value": "ups", "label": "UPS"},
            tracking_num="1Z999",
        ),
        make_shipment("102", "A2", status="on_hold"),
        make_shipment("103", "A3", status="in_transit", kits=[make_kit("K-3", status="packed")]),
    ])
