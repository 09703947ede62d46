"""Renderer tests: view model in, text out."""

import json

from conftest import make_payload, make_shipment
from shipment_card.output.shipment_panel import (
    render_details_markdown,
    render_json,
    render_shipments_markdown,
)
from shipment_card.parsing.projector import project


def test_shipments_markdown_lists_every_shipment(sample_payload):
    output = render_shipments_markdown(project(sample_payload))

    assert "## Shipments" in output
    assert "| ID | Year | Order Number & Info | Status | Carrier/Tracking |" in output
    assert "#A1" in output
    assert "[OK] Delivered" in output
    assert "[HOLD] On Hold" in output
    assert "[--] In Transit" in output
    assert "[1Z999](https://www.aftership.com/track/ups/1Z999)" in output


def test_shipments_markdown_empty_state():
    output = render_shipments_markdown([])
    assert "No shipments found" in output


def test_shipments_markdown_escapes_pipes():
    records = project(make_payload([make_shipment("1", "A1", description="left | right")]))
    output = render_shipments_markdown(records)
    assert "left \\| right" in output


def test_details_markdown_lists_kits(sample_payload):
    output = render_details_markdown(project(sample_payload)[0])

    assert "## A1 Order Details" in output
    assert "| 2023 | K-1 | [OK] Delivered |  |" in output
    assert "| 2023 | K-2 | [HOLD] On Hold | Awaiting stock |" in output


def test_details_markdown_without_kits(sample_payload):
    output = render_details_markdown(project(sample_payload)[1])
    assert "No kits recorded" in output


def test_details_markdown_missing_shipment():
    output = render_details_markdown(None, order_number="A9")
    assert "## A9 Order Details" in output
    assert "Shipment not found." in output


def test_render_json_adds_categories_and_links(sample_payload):
    data = json.loads(render_json(project(sample_payload), "https://track.example.com"))

    first = data["shipments"][0]
    assert first["order_number"] == "A1"
    assert first["status_category"] == "success"
    assert first["tracking_url"] == "https://track.example.com/ups/1Z999"
    assert [k["status_category"] for k in first["kits"]] == ["success", "warning"]
    assert data["shipments"][1]["tracking_url"] is None
