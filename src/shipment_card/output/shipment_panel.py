"""Render the shipments list and kit details views."""

import json
from typing import Any, Dict, List, Optional, Sequence

from shipment_card.config.loader import DEFAULT_TRACKING_BASE_URL
from shipment_card.parsing.projector import classify, tracking_url
from shipment_card.shipments.shipment_models import ShipmentRecord, TaggedValue

STATUS_BADGES = {"success": "[OK]", "warning": "[HOLD]", "default": "[--]"}


def _cell(value: Any) -> str:
    if value is None:
        return ""
    # Pipes would split the markdown cell
    return str(value).replace("|", "\\|").replace("\n", " ")


def _status_cell(status: Optional[TaggedValue]) -> str:
    if status is None:
        return STATUS_BADGES["default"]
    return f"{STATUS_BADGES[classify(status.value)]} {_cell(status.label)}"


def render_shipments_markdown(
    shipments: Sequence[ShipmentRecord],
    tracking_base_url: str = DEFAULT_TRACKING_BASE_URL,
) -> str:
    """Render the shipments table for a company."""
    lines = ["## Shipments", ""]

    if not shipments:
        lines.append("No shipments found for this company.")
        lines.append("")
        return "\n".join(lines)

    lines.append("| ID | Year | Order Number & Info | Status | Carrier/Tracking |")
    lines.append("|----|------|---------------------|--------|------------------|")
    for shipment in shipments:
        info = f"#{_cell(shipment.order_number)}"
        if shipment.description:
            info += f"<br>{_cell(shipment.description)}"

        carrier_parts = []
        if shipment.carrier is not None:
            carrier_parts.append(_cell(shipment.carrier.label))
        url = tracking_url(shipment, tracking_base_url)
        if url:
            carrier_parts.append(f"[{_cell(shipment.tracking_number)}]({url})")
        elif shipment.tracking_number:
            carrier_parts.append(_cell(shipment.tracking_number))

        lines.append(
            f"| {_cell(shipment.id)} | {_cell(shipment.year)} | {info} | "
            f"{_status_cell(shipment.status)} | {'<br>'.join(carrier_parts)} |"
        )
    lines.append("")
    return "\n".join(lines)


def render_details_markdown(shipment: Optional[ShipmentRecord], order_number: Optional[str] = None) -> str:
    """Render the kit table for one shipment.

    A missing shipment (stale selection) renders a notice instead of failing.
    """
    title = order_number or (shipment.order_number if shipment else None) or ""
    lines = [f"## {title} Order Details".strip(), ""]

    if shipment is None:
        lines.append("Shipment not found.")
        lines.append("")
        return "\n".join(lines)

    if not shipment.kits:
        lines.append("No kits recorded for this shipment.")
        lines.append("")
        return "\n".join(lines)

    lines.append("| Year | Kit Number | Status | Notes |")
    lines.append("|------|------------|--------|-------|")
    for kit in shipment.kits:
        lines.append(
            f"| {_cell(kit.year)} | {_cell(kit.kit_number)} | "
            f"{_status_cell(kit.status)} | {_cell(kit.hold_reason)} |"
        )
    lines.append("")
    return "\n".join(lines)


def shipment_to_dict(shipment: ShipmentRecord, tracking_base_url: str = DEFAULT_TRACKING_BASE_URL) -> Dict[str, Any]:
    data = shipment.model_dump(mode="json")
    data["status_category"] = classify(shipment.status.value if shipment.status else None)
    data["tracking_url"] = tracking_url(shipment, tracking_base_url)
    for kit_data, kit in zip(data["kits"], shipment.kits):
        kit_data["status_category"] = classify(kit.status.value if kit.status else None)
    return data


def render_json(shipments: Sequence[ShipmentRecord], tracking_base_url: str = DEFAULT_TRACKING_BASE_URL) -> str:
    """Render the view model as JSON."""
    payload: List[Dict[str, Any]] = [shipment_to_dict(s, tracking_base_url) for s in shipments]
    return json.dumps({"shipments": payload}, indent=2)
