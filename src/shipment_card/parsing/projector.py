"""Project the raw collector payload into the shipment/kit view model."""

from typing import Any, Dict, Iterable, List, Optional, Sequence

from pydantic import ValidationError

from shipment_card.config.loader import DEFAULT_TRACKING_BASE_URL
from shipment_card.errors import MalformedDataError
from shipment_card.retrieval.query import KITS_ASSOCIATION, SHIPMENTS_ASSOCIATION
from shipment_card.shipments.shipment_models import ShipmentRecord
from shipment_card.utils.logging import get_logger

logger = get_logger(__name__)

SUCCESS = "success"
WARNING = "warning"
DEFAULT = "default"

STATUS_CATEGORIES = {
    "complete": SUCCESS,
    "delivered": SUCCESS,
    "on_hold": WARNING,
}

SHIPMENT_ASSOCIATION_KEYS = (SHIPMENTS_ASSOCIATION, "shipments")
KIT_ASSOCIATION_KEYS = (KITS_ASSOCIATION, "kits")


def classify(status_value: Any) -> str:
    """
    Map a status value onto a presentation category.

    complete/delivered -> success, on_hold -> warning, anything else
    (including None and non-strings) -> default.
    """
    if not isinstance(status_value, str):
        return DEFAULT
    return STATUS_CATEGORIES.get(status_value, DEFAULT)


def _child(node: Any, key: str, path: str) -> Any:
    """Step one level down; None/missing yields None, a non-object raises."""
    if node is None:
        return None
    if not isinstance(node, dict):
        raise MalformedDataError(f"Expected an object at '{path}', got {type(node).__name__}")
    return node.get(key)


def _first_child(node: Any, keys: Iterable[str], path: str) -> Any:
    for key in keys:
        value = _child(node, key, path)
        if value is not None:
            return value
    return None


def _items(collection: Any, path: str) -> List[Any]:
    items = _child(collection, "items", path)
    if items is None:
        return []
    if not isinstance(items, list):
        raise MalformedDataError(f"Expected a list at '{path}.items', got {type(items).__name__}")
    return items


def _locate_company(raw: Dict[str, Any]) -> Any:
    """Accept the full body, its data object, the CRM object, or {company: ...}."""
    node: Any = raw
    if isinstance(node, dict) and "data" in node:
        node = node["data"]
    if isinstance(node, dict) and "CRM" in node:
        node = node["CRM"]
    return _child(node, "company", "CRM")


def _kit_items(item: Dict[str, Any], path: str) -> List[Any]:
    associations = item.get("associations")
    collection = _first_child(associations, KIT_ASSOCIATION_KEYS, f"{path}.associations")
    if collection is None:
        collection = item.get("kits")
    kits = _items(collection, f"{path}.kits")
    for index, kit in enumerate(kits):
        if not isinstance(kit, dict):
            raise MalformedDataError(f"Expected an object at '{path}.kits.items[{index}]'")
    return kits


def project(raw: Dict[str, Any]) -> List[ShipmentRecord]:
    """
    Flatten the company -> shipments -> kits payload into ShipmentRecords.

    Order is preserved as received; nothing is sorted, filtered or deduplicated.
    A missing or null step anywhere on the path yields an empty list.

    Args:
        raw: Parsed response body from ShipmentFetcher

    Returns:
        List of ShipmentRecord (possibly empty, never None)

    Raises:
        MalformedDataError: If a step on the path is present but has the wrong type
    """
    if raw is None:
        return []
    if not isinstance(raw, dict):
        raise MalformedDataError(f"Payload must be an object, got {type(raw).__name__}")

    company = _locate_company(raw)
    associations = _child(company, "associations", "company")
    shipments = _first_child(associations, SHIPMENT_ASSOCIATION_KEYS, "company.associations")
    items = _items(shipments, "company.associations.shipments")

    records: List[ShipmentRecord] = []
    seen_ids = set()
    for index, item in enumerate(items):
        path = f"shipments.items[{index}]"
        if not isinstance(item, dict):
            raise MalformedDataError(f"Expected an object at '{path}', got {type(item).__name__}")

        fields = {k: v for k, v in item.items() if k not in ("associations", "kits")}
        fields["kits"] = _kit_items(item, path)
        try:
            record = ShipmentRecord.model_validate(fields)
        except ValidationError as e:
            raise MalformedDataError(f"Invalid shipment at '{path}': {e}") from e

        if record.id in seen_ids:
            logger.warning(f"Duplicate shipment id {record.id} in payload")
        seen_ids.add(record.id)
        records.append(record)

    logger.debug(f"Projected {len(records)} shipments")
    return records


def find_by_id(records: Sequence[ShipmentRecord], record_id: Any) -> Optional[ShipmentRecord]:
    """Return the first record whose id matches, or None."""
    if record_id is None:
        return None
    wanted = str(record_id)
    for record in records:
        if record.id == wanted:
            return record
    return None


def tracking_url(record: ShipmentRecord, base_url: str = DEFAULT_TRACKING_BASE_URL) -> Optional[str]:
    """Carrier tracking link for a shipment, when both carrier and number are known."""
    if record.carrier is None or not record.tracking_number:
        return None
    return f"{base_url.rstrip('/')}/{record.carrier.value}/{record.tracking_number}"
