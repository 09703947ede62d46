"""Panel state transitions.

The card moves through: fetch requested -> response received -> details
opened/closed. Each transition is a pure function of (state, event).
Responses for a company other than the current one are stale and ignored;
that is how an abandoned in-flight request is dropped.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple, Union

from shipment_card.parsing.projector import find_by_id
from shipment_card.shipments.shipment_models import ShipmentRecord
from shipment_card.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class PanelState:
    company_id: Optional[str] = None
    loading: bool = False
    shipments: Optional[Tuple[ShipmentRecord, ...]] = None  # None until first response
    error: Optional[str] = None
    show_details: bool = False
    selected_shipment_id: Optional[str] = None
    selected_order_number: Optional[str] = None


@dataclass(frozen=True)
class FetchRequested:
    company_id: str


@dataclass(frozen=True)
class FetchSucceeded:
    company_id: str
    shipments: Tuple[ShipmentRecord, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class FetchFailed:
    company_id: str
    error: str


@dataclass(frozen=True)
class DetailsOpened:
    shipment_id: str
    order_number: Optional[str] = None


@dataclass(frozen=True)
class DetailsClosed:
    pass


PanelEvent = Union[FetchRequested, FetchSucceeded, FetchFailed, DetailsOpened, DetailsClosed]


def reduce(state: PanelState, event: PanelEvent) -> PanelState:
    """Apply one event and return the next state."""
    if isinstance(event, FetchRequested):
        if event.company_id != state.company_id:
            # New company: nothing from the previous one may leak through
            return PanelState(company_id=event.company_id, loading=True)
        return replace(state, loading=True, error=None)

    if isinstance(event, (FetchSucceeded, FetchFailed)):
        if event.company_id != state.company_id:
            logger.debug(f"Ignoring stale response for company {event.company_id}")
            return state
        if isinstance(event, FetchFailed):
            return replace(state, loading=False, error=event.error)
        return replace(state, loading=False, error=None, shipments=tuple(event.shipments))

    if isinstance(event, DetailsOpened):
        return replace(
            state,
            show_details=True,
            selected_shipment_id=event.shipment_id,
            selected_order_number=event.order_number,
        )

    if isinstance(event, DetailsClosed):
        return replace(state, show_details=False)

    raise TypeError(f"Unknown panel event: {type(event).__name__}")


def selected_shipment(state: PanelState) -> Optional[ShipmentRecord]:
    """Shipment backing the details view; None if the selection has no record."""
    return find_by_id(state.shipments or (), state.selected_shipment_id)
