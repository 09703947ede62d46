"""Fetch-and-project entry points for the shipment card."""

import time
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from shipment_card.config.loader import load_config_or_defaults, resolve_token
from shipment_card.errors import FetchError, UpstreamError
from shipment_card.parsing.projector import project
from shipment_card.retrieval.fetcher import ShipmentFetcher
from shipment_card.retrieval.query import COMPANY_ID_VARIABLE, SHIPMENT_QUERY_VERSION
from shipment_card.shipments.shipment_models import ShipmentRecord
from shipment_card.utils.logging import get_logger
from shipment_card.utils.time import utc_now_z

logger = get_logger(__name__)

SUCCESS = "SUCCESS"
FAILURE = "FAILURE"


class ShipmentFetchOutcome(BaseModel):
    """Result of one fetch-and-project cycle for a company."""

    company_id: str
    fetched_at_utc: str  # ISO 8601
    status: str  # SUCCESS | FAILURE
    shipments: List[ShipmentRecord] = Field(default_factory=list)
    error: Optional[str] = None
    error_kind: Optional[str] = None  # NetworkError | UpstreamError | MalformedDataError
    status_code: Optional[int] = None
    duration_seconds: Optional[float] = None
    query_version: str = SHIPMENT_QUERY_VERSION

    @property
    def ok(self) -> bool:
        return self.status == SUCCESS


def run_fetch(
    company_id: str,
    token: Optional[str] = None,
    *,
    config: Optional[Dict] = None,
    fetcher: Optional[ShipmentFetcher] = None,
) -> ShipmentFetchOutcome:
    """
    Fetch shipments for a company and project them into view records.

    Args:
        company_id: CRM company identifier
        token: Bearer token. If None, read from the configured environment variable.
        config: Optional runtime config dict
        fetcher: Optional fetcher instance (tests inject one)

    Returns:
        ShipmentFetchOutcome. On failure, shipments is empty and error/error_kind
        describe what went wrong; an empty SUCCESS means the company has no shipments.

    Raises:
        ValueError: If company_id is empty or no token can be resolved
    """
    if config is None:
        config = load_config_or_defaults()
    credential = resolve_token(config, token)
    if fetcher is None:
        fetcher = ShipmentFetcher(config)

    fetched_at_utc = utc_now_z()
    start_time = time.monotonic()

    try:
        raw = fetcher.fetch(company_id, credential)
        shipments = project(raw)
    except FetchError as e:
        status_code = e.status_code if isinstance(e, UpstreamError) else None
        logger.error(f"Failed to fetch shipments for company {company_id}: {e.kind}: {e}")
        return ShipmentFetchOutcome(
            company_id=company_id,
            fetched_at_utc=fetched_at_utc,
            status=FAILURE,
            error=str(e),
            error_kind=e.kind,
            status_code=status_code,
            duration_seconds=time.monotonic() - start_time,
        )

    logger.info(f"Fetched {len(shipments)} shipments for company {company_id}")
    return ShipmentFetchOutcome(
        company_id=company_id,
        fetched_at_utc=fetched_at_utc,
        status=SUCCESS,
        shipments=shipments,
        duration_seconds=time.monotonic() - start_time,
    )


def handle(context: Optional[Dict[str, Any]] = None, *, fetcher: Optional[ShipmentFetcher] = None) -> Dict[str, Any]:
    """
    Serverless-style entry point.

    ``context`` mirrors the host invocation: ``parameters`` carries the
    company id under ``hs_object_id`` and ``secrets`` carries the private app
    token. Always returns a response dict; never raises for bad input.
    """
    context = context or {}
    parameters = context.get("parameters") or {}
    secrets = context.get("secrets") or {}
    config = load_config_or_defaults()
    token_env = config["auth"]["token_env"]

    company_id = str(parameters.get(COMPANY_ID_VARIABLE) or "").strip()
    token = str(secrets.get(token_env) or "").strip()
    if not company_id or not token:
        missing = COMPANY_ID_VARIABLE if not company_id else token_env
        logger.warning(f"Serverless call missing {missing}")
        return {"status": "ERROR", "message": f"Missing required value: {missing}", "error_kind": "ValueError"}

    outcome = run_fetch(company_id, token, config=config, fetcher=fetcher)
    if not outcome.ok:
        return {
            "status": "ERROR",
            "message": outcome.error,
            "error_kind": outcome.error_kind,
            "status_code": outcome.status_code,
        }
    return {"status": "SUCCESS", "response": outcome.model_dump(mode="json")}
