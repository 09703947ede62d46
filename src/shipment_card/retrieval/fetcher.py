"""Shipment fetcher: one GraphQL POST against the CRM collector."""

from typing import Any, Dict, Optional

import requests

from shipment_card.config.loader import (
    DEFAULT_ENDPOINT,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_USER_AGENT,
    load_config_or_defaults,
)
from shipment_card.errors import MalformedDataError, NetworkError, UpstreamError
from shipment_card.retrieval.query import COMPANY_ID_VARIABLE, OPERATION_NAME, SHIPMENT_QUERY
from shipment_card.utils.logging import get_logger

logger = get_logger(__name__)


def build_request_body(company_id: str) -> Dict[str, Any]:
    """Build the JSON body for the shipment query."""
    return {
        "operationName": OPERATION_NAME,
        "query": SHIPMENT_QUERY,
        "variables": {COMPANY_ID_VARIABLE: company_id},
    }


class ShipmentFetcher:
    """Fetches the raw company/shipment/kit payload from the collector."""

    def __init__(self, config: Optional[Dict] = None):
        """
        Initialize fetcher.

        Args:
            config: Optional runtime config dict. If None, loads from the default
                path (or built-in defaults when no file exists).
        """
        if config is None:
            config = load_config_or_defaults()

        collector = config.get("collector", {})
        self.endpoint = collector.get("endpoint", DEFAULT_ENDPOINT)
        # requests never times out on its own; always pass one
        self.timeout = collector.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS)
        self.user_agent = collector.get("user_agent", DEFAULT_USER_AGENT)

    def _get_headers(self, credential: str) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {credential}",
            "User-Agent": self.user_agent,
        }

    def fetch(self, company_id: str, credential: str) -> Dict[str, Any]:
        """
        Run the shipment query for one company.

        Issues exactly one POST; nothing is retried.

        Args:
            company_id: CRM company identifier (hs_object_id)
            credential: Bearer token for the collector

        Returns:
            Parsed JSON response body

        Raises:
            ValueError: If company_id or credential is empty
            NetworkError: On transport failure or timeout
            UpstreamError: On a non-2xx response or a GraphQL error-only body
            MalformedDataError: If the body is not a JSON object
        """
        if not isinstance(company_id, str) or not company_id.strip():
            raise ValueError("company_id must be a non-empty string")
        if not isinstance(credential, str) or not credential.strip():
            raise ValueError("credential must be a non-empty string")

        logger.info(f"Fetching shipments for company {company_id}")

        try:
            response = requests.post(
                self.endpoint,
                json=build_request_body(company_id),
                headers=self._get_headers(credential),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Request to {self.endpoint} failed for company {company_id}: {e}")
            raise NetworkError(f"Failed to reach {self.endpoint}: {e}") from e

        status_code = response.status_code
        if not 200 <= status_code < 300:
            logger.error(f"Collector returned HTTP {status_code} for company {company_id}")
            try:
                response.raise_for_status()
            except requests.HTTPError as e:
                raise UpstreamError(f"Collector returned HTTP {status_code}", status_code=status_code) from e
            raise UpstreamError(f"Collector returned HTTP {status_code}", status_code=status_code)

        try:
            body = response.json()
        except ValueError as e:
            raise MalformedDataError(f"Collector response is not valid JSON: {e}") from e

        if not isinstance(body, dict):
            raise MalformedDataError(
                f"Collector response must be a JSON object, got {type(body).__name__}"
            )

        errors = body.get("errors")
        if errors:
            messages = "; ".join(_error_message(err) for err in errors) if isinstance(errors, list) else str(errors)
            if body.get("data") is None:
                raise UpstreamError(f"GraphQL errors: {messages}", status_code=status_code)
            logger.warning(f"Partial GraphQL response for company {company_id}: {messages}")

        logger.debug(f"Fetched {len(response.content or b'')} bytes for company {company_id}")
        return body


def _error_message(error: Any) -> str:
    if isinstance(error, dict):
        return str(error.get("message", error))
    return str(error)
