"""Failure kinds raised while fetching shipments from the CRM collector."""

from typing import Optional


class FetchError(Exception):
    """Base class for every failure surfaced by the shipment fetch pipeline."""

    kind = "FetchError"


class NetworkError(FetchError):
    """Transport-level failure: DNS, connection refused, timeout."""

    kind = "NetworkError"


class UpstreamError(FetchError):
    """The collector answered, but not with a usable success response."""

    kind = "UpstreamError"

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedDataError(FetchError):
    """The response body does not have the shape the card expects."""

    kind = "MalformedDataError"
