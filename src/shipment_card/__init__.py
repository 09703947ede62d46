"""Shipment card: CRM company shipments fetched over GraphQL and shaped for a panel view."""

__version__ = "0.3.0"
