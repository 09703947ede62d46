"""CLI entrypoint for the shipment card."""

import argparse
import json
import sys
from pathlib import Path

from shipment_card.api.shipments_api import ShipmentFetchOutcome, run_fetch
from shipment_card.config.loader import load_config, load_config_or_defaults
from shipment_card.output.shipment_panel import (
    render_details_markdown,
    render_json,
    render_shipments_markdown,
    shipment_to_dict,
)
from shipment_card.panel.state import (
    DetailsOpened,
    FetchFailed,
    FetchRequested,
    FetchSucceeded,
    PanelState,
    reduce,
    selected_shipment,
)
from shipment_card.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


def _load_config(args: argparse.Namespace):
    if args.config:
        return load_config(Path(args.config))
    return load_config_or_defaults()


def _fetch_into_state(args: argparse.Namespace, config) -> PanelState:
    state = reduce(PanelState(), FetchRequested(company_id=args.company_id))
    outcome: ShipmentFetchOutcome = run_fetch(args.company_id, args.token, config=config)
    if outcome.ok:
        return reduce(state, FetchSucceeded(company_id=args.company_id, shipments=tuple(outcome.shipments)))
    return reduce(state, FetchFailed(company_id=args.company_id, error=f"{outcome.error_kind}: {outcome.error}"))


def cmd_fetch(args: argparse.Namespace) -> int:
    """Fetch and print the shipments list for a company."""
    config = _load_config(args)
    state = _fetch_into_state(args, config)

    if state.error:
        print(f"Error: {state.error}", file=sys.stderr)
        return 1

    base_url = config["tracking"]["base_url"]
    shipments = state.shipments or ()
    if args.format == "json":
        print(render_json(shipments, base_url))
    else:
        print(render_shipments_markdown(shipments, base_url))
    return 0


def cmd_details(args: argparse.Namespace) -> int:
    """Fetch a company's shipments and print one shipment's kits."""
    config = _load_config(args)
    state = _fetch_into_state(args, config)

    if state.error:
        print(f"Error: {state.error}", file=sys.stderr)
        return 1

    state = reduce(state, DetailsOpened(shipment_id=args.shipment_id))
    shipment = selected_shipment(state)
    if args.format == "json":
        payload = shipment_to_dict(shipment, config["tracking"]["base_url"]) if shipment else None
        print(json.dumps({"shipment": payload}, indent=2))
    else:
        print(render_details_markdown(shipment))
    return 0 if shipment is not None else 2


def main(argv=None) -> int:
    """Main CLI entrypoint."""
    parser = argparse.ArgumentParser(
        prog="shipment-card",
        description="Show shipments and kits associated with a CRM company",
    )
    parser.add_argument("--config", type=str, help="Path to config YAML (default: shipment_card.config.yaml)")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    def add_common(sub: argparse.ArgumentParser) -> None:
        sub.add_argument("--company-id", required=True, help="CRM company hs_object_id")
        sub.add_argument(
            "--token",
            type=str,
            help="Private app access token (default: read from the configured environment variable)",
        )
        sub.add_argument(
            "--format",
            type=str,
            choices=["md", "json"],
            default="md",
            help="Output format: md or json (default: md)",
        )

    fetch_parser = subparsers.add_parser("fetch", help="List shipments for a company")
    add_common(fetch_parser)
    fetch_parser.set_defaults(func=cmd_fetch)

    details_parser = subparsers.add_parser("details", help="Show kits for one shipment")
    add_common(details_parser)
    details_parser.add_argument("--shipment-id", required=True, help="Shipment hs_object_id")
    details_parser.set_defaults(func=cmd_details)

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if not args.command:
        parser.print_help()
        return 0

    try:
        return args.func(args)
    except ValueError as e:
        logger.error(f"Invalid input for '{args.command}': {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except Exception as e:
        logger.error(f"Error running command '{args.command}': {e}", exc_info=True)
        raise


if __name__ == "__main__":
    sys.exit(main())
