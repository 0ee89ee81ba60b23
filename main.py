# main.py

"""Entry point for the anjia property data service (API server or CLI)."""

import argparse
import asyncio
import logging
import sys

from anjia_properties.config.logging_config import setup_logging
from anjia_properties.config.settings import Settings

logger = logging.getLogger("anjia.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="anjia",
        description="Property data resolution service for An Jia Properties.",
        epilog=(
            f"Primary CMS: {Settings.CMS_PRIMARY_URL}  "
            f"Mirror CMS: {Settings.CMS_MIRROR_URL}"
        ),
    )
    parser.add_argument(
        "--health",
        action="store_true",
        default=False,
        help="Run a connectivity health check on the CMS sources.",
    )
    commands = parser.add_subparsers(dest="command")

    serve = commands.add_parser("serve", help="Run the HTTP API.")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    prop = commands.add_parser("property", help="Resolve one property by id.")
    prop.add_argument("property_id")

    listings = commands.add_parser(
        "listings", help="Resolve one filtered page of properties."
    )
    listings.add_argument("--page", type=int, default=1)
    listings.add_argument("--location", default=None)
    listings.add_argument("--min-price", default=None, dest="minPrice")
    listings.add_argument("--max-price", default=None, dest="maxPrice")
    listings.add_argument("--bedrooms", default=None)
    listings.add_argument("--bathrooms", default=None)
    listings.add_argument("--type", default=None, dest="propertyType")
    listings.add_argument(
        "--amenities",
        default=None,
        help="Comma-separated amenities that must all be present.",
    )

    for sub in (prop, listings):
        sub.add_argument(
            "-f",
            "--format",
            choices=["json", "table"],
            default="json",
            dest="output_format",
            help="Output format (default: json).",
        )
    return parser


def _run_server(args: argparse.Namespace) -> None:
    """Serve the FastAPI app with uvicorn."""
    import uvicorn

    from anjia_properties.api.app import create_app

    try:
        uvicorn.run(create_app(), host=args.host, port=args.port)
    except Exception:
        logger.critical("Fatal error while serving", exc_info=True)
        raise
    finally:
        logger.info("anjia API server shutting down")


def _run_property(args: argparse.Namespace) -> None:
    from anjia_properties.cli.runner import cli_property

    exit_code = asyncio.run(
        cli_property(args.property_id, args.output_format)
    )
    sys.exit(exit_code)


def _run_listings(args: argparse.Namespace) -> None:
    from anjia_properties.cli.runner import cli_listings

    params = {
        key: getattr(args, key)
        for key in (
            "location",
            "minPrice",
            "maxPrice",
            "bedrooms",
            "bathrooms",
            "propertyType",
            "amenities",
        )
    }
    exit_code = asyncio.run(
        cli_listings(params, max(args.page, 1), args.output_format)
    )
    sys.exit(exit_code)


def _run_health_check() -> None:
    """Run CMS connectivity health check."""
    from anjia_properties.cli.runner import run_health_check

    exit_code = asyncio.run(run_health_check())
    sys.exit(exit_code)


def main(argv: list[str] | None = None) -> None:
    """Route to the health check, a CLI command or the API server."""
    log_file = setup_logging()
    logger.info("anjia starting, log file: %s", log_file)

    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.health:
        _run_health_check()
    elif args.command == "property":
        _run_property(args)
    elif args.command == "listings":
        _run_listings(args)
    elif args.command == "serve":
        _run_server(args)
    else:
        parser.print_help()
        sys.exit(2)


if __name__ == "__main__":
    main()
