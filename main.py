# main.py

"""Entry point for stylecart (TUI or headless CLI)."""

import argparse
import asyncio
import logging
import sys

from stylecart.config.logging_config import setup_logging
from stylecart.config.settings import Settings

logger = logging.getLogger("stylecart.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    provider_ids = ", ".join(p["id"] for p in Settings.AVAILABLE_PROVIDERS)

    parser = argparse.ArgumentParser(
        prog="stylecart",
        description="Multi-provider catalog search and outfit builder.",
        epilog=f"Registered providers: {provider_ids}",
    )
    parser.add_argument(
        "query",
        nargs="?",
        default=None,
        help="Free-text shopping request. Omit to launch the interactive TUI.",
    )
    parser.add_argument(
        "-l",
        "--limit",
        type=int,
        default=Settings.DEFAULT_LIMIT,
        help=f"Maximum merged results (default: {Settings.DEFAULT_LIMIT}).",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="json",
        dest="output_format",
        help="Output format (default: json).",
    )
    parser.add_argument(
        "--outfits",
        action="store_true",
        default=False,
        help="Compose top + bottom + footwear bundles from the results.",
    )
    parser.add_argument(
        "-b",
        "--budget",
        type=float,
        default=None,
        help="Outfit budget ceiling (default: price parsed from the query).",
    )
    parser.add_argument(
        "--top",
        action="store_true",
        default=False,
        help="List top products from every provider without filters.",
    )
    parser.add_argument(
        "--providers",
        action="store_true",
        default=False,
        help="List registered providers and whether they are enabled.",
    )
    parser.add_argument(
        "--cart-total",
        type=float,
        default=None,
        dest="cart_total",
        help="Report distance to the free-shipping threshold.",
    )
    return parser


def _run_tui() -> None:
    """Launch the interactive Textual TUI."""
    from stylecart.ui.app import StyleCartApp

    try:
        app = StyleCartApp()
        app.run()
    except Exception:
        logger.critical("Fatal error during TUI run", exc_info=True)
        raise
    finally:
        logger.info("stylecart TUI shutting down")


def _run_cli(args: argparse.Namespace) -> None:
    """Run a headless search and exit."""
    from stylecart.cli.runner import cli_search

    exit_code = asyncio.run(
        cli_search(
            query=None if args.top else args.query,
            limit=args.limit,
            output_format=args.output_format,
            outfits=args.outfits,
            budget=args.budget,
        )
    )
    sys.exit(exit_code)


def _run_list_providers() -> None:
    from stylecart.cli.runner import run_list_providers

    sys.exit(run_list_providers())


def _run_cart_check(total: float) -> None:
    from stylecart.cli.runner import run_cart_check

    sys.exit(run_cart_check(total))


def main() -> None:
    """Route to TUI (no args) or headless CLI (query or flag provided)."""
    log_file = setup_logging()
    logger.info("stylecart starting, log file: %s", log_file)

    parser = _build_parser()
    args = parser.parse_args()

    if args.providers:
        _run_list_providers()
    elif args.cart_total is not None:
        _run_cart_check(args.cart_total)
    elif args.top or args.query is not None:
        _run_cli(args)
    else:
        _run_tui()


if __name__ == "__main__":
    main()
