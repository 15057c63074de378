"""Command line entry point for the monthly audit.

Usage:
    gov-web-audit            audit every site in countries.json
    gov-web-audit uk         audit only the site with identifier "uk"
"""

import argparse
import asyncio
import sys
from pathlib import Path

import structlog

from auditor.tasks.audit import run_monthly_audit
from core.config import get_settings
from core.exceptions import ConfigurationError
from core.logging import setup_logging

logger = structlog.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Audit government websites and update the monthly reports"
    )
    parser.add_argument(
        "tld",
        nargs="?",
        default=None,
        help="Only audit the site with this identifier",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory holding countries.json and reports/ (overrides DATA_DIR)",
    )
    parser.add_argument(
        "--source",
        choices=["pagespeed", "lighthouse", "mock"],
        default=None,
        help="Audit source to use (overrides AUDIT_SOURCE)",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=None,
        help="Seconds to wait between sites (overrides PACING_DELAY_SECONDS)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the audit; returns the process exit code."""
    args = build_parser().parse_args(argv)

    overrides = {}
    if args.data_dir is not None:
        overrides["data_dir"] = args.data_dir
    if args.source is not None:
        overrides["audit_source"] = args.source
    if args.delay is not None:
        overrides["pacing_delay_seconds"] = args.delay
    settings = get_settings().model_copy(update=overrides)

    setup_logging(settings)

    try:
        result = asyncio.run(run_monthly_audit(settings, tld=args.tld))
    except ConfigurationError as e:
        logger.error("audit_aborted", error=e.message, **e.details)
        return 1

    if result.failed:
        logger.warning("sites_failed", count=len(result.failed), tlds=result.failed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
