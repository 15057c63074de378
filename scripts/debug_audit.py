#!/usr/bin/env python
"""Audit a single URL and print its four category scores.

Nothing is written to the report store. Useful for checking whether a site
can be audited at all before adding it to countries.json.

Usage:
    python scripts/debug_audit.py https://www.gov.uk [--source pagespeed]
"""

import argparse
import asyncio
import json
import sys

sys.path.insert(0, ".")

from auditor.extraction.extractor import extract_site_report  # noqa: E402
from auditor.reports.contract import Site  # noqa: E402
from auditor.tasks.audit import isoformat, source_from_settings, utc_now  # noqa: E402
from core.config import get_settings  # noqa: E402
from core.exceptions import MissingCategoryError, SourceUnavailableError  # noqa: E402
from core.logging import setup_logging  # noqa: E402


async def debug_audit(url: str, source_name: str | None) -> int:
    settings = get_settings()
    if source_name:
        settings = settings.model_copy(update={"audit_source": source_name})
    source = source_from_settings(settings)

    print(f"Testing {url} with {source.source_type.value}...")
    try:
        raw = await source.run_audit(url)
        report = extract_site_report(raw, Site(name=url, url=url, tld="debug"), isoformat(utc_now()))
    except (SourceUnavailableError, MissingCategoryError) as e:
        print(f"Failed: {url}")
        print(f"  {e.message}")
        return 1

    print(f"Success: {url}")
    print(json.dumps(report.scores.to_dict(), indent=2))
    issue_counts = {metric.value: len(issues) for metric, issues in (report.issues or {}).items()}
    print(f"Issues: {issue_counts}")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Audit one URL without saving")
    parser.add_argument("url", help="URL to audit")
    parser.add_argument(
        "--source",
        choices=["pagespeed", "lighthouse"],
        default=None,
        help="Audit source (defaults to AUDIT_SOURCE)",
    )
    args = parser.parse_args()

    setup_logging()
    return asyncio.run(debug_audit(args.url, args.source))


if __name__ == "__main__":
    sys.exit(main())
