"""Test fixtures for building raw audit results and stored reports."""

from tests.fixtures.lighthouse import (
    make_audit,
    make_lhr,
    make_site_report,
    make_summary,
)

__all__ = [
    "make_audit",
    "make_lhr",
    "make_site_report",
    "make_summary",
]
