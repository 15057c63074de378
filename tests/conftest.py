"""Pytest configuration and fixtures."""

import json
import os
from collections.abc import Generator
from pathlib import Path

import pytest

# Set test environment before any app code runs
os.environ["ENV"] = "test"
os.environ["PACING_DELAY_SECONDS"] = "0"


SITES = [
    {"name": "United Kingdom", "url": "https://www.gov.uk", "tld": "uk"},
    {"name": "Germany", "url": "https://www.bund.de", "tld": "de"},
]


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Make every test read settings from its own environment."""
    from core.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Data directory containing a two-site countries.json."""
    (tmp_path / "countries.json").write_text(
        json.dumps({"countries": SITES}), encoding="utf-8"
    )
    return tmp_path


@pytest.fixture
def store(data_dir: Path):
    """Report store rooted at the temporary data directory."""
    from auditor.reports.storage import ReportStore

    return ReportStore(data_dir)
