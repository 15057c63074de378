"""File-backed storage for audit reports.

Layout under the data directory:

    countries.json                 static site list
    reports/manifest.json          index of monthly summaries
    reports/<month>-summary.json   monthly summary (scores only)
    reports/<month>/<tld>.json     per-site detail report
    reports/<month>.json           legacy single-file month (read only)

Typed loaders never raise for missing or unparseable documents; they return
None or an empty default, logging a warning for malformed files.
"""

import json
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog

from auditor.reports.contract import MonthlySummary, Site, SiteReport
from auditor.reports.manifest import ReportManifest, summary_filename
from core.exceptions import (
    ConfigurationError,
    MalformedDocumentError,
    MissingDocumentError,
)

logger = structlog.get_logger(__name__)

SITES_FILENAME = "countries.json"
REPORTS_DIRNAME = "reports"
MANIFEST_FILENAME = "manifest.json"

# Raised by the contract's from_dict on JSON of the wrong shape
SHAPE_ERRORS = (AttributeError, KeyError, TypeError, ValueError)


@dataclass(frozen=True)
class ReportFormat:
    """A named on-disk format for a month's report document."""

    name: str
    filename: Callable[[str], str]

    def parse(self, data: Any) -> MonthlySummary | None:
        """Parse a loaded document, None if it does not fit this format."""
        if not isinstance(data, dict) or not isinstance(data.get("reports"), list):
            return None
        try:
            return MonthlySummary.from_dict(data)
        except SHAPE_ERRORS as e:
            logger.warning("document_malformed", format=self.name, reason=str(e))
            return None


SUMMARY_FORMAT = ReportFormat(name="summary", filename=summary_filename)
LEGACY_FORMAT = ReportFormat(name="legacy", filename=lambda month: f"{month}.json")

# Tried in order when loading a month; first hit wins
MONTHLY_FORMATS: tuple[ReportFormat, ...] = (SUMMARY_FORMAT, LEGACY_FORMAT)


class ReportStore:
    """Reads and writes report documents under a base directory."""

    def __init__(self, base_path: Path | str):
        """
        Initialize storage.

        Args:
            base_path: Data directory holding the site list and reports
        """
        self.base_path = Path(base_path)

    @property
    def reports_dir(self) -> Path:
        return self.base_path / REPORTS_DIRNAME

    @property
    def sites_path(self) -> Path:
        return self.base_path / SITES_FILENAME

    @property
    def manifest_path(self) -> Path:
        return self.reports_dir / MANIFEST_FILENAME

    def summary_path(self, month: str) -> Path:
        return self.reports_dir / summary_filename(month)

    def detail_path(self, month: str, tld: str) -> Path:
        return self.reports_dir / month / f"{tld}.json"

    # Raw documents

    def read_document(self, path: Path) -> Any:
        """
        Read and parse a JSON document.

        Raises:
            MissingDocumentError: The file does not exist
            MalformedDocumentError: The file is not valid JSON
        """
        if not path.exists():
            raise MissingDocumentError(path)
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise MalformedDocumentError(path, str(e)) from e

    def write_document(self, path: Path, data: Any) -> Path:
        """Write a JSON document, creating parent directories."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
        return path

    def _read_optional(self, path: Path) -> Any | None:
        """Read a document, mapping missing and malformed files to None."""
        try:
            return self.read_document(path)
        except MissingDocumentError:
            return None
        except MalformedDocumentError as e:
            logger.warning("document_malformed", path=str(path), reason=e.details["reason"])
            return None

    # Site list

    def load_sites(self) -> list[Site]:
        """
        Load the static site list.

        Raises:
            ConfigurationError: The list is missing, unreadable or invalid
        """
        try:
            data = self.read_document(self.sites_path)
        except (MissingDocumentError, MalformedDocumentError) as e:
            raise ConfigurationError(
                f"Cannot read site list: {e.message}", details=e.details
            ) from e

        try:
            sites = [Site.from_dict(item) for item in data["countries"]]
        except (KeyError, TypeError) as e:
            raise ConfigurationError(
                f"Invalid site list at {self.sites_path}: {e}",
                details={"path": str(self.sites_path)},
            ) from e

        seen: set[str] = set()
        for site in sites:
            if site.tld in seen:
                raise ConfigurationError(
                    f"Duplicate site identifier '{site.tld}' in {self.sites_path}",
                    details={"tld": site.tld},
                )
            seen.add(site.tld)
        return sites

    # Manifest

    def load_manifest(self) -> ReportManifest:
        """Load the manifest, empty if none exists yet."""
        data = self._read_optional(self.manifest_path)
        if data is None:
            return ReportManifest()
        try:
            return ReportManifest.from_dict(data)
        except SHAPE_ERRORS as e:
            logger.warning("document_malformed", path=str(self.manifest_path), reason=str(e))
            return ReportManifest()

    def save_manifest(self, manifest: ReportManifest) -> Path:
        path = self.write_document(self.manifest_path, manifest.to_dict())
        logger.info("manifest_updated", path=str(path), months=len(manifest.entries))
        return path

    def latest_month(self) -> str | None:
        return self.load_manifest().latest_month

    # Monthly summaries

    def load_summary(self, month: str) -> MonthlySummary | None:
        """Load a month's summary document (new format only)."""
        return SUMMARY_FORMAT.parse(self._read_optional(self.summary_path(month)))

    def save_summary(self, summary: MonthlySummary) -> Path:
        path = self.write_document(self.summary_path(summary.month), summary.to_dict())
        logger.info("summary_saved", path=str(path), reports=len(summary.reports))
        return path

    def load_monthly_report(self, month: str) -> MonthlySummary | None:
        """
        Load a month in whichever stored format is available.

        Formats are tried in MONTHLY_FORMATS order; the first one that
        yields a summary wins.
        """
        for fmt in MONTHLY_FORMATS:
            data = self._read_optional(self.reports_dir / fmt.filename(month))
            if data is None:
                continue
            summary = fmt.parse(data)
            if summary is not None:
                if fmt is not SUMMARY_FORMAT:
                    logger.debug("monthly_report_fallback", month=month, format=fmt.name)
                return summary
            logger.warning("monthly_report_unrecognized", month=month, format=fmt.name)
        return None

    def load_all_reports(self) -> list[MonthlySummary]:
        """Load every month listed in the manifest, newest first."""
        reports = []
        for month in self.load_manifest().months:
            summary = self.load_monthly_report(month)
            if summary is not None:
                reports.append(summary)
        return reports

    def load_latest_report(self) -> MonthlySummary | None:
        month = self.latest_month()
        if month is None:
            return None
        return self.load_monthly_report(month)

    # Detail reports

    def load_detail(self, month: str, tld: str) -> SiteReport | None:
        data = self._read_optional(self.detail_path(month, tld))
        if not isinstance(data, dict):
            return None
        try:
            return SiteReport.from_dict(data)
        except SHAPE_ERRORS as e:
            logger.warning("detail_unrecognized", month=month, tld=tld, reason=str(e))
            return None

    def save_detail(self, month: str, report: SiteReport) -> Path:
        return self.write_document(self.detail_path(month, report.tld), report.to_dict())
