"""Monthly audit batch.

Audits every configured site one after another, pausing between sites, and
persists the results: one detail document per site, the merged monthly
summary and the manifest entry. A site whose audit fails is recorded with a
zero-score placeholder so it never blocks the rest of the batch.
"""

import asyncio
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

import structlog

from auditor.extraction.extractor import extract_site_report
from auditor.reports.contract import CategoryScores, Site, SiteReport
from auditor.reports.manifest import summary_filename
from auditor.reports.merger import merge_reports
from auditor.reports.storage import ReportStore
from auditor.source.providers import AuditSource, SourceConfig, get_source
from core.config import Settings
from core.exceptions import ConfigurationError, MissingCategoryError, SourceUnavailableError
from core.logging import bind_run_context

logger = structlog.get_logger(__name__)


@dataclass
class BatchResult:
    """Outcome of one persisted audit batch."""

    month: str
    summary_path: Path
    audited: int
    failed: list[str] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return self.audited - len(self.failed)

    def to_dict(self) -> dict:
        return {
            "month": self.month,
            "summary_path": str(self.summary_path),
            "audited": self.audited,
            "succeeded": self.succeeded,
            "failed": self.failed,
        }


def utc_now() -> datetime:
    return datetime.now(UTC)


def isoformat(moment: datetime) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a Z suffix."""
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def month_key(moment: datetime) -> str:
    """YYYY-MM key of the month containing a moment."""
    return f"{moment.year:04d}-{moment.month:02d}"


def make_placeholder(site: Site, timestamp: str) -> SiteReport:
    """Zero-score summary-form report for a site whose audit failed."""
    return SiteReport(
        name=site.name,
        tld=site.tld,
        url=site.url,
        timestamp=timestamp,
        scores=CategoryScores(performance=0, accessibility=0, best_practices=0, seo=0),
    )


def filter_sites(sites: list[Site], tld: str | None) -> list[Site]:
    """
    Restrict the site list to one identifier.

    Raises:
        ConfigurationError: No site has the requested identifier
    """
    if not tld:
        return sites
    matching = [site for site in sites if site.tld == tld]
    if not matching:
        raise ConfigurationError(f"No site found with identifier '{tld}'", details={"tld": tld})
    return matching


async def audit_site(source: AuditSource, site: Site, timestamp: str) -> tuple[SiteReport, bool]:
    """
    Audit one site.

    Returns:
        Tuple of (report, succeeded); the report is a placeholder on failure
    """
    try:
        raw = await source.run_audit(site.url)
        report = extract_site_report(raw, site, timestamp)
    except (SourceUnavailableError, MissingCategoryError) as e:
        logger.error("site_audit_failed", tld=site.tld, url=site.url, error=e.message, code=e.code)
        return make_placeholder(site, timestamp), False
    except Exception:
        # One broken site must not abort the batch
        logger.exception("site_audit_crashed", tld=site.tld, url=site.url)
        return make_placeholder(site, timestamp), False

    logger.info(
        "site_audited",
        tld=site.tld,
        performance=report.scores.performance,
        accessibility=report.scores.accessibility,
        best_practices=report.scores.best_practices,
        seo=report.scores.seo,
    )
    return report, True


async def run_batch(
    source: AuditSource,
    sites: list[Site],
    pacing_delay_seconds: float = 0.0,
    timestamp: str | None = None,
) -> tuple[list[SiteReport], list[str]]:
    """
    Audit sites sequentially.

    Args:
        source: Audit source to use
        sites: Sites to audit, in order
        pacing_delay_seconds: Pause between two sites
        timestamp: Shared run timestamp, defaults to now

    Returns:
        Tuple of (reports in site order, identifiers of failed sites)
    """
    timestamp = timestamp or isoformat(utc_now())
    reports: list[SiteReport] = []
    failed: list[str] = []

    logger.info("batch_started", sites=len(sites), source=source.source_type.value)

    for i, site in enumerate(sites):
        logger.info("site_audit_started", position=i + 1, total=len(sites), tld=site.tld)
        report, ok = await audit_site(source, site, timestamp)
        reports.append(report)
        if not ok:
            failed.append(site.tld)

        if i < len(sites) - 1 and pacing_delay_seconds > 0:
            await asyncio.sleep(pacing_delay_seconds)

    return reports, failed


def save_batch(
    store: ReportStore,
    reports: list[SiteReport],
    now: datetime | None = None,
    failed: list[str] | None = None,
) -> BatchResult:
    """
    Persist a batch: detail documents, merged summary and manifest entry.

    Args:
        store: Report store
        reports: Reports from this run
        now: Moment of the save, decides the month
        failed: Identifiers of sites that got placeholders

    Returns:
        BatchResult describing what was written
    """
    now = now or utc_now()
    month = month_key(now)
    generated_at = isoformat(now)

    merged = merge_reports(reports, store.load_summary(month), month, generated_at)

    for report in merged.details:
        store.save_detail(month, report)

    summary_path = store.save_summary(merged.summary)

    manifest = store.load_manifest()
    manifest.upsert(month, summary_filename(month), generated_at)
    store.save_manifest(manifest)

    return BatchResult(
        month=month,
        summary_path=summary_path,
        audited=len(reports),
        failed=list(failed or []),
    )


def source_from_settings(settings: Settings) -> AuditSource:
    """Build the configured audit source."""
    config = SourceConfig(
        api_key=settings.pagespeed_api_key or "",
        timeout_seconds=settings.audit_timeout_seconds,
        strategy=settings.pagespeed_strategy,
        binary=settings.lighthouse_binary,
        chrome_flags=settings.lighthouse_chrome_flags,
    )
    return get_source(settings.audit_source, config)


async def run_monthly_audit(
    settings: Settings,
    tld: str | None = None,
    source: AuditSource | None = None,
    now: datetime | None = None,
) -> BatchResult:
    """
    Run a complete audit batch and persist it.

    Raises:
        ConfigurationError: The site list is unusable or the filter matches nothing
    """
    now = now or utc_now()
    store = ReportStore(settings.data_dir)
    sites = filter_sites(store.load_sites(), tld)
    source = source or source_from_settings(settings)
    bind_run_context(month_key(now), source.source_type.value)

    reports, failed = await run_batch(
        source,
        sites,
        pacing_delay_seconds=settings.pacing_delay_seconds,
        timestamp=isoformat(now),
    )
    result = save_batch(store, reports, now=now, failed=failed)

    logger.info("batch_completed", **result.to_dict())
    return result
