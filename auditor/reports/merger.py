"""Merge a batch of fresh site reports into a month's summary.

Summary entries are merged by site identifier: a re-audited site replaces
its previous entry, a new site is appended, and the result is ordered by
site name. Detail documents carry no history, so every audited site simply
gets a fresh detail document.
"""

from dataclasses import dataclass, field

import structlog

from auditor.reports.contract import MonthlySummary, SiteReport

logger = structlog.get_logger(__name__)


@dataclass
class MergeResult:
    """Outcome of merging one batch."""

    summary: MonthlySummary
    details: list[SiteReport] = field(default_factory=list)
    replaced: list[str] = field(default_factory=list)
    added: list[str] = field(default_factory=list)


def merge_reports(
    batch: list[SiteReport],
    previous: MonthlySummary | None,
    month: str,
    generated_at: str,
) -> MergeResult:
    """
    Merge newly extracted reports with the month's previous summary.

    Args:
        batch: Reports from this run, in audit order
        previous: Summary already persisted for the month, if any
        month: Month key (YYYY-MM)
        generated_at: ISO timestamp stamped on the new summary

    Returns:
        MergeResult with the updated summary and the detail documents to write
    """
    entries = [r.to_summary() for r in previous.reports] if previous else []
    positions = {r.tld: i for i, r in enumerate(entries)}

    result = MergeResult(summary=MonthlySummary(month=month, generated_at=generated_at))

    for report in batch:
        summary_report = report.to_summary()

        index = positions.get(report.tld)
        if index is not None:
            entries[index] = summary_report
            if report.tld not in result.replaced:
                result.replaced.append(report.tld)
        else:
            positions[report.tld] = len(entries)
            entries.append(summary_report)
            result.added.append(report.tld)

        result.details.append(report)

    entries.sort(key=lambda r: r.name.casefold())
    result.summary.reports = entries

    logger.debug(
        "reports_merged",
        month=month,
        total=len(entries),
        replaced=len(result.replaced),
        added=len(result.added),
    )
    return result
