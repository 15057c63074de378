"""Descriptive aggregates over a monthly summary."""

from auditor.reports.contract import (
    CategoryScores,
    Metric,
    MonthlySummary,
    SiteReport,
    round_half_up,
)


def calculate_average_scores(summary: MonthlySummary) -> CategoryScores:
    """
    Mean of each metric across all sites, rounded half up.

    Raises:
        ValueError: The summary has no reports
    """
    if not summary.reports:
        raise ValueError(f"Cannot average scores of an empty summary ({summary.month})")

    count = len(summary.reports)
    averages = {}
    for metric in Metric:
        total = sum(report.score(metric) or 0 for report in summary.reports)
        averages[metric] = round_half_up(total / count)

    return CategoryScores(
        performance=averages[Metric.PERFORMANCE],
        accessibility=averages[Metric.ACCESSIBILITY],
        best_practices=averages[Metric.BEST_PRACTICES],
        seo=averages[Metric.SEO],
    )


def select_sites(summary: MonthlySummary, tlds: list[str]) -> list[SiteReport]:
    """Reports for the requested sites, in request order; unknown ids are skipped."""
    selected = []
    for tld in tlds:
        report = summary.find(tld)
        if report is not None:
            selected.append(report)
    return selected
