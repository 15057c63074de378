"""Cross-site rankings for one metric.

Sites are ordered by score descending with a stable sort, so equal scores
keep their summary order. A score that is not a number never wins or loses
a comparison; it stays where the stable sort leaves it. Rank deltas compare
against the previous period: positive means the site moved up.
"""

from dataclasses import dataclass, field
from functools import cmp_to_key

from auditor.reports.contract import Metric, MonthlySummary, SiteReport


@dataclass
class SiteRanking:
    """Position of one site for one metric."""

    name: str
    tld: str
    rank: int
    score: int | None
    previous_rank: int | None = None
    change: int | None = None  # previous_rank - rank

    def to_dict(self) -> dict:
        data: dict = {
            "country": self.name,
            "tld": self.tld,
            "rank": self.rank,
            "score": self.score,
        }
        if self.previous_rank is not None:
            data["previousRank"] = self.previous_rank
            data["change"] = self.change
        return data

    @property
    def change_display(self) -> str:
        """Human-readable movement."""
        if self.change is None:
            return "new"
        if self.change == 0:
            return "="
        return f"+{self.change}" if self.change > 0 else str(self.change)


@dataclass
class MetricRankings:
    """Ordered rankings for one metric."""

    metric: Metric
    rankings: list[SiteRanking] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "metric": self.metric.value,
            "rankings": [r.to_dict() for r in self.rankings],
        }


def _is_number(value: object) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def sort_by_metric(reports: list[SiteReport], metric: Metric) -> list[SiteReport]:
    """Stable sort of reports by a metric, highest first."""

    def compare(a: SiteReport, b: SiteReport) -> int:
        score_a = a.score(metric)
        score_b = b.score(metric)
        if _is_number(score_a) and _is_number(score_b):
            return score_b - score_a
        return 0

    return sorted(reports, key=cmp_to_key(compare))


def calculate_rankings(
    current: MonthlySummary,
    previous: MonthlySummary | None,
    metric: Metric,
) -> MetricRankings:
    """
    Rank sites on a metric and compare with the previous period.

    Args:
        current: Summary being ranked
        previous: Summary of the period before, if any
        metric: Metric to rank by

    Returns:
        MetricRankings, empty when the current summary has no reports
    """
    previous_ranks: dict[str, int] = {}
    if previous is not None:
        for position, report in enumerate(sort_by_metric(previous.reports, metric), start=1):
            previous_ranks.setdefault(report.tld, position)

    result = MetricRankings(metric=metric)
    for position, report in enumerate(sort_by_metric(current.reports, metric), start=1):
        previous_rank = previous_ranks.get(report.tld)
        result.rankings.append(
            SiteRanking(
                name=report.name,
                tld=report.tld,
                rank=position,
                score=report.score(metric),
                previous_rank=previous_rank,
                change=previous_rank - position if previous_rank is not None else None,
            )
        )
    return result


def calculate_all_rankings(
    current: MonthlySummary,
    previous: MonthlySummary | None,
) -> dict[Metric, MetricRankings]:
    """Rankings for every metric."""
    return {metric: calculate_rankings(current, previous, metric) for metric in Metric}


def latest_rankings(summaries: list[MonthlySummary]) -> dict[Metric, MetricRankings]:
    """
    Rank the newest month against the month before it.

    Args:
        summaries: Monthly summaries in any order

    Returns:
        Rankings per metric, empty if there are no summaries
    """
    if not summaries:
        return {}
    ordered = sorted(summaries, key=lambda s: s.month, reverse=True)
    previous = ordered[1] if len(ordered) > 1 else None
    return calculate_all_rankings(ordered[0], previous)
