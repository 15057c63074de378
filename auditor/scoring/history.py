"""Per-site score history across monthly summaries."""

from dataclasses import dataclass, field

from auditor.reports.contract import Metric, MonthlySummary


@dataclass
class HistoricalDataPoint:
    """One month's value for a metric."""

    month: str
    value: int | None

    def to_dict(self) -> dict:
        return {"month": self.month, "value": self.value}


@dataclass
class SiteHistory:
    """Four aligned monthly series for one site."""

    name: str
    tld: str
    series: dict[Metric, list[HistoricalDataPoint]] = field(default_factory=dict)

    @property
    def months(self) -> list[str]:
        return [p.month for p in self.series.get(Metric.PERFORMANCE, [])]

    def points(self, metric: Metric) -> list[HistoricalDataPoint]:
        return self.series.get(metric, [])

    def latest_change(self, metric: Metric) -> int | None:
        """Last value minus the one before, None without two numeric points."""
        points = self.points(metric)
        if len(points) < 2:
            return None
        last, before = points[-1].value, points[-2].value
        if last is None or before is None:
            return None
        return last - before

    def to_dict(self) -> dict:
        data: dict = {"country": self.name, "tld": self.tld}
        for metric in Metric:
            data[metric.value] = [p.to_dict() for p in self.points(metric)]
        return data


def build_site_history(summaries: list[MonthlySummary], tld: str) -> SiteHistory | None:
    """
    Build a site's chronological score series.

    Months in which the site was not audited are skipped, not filled in.

    Args:
        summaries: Monthly summaries in any order
        tld: Site identifier

    Returns:
        SiteHistory, or None if the site appears in no month
    """
    ordered = sorted(summaries, key=lambda s: s.month)

    present = []
    for summary in ordered:
        report = summary.find(tld)
        if report is not None:
            present.append((summary.month, report))

    if not present:
        return None

    first = present[0][1]
    return SiteHistory(
        name=first.name,
        tld=first.tld,
        series={
            metric: [
                HistoricalDataPoint(month=month, value=report.score(metric))
                for month, report in present
            ]
            for metric in Metric
        },
    )
