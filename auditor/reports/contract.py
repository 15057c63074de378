"""Report JSON contract and data structures.

Defines the documents persisted by the report store: per-site reports in
summary and detail form, monthly summaries and the manifest. Python names
are snake_case; ``to_dict`` emits the camelCase keys the dashboard reads and
``from_dict`` accepts them back.
"""

import math
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class Metric(StrEnum):
    """The four tracked quality categories, valued by their document key."""

    PERFORMANCE = "performance"
    ACCESSIBILITY = "accessibility"
    BEST_PRACTICES = "bestPractices"
    SEO = "seo"

    @property
    def category_id(self) -> str:
        """Category identifier used by Lighthouse."""
        return CATEGORY_IDS[self]


CATEGORY_IDS: dict[Metric, str] = {
    Metric.PERFORMANCE: "performance",
    Metric.ACCESSIBILITY: "accessibility",
    Metric.BEST_PRACTICES: "best-practices",
    Metric.SEO: "seo",
}


class Severity(StrEnum):
    """Derived severity of an issue."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Sort rank, most severe first."""
        return SEVERITY_ORDER[self]


SEVERITY_ORDER: dict[Severity, int] = {
    Severity.HIGH: 0,
    Severity.MEDIUM: 1,
    Severity.LOW: 2,
}


class ScoreDisplayMode(StrEnum):
    """How an audit score should be interpreted."""

    NUMERIC = "numeric"
    BINARY = "binary"
    INFORMATIVE = "informative"
    NOT_APPLICABLE = "notApplicable"
    MANUAL = "manual"
    ERROR = "error"
    METRIC_SAVINGS = "metricSavings"


# Timing field name -> Lighthouse audit id
TIMING_AUDITS: dict[str, str] = {
    "firstContentfulPaint": "first-contentful-paint",
    "largestContentfulPaint": "largest-contentful-paint",
    "totalBlockingTime": "total-blocking-time",
    "cumulativeLayoutShift": "cumulative-layout-shift",
    "speedIndex": "speed-index",
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return math.floor(value + 0.5)


def _as_score(value: Any) -> int | None:
    """Keep finite numeric scores as integers, map anything else to None."""
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    if not math.isfinite(value):
        return None
    return round_half_up(value)


def _require_dict(value: Any, what: str) -> dict:
    """Return value if it is a JSON object, else raise ValueError."""
    if not isinstance(value, dict):
        raise ValueError(f"{what} must be an object, got {type(value).__name__}")
    return value


def _require_str(data: dict, key: str, what: str) -> str:
    """Return a required string field, else raise ValueError."""
    value = data.get(key)
    if not isinstance(value, str):
        raise ValueError(f"{what} needs a string '{key}'")
    return value


@dataclass(frozen=True)
class Site:
    """A tracked website from the static site list."""

    name: str
    url: str
    tld: str

    def to_dict(self) -> dict:
        return {"name": self.name, "url": self.url, "tld": self.tld}

    @classmethod
    def from_dict(cls, data: dict) -> "Site":
        return cls(name=data["name"], url=data["url"], tld=data["tld"])


@dataclass(frozen=True)
class Issue:
    """A failed or informative audit check within one category."""

    id: str
    title: str
    description: str
    score: float | None
    score_display_mode: str
    display_value: str | None
    severity: Severity
    weight: float
    numeric_value: float | None = None
    numeric_unit: str | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "score": self.score,
            "scoreDisplayMode": self.score_display_mode,
            "displayValue": self.display_value,
            "severity": self.severity.value,
            "weight": self.weight,
            "numericValue": self.numeric_value,
            "numericUnit": self.numeric_unit,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Issue":
        _require_dict(data, "issue")
        return cls(
            id=data["id"],
            title=data.get("title", ""),
            description=data.get("description", ""),
            score=data.get("score"),
            score_display_mode=data.get("scoreDisplayMode", ScoreDisplayMode.NUMERIC.value),
            display_value=data.get("displayValue"),
            severity=Severity(data.get("severity", Severity.LOW.value)),
            weight=data.get("weight", 0),
            numeric_value=data.get("numericValue"),
            numeric_unit=data.get("numericUnit"),
        )


@dataclass
class CategoryScores:
    """Scores (0-100) for the four categories."""

    performance: int | None = 0
    accessibility: int | None = 0
    best_practices: int | None = 0
    seo: int | None = 0

    def get(self, metric: Metric) -> int | None:
        """Score for one metric."""
        return {
            Metric.PERFORMANCE: self.performance,
            Metric.ACCESSIBILITY: self.accessibility,
            Metric.BEST_PRACTICES: self.best_practices,
            Metric.SEO: self.seo,
        }[metric]

    def to_dict(self) -> dict:
        return {
            Metric.PERFORMANCE.value: self.performance,
            Metric.ACCESSIBILITY.value: self.accessibility,
            Metric.BEST_PRACTICES.value: self.best_practices,
            Metric.SEO.value: self.seo,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CategoryScores":
        return cls(
            performance=_as_score(data.get(Metric.PERFORMANCE.value)),
            accessibility=_as_score(data.get(Metric.ACCESSIBILITY.value)),
            best_practices=_as_score(data.get(Metric.BEST_PRACTICES.value)),
            seo=_as_score(data.get(Metric.SEO.value)),
        )


@dataclass
class TimingMetrics:
    """Lab timing values from the performance category."""

    first_contentful_paint: float | None = None
    largest_contentful_paint: float | None = None
    total_blocking_time: float | None = None
    cumulative_layout_shift: float | None = None
    speed_index: float | None = None

    def to_dict(self) -> dict:
        return {
            "firstContentfulPaint": self.first_contentful_paint,
            "largestContentfulPaint": self.largest_contentful_paint,
            "totalBlockingTime": self.total_blocking_time,
            "cumulativeLayoutShift": self.cumulative_layout_shift,
            "speedIndex": self.speed_index,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TimingMetrics":
        return cls(
            first_contentful_paint=data.get("firstContentfulPaint"),
            largest_contentful_paint=data.get("largestContentfulPaint"),
            total_blocking_time=data.get("totalBlockingTime"),
            cumulative_layout_shift=data.get("cumulativeLayoutShift"),
            speed_index=data.get("speedIndex"),
        )


@dataclass
class SiteReport:
    """One site's result for one audit run.

    ``issues`` and ``timing`` are only set on the detail form. The summary
    form is obtained with :meth:`to_summary`.
    """

    name: str
    tld: str
    url: str
    timestamp: str
    scores: CategoryScores
    issues: dict[Metric, list[Issue]] | None = None
    timing: TimingMetrics | None = None

    @property
    def is_detail(self) -> bool:
        return self.issues is not None or self.timing is not None

    def score(self, metric: Metric) -> int | None:
        return self.scores.get(metric)

    def to_summary(self) -> "SiteReport":
        """Project to the lightweight summary form (scores only)."""
        return SiteReport(
            name=self.name,
            tld=self.tld,
            url=self.url,
            timestamp=self.timestamp,
            scores=CategoryScores(**vars(self.scores)),
        )

    def to_dict(self) -> dict:
        metrics: dict[str, Any] = self.scores.to_dict()
        if self.issues is not None:
            metrics["audits"] = {
                metric.value: [issue.to_dict() for issue in self.issues.get(metric, [])]
                for metric in Metric
            }
        if self.timing is not None:
            metrics["timing"] = self.timing.to_dict()
        return {
            "country": self.name,
            "tld": self.tld,
            "url": self.url,
            "timestamp": self.timestamp,
            "metrics": metrics,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SiteReport":
        _require_dict(data, "site report")
        name = _require_str(data, "country", "site report")
        tld = _require_str(data, "tld", "site report")
        metrics = _require_dict(data.get("metrics") or {}, "site report metrics")
        issues = None
        if isinstance(metrics.get("audits"), dict):
            issues = {
                metric: [Issue.from_dict(i) for i in metrics["audits"].get(metric.value, [])]
                for metric in Metric
            }
        timing = None
        if isinstance(metrics.get("timing"), dict):
            timing = TimingMetrics.from_dict(metrics["timing"])
        return cls(
            name=name,
            tld=tld,
            url=data.get("url", ""),
            timestamp=data.get("timestamp", ""),
            scores=CategoryScores.from_dict(metrics),
            issues=issues,
            timing=timing,
        )


@dataclass
class MonthlySummary:
    """All sites' summary-form reports for one month."""

    month: str  # YYYY-MM
    generated_at: str
    reports: list[SiteReport] = field(default_factory=list)

    def find(self, tld: str) -> SiteReport | None:
        """Report for a site identifier, if present."""
        for report in self.reports:
            if report.tld == tld:
                return report
        return None

    def to_dict(self) -> dict:
        return {
            "month": self.month,
            "generatedAt": self.generated_at,
            "reports": [r.to_summary().to_dict() for r in self.reports],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MonthlySummary":
        _require_dict(data, "monthly summary")
        reports = data.get("reports", [])
        if not isinstance(reports, list):
            raise ValueError("monthly summary 'reports' must be a list")
        return cls(
            month=_require_str(data, "month", "monthly summary"),
            generated_at=data.get("generatedAt", ""),
            reports=[SiteReport.from_dict(r).to_summary() for r in reports],
        )


@dataclass
class ManifestEntry:
    """Index entry for one month's summary document."""

    month: str
    filename: str
    generated_at: str

    def to_dict(self) -> dict:
        return {
            "month": self.month,
            "filename": self.filename,
            "generatedAt": self.generated_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ManifestEntry":
        _require_dict(data, "manifest entry")
        month = _require_str(data, "month", "manifest entry")
        return cls(
            month=month,
            filename=data.get("filename", f"{month}-summary.json"),
            generated_at=data.get("generatedAt", ""),
        )
