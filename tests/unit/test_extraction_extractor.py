"""Tests for metric extraction."""

import pytest

from auditor.extraction.extractor import (
    MetricExtractor,
    classify_severity,
    extract_site_report,
    scale_score,
)
from auditor.reports.contract import Metric, Severity, Site
from auditor.source.models import parse_audit_result
from core.exceptions import MissingCategoryError
from tests.fixtures import make_audit, make_lhr

SITE = Site(name="United Kingdom", url="https://www.gov.uk", tld="uk")
TIMESTAMP = "2024-03-01T10:00:00.000Z"


def extract(lhr: dict):
    return extract_site_report(parse_audit_result(lhr, SITE.url), SITE, TIMESTAMP)


class TestScaleScore:
    """Tests for category score scaling."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(0.0, 0), (1.0, 100), (0.8, 80), (0.95, 95), (0.875, 88), (0.994, 99)],
    )
    def test_scales_and_rounds(self, raw: float, expected: int) -> None:
        """Score is round(raw * 100)."""
        assert scale_score(raw) == expected

    def test_missing_score_is_zero(self) -> None:
        """A category without a score is never reported as passing."""
        assert scale_score(None) == 0


class TestClassifySeverity:
    """Tests for severity classification."""

    def test_zero_is_high(self) -> None:
        assert classify_severity(0) == Severity.HIGH

    def test_below_half_is_medium(self) -> None:
        assert classify_severity(0.01) == Severity.MEDIUM
        assert classify_severity(0.49) == Severity.MEDIUM

    def test_half_and_above_is_low(self) -> None:
        assert classify_severity(0.5) == Severity.LOW
        assert classify_severity(0.99) == Severity.LOW

    def test_null_is_low(self) -> None:
        assert classify_severity(None) == Severity.LOW


class TestMetricExtractor:
    """Tests for MetricExtractor."""

    def test_scores_scaled(self) -> None:
        """All four categories are scaled to 0-100."""
        report = extract(make_lhr(performance=0.8, accessibility=0.91, best_practices=1, seo=0.5))

        assert report.scores.performance == 80
        assert report.scores.accessibility == 91
        assert report.scores.best_practices == 100
        assert report.scores.seo == 50

    def test_report_identity(self) -> None:
        """Report carries the site identity and run timestamp."""
        report = extract(make_lhr())

        assert report.tld == "uk"
        assert report.name == "United Kingdom"
        assert report.url == "https://www.gov.uk"
        assert report.timestamp == TIMESTAMP
        assert report.is_detail

    def test_passing_audit_excluded(self) -> None:
        """An audit scoring exactly 1 is not an issue."""
        lhr = make_lhr(
            refs={"seo": [("document-title", 1)]},
            audits={"document-title": make_audit(score=1, mode="binary")},
        )

        report = extract(lhr)

        assert report.issues[Metric.SEO] == []

    def test_failing_audit_included_as_high(self) -> None:
        """An audit scoring 0 is included with high severity."""
        lhr = make_lhr(
            refs={"seo": [("meta-description", 1)]},
            audits={"meta-description": make_audit(score=0, title="No meta description")},
        )

        issues = extract(lhr).issues[Metric.SEO]

        assert len(issues) == 1
        assert issues[0].id == "meta-description"
        assert issues[0].severity == Severity.HIGH
        assert issues[0].title == "No meta description"

    def test_null_score_excluded_unless_informative_with_details(self) -> None:
        """Unscored audits only appear when informative and detailed."""
        lhr = make_lhr(
            refs={
                "performance": [
                    ("not-applicable", 0),
                    ("informative-bare", 0),
                    ("informative-detailed", 0),
                ]
            },
            audits={
                "not-applicable": make_audit(score=None, mode="notApplicable"),
                "informative-bare": make_audit(score=None, mode="informative"),
                "informative-detailed": make_audit(
                    score=None, mode="informative", details={"type": "table", "items": []}
                ),
            },
        )

        issues = extract(lhr).issues[Metric.PERFORMANCE]

        assert [i.id for i in issues] == ["informative-detailed"]
        assert issues[0].severity == Severity.LOW
        assert issues[0].score is None

    def test_issue_ordering(self) -> None:
        """Issues sort by severity, then weight descending, then input order."""
        lhr = make_lhr(
            refs={
                "accessibility": [
                    ("low-light", 1),
                    ("medium", 3),
                    ("high-light", 1),
                    ("low-heavy", 7),
                    ("high-heavy", 10),
                    ("high-light-2", 1),
                ]
            },
            audits={
                "low-light": make_audit(score=0.7),
                "medium": make_audit(score=0.3),
                "high-light": make_audit(score=0),
                "low-heavy": make_audit(score=0.9),
                "high-heavy": make_audit(score=0),
                "high-light-2": make_audit(score=0),
            },
        )

        issues = extract(lhr).issues[Metric.ACCESSIBILITY]

        assert [i.id for i in issues] == [
            "high-heavy",
            "high-light",
            "high-light-2",
            "medium",
            "low-heavy",
            "low-light",
        ]

    def test_extraction_is_deterministic(self) -> None:
        """Extracting the same input twice gives identical issue lists."""
        lhr = make_lhr(
            refs={"performance": [(f"audit-{i}", i % 3) for i in range(12)]},
            audits={f"audit-{i}": make_audit(score=(i % 4) / 4) for i in range(12)},
        )

        first = extract(lhr).issues[Metric.PERFORMANCE]
        second = extract(lhr).issues[Metric.PERFORMANCE]

        assert [i.to_dict() for i in first] == [i.to_dict() for i in second]

    def test_unknown_reference_skipped(self) -> None:
        """References to audits missing from the lookup are ignored."""
        lhr = make_lhr(refs={"seo": [("ghost", 1)]}, audits={})

        assert extract(lhr).issues[Metric.SEO] == []

    def test_issue_fields_copied(self) -> None:
        """Issue carries weight, display text and numeric value."""
        lhr = make_lhr(
            refs={"performance": [("render-blocking-resources", 0)]},
            audits={
                "render-blocking-resources": make_audit(
                    score=0.42,
                    mode="metricSavings",
                    display_value="Potential savings of 1,230 ms",
                    numeric_value=1230,
                    numeric_unit="millisecond",
                )
            },
        )

        issue = extract(lhr).issues[Metric.PERFORMANCE][0]

        assert issue.severity == Severity.MEDIUM
        assert issue.weight == 0
        assert issue.display_value == "Potential savings of 1,230 ms"
        assert issue.numeric_value == 1230
        assert issue.numeric_unit == "millisecond"
        assert issue.score_display_mode == "metricSavings"

    def test_best_practices_issues_use_metric_key(self) -> None:
        """best-practices issues are stored under bestPractices."""
        lhr = make_lhr(
            refs={"best-practices": [("uses-https", 1)]},
            audits={"uses-https": make_audit(score=0)},
        )

        report = extract(lhr)

        assert [i.id for i in report.issues[Metric.BEST_PRACTICES]] == ["uses-https"]
        assert report.to_dict()["metrics"]["audits"]["bestPractices"][0]["id"] == "uses-https"

    def test_timing_metrics(self) -> None:
        """Timing values come from their audits; absent ones are None."""
        lhr = make_lhr(
            audits={
                "first-contentful-paint": make_audit(score=0.9, numeric_value=812.5),
                "largest-contentful-paint": make_audit(score=0.7, numeric_value=2450),
                "cumulative-layout-shift": make_audit(score=1, numeric_value=0),
            }
        )

        timing = extract(lhr).timing

        assert timing.first_contentful_paint == 812.5
        assert timing.largest_contentful_paint == 2450
        assert timing.cumulative_layout_shift == 0
        assert timing.total_blocking_time is None
        assert timing.speed_index is None

    def test_missing_category_fails_closed(self) -> None:
        """A result without a tracked category raises."""
        lhr = make_lhr(omit=("seo",))

        with pytest.raises(MissingCategoryError) as exc_info:
            extract(lhr)

        assert exc_info.value.category == "seo"

    def test_null_category_score_is_zero(self) -> None:
        """A category Lighthouse could not score is reported as 0."""
        report = extract(make_lhr(performance=None))

        assert report.scores.performance == 0

    def test_extractor_class_matches_function(self) -> None:
        """The convenience function delegates to MetricExtractor."""
        raw = parse_audit_result(make_lhr(performance=0.61), SITE.url)

        report = MetricExtractor().extract(raw, SITE, TIMESTAMP)

        assert report.to_dict() == extract_site_report(raw, SITE, TIMESTAMP).to_dict()
