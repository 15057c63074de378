"""Tests for per-site history series."""

from auditor.reports.contract import Metric
from auditor.scoring.history import build_site_history
from tests.fixtures import make_site_report, make_summary


class TestBuildSiteHistory:
    """Tests for build_site_history."""

    def test_series_is_chronological(self) -> None:
        summaries = [
            make_summary("2024-03", [make_site_report("uk", performance=70)]),
            make_summary("2024-01", [make_site_report("uk", performance=50)]),
            make_summary("2024-02", [make_site_report("uk", performance=60)]),
        ]

        history = build_site_history(summaries, "uk")

        assert history.months == ["2024-01", "2024-02", "2024-03"]
        assert [p.value for p in history.points(Metric.PERFORMANCE)] == [50, 60, 70]

    def test_gap_month_is_skipped(self) -> None:
        """A month without the site is omitted, and values stay on their months."""
        summaries = [
            make_summary("2024-01", [make_site_report("uk", seo=80)]),
            make_summary("2024-02", [make_site_report("de", seo=10)]),
            make_summary("2024-03", [make_site_report("uk", seo=85)]),
        ]

        points = build_site_history(summaries, "uk").points(Metric.SEO)

        assert [(p.month, p.value) for p in points] == [("2024-01", 80), ("2024-03", 85)]

    def test_four_series_aligned(self) -> None:
        summaries = [
            make_summary("2024-01", [make_site_report("uk")]),
            make_summary("2024-02", [make_site_report("uk")]),
        ]

        history = build_site_history(summaries, "uk")

        for metric in Metric:
            assert [p.month for p in history.points(metric)] == ["2024-01", "2024-02"]

    def test_absent_site(self) -> None:
        summaries = [make_summary("2024-01", [make_site_report("uk")])]

        assert build_site_history(summaries, "fr") is None
        assert build_site_history([], "fr") is None

    def test_latest_change(self) -> None:
        summaries = [
            make_summary("2024-01", [make_site_report("uk", accessibility=70)]),
            make_summary("2024-02", [make_site_report("uk", accessibility=82)]),
        ]

        history = build_site_history(summaries, "uk")

        assert history.latest_change(Metric.ACCESSIBILITY) == 12

    def test_latest_change_needs_two_points(self) -> None:
        history = build_site_history(
            [make_summary("2024-01", [make_site_report("uk")])], "uk"
        )

        assert history.latest_change(Metric.SEO) is None

    def test_to_dict(self) -> None:
        history = build_site_history(
            [make_summary("2024-01", [make_site_report("uk", name="United Kingdom", seo=77)])],
            "uk",
        )

        data = history.to_dict()

        assert data["country"] == "United Kingdom"
        assert data["seo"] == [{"month": "2024-01", "value": 77}]
        assert set(data) == {"country", "tld", "performance", "accessibility", "bestPractices", "seo"}
