"""Metric extraction from raw audit results.

Turns one validated Lighthouse result into a detail-form site report:
category scores scaled to 0-100, per-category issue lists and the timing
block. The extractor knows nothing about history or storage.
"""

import structlog

from auditor.reports.contract import (
    TIMING_AUDITS,
    CategoryScores,
    Issue,
    Metric,
    ScoreDisplayMode,
    Severity,
    Site,
    SiteReport,
    TimingMetrics,
    round_half_up,
)
from auditor.source.models import RawAuditResult, RawCategory
from core.exceptions import MissingCategoryError

logger = structlog.get_logger(__name__)


def classify_severity(score: float | None) -> Severity:
    """Severity of an issue from its raw 0-1 score (None counts as passing)."""
    effective = 1.0 if score is None else score
    if effective == 0:
        return Severity.HIGH
    if effective < 0.5:
        return Severity.MEDIUM
    return Severity.LOW


def scale_score(score: float | None) -> int:
    """Scale a 0-1 category score to an integer 0-100."""
    if score is None:
        return 0
    return round_half_up(score * 100)


class MetricExtractor:
    """Extracts normalized metrics from raw audit results."""

    def extract(self, raw: RawAuditResult, site: Site, timestamp: str) -> SiteReport:
        """
        Build the detail-form report for one site.

        Args:
            raw: Validated raw audit result
            site: The audited site
            timestamp: ISO timestamp of the audit run

        Returns:
            SiteReport with scores, issues and timing

        Raises:
            MissingCategoryError: A tracked category is absent from the result
        """
        categories = {metric: self._category(raw, metric, site) for metric in Metric}

        for metric, category in categories.items():
            if category.score is None:
                logger.warning(
                    "category_score_missing",
                    tld=site.tld,
                    category=metric.category_id,
                )

        scores = CategoryScores(
            performance=scale_score(categories[Metric.PERFORMANCE].score),
            accessibility=scale_score(categories[Metric.ACCESSIBILITY].score),
            best_practices=scale_score(categories[Metric.BEST_PRACTICES].score),
            seo=scale_score(categories[Metric.SEO].score),
        )

        return SiteReport(
            name=site.name,
            tld=site.tld,
            url=site.url,
            timestamp=timestamp,
            scores=scores,
            issues={
                metric: self.extract_issues(raw, category)
                for metric, category in categories.items()
            },
            timing=self.extract_timing(raw),
        )

    def _category(self, raw: RawAuditResult, metric: Metric, site: Site) -> RawCategory:
        category = raw.categories.get(metric.category_id)
        if category is None:
            raise MissingCategoryError(metric.category_id, url=site.url)
        return category

    def extract_issues(self, raw: RawAuditResult, category: RawCategory) -> list[Issue]:
        """
        Collect the failing or informative audits of one category.

        An audit is kept when its score is below 1 (a missing score counts
        as 1), or when it is informative and carries details. Results are
        ordered by severity, then by weight descending; the sort is stable
        so equal keys keep the category's reference order.
        """
        issues: list[Issue] = []

        for ref in category.audit_refs:
            audit = raw.audits.get(ref.id)
            if audit is None:
                continue

            effective_score = 1.0 if audit.score is None else audit.score
            informative = (
                audit.score_display_mode == ScoreDisplayMode.INFORMATIVE and audit.has_details
            )
            if not (effective_score < 1 or informative):
                continue

            issues.append(
                Issue(
                    id=ref.id,
                    title=audit.title,
                    description=audit.description,
                    score=audit.score,
                    score_display_mode=audit.score_display_mode,
                    display_value=audit.display_value or None,
                    severity=classify_severity(audit.score),
                    weight=ref.weight,
                    numeric_value=audit.numeric_value,
                    numeric_unit=audit.numeric_unit,
                )
            )

        issues.sort(key=lambda issue: (issue.severity.rank, -issue.weight))
        return issues

    def extract_timing(self, raw: RawAuditResult) -> TimingMetrics:
        """Read the five lab timing values, None where absent."""
        values = {name: raw.numeric_value(audit_id) for name, audit_id in TIMING_AUDITS.items()}
        return TimingMetrics.from_dict(values)


def extract_site_report(raw: RawAuditResult, site: Site, timestamp: str) -> SiteReport:
    """Convenience function to extract a detail-form report."""
    return MetricExtractor().extract(raw, site, timestamp)
