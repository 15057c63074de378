"""Report contract, merging and storage.

Use explicit imports:
    from auditor.reports.contract import Metric, SiteReport, MonthlySummary
    from auditor.reports.merger import merge_reports
    from auditor.reports.manifest import ReportManifest
    from auditor.reports.storage import ReportStore
    from auditor.reports.recommendations import get_recommendation
"""

__all__ = [
    # Contract
    "Metric",
    "Severity",
    "Issue",
    "CategoryScores",
    "TimingMetrics",
    "Site",
    "SiteReport",
    "MonthlySummary",
    "ManifestEntry",
    # Merge and storage
    "merge_reports",
    "MergeResult",
    "ReportManifest",
    "ReportStore",
    # Guidance
    "get_recommendation",
]
