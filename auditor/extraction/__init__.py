"""Metric extraction from raw audit results.

Use explicit imports:
    from auditor.extraction.extractor import MetricExtractor, extract_site_report
"""

__all__ = [
    "MetricExtractor",
    "extract_site_report",
    "classify_severity",
    "scale_score",
]
