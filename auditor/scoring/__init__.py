"""Read-side analytics over stored monthly summaries.

Use explicit imports:
    from auditor.scoring.rankings import calculate_rankings, latest_rankings
    from auditor.scoring.history import build_site_history
    from auditor.scoring.aggregate import calculate_average_scores, select_sites
"""

__all__ = [
    # Rankings
    "SiteRanking",
    "MetricRankings",
    "calculate_rankings",
    "calculate_all_rankings",
    "latest_rankings",
    # History
    "HistoricalDataPoint",
    "SiteHistory",
    "build_site_history",
    # Aggregates
    "calculate_average_scores",
    "select_sites",
]
