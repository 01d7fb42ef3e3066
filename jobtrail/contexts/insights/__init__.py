"""
Insights Context

Responsibilities:
- Aggregates applications by linked resume and pipeline stage
- Computes funnel conversion rates per resume and overall
- Shapes chart series and status distributions for display
- Evaluates recommendation rules
- Recomputes everything whenever the tracking context publishes a snapshot

Owns: Analytics, chart series, recommendations, insights reports
Never: Creates, edits or deletes applications and resumes
"""

from jobtrail.contexts.insights.analytics import (
    OverallStats,
    ResumeAnalytics,
    compute_overall_stats,
    compute_resume_analytics,
    find_top_performing_resume,
    sort_by_success_rate,
    success_tier,
)
from jobtrail.contexts.insights.charts import (
    ChartMetric,
    ChartPoint,
    DistributionPoint,
    build_chart_series,
    build_status_distribution,
)
from jobtrail.contexts.insights.config_resolver import (
    InsightsConfig,
    apply_overrides,
    load_insights_config,
)
from jobtrail.contexts.insights.engine import AnalyticsResult, InsightsEngine, compute_analytics
from jobtrail.contexts.insights.recommendations import (
    RecommendationThresholds,
    build_recommendations,
)
from jobtrail.contexts.insights.report import format_insights_report

__all__ = [
    # Aggregation
    "compute_analytics",
    "compute_resume_analytics",
    "compute_overall_stats",
    "find_top_performing_resume",
    "sort_by_success_rate",
    "success_tier",
    "AnalyticsResult",
    "ResumeAnalytics",
    "OverallStats",
    # Chart shaping
    "build_chart_series",
    "build_status_distribution",
    "ChartMetric",
    "ChartPoint",
    "DistributionPoint",
    # Recommendations
    "build_recommendations",
    "RecommendationThresholds",
    # Configuration
    "InsightsConfig",
    "load_insights_config",
    "apply_overrides",
    # Subscriber and report
    "InsightsEngine",
    "format_insights_report",
]
