"""
Insights engine: one full recomputation per snapshot.

compute_analytics() is the pure transform from an (applications, resumes)
pair to everything the presentation layer shows. InsightsEngine wires that
transform to a persistence gateway: it keeps only the latest snapshot of
each collection and, once both have arrived, recomputes from scratch on every
change and hands the result to its listeners.
"""

from dataclasses import dataclass, replace
from typing import Callable, List, Optional, Sequence, Tuple

from jobtrail.contexts.insights.analytics import (
    OverallStats,
    ResumeAnalytics,
    compute_overall_stats,
    compute_resume_analytics,
    find_top_performing_resume,
)
from jobtrail.contexts.insights.charts import (
    ChartMetric,
    ChartPoint,
    DistributionPoint,
    build_chart_series,
    build_status_distribution,
)
from jobtrail.contexts.insights.config_resolver import InsightsConfig, validate_config
from jobtrail.contexts.insights.logger import _log_debug, _log_warning, log_analytics_result
from jobtrail.contexts.insights.recommendations import build_recommendations
from jobtrail.contexts.tracking import Application, PersistenceGateway, PipelineVariant, Resume

ResultListener = Callable[["AnalyticsResult"], None]


@dataclass(frozen=True)
class AnalyticsResult:
    """Everything derived from one snapshot pair."""

    resume_analytics: List[ResumeAnalytics]
    overall_stats: OverallStats
    top_performing_resume: Optional[ResumeAnalytics]
    chart_series: List[ChartPoint]
    status_distribution: List[DistributionPoint]
    recommendations: List[str]
    metric: ChartMetric
    pipeline_name: str


def compute_analytics(
    applications: Sequence[Application],
    resumes: Sequence[Resume],
    config: Optional[InsightsConfig] = None,
    pipeline: Optional[PipelineVariant] = None,
) -> AnalyticsResult:
    """
    Compute per-resume analytics, overall stats, chart series and recommendations.

    Never raises for well-formed records: empty inputs, zero denominators and
    dangling resume references all resolve to zero or empty results.

    Args:
        applications: Application snapshot
        resumes: Resume snapshot
        config: Pipeline, chart metric, label length and thresholds
                (defaults to InsightsConfig())
        pipeline: Variant to count against instead of the one config names,
                  for status sets built outside the registry
    """
    if config is None:
        config = InsightsConfig()
    if pipeline is None:
        pipeline = config.pipeline_variant
    metric = config.chart_metric

    foreign = [app for app in applications if app.status not in pipeline]
    if foreign:
        _log_warning(
            f"{len(foreign)} application(s) have a status outside '{pipeline.name}' "
            "and are left out of stage counts"
        )

    analytics = compute_resume_analytics(applications, resumes, pipeline)
    overall_stats = compute_overall_stats(applications, analytics, pipeline)

    return AnalyticsResult(
        resume_analytics=analytics,
        overall_stats=overall_stats,
        top_performing_resume=find_top_performing_resume(analytics),
        chart_series=build_chart_series(analytics, metric, config.label_length),
        status_distribution=build_status_distribution(applications, pipeline),
        recommendations=build_recommendations(analytics, overall_stats, config.thresholds),
        metric=metric,
        pipeline_name=pipeline.name,
    )


class InsightsEngine:
    """
    Subscriber that keeps analytics in step with a persistence gateway.

    Attributes:
        gateway: Source of application and resume snapshots
        config: Settings passed to every recomputation
        pipeline: Caller-built variant that overrides config.pipeline (optional)
        latest: Most recent AnalyticsResult (None until both snapshots arrived)
    """

    def __init__(
        self,
        gateway: PersistenceGateway,
        config: Optional[InsightsConfig] = None,
        pipeline: Optional[PipelineVariant] = None,
    ):
        self.gateway = gateway
        self.config = validate_config(config or InsightsConfig())
        self.pipeline = pipeline
        self.latest: Optional[AnalyticsResult] = None
        self._applications: Optional[Tuple[Application, ...]] = None
        self._resumes: Optional[Tuple[Resume, ...]] = None
        self._listeners: List[ResultListener] = []
        self._unsubscribes: List[Callable[[], None]] = []

    def start(self) -> "InsightsEngine":
        """Subscribe to both collections. Safe to call once; returns self."""
        if not self._unsubscribes:
            self._unsubscribes = [
                self.gateway.subscribe_applications(self._on_applications),
                self.gateway.subscribe_resumes(self._on_resumes),
            ]
        return self

    def stop(self) -> None:
        for unsubscribe in self._unsubscribes:
            unsubscribe()
        self._unsubscribes = []

    def subscribe(self, listener: ResultListener) -> Callable[[], None]:
        """
        Receive every new AnalyticsResult, starting with the current one if any.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)
        if self.latest is not None:
            listener(self.latest)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_metric(self, metric: ChartMetric) -> Optional[AnalyticsResult]:
        """Switch the chart metric and recompute from the held snapshots."""
        self.config = validate_config(replace(self.config, metric=ChartMetric(metric).value))
        return self._recompute()

    def _on_applications(self, applications: Tuple[Application, ...]) -> None:
        _log_debug(f"Application snapshot received ({len(applications)})")
        self._applications = applications
        self._recompute()

    def _on_resumes(self, resumes: Tuple[Resume, ...]) -> None:
        _log_debug(f"Resume snapshot received ({len(resumes)})")
        self._resumes = resumes
        self._recompute()

    def _recompute(self) -> Optional[AnalyticsResult]:
        if self._applications is None or self._resumes is None:
            return None

        self.latest = compute_analytics(
            self._applications, self._resumes, self.config, self.pipeline
        )
        log_analytics_result(self.latest)
        for listener in list(self._listeners):
            listener(self.latest)
        return self.latest
