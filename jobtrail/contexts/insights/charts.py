"""
Chart-ready series built from analytics output.

Bar-chart points carry one value per resume for the selected metric; the
status distribution carries one slice per non-empty pipeline stage.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Sequence, Union

from jobtrail.contexts.insights.analytics import ResumeAnalytics
from jobtrail.contexts.insights.defaults import DEFAULT_LABEL_LENGTH
from jobtrail.contexts.tracking import Application, PipelineVariant
from jobtrail.utils.report_formatter import truncate_label


class ChartMetric(str, Enum):
    """Metric plotted per resume."""

    APPLICATIONS = "applications"
    SUCCESS_RATE = "success_rate"
    INTERVIEW_RATE = "interview_rate"

    @property
    def is_percentage(self) -> bool:
        return self is not ChartMetric.APPLICATIONS

    @property
    def title(self) -> str:
        return self.value.replace("_", " ").title()


@dataclass(frozen=True)
class ChartPoint:
    """One bar: truncated label, plotted value, and the untruncated name."""

    label: str
    value: Union[int, float]
    full_name: str
    resume_id: str


@dataclass(frozen=True)
class DistributionPoint:
    """One pie slice for a pipeline stage."""

    status: str
    label: str
    value: int
    color: str


def round_to_tenth(value: float) -> float:
    """Round half up to one decimal place (33.333 -> 33.3, 12.25 -> 12.3)."""
    return math.floor(value * 10 + 0.5) / 10


def build_chart_series(
    analytics: Sequence[ResumeAnalytics],
    metric: ChartMetric = ChartMetric.APPLICATIONS,
    label_length: int = DEFAULT_LABEL_LENGTH,
) -> List[ChartPoint]:
    """
    One chart point per analytics entry, in input order.

    Args:
        analytics: Entries to plot (caller decides the order)
        metric: APPLICATIONS plots raw counts; rate metrics plot percentages
                rounded to one decimal
        label_length: Names longer than this are truncated with "..."
    """
    metric = ChartMetric(metric)
    points = []

    for entry in analytics:
        if metric is ChartMetric.APPLICATIONS:
            value = entry.total_applications
        elif metric is ChartMetric.SUCCESS_RATE:
            value = round_to_tenth(entry.overall_success_rate)
        else:
            value = round_to_tenth(entry.interview_rate)

        points.append(
            ChartPoint(
                label=truncate_label(entry.resume_name, label_length),
                value=value,
                full_name=entry.resume_name,
                resume_id=entry.resume_id,
            )
        )

    return points


def build_status_distribution(
    applications: Iterable[Application], pipeline: PipelineVariant
) -> List[DistributionPoint]:
    """
    Count resume-linked applications per stage, in pipeline order.

    Stages with no applications are omitted.
    """
    counts = pipeline.empty_counts()
    for app in applications:
        if app.resume_id and app.status in counts:
            counts[app.status] += 1

    return [
        DistributionPoint(
            status=stage.value,
            label=stage.label,
            value=counts[stage.value],
            color=stage.color,
        )
        for stage in pipeline.stages
        if counts[stage.value] > 0
    ]
