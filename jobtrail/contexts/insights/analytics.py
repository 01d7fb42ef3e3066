"""
Resume funnel analytics.

Aggregates applications by linked resume and pipeline stage, then derives
conversion rates for each resume and across all resume-linked applications.
Every function here is pure: inputs are read-only snapshots and every call
builds fresh output.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from jobtrail.contexts.insights.defaults import SUCCESS_TIERS
from jobtrail.contexts.tracking import Application, PipelineVariant, Resume


def percentage(numerator: int, denominator: int) -> float:
    """numerator / denominator x 100, or 0.0 when the denominator is zero."""
    if denominator == 0:
        return 0.0
    return numerator / denominator * 100


@dataclass(frozen=True)
class ResumeAnalytics:
    """
    Funnel statistics for one resume with at least one linked application.

    Attributes:
        resume_id: Source resume id
        resume_name: Source resume name
        status_counts: Linked applications per stage, in pipeline order (read-only)
        total_applications: Sum of status_counts
        applied_count: Applications past the initial stage
        interview_count: Applications that reached an interview or an offer
        offer_count: Applications that reached an offer
        apply_rate: applied_count / total_applications (%)
        interview_rate: interview_count / applied_count (%)
        offer_rate: offer_count / interview_count (%)
        overall_success_rate: offer_count / total_applications (%)
    """

    resume_id: str
    resume_name: str
    status_counts: Mapping[str, int] = field(hash=False)
    total_applications: int
    applied_count: int
    interview_count: int
    offer_count: int
    apply_rate: float
    interview_rate: float
    offer_rate: float
    overall_success_rate: float

    def count(self, status: str) -> int:
        """Applications in a given stage (0 for stages outside the pipeline)."""
        return self.status_counts.get(status, 0)


@dataclass(frozen=True)
class OverallStats:
    """Statistics across every application that references a resume."""

    total_applications: int
    overall_success_rate: float
    overall_interview_rate: float
    average_applications_per_resume: float


def _summarize(
    resume: Resume, counts: Dict[str, int], pipeline: PipelineVariant
) -> ResumeAnalytics:
    total = sum(counts.values())
    applied = sum(counts[s] for s in pipeline.applied_statuses)
    interviews = sum(counts[s] for s in pipeline.interview_statuses)
    offers = counts[pipeline.offer_status]

    return ResumeAnalytics(
        resume_id=resume.id,
        resume_name=resume.name,
        status_counts=MappingProxyType(dict(counts)),
        total_applications=total,
        applied_count=applied,
        interview_count=interviews,
        offer_count=offers,
        apply_rate=percentage(applied, total),
        interview_rate=percentage(interviews, applied),
        offer_rate=percentage(offers, interviews),
        overall_success_rate=percentage(offers, total),
    )


def compute_resume_analytics(
    applications: Iterable[Application],
    resumes: Iterable[Resume],
    pipeline: PipelineVariant,
) -> List[ResumeAnalytics]:
    """
    Build one ResumeAnalytics per resume that has linked applications.

    Applications without a resume, with a resume id that matches no known
    resume, or with a status outside the pipeline contribute to no entry.
    Resumes with no counted applications are left out of the result.

    Returns:
        Entries in resume order
    """
    accumulators: Dict[str, tuple] = {}
    for resume in resumes:
        accumulators[resume.id] = (resume, pipeline.empty_counts())

    for app in applications:
        if not app.resume_id or app.resume_id not in accumulators:
            continue
        counts = accumulators[app.resume_id][1]
        if app.status in counts:
            counts[app.status] += 1

    summaries = [_summarize(resume, counts, pipeline) for resume, counts in accumulators.values()]
    return [entry for entry in summaries if entry.total_applications > 0]


def compute_overall_stats(
    applications: Iterable[Application],
    analytics: Sequence[ResumeAnalytics],
    pipeline: PipelineVariant,
) -> OverallStats:
    """
    Aggregate across every application that carries a resume id.

    The resume id does not have to resolve to a known resume: dangling
    references still count toward the totals here, while per-resume entries
    ignore them. The per-resume average divides by the number of resumes
    with activity.
    """
    linked = [app for app in applications if app.resume_id]
    offers = sum(1 for app in linked if app.status == pipeline.offer_status)
    interviews = sum(1 for app in linked if app.status in pipeline.interview_statuses)
    applied = sum(1 for app in linked if app.status in pipeline.applied_statuses)

    return OverallStats(
        total_applications=len(linked),
        overall_success_rate=percentage(offers, len(linked)),
        overall_interview_rate=percentage(interviews, applied),
        average_applications_per_resume=len(linked) / len(analytics) if analytics else 0.0,
    )


def find_top_performing_resume(
    analytics: Sequence[ResumeAnalytics],
) -> Optional[ResumeAnalytics]:
    """Entry with the highest overall success rate; the first one wins ties."""
    if not analytics:
        return None

    best = analytics[0]
    for entry in analytics[1:]:
        if entry.overall_success_rate > best.overall_success_rate:
            best = entry
    return best


def sort_by_success_rate(analytics: Iterable[ResumeAnalytics]) -> List[ResumeAnalytics]:
    """Copy of analytics ordered by success rate, best first (stable)."""
    return sorted(analytics, key=lambda entry: entry.overall_success_rate, reverse=True)


def success_tier(rate: float) -> str:
    """Classify a success rate as "strong", "moderate" or "weak"."""
    for floor, tier in SUCCESS_TIERS:
        if rate >= floor:
            return tier
    return SUCCESS_TIERS[-1][1]
