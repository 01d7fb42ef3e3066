"""
Rule-based recommendations from resume analytics.

Rules run in a fixed priority order and every rule that fires contributes one
message. The only short-circuit is the empty case: with no resume activity,
the single "start linking" prompt is returned.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from jobtrail.contexts.insights.analytics import (
    OverallStats,
    ResumeAnalytics,
    find_top_performing_resume,
)
from jobtrail.contexts.insights.defaults import (
    DEFAULT_INTERVIEW_RATE_THRESHOLD,
    DEFAULT_MIN_APPLICATIONS_FOR_REVIEW,
    DEFAULT_SUCCESS_RATE_THRESHOLD,
    MESSAGES,
)


@dataclass
class RecommendationThresholds:
    """
    Cut-offs for the recommendation rules.

    Attributes:
        interview_rate: Overall interview rate (%) below which tailoring is advised
        success_rate: Overall success rate (%) below which a content review is advised
        min_applications_for_review: Applications a resume needs, with zero offers,
            before it is flagged for replacement
    """

    interview_rate: float = DEFAULT_INTERVIEW_RATE_THRESHOLD
    success_rate: float = DEFAULT_SUCCESS_RATE_THRESHOLD
    min_applications_for_review: int = DEFAULT_MIN_APPLICATIONS_FOR_REVIEW


def build_recommendations(
    analytics: Sequence[ResumeAnalytics],
    overall_stats: OverallStats,
    thresholds: Optional[RecommendationThresholds] = None,
) -> List[str]:
    """
    Produce recommendation messages for the current analytics.

    Args:
        analytics: Per-resume entries (only resumes with activity)
        overall_stats: Cross-resume statistics
        thresholds: Rule cut-offs (defaults to RecommendationThresholds())

    Returns:
        At least one message, in rule priority order
    """
    if thresholds is None:
        thresholds = RecommendationThresholds()

    if not analytics:
        return [MESSAGES["start_linking"]]

    recommendations = []

    top = find_top_performing_resume(analytics)
    if top is not None and len(analytics) > 1:
        recommendations.append(
            MESSAGES["prioritize_top"].format(name=top.resume_name, rate=top.overall_success_rate)
        )

    if overall_stats.overall_interview_rate < thresholds.interview_rate:
        recommendations.append(
            MESSAGES["low_interview_rate"].format(threshold=thresholds.interview_rate)
        )

    if overall_stats.overall_success_rate < thresholds.success_rate:
        recommendations.append(
            MESSAGES["low_success_rate"].format(threshold=thresholds.success_rate)
        )

    stale = [
        entry
        for entry in analytics
        if entry.total_applications >= thresholds.min_applications_for_review
        and entry.overall_success_rate == 0
    ]
    if stale:
        names = ", ".join(entry.resume_name for entry in stale)
        recommendations.append(MESSAGES["replace_resumes"].format(names=names))

    if not recommendations:
        recommendations.append(MESSAGES["keep_going"])

    return recommendations
