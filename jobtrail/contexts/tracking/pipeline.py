"""
Pipeline variants for application status tracking.

A pipeline is an explicit, closed, ordered set of stages. Two variants exist:
the five-stage tracker set and the six-stage industry set. Analytics never
hard-code stage names; they ask the active variant which stages count as
"applied or later", "interview or beyond" and "offer".
"""

import os
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Tuple

from dotenv import load_dotenv

from jobtrail.contexts.tracking.exceptions import UnknownStatusError

load_dotenv()
DEFAULT_PIPELINE_NAME = os.getenv("JOBTRAIL_PIPELINE", "five_stage")


@dataclass(frozen=True)
class Stage:
    """One pipeline stage with its display label and chart color."""

    value: str
    label: str
    color: str


@dataclass(frozen=True)
class PipelineVariant:
    """
    Ordered, closed set of application statuses.

    Attributes:
        name: Variant identifier ("five_stage", "six_stage")
        stages: Stages in pipeline order
        initial_status: Stage an application starts in (not yet applied)
        interview_statuses: Stages that count as reaching an interview
        offer_status: Stage that counts as a successful outcome
    """

    name: str
    stages: Tuple[Stage, ...]
    initial_status: str
    interview_statuses: FrozenSet[str]
    offer_status: str

    def __post_init__(self):
        values = self.statuses
        if len(set(values)) != len(values):
            raise ValueError(f"Pipeline '{self.name}' has duplicate stages")
        referenced = {self.initial_status, self.offer_status} | set(self.interview_statuses)
        missing = referenced - set(values)
        if missing:
            raise ValueError(f"Pipeline '{self.name}' references unknown stages: {sorted(missing)}")
        if self.offer_status not in self.interview_statuses:
            raise ValueError(f"Pipeline '{self.name}': offer stage must count as interview stage")

    @property
    def statuses(self) -> Tuple[str, ...]:
        return tuple(stage.value for stage in self.stages)

    @property
    def applied_statuses(self) -> FrozenSet[str]:
        """Every stage past the initial one (rejections included)."""
        return frozenset(s for s in self.statuses if s != self.initial_status)

    def __contains__(self, status: str) -> bool:
        return status in self.statuses

    def stage(self, status: str) -> Stage:
        for stage in self.stages:
            if stage.value == status:
                return stage
        raise UnknownStatusError(status, self.name, self.statuses)

    def validate(self, status: str) -> str:
        """Return status unchanged if it belongs to this pipeline."""
        if status not in self.statuses:
            raise UnknownStatusError(status, self.name, self.statuses)
        return status

    def empty_counts(self) -> Dict[str, int]:
        """Fresh zeroed per-stage counter in pipeline order."""
        return {status: 0 for status in self.statuses}


FIVE_STAGE_PIPELINE = PipelineVariant(
    name="five_stage",
    stages=(
        Stage("to-apply", "To Apply", "#6B7280"),
        Stage("applied", "Applied", "#3B82F6"),
        Stage("interviewing", "Interviewing", "#F59E0B"),
        Stage("offer", "Offers", "#10B981"),
        Stage("rejected", "Rejected", "#EF4444"),
    ),
    initial_status="to-apply",
    interview_statuses=frozenset({"interviewing", "offer"}),
    offer_status="offer",
)

# Phone screens count as applied but not as interviews
SIX_STAGE_PIPELINE = PipelineVariant(
    name="six_stage",
    stages=(
        Stage("saved", "Saved", "#6B7280"),
        Stage("applied", "Applied", "#3B82F6"),
        Stage("phone-screen", "Phone Screen", "#8B5CF6"),
        Stage("interview", "Interview", "#F59E0B"),
        Stage("offer", "Offers", "#10B981"),
        Stage("rejected", "Rejected", "#EF4444"),
    ),
    initial_status="saved",
    interview_statuses=frozenset({"interview", "offer"}),
    offer_status="offer",
)

PIPELINES = {
    FIVE_STAGE_PIPELINE.name: FIVE_STAGE_PIPELINE,
    SIX_STAGE_PIPELINE.name: SIX_STAGE_PIPELINE,
}


def get_pipeline(name: str = None) -> PipelineVariant:
    """
    Look up a pipeline variant by name.

    Args:
        name: Variant name (defaults to JOBTRAIL_PIPELINE env variable, then "five_stage")

    Raises:
        ValueError: If name is not a known variant
    """
    if name is None:
        name = DEFAULT_PIPELINE_NAME
    if name not in PIPELINES:
        raise ValueError(f"Unknown pipeline '{name}'. Available pipelines: {list(PIPELINES)}")
    return PIPELINES[name]


def group_by_status(applications: Iterable, pipeline: PipelineVariant) -> Dict[str, List]:
    """
    Bucket applications into board columns, one per stage in pipeline order.

    Applications with a status outside the pipeline are left out.
    """
    columns: Dict[str, List] = {status: [] for status in pipeline.statuses}
    for application in applications:
        if application.status in columns:
            columns[application.status].append(application)
    return columns
