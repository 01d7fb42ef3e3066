"""Unit tests for the compute_analytics transform."""

import pytest

from jobtrail.contexts.insights import compute_analytics
from jobtrail.contexts.tracking import Application, PipelineVariant, Resume, Stage

TRIAL_PIPELINE = PipelineVariant(
    name="trial",
    stages=(
        Stage("lead", "Lead", "#6B7280"),
        Stage("sent", "Sent", "#3B82F6"),
        Stage("call", "Call", "#F59E0B"),
        Stage("hired", "Hired", "#10B981"),
    ),
    initial_status="lead",
    interview_statuses=frozenset({"call", "hired"}),
    offer_status="hired",
)


def make_app(app_id, status, resume_id=None):
    return Application(
        id=app_id, job_title="Engineer", company="Acme", status=status, resume_id=resume_id
    )


@pytest.mark.unit
def test_same_snapshot_gives_identical_results():
    """Test that recomputing from unchanged inputs yields an equal result."""
    resumes = [Resume(id="r1", name="Tech Resume"), Resume(id="r2", name="Data Resume")]
    apps = [
        make_app("a1", "applied", "r1"),
        make_app("a2", "offer", "r1"),
        make_app("a3", "interviewing", "r2"),
        make_app("a4", "offer", "missing"),
        make_app("a5", "archived", "r2"),
        make_app("a6", "applied"),
    ]

    first = compute_analytics(apps, resumes)
    second = compute_analytics(apps, resumes)

    assert first == second
    assert first is not second
    assert first.overall_stats.total_applications == 5


@pytest.mark.unit
def test_caller_built_pipeline_drives_counts():
    """Test that a variant outside the registry can be passed straight in."""
    resumes = [Resume(id="r1", name="Tech Resume")]
    apps = [
        make_app("a1", "lead", "r1"),
        make_app("a2", "sent", "r1"),
        make_app("a3", "call", "r1"),
        make_app("a4", "hired", "r1"),
    ]

    result = compute_analytics(apps, resumes, pipeline=TRIAL_PIPELINE)

    [entry] = result.resume_analytics
    assert result.pipeline_name == "trial"
    assert entry.applied_count == 3
    assert entry.interview_count == 2
    assert entry.offer_count == 1
    assert entry.overall_success_rate == 25.0
    assert [p.status for p in result.status_distribution] == ["lead", "sent", "call", "hired"]
