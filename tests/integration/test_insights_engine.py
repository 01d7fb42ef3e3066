"""Integration tests for InsightsEngine recomputation over a gateway."""

import itertools

import pytest

from jobtrail.contexts.insights import ChartMetric, InsightsConfig, InsightsEngine
from jobtrail.contexts.tracking import (
    Application,
    InMemoryGateway,
    PersistenceGateway,
    PipelineVariant,
    Resume,
    Stage,
)


class ManualGateway(PersistenceGateway):
    """Gateway that delivers snapshots only when a test pushes them."""

    def __init__(self):
        self.application_listeners = []
        self.resume_listeners = []

    def list_applications(self):
        return ()

    def list_resumes(self):
        return ()

    def subscribe_applications(self, listener):
        self.application_listeners.append(listener)
        return lambda: self.application_listeners.remove(listener)

    def subscribe_resumes(self, listener):
        self.resume_listeners.append(listener)
        return lambda: self.resume_listeners.remove(listener)

    def push_applications(self, applications):
        for listener in list(self.application_listeners):
            listener(tuple(applications))

    def push_resumes(self, resumes):
        for listener in list(self.resume_listeners):
            listener(tuple(resumes))


def make_gateway() -> InMemoryGateway:
    ids = (f"id{n}" for n in itertools.count(1))
    return InMemoryGateway(id_factory=lambda: next(ids))


@pytest.mark.integration
def test_no_result_until_both_snapshots_arrive():
    """Test that the engine waits for both collections."""
    gateway = ManualGateway()
    engine = InsightsEngine(gateway).start()
    results = []
    engine.subscribe(results.append)

    gateway.push_applications(
        [Application(id="a1", job_title="Dev", company="Acme", status="offer", resume_id="r1")]
    )
    assert engine.latest is None
    assert results == []

    gateway.push_resumes([Resume(id="r1", name="Tech")])
    assert len(results) == 1
    assert results[0].resume_analytics[0].overall_success_rate == 100.0


@pytest.mark.integration
def test_engine_follows_gateway_changes():
    """Test recomputation on every gateway change."""
    gateway = make_gateway()
    engine = InsightsEngine(gateway).start()

    # Both empty snapshots were delivered on subscribe
    assert engine.latest.resume_analytics == []
    assert engine.latest.recommendations == [
        "Start linking your applications to resumes to unlock performance insights."
    ]

    resume = gateway.add_resume("Tech Resume", "tech.pdf", 4096)
    app = gateway.add_application("Dev", "Acme", status="applied", resume_id=resume.id)
    assert engine.latest.overall_stats.total_applications == 1
    assert engine.latest.overall_stats.overall_success_rate == 0.0

    gateway.change_status(app.id, "offer")
    entry = engine.latest.resume_analytics[0]
    assert entry.offer_count == 1
    assert entry.overall_success_rate == 100.0
    assert engine.latest.top_performing_resume.resume_name == "Tech Resume"


@pytest.mark.integration
def test_listeners_receive_each_recomputation():
    """Test result delivery to engine listeners."""
    gateway = make_gateway()
    engine = InsightsEngine(gateway).start()
    results = []

    unsubscribe = engine.subscribe(results.append)
    assert len(results) == 1

    gateway.add_resume("Tech Resume", "tech.pdf", 4096)
    assert len(results) == 2

    unsubscribe()
    gateway.add_resume("Data Resume", "data.pdf", 4096)
    assert len(results) == 2


@pytest.mark.integration
def test_set_metric_recomputes_chart_from_held_snapshots():
    """Test switching the chart metric."""
    gateway = make_gateway()
    resume = gateway.add_resume("Tech Resume", "tech.pdf", 4096)
    gateway.add_application("Dev", "Acme", status="interviewing", resume_id=resume.id)
    gateway.add_application("Dev", "Beta", status="rejected", resume_id=resume.id)
    gateway.add_application("Dev", "Gamma", status="applied", resume_id=resume.id)
    engine = InsightsEngine(gateway).start()

    assert engine.latest.chart_series[0].value == 3

    result = engine.set_metric(ChartMetric.INTERVIEW_RATE)

    assert result is engine.latest
    assert result.metric is ChartMetric.INTERVIEW_RATE
    assert result.chart_series[0].value == 33.3
    assert engine.config.metric == "interview_rate"


@pytest.mark.integration
def test_start_is_idempotent_and_stop_detaches():
    """Test repeated start and stop."""
    gateway = make_gateway()
    engine = InsightsEngine(gateway, InsightsConfig(metric="success_rate"))
    results = []
    engine.subscribe(results.append)

    engine.start()
    engine.start()
    count_after_start = len(results)
    engine.stop()
    gateway.add_resume("Tech Resume", "tech.pdf", 4096)

    assert count_after_start == 1
    assert len(results) == count_after_start


@pytest.mark.integration
def test_engine_counts_against_caller_built_pipeline():
    """Test an engine configured with a variant outside the registry."""
    pipeline = PipelineVariant(
        name="trial",
        stages=(Stage("lead", "Lead", "#6B7280"), Stage("hired", "Hired", "#10B981")),
        initial_status="lead",
        interview_statuses=frozenset({"hired"}),
        offer_status="hired",
    )
    gateway = ManualGateway()
    engine = InsightsEngine(gateway, pipeline=pipeline).start()

    gateway.push_resumes([Resume(id="r1", name="Tech")])
    gateway.push_applications(
        [
            Application(id="a1", job_title="Dev", company="Acme", status="lead", resume_id="r1"),
            Application(id="a2", job_title="Dev", company="Beta", status="hired", resume_id="r1"),
        ]
    )

    assert engine.latest.pipeline_name == "trial"
    assert engine.latest.resume_analytics[0].overall_success_rate == 50.0
