"""Integration tests for the in-memory persistence gateway."""

import itertools
from datetime import datetime

import pytest

from jobtrail.contexts.tracking import (
    SIX_STAGE_PIPELINE,
    Application,
    InMemoryGateway,
    Resume,
    Snapshot,
)
from jobtrail.contexts.tracking.exceptions import (
    InvalidRecordError,
    RecordNotFoundError,
    ResumeInUseError,
    ResumeUploadError,
    UnknownStatusError,
)
from jobtrail.utils.event_logging import deduce_statuses_from_events, get_recent_events


def make_gateway(**kwargs) -> InMemoryGateway:
    ids = (f"id{n}" for n in itertools.count(1))
    return InMemoryGateway(id_factory=lambda: next(ids), **kwargs)


@pytest.mark.integration
def test_new_application_starts_in_initial_stage():
    """Test that new applications default to the initial stage."""
    gateway = make_gateway()

    app = gateway.add_application("  Data Engineer ", "Acme")

    assert app.status == "to-apply"
    assert app.job_title == "Data Engineer"
    assert app.created_at == app.updated_at
    assert gateway.list_applications() == (app,)


@pytest.mark.integration
def test_statuses_are_checked_against_active_pipeline():
    """Test status validation on create."""
    gateway = make_gateway(pipeline=SIX_STAGE_PIPELINE)

    assert gateway.add_application("Dev", "Acme").status == "saved"
    assert gateway.add_application("Dev", "Beta", status="phone-screen").status == "phone-screen"

    with pytest.raises(UnknownStatusError):
        gateway.add_application("Dev", "Gamma", status="interviewing")


@pytest.mark.integration
def test_application_must_reference_existing_resume():
    """Test that a resume reference must exist."""
    gateway = make_gateway()

    with pytest.raises(RecordNotFoundError):
        gateway.add_application("Dev", "Acme", status="applied", resume_id="missing")


@pytest.mark.integration
def test_update_refreshes_updated_at_only():
    """Test that edits refresh updated_at and keep created_at."""
    gateway = make_gateway()
    app = gateway.add_application("Dev", "Acme", status="applied")

    updated = gateway.update_application(app.id, notes="Referred by Sam", location="Remote")

    assert updated.notes == "Referred by Sam"
    assert updated.location == "Remote"
    assert updated.created_at == app.created_at
    assert updated.updated_at >= app.updated_at
    assert gateway.get_application(app.id) == updated


@pytest.mark.integration
def test_update_rejects_fixed_fields():
    """Test that fixed fields cannot be edited."""
    gateway = make_gateway()
    app = gateway.add_application("Dev", "Acme")

    with pytest.raises(InvalidRecordError) as excinfo:
        gateway.update_application(app.id, created_at=datetime(2020, 1, 1))

    assert excinfo.value.field_name == "created_at"


@pytest.mark.integration
def test_delete_application():
    """Test deleting an application."""
    gateway = make_gateway()
    app = gateway.add_application("Dev", "Acme")

    gateway.delete_application(app.id)

    assert gateway.list_applications() == ()
    with pytest.raises(RecordNotFoundError):
        gateway.get_application(app.id)


@pytest.mark.integration
def test_resume_upload_and_rename():
    """Test uploading and renaming a resume."""
    gateway = make_gateway()

    resume = gateway.add_resume("Tech Resume", "tech.pdf", 2048)
    renamed = gateway.rename_resume(resume.id, "Backend Resume")

    assert resume.file_name.endswith("_tech.pdf")
    assert resume.display_size == "2 KB"
    assert renamed.name == "Backend Resume"
    assert renamed.upload_date == resume.upload_date
    assert gateway.list_resumes() == (renamed,)


@pytest.mark.integration
def test_resume_upload_rejects_non_pdf():
    """Test that non-PDF uploads are rejected."""
    gateway = make_gateway()

    with pytest.raises(ResumeUploadError):
        gateway.add_resume("Tech Resume", "tech.docx", 2048, content_type="application/msword")

    assert gateway.list_resumes() == ()


@pytest.mark.integration
def test_resumes_listed_newest_first():
    """Test resume ordering by upload date."""
    snapshot = Snapshot(
        resumes=(
            Resume(id="old", name="Old", upload_date=datetime(2025, 1, 1)),
            Resume(id="new", name="New", upload_date=datetime(2026, 3, 1)),
            Resume(id="mid", name="Mid", upload_date=datetime(2025, 9, 1)),
        )
    )
    gateway = InMemoryGateway.from_snapshot(snapshot)

    assert [r.id for r in gateway.list_resumes()] == ["new", "mid", "old"]


@pytest.mark.integration
def test_resume_in_use_cannot_be_deleted():
    """Test that a resume in use cannot be deleted."""
    gateway = make_gateway()
    resume = gateway.add_resume("Tech Resume", "tech.pdf", 2048)
    app = gateway.add_application("Dev", "Acme", status="applied", resume_id=resume.id)

    with pytest.raises(ResumeInUseError) as excinfo:
        gateway.delete_resume(resume.id)

    assert excinfo.value.usage_count == 1

    gateway.update_application(app.id, resume_id=None)
    gateway.delete_resume(resume.id)
    assert gateway.list_resumes() == ()


@pytest.mark.integration
def test_from_snapshot_keeps_foreign_statuses():
    """Test that loaded records are kept as stored."""
    snapshot = Snapshot(
        applications=(Application(id="a1", job_title="Dev", company="Acme", status="archived"),)
    )

    gateway = InMemoryGateway.from_snapshot(snapshot)

    assert gateway.snapshot() == snapshot


@pytest.mark.integration
def test_subscribers_get_current_then_every_snapshot():
    """Test snapshot delivery to subscribers."""
    gateway = make_gateway()
    received = []

    unsubscribe = gateway.subscribe_applications(received.append)
    app = gateway.add_application("Dev", "Acme")
    gateway.change_status(app.id, "applied")
    unsubscribe()
    gateway.delete_application(app.id)

    assert len(received) == 3
    assert received[0] == ()
    assert received[2][0].status == "applied"


@pytest.mark.integration
def test_mutations_are_written_to_activity_log(tmp_path):
    """Test activity log entries for gateway mutations."""
    event_file = tmp_path / "activity.log"
    gateway = make_gateway(event_file=event_file)

    resume = gateway.add_resume("Tech Resume", "tech.pdf", 2048)
    first = gateway.add_application("Dev", "Acme", resume_id=resume.id)
    second = gateway.add_application("Dev", "Beta", status="applied")
    gateway.change_status(first.id, "applied")
    gateway.change_status(first.id, "interviewing")
    gateway.update_application(second.id, notes="Follow up Friday")
    gateway.delete_application(second.id)

    assert deduce_statuses_from_events(event_file) == {first.id: "interviewing"}
    assert len(get_recent_events(event_file, record_id=first.id, event_type="status_change")) == 2
    assert get_recent_events(event_file, n=1)[0]["event_type"] == "application_deleted"
    assert get_recent_events(event_file, event_type="resume_uploaded")[0]["name"] == "Tech Resume"
