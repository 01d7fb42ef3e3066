"""
Persistence gateway for applications and resumes.

The gateway owns record lifetimes and publishes complete snapshots (never
deltas) to subscribers whenever a collection changes. PersistenceGateway is
the interface analytics consumers depend on; InMemoryGateway is a complete
implementation backed by Python dicts, used by the CLI and tests.
"""

import uuid
from abc import ABC, abstractmethod
from dataclasses import replace
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from jobtrail.contexts.tracking.exceptions import (
    InvalidRecordError,
    RecordNotFoundError,
    ResumeInUseError,
)
from jobtrail.contexts.tracking.logger import _log_info, _log_warning, log_record_change
from jobtrail.contexts.tracking.pipeline import PipelineVariant, get_pipeline
from jobtrail.contexts.tracking.records import (
    Application,
    Resume,
    usage_count,
    validate_resume_upload,
)
from jobtrail.contexts.tracking.snapshot import Snapshot
from jobtrail.utils.event_logging import log_activity_event, log_status_change
from jobtrail.utils.timestamp import now

ApplicationsListener = Callable[[Tuple[Application, ...]], None]
ResumesListener = Callable[[Tuple[Resume, ...]], None]
Unsubscribe = Callable[[], None]

# Fields an edit may touch; id and created_at are fixed at creation
EDITABLE_APPLICATION_FIELDS = {
    "job_title",
    "company",
    "status",
    "resume_id",
    "location",
    "job_link",
    "notes",
}


class PersistenceGateway(ABC):
    """
    Read and subscribe interface over the application and resume collections.

    Subscribing delivers the current snapshot immediately, then every later
    snapshot. The returned callable cancels the subscription.
    """

    @abstractmethod
    def list_applications(self) -> Tuple[Application, ...]:
        ...

    @abstractmethod
    def list_resumes(self) -> Tuple[Resume, ...]:
        ...

    @abstractmethod
    def subscribe_applications(self, listener: ApplicationsListener) -> Unsubscribe:
        ...

    @abstractmethod
    def subscribe_resumes(self, listener: ResumesListener) -> Unsubscribe:
        ...


class InMemoryGateway(PersistenceGateway):
    """
    Dict-backed gateway with full CRUD and snapshot publishing.

    Resumes are listed newest upload first. Applications are listed in
    creation order.

    Attributes:
        pipeline: Pipeline variant that statuses are validated against
        event_file: Optional JSON Lines activity log for every mutation
    """

    def __init__(
        self,
        pipeline: Optional[PipelineVariant] = None,
        event_file: Optional[Path] = None,
        id_factory: Callable[[], str] = None,
    ):
        self.pipeline = pipeline or get_pipeline()
        self.event_file = event_file
        self._id_factory = id_factory or (lambda: uuid.uuid4().hex)
        self._applications: Dict[str, Application] = {}
        self._resumes: Dict[str, Resume] = {}
        self._application_listeners: List[ApplicationsListener] = []
        self._resume_listeners: List[ResumesListener] = []

    @classmethod
    def from_snapshot(
        cls, snapshot: Snapshot, pipeline: Optional[PipelineVariant] = None, **kwargs
    ) -> "InMemoryGateway":
        """
        Create a gateway pre-populated from a snapshot.

        Records are taken as stored: statuses outside the pipeline and
        dangling resume references are kept, since analytics tolerate both.
        """
        gateway = cls(pipeline=pipeline, **kwargs)
        gateway._applications = {app.id: app for app in snapshot.applications}
        gateway._resumes = {resume.id: resume for resume in snapshot.resumes}
        _log_info(
            f"Gateway loaded {len(gateway._applications)} application(s), "
            f"{len(gateway._resumes)} resume(s)"
        )
        return gateway

    def snapshot(self) -> Snapshot:
        return Snapshot(applications=self.list_applications(), resumes=self.list_resumes())

    # =========================================================================
    # READ / SUBSCRIBE
    # =========================================================================

    def list_applications(self) -> Tuple[Application, ...]:
        return tuple(self._applications.values())

    def list_resumes(self) -> Tuple[Resume, ...]:
        return tuple(sorted(self._resumes.values(), key=lambda r: r.upload_date, reverse=True))

    def get_application(self, application_id: str) -> Application:
        if application_id not in self._applications:
            raise RecordNotFoundError("Application", application_id)
        return self._applications[application_id]

    def get_resume(self, resume_id: str) -> Resume:
        if resume_id not in self._resumes:
            raise RecordNotFoundError("Resume", resume_id)
        return self._resumes[resume_id]

    def subscribe_applications(self, listener: ApplicationsListener) -> Unsubscribe:
        self._application_listeners.append(listener)
        listener(self.list_applications())
        return lambda: self._remove_listener(self._application_listeners, listener)

    def subscribe_resumes(self, listener: ResumesListener) -> Unsubscribe:
        self._resume_listeners.append(listener)
        listener(self.list_resumes())
        return lambda: self._remove_listener(self._resume_listeners, listener)

    @staticmethod
    def _remove_listener(listeners: list, listener) -> None:
        if listener in listeners:
            listeners.remove(listener)

    def _publish_applications(self) -> None:
        snapshot = self.list_applications()
        for listener in list(self._application_listeners):
            listener(snapshot)

    def _publish_resumes(self) -> None:
        snapshot = self.list_resumes()
        for listener in list(self._resume_listeners):
            listener(snapshot)

    def _log_event(self, event_type: str, record_id: str, **extra_fields) -> None:
        if self.event_file is not None:
            log_activity_event(
                self.event_file, event_type, record_id, source="gateway", **extra_fields
            )

    # =========================================================================
    # APPLICATIONS
    # =========================================================================

    def _check_resume_reference(self, resume_id: Optional[str]) -> Optional[str]:
        if not resume_id:
            return None
        if resume_id not in self._resumes:
            raise RecordNotFoundError("Resume", resume_id)
        return resume_id

    def add_application(
        self,
        job_title: str,
        company: str,
        status: Optional[str] = None,
        resume_id: Optional[str] = None,
        location: Optional[str] = None,
        job_link: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Application:
        """
        Create an application. Status defaults to the pipeline's initial stage.

        Raises:
            UnknownStatusError: If status is not part of the pipeline
            RecordNotFoundError: If resume_id does not name a stored resume
            InvalidRecordError: If job_title or company is blank
        """
        status = self.pipeline.validate(status or self.pipeline.initial_status)
        timestamp = now()
        application = Application(
            id=self._id_factory(),
            job_title=job_title.strip() if job_title else job_title,
            company=company.strip() if company else company,
            status=status,
            resume_id=self._check_resume_reference(resume_id),
            location=location,
            job_link=job_link,
            notes=notes,
            created_at=timestamp,
            updated_at=timestamp,
        )
        self._applications[application.id] = application

        log_record_change("created", "Application", application.id, f"{company}, {status}")
        self._log_event(
            "application_created",
            application.id,
            company=application.company,
            job_title=application.job_title,
            status=status,
            resume_id=application.resume_id,
        )
        self._publish_applications()
        return application

    def update_application(self, application_id: str, **changes) -> Application:
        """
        Edit fields of an application and refresh its updated_at.

        Raises:
            InvalidRecordError: If changes name a field that cannot be edited
            RecordNotFoundError: If the application or referenced resume is unknown
            UnknownStatusError: If a new status is not part of the pipeline
        """
        current = self.get_application(application_id)

        unknown = set(changes) - EDITABLE_APPLICATION_FIELDS
        if unknown:
            raise InvalidRecordError(
                f"Cannot edit field(s): {', '.join(sorted(unknown))}",
                field_name=sorted(unknown)[0],
            )
        if "status" in changes:
            self.pipeline.validate(changes["status"])
        if "resume_id" in changes:
            changes["resume_id"] = self._check_resume_reference(changes["resume_id"])

        updated = replace(current, updated_at=now(), **changes)
        self._applications[application_id] = updated

        log_record_change("updated", "Application", application_id, ", ".join(sorted(changes)))
        if "status" in changes and changes["status"] != current.status:
            if self.event_file is not None:
                log_status_change(
                    self.event_file,
                    application_id,
                    old_status=current.status,
                    new_status=changes["status"],
                    source="gateway",
                )
        else:
            self._log_event("application_updated", application_id, fields=sorted(changes))
        self._publish_applications()
        return updated

    def change_status(self, application_id: str, new_status: str) -> Application:
        """Move an application to another pipeline stage."""
        return self.update_application(application_id, status=new_status)

    def delete_application(self, application_id: str) -> None:
        """Permanently remove an application."""
        self.get_application(application_id)
        del self._applications[application_id]

        log_record_change("deleted", "Application", application_id)
        self._log_event("application_deleted", application_id)
        self._publish_applications()

    # =========================================================================
    # RESUMES
    # =========================================================================

    def add_resume(
        self,
        name: str,
        original_file_name: str,
        file_size: int,
        content_type: str = "application/pdf",
        download_url: str = "",
    ) -> Resume:
        """
        Register an uploaded resume file.

        The stored file name is prefixed with the upload time so repeated
        uploads of the same file never collide.

        Raises:
            ResumeUploadError: If the file is not an acceptable PDF
            InvalidRecordError: If name is blank
        """
        validate_resume_upload(original_file_name, content_type, file_size)
        upload_date = now()
        resume = Resume(
            id=self._id_factory(),
            name=name.strip() if name else name,
            original_file_name=original_file_name,
            file_name=f"{upload_date.strftime('%Y%m%d%H%M%S%f')}_{original_file_name}",
            file_size=file_size,
            download_url=download_url,
            upload_date=upload_date,
        )
        self._resumes[resume.id] = resume

        log_record_change("uploaded", "Resume", resume.id, resume.name)
        self._log_event("resume_uploaded", resume.id, name=resume.name, file_size=file_size)
        self._publish_resumes()
        return resume

    def rename_resume(self, resume_id: str, name: str) -> Resume:
        current = self.get_resume(resume_id)
        renamed = replace(current, name=name.strip() if name else name)
        self._resumes[resume_id] = renamed

        log_record_change("renamed", "Resume", resume_id, f"{current.name} -> {renamed.name}")
        self._log_event("resume_renamed", resume_id, old_name=current.name, new_name=renamed.name)
        self._publish_resumes()
        return renamed

    def usage_count(self, resume_id: str) -> int:
        return usage_count(resume_id, self._applications.values())

    def delete_resume(self, resume_id: str) -> None:
        """
        Permanently remove a resume that no application references.

        Raises:
            ResumeInUseError: If any application still links to the resume
        """
        self.get_resume(resume_id)
        in_use = self.usage_count(resume_id)
        if in_use > 0:
            _log_warning(
                f"Refusing to delete resume {resume_id}: linked to {in_use} application(s)"
            )
            raise ResumeInUseError(resume_id, in_use)
        del self._resumes[resume_id]

        log_record_change("deleted", "Resume", resume_id)
        self._log_event("resume_deleted", resume_id)
        self._publish_resumes()
