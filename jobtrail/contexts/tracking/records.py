"""
Application and resume records for the Tracking context.

Records are immutable snapshots of what the persistence gateway holds. Mutations
go through the gateway, which swaps in a new record with a fresh updated_at.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, Optional

from jobtrail.contexts.tracking.exceptions import InvalidRecordError, ResumeUploadError
from jobtrail.utils.report_formatter import format_file_size
from jobtrail.utils.timestamp import now, parse_timestamp

MAX_RESUME_BYTES = 10 * 1024 * 1024
ALLOWED_RESUME_CONTENT_TYPES = ("application/pdf",)


def _require_text(data: Dict[str, Any], key: str, aliases: tuple = ()) -> str:
    for name in (key, *aliases):
        value = data.get(name)
        if value is not None and str(value).strip():
            return str(value).strip()
    raise InvalidRecordError("Missing required value", field_name=key)


def _optional_text(data: Dict[str, Any], key: str, aliases: tuple = ()) -> Optional[str]:
    for name in (key, *aliases):
        value = data.get(name)
        if value is not None and str(value).strip():
            return str(value)
    return None


@dataclass(frozen=True)
class Application:
    """
    One tracked job application.

    status is validated against a pipeline variant by the gateway, not here:
    snapshots recorded under one variant can still be read under another.
    """

    id: str
    job_title: str
    company: str
    status: str
    resume_id: Optional[str] = None
    location: Optional[str] = None
    job_link: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime = field(default_factory=now)
    updated_at: datetime = field(default_factory=now)

    def __post_init__(self):
        for name in ("id", "job_title", "company", "status"):
            if not str(getattr(self, name) or "").strip():
                raise InvalidRecordError("Missing required value", field_name=name)

    @property
    def has_resume(self) -> bool:
        return bool(self.resume_id)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Application":
        """
        Build an Application from a stored document.

        Accepts both snake_case keys and the camelCase keys used by the
        document store (jobTitle, resumeId, createdAt, ...). An empty resume
        reference means no resume is attached.
        """
        return cls(
            id=_require_text(data, "id"),
            job_title=_require_text(data, "job_title", ("jobTitle",)),
            company=_require_text(data, "company"),
            status=_require_text(data, "status"),
            resume_id=_optional_text(data, "resume_id", ("resumeId",)),
            location=_optional_text(data, "location"),
            job_link=_optional_text(data, "job_link", ("jobLink",)),
            notes=_optional_text(data, "notes"),
            created_at=parse_timestamp(data.get("created_at", data.get("createdAt"))),
            updated_at=parse_timestamp(data.get("updated_at", data.get("updatedAt"))),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["created_at"] = self.created_at.isoformat()
        data["updated_at"] = self.updated_at.isoformat()
        return data


@dataclass(frozen=True)
class Resume:
    """One uploaded resume variant and its stored file metadata."""

    id: str
    name: str
    original_file_name: str = ""
    file_name: str = ""
    file_size: int = 0
    download_url: str = ""
    upload_date: datetime = field(default_factory=now)

    def __post_init__(self):
        if not str(self.id or "").strip():
            raise InvalidRecordError("Missing required value", field_name="id")
        if not str(self.name or "").strip():
            raise InvalidRecordError("Missing required value", field_name="name")
        if self.file_size < 0:
            raise InvalidRecordError("File size cannot be negative", field_name="file_size")

    @property
    def display_size(self) -> str:
        return format_file_size(self.file_size)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Resume":
        """Build a Resume from a stored document (snake_case or camelCase keys)."""
        return cls(
            id=_require_text(data, "id"),
            name=_require_text(data, "name"),
            original_file_name=_optional_text(data, "original_file_name", ("originalFileName",))
            or "",
            file_name=_optional_text(data, "file_name", ("fileName",)) or "",
            file_size=int(data.get("file_size", data.get("fileSize")) or 0),
            download_url=_optional_text(data, "download_url", ("downloadURL",)) or "",
            upload_date=parse_timestamp(data.get("upload_date", data.get("uploadDate"))),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["upload_date"] = self.upload_date.isoformat()
        return data


def usage_count(resume_id: str, applications: Iterable[Application]) -> int:
    """Number of applications that reference resume_id."""
    return sum(1 for app in applications if app.resume_id == resume_id)


def can_delete_resume(resume_id: str, applications: Iterable[Application]) -> bool:
    """A resume may only be deleted once no application references it."""
    return usage_count(resume_id, applications) == 0


def validate_resume_upload(file_name: str, content_type: str, size_bytes: int) -> None:
    """
    Check an uploaded resume file before it is stored.

    Raises:
        ResumeUploadError: If the file is not a PDF, is empty, or exceeds 10 MB
    """
    if content_type not in ALLOWED_RESUME_CONTENT_TYPES:
        raise ResumeUploadError(f"{file_name}: only PDF files are accepted (got {content_type})")
    if size_bytes <= 0:
        raise ResumeUploadError(f"{file_name}: file is empty")
    if size_bytes > MAX_RESUME_BYTES:
        raise ResumeUploadError(
            f"{file_name}: file size {format_file_size(size_bytes)} exceeds the 10 MB limit"
        )
