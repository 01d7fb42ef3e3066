"""Custom exceptions for the tracking context."""

from typing import Optional


class InvalidRecordError(ValueError):
    """
    Exception raised when an application or resume record is malformed.

    Attributes:
        message: Error description
        field_name: Offending field, when one can be named
    """

    def __init__(self, message: str, field_name: Optional[str] = None):
        self.message = message
        self.field_name = field_name

        if field_name:
            message = f"{message} (field: {field_name})"
        super().__init__(message)


class UnknownStatusError(InvalidRecordError):
    """Exception raised when a status is not part of the active pipeline variant."""

    def __init__(self, status: str, pipeline_name: str, allowed: tuple):
        self.status = status
        self.pipeline_name = pipeline_name
        self.allowed = allowed
        super().__init__(
            f"Unknown status '{status}' for pipeline '{pipeline_name}'. "
            f"Allowed: {', '.join(allowed)}",
            field_name="status",
        )


class RecordNotFoundError(KeyError):
    """Exception raised when a record id does not exist in the gateway."""

    def __init__(self, record_kind: str, record_id: str):
        self.record_kind = record_kind
        self.record_id = record_id
        super().__init__(f"{record_kind} '{record_id}' not found")

    def __str__(self) -> str:
        return self.args[0]


class ResumeInUseError(Exception):
    """
    Exception raised when deleting a resume that applications still reference.

    Attributes:
        resume_id: Resume that was to be deleted
        usage_count: Number of applications linked to it
    """

    def __init__(self, resume_id: str, usage_count: int):
        self.resume_id = resume_id
        self.usage_count = usage_count
        super().__init__(
            f"Cannot delete resume '{resume_id}' - used by {usage_count} application(s)"
        )


class ResumeUploadError(ValueError):
    """Exception raised when an uploaded resume file fails validation."""

    pass
