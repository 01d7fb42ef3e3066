"""
Snapshot files: point-in-time copies of the application and resume collections.

A snapshot file is YAML (or JSON, which OmegaConf reads as YAML) with two
top-level lists:

    applications:
      - {id: a1, jobTitle: ML Engineer, company: Acme, status: applied, resumeId: r1}
    resumes:
      - {id: r1, name: Tech Resume}
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple

from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException

from jobtrail.contexts.tracking.exceptions import InvalidRecordError
from jobtrail.contexts.tracking.logger import _log_success, log_snapshot_loaded
from jobtrail.contexts.tracking.records import Application, Resume


@dataclass(frozen=True)
class Snapshot:
    """Complete copy of both collections at one moment."""

    applications: Tuple[Application, ...] = field(default_factory=tuple)
    resumes: Tuple[Resume, ...] = field(default_factory=tuple)


def load_snapshot(path: Path) -> Snapshot:
    """
    Load applications and resumes from a snapshot file.

    Args:
        path: YAML or JSON file with "applications" and "resumes" lists

    Returns:
        Snapshot with records in file order

    Raises:
        FileNotFoundError: If path doesn't exist
        InvalidRecordError: If the file structure or any record is malformed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Snapshot not found: {path}")

    try:
        data = OmegaConf.to_container(OmegaConf.load(path), resolve=True)
    except OmegaConfBaseException as e:
        raise InvalidRecordError(f"Could not read snapshot {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise InvalidRecordError(f"Snapshot {path} must be a mapping at the top level")

    raw_applications = data.get("applications") or []
    raw_resumes = data.get("resumes") or []
    for key, value in (("applications", raw_applications), ("resumes", raw_resumes)):
        if not isinstance(value, list):
            raise InvalidRecordError(f"Snapshot {path}: '{key}' must be a list", field_name=key)

    snapshot = Snapshot(
        applications=tuple(Application.from_dict(item) for item in raw_applications),
        resumes=tuple(Resume.from_dict(item) for item in raw_resumes),
    )
    log_snapshot_loaded(path, len(snapshot.applications), len(snapshot.resumes))
    return snapshot


def save_snapshot(snapshot: Snapshot, path: Path) -> Path:
    """Write a snapshot to a YAML file, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    conf = OmegaConf.create(
        {
            "applications": [app.to_dict() for app in snapshot.applications],
            "resumes": [resume.to_dict() for resume in snapshot.resumes],
        }
    )
    OmegaConf.save(conf, path)
    _log_success(f"Saved snapshot to {path}")
    return path
