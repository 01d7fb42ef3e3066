"""
Tracking Context

Responsibilities:
- Defines application and resume records
- Defines pipeline variants (ordered, closed sets of application statuses)
- Owns record lifetimes through the persistence gateway
- Publishes complete snapshots whenever a collection changes
- Reads and writes snapshot files

Owns: Records, pipeline variants, persistence gateway, snapshot files
Never: Computes analytics or recommendations
"""

from jobtrail.contexts.tracking.gateway import InMemoryGateway, PersistenceGateway
from jobtrail.contexts.tracking.pipeline import (
    FIVE_STAGE_PIPELINE,
    SIX_STAGE_PIPELINE,
    PipelineVariant,
    Stage,
    get_pipeline,
    group_by_status,
)
from jobtrail.contexts.tracking.records import (
    Application,
    Resume,
    can_delete_resume,
    usage_count,
    validate_resume_upload,
)
from jobtrail.contexts.tracking.snapshot import Snapshot, load_snapshot, save_snapshot

__all__ = [
    # Records
    "Application",
    "Resume",
    "usage_count",
    "can_delete_resume",
    "validate_resume_upload",
    # Pipeline variants
    "PipelineVariant",
    "Stage",
    "FIVE_STAGE_PIPELINE",
    "SIX_STAGE_PIPELINE",
    "get_pipeline",
    "group_by_status",
    # Persistence
    "PersistenceGateway",
    "InMemoryGateway",
    "Snapshot",
    "load_snapshot",
    "save_snapshot",
]
