"""
Tracking context logger.

Prefixed loguru helpers for the tracking context. Sessions are configured
by whichever entry point runs (see utils.logger.setup_logger); tracking
modules only emit through the helpers below.
"""

from pathlib import Path

from loguru import logger

CONTEXT_PREFIX = "[track]"


# Wrapper functions with automatic [track] prefix


def _log_info(message: str) -> None:
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_snapshot_loaded(source: Path, application_count: int, resume_count: int) -> None:
    """Log the contents of a loaded snapshot file."""
    _log_info(f"Loaded {application_count} application(s), {resume_count} resume(s)")
    _log_debug(f"Source: {source}")


def log_record_change(action: str, record_kind: str, record_id: str, detail: str = "") -> None:
    """Log a gateway mutation (created, updated, deleted, ...)."""
    suffix = f" ({detail})" if detail else ""
    _log_debug(f"{record_kind} {record_id} {action}{suffix}")
