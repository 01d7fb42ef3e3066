"""
Insights context logger.

Provides logging interface for the insights context with automatic [insights] prefix.
All insights modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from jobtrail.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[insights]"


def setup_insights_logger(log_dir: Path, pipeline_name: str, metric: str) -> Path:
    """
    Setup logger for the insights context.

    Args:
        log_dir: Directory for this session
        pipeline_name: Active pipeline variant
        metric: Selected chart metric

    Returns:
        Path to log file

    Example:
        from jobtrail.contexts.insights.logger import setup_insights_logger, _log_info

        log_file = setup_insights_logger(log_dir, "five_stage", "applications")
        _log_info("Computing analytics...")
    """
    return _setup_logger(
        context_name="insights",
        log_dir=log_dir,
        extra_provenance={"Pipeline": pipeline_name, "Chart metric": metric},
    )


# Wrapper functions with automatic [insights] prefix


def _log_info(message: str) -> None:
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_analytics_result(result) -> None:
    """
    Log a summary of a recomputed AnalyticsResult.

    Args:
        result: AnalyticsResult from compute_analytics()
    """
    stats = result.overall_stats
    _log_info(
        f"Analytics recomputed: {len(result.resume_analytics)} active resume(s), "
        f"{stats.total_applications} linked application(s)"
    )
    _log_debug(
        f"Success rate {stats.overall_success_rate:.1f}%, "
        f"interview rate {stats.overall_interview_rate:.1f}%"
    )
    if result.top_performing_resume is not None:
        _log_debug(f"Top performer: {result.top_performing_resume.resume_name}")
    for message in result.recommendations:
        _log_debug(f"Recommendation: {message}")
