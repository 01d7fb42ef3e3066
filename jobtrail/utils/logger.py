"""
Session logging setup shared by all contexts.

Each CLI run that asks for a log gets its own directory under LOGS_PATH holding
one loguru file (DEBUG and above) headed by a provenance block. Console output
goes to stderr so that reports printed on stdout stay clean.
Context-specific wrappers live in contexts/{context}/logger.py.
"""

import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

from jobtrail import __version__
from jobtrail.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
CONSOLE_LOG_LEVEL = os.getenv("JOBTRAIL_LOG_LEVEL", "INFO")

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "<level>{level: <7}</level> | <level>{message}</level>"

LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}


def session_log_dir(prefix: str, logs_root: Path = None) -> Path:
    """Timestamped directory for one logging session, e.g. outs/logs/insights_20260114_093000."""
    root = Path(logs_root) if logs_root is not None else LOGS_PATH
    return root / f"{prefix}_{now().strftime('%Y%m%d_%H%M%S')}"


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: dict = None,
    console_level: str = None,
) -> Path:
    """
    Route loguru output to a session file and to the console.

    Args:
        context_name: Context identifier ("track" or "insights"), used as the file name
        log_dir: Directory for this logging session (created if missing)
        extra_provenance: Additional key-value pairs for the provenance header
        console_level: Minimum console level (default: JOBTRAIL_LOG_LEVEL or INFO)

    Returns:
        Path to log file
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG")
    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level=console_level or CONSOLE_LOG_LEVEL,
        colorize=True,
    )

    log_provenance(extra_provenance)
    return log_file


def log_provenance(extra_context: dict = None) -> None:
    """Write the session header: version, command line, working directory, Python."""
    logger.info("=" * 80)
    logger.info(f"jobtrail {__version__}")
    logger.info(f"Command: {' '.join(sys.argv)}")
    logger.info(f"Working directory: {Path.cwd()}")
    logger.info(f"Python: {sys.version.split()[0]}")

    for key, value in (extra_context or {}).items():
        logger.info(f"{key}: {value}")

    logger.info("=" * 80)
