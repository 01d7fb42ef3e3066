"""
Shared utilities for JOBTRAIL.

Common functionality used across contexts:
- Logging setup and activity event log
- Plain-text report tables
- Timestamp helpers
"""

from jobtrail.utils.report_formatter import format_file_size, truncate_label
from jobtrail.utils.timestamp import now, now_exact

__all__ = ["format_file_size", "now", "now_exact", "truncate_label"]
