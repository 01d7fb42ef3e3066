"""
Utility functions for formatting plain-text reports and tables.

Provides consistent table formatting for the insights report and CLI output.
"""

from typing import Any, List

ELLIPSIS = "..."


def truncate_label(text: str, max_length: int, marker: str = ELLIPSIS) -> str:
    """
    Shorten text to max_length characters, appending marker when cut.

    The marker is added after the kept characters, so a truncated label is
    max_length + len(marker) characters long.
    """
    if len(text) <= max_length:
        return text
    return text[:max_length] + marker


class Column:
    """Column definition for table formatting."""

    def __init__(self, name: str, width: int, align: str = "<"):
        """
        Args:
            name: Column header name
            width: Column width in characters
            align: Alignment ('<' left, '>' right, '^' center)
        """
        self.name = name
        self.width = width
        self.align = align

    def format_header(self) -> str:
        return f"{self.name:{self.align}{self.width}}"

    def format_value(self, value: Any) -> str:
        """Format value with alignment, cutting strings that overflow the column."""
        if isinstance(value, str) and len(value) > self.width:
            value = truncate_label(value, max(self.width - len(ELLIPSIS), 0))
        return f"{value:{self.align}{self.width}}"


class TableFormatter:
    """Builder for formatted text tables with aligned columns."""

    def __init__(self, columns: List[Column], total_width: int = 100):
        """
        Args:
            columns: List of Column definitions
            total_width: Total report width for separators
        """
        self.columns = columns
        self.total_width = total_width
        self.lines: List[str] = []

    def add_section_header(self, title: str) -> "TableFormatter":
        """Add section header framed by separator lines."""
        self.lines.append("=" * self.total_width)
        self.lines.append(title)
        self.lines.append("=" * self.total_width)
        return self

    def add_table_header(self) -> "TableFormatter":
        header_parts = [col.format_header() for col in self.columns]
        self.lines.append(" ".join(header_parts).rstrip())
        return self

    def add_separator(self, char: str = "-") -> "TableFormatter":
        self.lines.append(char * self.total_width)
        return self

    def add_row(self, values: List[Any]) -> "TableFormatter":
        """
        Add data row with column values.

        Raises:
            ValueError: If number of values doesn't match columns
        """
        if len(values) != len(self.columns):
            raise ValueError(f"Expected {len(self.columns)} values, got {len(values)}")

        row_parts = [col.format_value(val) for col, val in zip(self.columns, values)]
        self.lines.append(" ".join(row_parts).rstrip())
        return self

    def add_bullet(self, text: str, bullet: str = "-") -> "TableFormatter":
        self.lines.append(f"  {bullet} {text}")
        return self

    def add_blank_line(self) -> "TableFormatter":
        self.lines.append("")
        return self

    def add_text(self, text: str) -> "TableFormatter":
        self.lines.append(text)
        return self

    def render(self) -> str:
        """Render accumulated lines to string."""
        return "\n".join(self.lines)


def format_percentage(value: float, decimal_places: int = 1) -> str:
    """
    Format an already-computed percentage (e.g., 33.333 -> "33.3%").
    """
    return f"{value:.{decimal_places}f}%"


def format_file_size(size_bytes: int) -> str:
    """
    Format a byte count for display ("0 Bytes", "1.5 KB", "2.25 MB").

    Uses 1024-based units up to GB, keeping at most two decimals and dropping
    trailing zeros.
    """
    if size_bytes <= 0:
        return "0 Bytes"

    units = ["Bytes", "KB", "MB", "GB"]
    value = float(size_bytes)
    index = 0
    while value >= 1024 and index < len(units) - 1:
        value /= 1024
        index += 1

    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {units[index]}"


def render_bar(value: float, max_value: float, width: int = 30, char: str = "#") -> str:
    """
    Horizontal text bar scaled so max_value fills width characters.

    Any positive value gets at least one character; zero, negative or
    unscalable inputs give an empty bar.
    """
    if max_value <= 0 or value <= 0:
        return ""
    filled = max(1, round(value / max_value * width))
    return char * min(filled, width)
