"""
Plain-text rendering of an AnalyticsResult.

Sections: overview, detailed resume performance (best success rate first),
the chart series for the selected metric, status distribution and
recommendations.
"""

from typing import List

from jobtrail.contexts.insights.analytics import sort_by_success_rate, success_tier
from jobtrail.contexts.insights.engine import AnalyticsResult
from jobtrail.utils.report_formatter import (
    Column,
    TableFormatter,
    format_percentage,
    render_bar,
)

REPORT_WIDTH = 100
TOP_MARKER = "*"
BAR_WIDTH = 40


def format_overview(result: AnalyticsResult, width: int = REPORT_WIDTH) -> List[str]:
    stats = result.overall_stats
    formatter = TableFormatter(columns=[], total_width=width)
    formatter.add_section_header("RESUME INSIGHTS")
    formatter.add_text(f"Pipeline: {result.pipeline_name}")
    formatter.add_blank_line()
    formatter.add_text(f"  Total applications:   {stats.total_applications}")
    formatter.add_text(f"  Success rate:         {format_percentage(stats.overall_success_rate)}")
    formatter.add_text(f"  Interview rate:       {format_percentage(stats.overall_interview_rate)}")
    formatter.add_text(f"  Avg per resume:       {stats.average_applications_per_resume:.1f}")
    formatter.add_blank_line()
    return formatter.lines


def format_performance_table(result: AnalyticsResult, width: int = REPORT_WIDTH) -> List[str]:
    """
    Detail table, best success rate first.

    The leading entry is starred when it has produced at least one offer.
    """
    formatter = TableFormatter(
        columns=[
            Column("", 1, "<"),
            Column("Resume", 36, "<"),
            Column("Total", 7, ">"),
            Column("Applied", 8, ">"),
            Column("Interviews", 11, ">"),
            Column("Offers", 7, ">"),
            Column("Success", 9, ">"),
            Column("Tier", 10, "<"),
        ],
        total_width=width,
    )
    formatter.add_section_header("DETAILED RESUME PERFORMANCE")

    ranked = sort_by_success_rate(result.resume_analytics)
    if not ranked:
        formatter.add_text("No resumes linked to applications yet.")
        formatter.add_blank_line()
        return formatter.lines

    formatter.add_table_header()
    formatter.add_separator("-")

    for index, entry in enumerate(ranked):
        marker = TOP_MARKER if index == 0 and entry.overall_success_rate > 0 else ""
        formatter.add_row(
            [
                marker,
                entry.resume_name,
                entry.total_applications,
                entry.applied_count,
                entry.interview_count,
                entry.offer_count,
                format_percentage(entry.overall_success_rate),
                success_tier(entry.overall_success_rate),
            ]
        )

    formatter.add_blank_line()
    return formatter.lines


def format_chart_series(result: AnalyticsResult, width: int = REPORT_WIDTH) -> List[str]:
    formatter = TableFormatter(
        columns=[
            Column("Resume", 20, "<"),
            Column(result.metric.title, 16, ">"),
            Column("", BAR_WIDTH, "<"),
        ],
        total_width=width,
    )
    formatter.add_section_header(f"RESUME PERFORMANCE: {result.metric.title.upper()}")

    if not result.chart_series:
        formatter.add_text("Nothing to chart.")
        formatter.add_blank_line()
        return formatter.lines

    formatter.add_table_header()
    formatter.add_separator("-")
    scale = 100 if result.metric.is_percentage else max(p.value for p in result.chart_series)
    for point in result.chart_series:
        value = f"{point.value}%" if result.metric.is_percentage else point.value
        formatter.add_row([point.label, value, render_bar(point.value, scale, BAR_WIDTH)])

    formatter.add_blank_line()
    return formatter.lines


def format_status_distribution(result: AnalyticsResult, width: int = REPORT_WIDTH) -> List[str]:
    formatter = TableFormatter(
        columns=[Column("Status", 20, "<"), Column("Count", 8, ">"), Column("Share", 9, ">")],
        total_width=width,
    )
    formatter.add_section_header("APPLICATION STATUS DISTRIBUTION")

    total = sum(point.value for point in result.status_distribution)
    if total == 0:
        formatter.add_text("No resume-linked applications.")
        formatter.add_blank_line()
        return formatter.lines

    formatter.add_table_header()
    formatter.add_separator("-")
    for point in result.status_distribution:
        formatter.add_row([point.label, point.value, format_percentage(point.value / total * 100)])

    formatter.add_blank_line()
    return formatter.lines


def format_recommendations(result: AnalyticsResult, width: int = REPORT_WIDTH) -> List[str]:
    formatter = TableFormatter(columns=[], total_width=width)
    formatter.add_section_header("RECOMMENDATIONS")
    for message in result.recommendations:
        formatter.add_bullet(message)
    formatter.add_blank_line()
    return formatter.lines


def format_insights_report(result: AnalyticsResult, width: int = REPORT_WIDTH) -> str:
    """
    Render the full insights report.

    Args:
        result: Output of compute_analytics()
        width: Separator width

    Returns:
        Formatted string report
    """
    lines = []
    lines.extend(format_overview(result, width))
    lines.extend(format_performance_table(result, width))
    lines.extend(format_chart_series(result, width))
    lines.extend(format_status_distribution(result, width))
    lines.extend(format_recommendations(result, width))
    return "\n".join(lines)
