"""
Default values for resume performance insights.

Provides shared defaults used by:
- recommendations.py (rule thresholds and message text)
- charts.py (label truncation)
- analytics.py (success tiers for the detail table)
- config_resolver.py (structured config defaults)
"""

# Recommendation rule thresholds (percentages, application counts)
DEFAULT_INTERVIEW_RATE_THRESHOLD = 20.0
DEFAULT_SUCCESS_RATE_THRESHOLD = 5.0
DEFAULT_MIN_APPLICATIONS_FOR_REVIEW = 5

# Chart labels longer than this are cut and suffixed with "..."
DEFAULT_LABEL_LENGTH = 15

DEFAULT_METRIC = "applications"

# Success-rate tiers for the detail table, checked top-down
SUCCESS_TIERS = (
    (10.0, "strong"),
    (5.0, "moderate"),
    (0.0, "weak"),
)

MESSAGES = {
    "start_linking": (
        "Start linking your applications to resumes to unlock performance insights."
    ),
    "prioritize_top": (
        'Your "{name}" resume has the highest success rate at {rate:.1f}%. '
        "Consider using it for more applications."
    ),
    "low_interview_rate": (
        "Your interview rate is below {threshold:g}%. "
        "Consider tailoring your resumes more specifically to job requirements."
    ),
    "low_success_rate": (
        "Consider updating your resume format or content. "
        "Success rates below {threshold:g}% often indicate room for improvement."
    ),
    "replace_resumes": (
        "Consider updating or replacing: {names} - they haven't generated any offers yet."
    ),
    "keep_going": (
        "Great job! Your resume performance looks strong. "
        "Keep tracking your applications to identify optimization opportunities."
    ),
}
