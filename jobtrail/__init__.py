"""
JOBTRAIL - job application tracking with resume performance insights

Records job applications, links them to resume versions, and measures how each
resume converts through the hiring pipeline.

Architecture:
- Tracking Context: Application and resume records, pipeline variants, persistence gateway
- Insights Context: Funnel analytics, chart series, recommendations, reports
"""

__version__ = "0.1.0"
