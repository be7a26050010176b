"""
InsightHub data-profiling core.

CSV schema inference, typed row parsing and rule-based insights, plus the
storage and AI-analysis collaborators that wrap them.
"""

__version__ = "0.1.0"
