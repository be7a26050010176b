"""
LLM Provider Module
Optional LLM integration for AI data analysis.
"""

from insighthub.llm.analyzer import DataAnalyzer, build_analysis_prompt, parse_analysis_response
from insighthub.llm.router import get_llm_client, is_llm_configured

__all__ = [
    "DataAnalyzer",
    "build_analysis_prompt",
    "parse_analysis_response",
    "get_llm_client",
    "is_llm_configured"
]
