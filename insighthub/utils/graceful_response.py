"""
Graceful Response Layer for data analysis

Provides human-friendly messaging for success and degraded cases
while keeping the technical reason available as metadata.

Design Principles:
- Never expose technical details to end users
- Never blame the user
- Always suggest a constructive next action
- Keep messages short and clear (1-2 sentences max)
"""

from enum import Enum
from typing import Dict, Any, Optional
import logging

logger = logging.getLogger(__name__)


class DegradationLevel(str, Enum):
    """
    Degradation levels for operations.

    - NONE: Operation succeeded fully
    - FALLBACK: Operation used fallback approach
    """
    NONE = "none"
    FALLBACK = "fallback"


# Context-specific message templates
_MESSAGE_TEMPLATES = {
    # AI analysis
    "analysis_llm_disabled": "AI analysis is not enabled, so a rule-based summary was generated.",
    "analysis_llm_error": "The AI service couldn't analyze this data, so a rule-based summary was generated.",
    "analysis_unstructured_response": "The AI response couldn't be structured, so results may be limited.",

    # CSV/Structured Data
    "csv_file_unavailable": "The data file for this source couldn't be read.",

    # Generic
    "generic_fallback": "The operation completed with limitations."
}


# Context-specific user action hints
_ACTION_HINTS = {
    "analysis_llm_disabled": "Set LLM_PROVIDER to 'gemini' to enable AI-generated insights.",
    "analysis_llm_error": "Please try again in a moment.",
    "analysis_unstructured_response": "Try rephrasing your question more specifically.",

    "csv_file_unavailable": "Re-upload the file for this data source.",

    "generic_fallback": "Results may be limited, consider refining your input."
}


def success_message(
    context: str,
    details: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Generate a success message with full quality.

    Args:
        context: The operation context (e.g., "analysis")
        details: Optional additional details to include

    Returns:
        Dict with graceful_message, degradation_level, and user_action_hint
    """
    return {
        "graceful_message": None,  # No message needed for full success
        "degradation_level": DegradationLevel.NONE.value,
        "user_action_hint": None,
        **(details or {})
    }


def graceful_fallback(
    context: str,
    reason: str,
    suggestion: Optional[str] = None,
    meta: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Generate a graceful fallback message for degraded operations.

    Args:
        context: The operation context (e.g., "analysis_llm_error")
        reason: Internal reason for fallback (for logging/metadata)
        suggestion: Optional custom user action hint
        meta: Optional metadata to include

    Returns:
        Dict with graceful_message, degradation_level, user_action_hint, and fallback_reason

    Example:
        >>> graceful_fallback("analysis_llm_disabled", "LLM_PROVIDER=none")
        {
            "graceful_message": "AI analysis is not enabled, so a rule-based summary was generated.",
            "degradation_level": "fallback",
            "user_action_hint": "Set LLM_PROVIDER to 'gemini' to enable AI-generated insights.",
            "fallback_reason": "LLM_PROVIDER=none"
        }
    """
    message = _MESSAGE_TEMPLATES.get(context, _MESSAGE_TEMPLATES["generic_fallback"])
    action_hint = suggestion or _ACTION_HINTS.get(context, _ACTION_HINTS["generic_fallback"])

    logger.info(f"graceful_fallback context={context} reason={reason}")

    result = {
        "graceful_message": message,
        "degradation_level": DegradationLevel.FALLBACK.value,
        "user_action_hint": action_hint,
        "fallback_reason": reason
    }

    if meta:
        result.update(meta)

    return result


def add_graceful_context(
    response: Dict[str, Any],
    graceful_data: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Merge graceful messaging into an existing response dict.

    Args:
        response: Existing response dict
        graceful_data: Result from success_message or graceful_fallback

    Returns:
        Merged response with graceful fields added
    """
    return {**response, **graceful_data}
