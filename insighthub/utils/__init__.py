"""
Shared helpers for user-facing response shaping.
"""

from .graceful_response import (
    DegradationLevel,
    success_message,
    graceful_fallback,
    add_graceful_context
)

__all__ = [
    "DegradationLevel",
    "success_message",
    "graceful_fallback",
    "add_graceful_context"
]
