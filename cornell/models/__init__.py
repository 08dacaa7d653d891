"""
Data models module
"""
from .note import (
    Candidate,
    GenerationRequest,
    GenerationResult,
    Note,
    QAItem,
    ValidationResult,
)

__all__ = [
    "Candidate",
    "GenerationRequest",
    "GenerationResult",
    "Note",
    "QAItem",
    "ValidationResult",
]
