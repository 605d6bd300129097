"""
Typing Integrity Schemas

Public exports for input and output Pydantic models.
"""

# Input schemas
from integrity.schemas.inputs import (
    AntiCheatInput,
    IntegrityModel,
    KeystrokeEvent,
    SessionSubmission,
)

# Output schemas
from integrity.schemas.outputs import (
    AntiCheatFlag,
    LatencyStats,
    SubmissionReceipt,
    TypingStats,
    Verdict,
    Violation,
)

__all__ = [
    # Input
    "IntegrityModel",
    "KeystrokeEvent",
    "AntiCheatInput",
    "SessionSubmission",
    # Output
    "AntiCheatFlag",
    "LatencyStats",
    "TypingStats",
    "Violation",
    "Verdict",
    "SubmissionReceipt",
]
