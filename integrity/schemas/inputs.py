"""
Typing Integrity Input Schemas

This module defines Pydantic V2 models for:
- Raw keystroke log entries captured by the typing engine (KeystrokeEvent)
- Self-reported session stats submitted for validation (AntiCheatInput)
- The boundary submission payload (SessionSubmission)

Attribute names are snake_case; the JSON form uses camelCase aliases
(``timestampMs``, ``rawWpm``, ``keystrokeLogs`` ...). Both are accepted.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class IntegrityModel(BaseModel):
    """Base model: camelCase wire names, immutable instances."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


# =============================================================================
# Keystroke Log
# =============================================================================

class KeystrokeEvent(IntegrityModel):
    """Single keystroke recorded against the target text."""
    timestamp_ms: int = Field(..., ge=0, description="Milliseconds since session start")
    expected: str = Field(..., description="Character the target text expected")
    actual: str = Field(..., description="Character actually typed")
    is_correct: bool = Field(..., description="True when actual == expected")
    latency_ms: int = Field(..., ge=0, description="Milliseconds since previous keystroke")


# =============================================================================
# Anti-Cheat Input
# =============================================================================

class AntiCheatInput(IntegrityModel):
    """
    Reported session stats plus the optional raw keystroke log.

    Read-only input to the validator. Range constraints here are the schema
    validation the submission boundary relies on; the validator itself
    assumes they already hold.
    """
    wpm: int = Field(..., ge=0, description="Reported WPM (correct chars)")
    raw_wpm: int = Field(..., ge=0, description="Reported raw WPM (all keystrokes)")
    accuracy: int = Field(..., ge=0, le=100, description="Reported accuracy percentage")
    keystrokes: int = Field(..., ge=0, description="Reported keystroke count")
    errors: int = Field(..., ge=0, description="Reported error count")
    duration_ms: int = Field(..., ge=0, description="Reported session duration (ms)")
    keystroke_logs: Optional[List[KeystrokeEvent]] = Field(
        None,
        description="Raw keystroke log, when the client sent one"
    )


class SessionSubmission(AntiCheatInput):
    """
    Completed practice session as received by the submission boundary.
    Carries the anti-cheat fields plus boundary-only context.
    """
    challenge_id: Optional[str] = Field(None, description="Challenge the session was typed against")
    hint_used: bool = Field(False, description="Whether the typist asked for a hint")
