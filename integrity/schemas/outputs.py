"""
Typing Integrity Output Schemas

This module defines Pydantic V2 models for the values the core produces:
live/final typing stats, latency statistics and anti-cheat verdicts.
"""

from enum import Enum
from typing import List

from pydantic import Field, model_validator

from integrity.schemas.inputs import IntegrityModel


# =============================================================================
# Enums
# =============================================================================

class AntiCheatFlag(str, Enum):
    """Closed set of reasons the validator can reject a session."""
    UNREALISTIC_WPM = "UNREALISTIC_WPM"
    WPM_MISMATCH = "WPM_MISMATCH"
    ACCURACY_MISMATCH = "ACCURACY_MISMATCH"
    IMPOSSIBLY_FAST_KEYSTROKES = "IMPOSSIBLY_FAST_KEYSTROKES"
    ROBOTIC_TIMING = "ROBOTIC_TIMING"
    DURATION_MISMATCH = "DURATION_MISMATCH"
    KEYSTROKE_COUNT_MISMATCH = "KEYSTROKE_COUNT_MISMATCH"


# =============================================================================
# Typing Stats
# =============================================================================

class LatencyStats(IntegrityModel):
    """Distribution of inter-keystroke latencies. All zero when empty."""
    avg_latency_ms: float = Field(0.0, description="Arithmetic mean")
    min_latency_ms: float = Field(0.0, description="Smallest latency")
    max_latency_ms: float = Field(0.0, description="Largest latency")
    std_dev_latency_ms: float = Field(0.0, description="Population standard deviation")
    p50_latency_ms: float = Field(0.0, description="Nearest-rank median")
    p95_latency_ms: float = Field(0.0, description="Nearest-rank 95th percentile")


class TypingStats(IntegrityModel):
    """Snapshot of a typing session, derived from the engine counters."""
    wpm: int = Field(0, ge=0, description="Words per minute from correct characters")
    raw_wpm: int = Field(0, ge=0, description="Words per minute from all keystrokes")
    accuracy: int = Field(100, ge=0, le=100, description="Percentage of correct keystrokes")
    keystrokes: int = Field(0, ge=0, description="Counted keystrokes")
    errors: int = Field(0, ge=0, description="Counted incorrect keystrokes")
    duration_ms: int = Field(0, ge=0, description="Elapsed time since start (ms)")
    latency: LatencyStats = Field(default_factory=LatencyStats)


# =============================================================================
# Anti-Cheat Verdict
# =============================================================================

class Violation(IntegrityModel):
    """A single named reason a session was flagged."""
    flag: AntiCheatFlag = Field(..., description="Violation category")
    message: str = Field(..., description="Human readable explanation")


class Verdict(IntegrityModel):
    """
    Validator result.

    ``passed`` is always ``len(violations) == 0``; constructing a verdict
    that disagrees raises a ValidationError.
    """
    passed: bool = Field(..., description="True when no check fired")
    violations: List[Violation] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_passed_matches_violations(self) -> "Verdict":
        if self.passed != (len(self.violations) == 0):
            raise ValueError("passed must be True exactly when there are no violations")
        return self

    @classmethod
    def from_violations(cls, violations: List[Violation]) -> "Verdict":
        return cls(passed=not violations, violations=list(violations))

    @property
    def flags(self) -> List[AntiCheatFlag]:
        return [v.flag for v in self.violations]


class SubmissionReceipt(IntegrityModel):
    """Outcome of a session submission at the boundary."""
    accepted: bool = Field(..., description="True when the session was trusted")
    verdict: Verdict = Field(..., description="Anti-cheat verdict behind the decision")
