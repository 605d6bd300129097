"""
Typing Integrity

Keystroke-capture engine and rule-based anti-cheat validation for
typing-practice sessions.
"""

from integrity.engine import SessionState, TypingEngine
from integrity.models.anticheat import detect_anti_cheat
from integrity.processors.latency import calculate_latency_stats
from integrity.submission import SessionSubmissionGate

__all__ = [
    "SessionState",
    "SessionSubmissionGate",
    "TypingEngine",
    "calculate_latency_stats",
    "detect_anti_cheat",
]
