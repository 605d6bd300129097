"""
Typing Integrity Models

Rule-based anti-cheat validation.
"""

from integrity.models.anticheat import (
    check_accuracy_consistency,
    check_duration_consistency,
    check_keystroke_count_consistency,
    check_keystroke_timing,
    check_robotic_timing,
    check_unrealistic_wpm,
    check_wpm_consistency,
    detect_anti_cheat,
)

__all__ = [
    "detect_anti_cheat",
    "check_unrealistic_wpm",
    "check_wpm_consistency",
    "check_accuracy_consistency",
    "check_keystroke_timing",
    "check_robotic_timing",
    "check_duration_consistency",
    "check_keystroke_count_consistency",
]
