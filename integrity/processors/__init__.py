"""
Typing Integrity Processors

Public exports for metric, latency and keyboard layout computations.
"""

from integrity.processors.latency import calculate_latency_stats
from integrity.processors.layouts import KeyboardLayout, reverse_translate_key, translate_key
from integrity.processors.metrics import (
    CHARS_PER_WORD,
    calculate_accuracy,
    calculate_net_wpm,
    calculate_raw_wpm,
    calculate_wpm,
    chars_per_second_to_wpm,
    ms_to_minutes,
    wpm_to_chars_per_second,
)

__all__ = [
    "CHARS_PER_WORD",
    "KeyboardLayout",
    "calculate_accuracy",
    "calculate_latency_stats",
    "calculate_net_wpm",
    "calculate_raw_wpm",
    "calculate_wpm",
    "chars_per_second_to_wpm",
    "ms_to_minutes",
    "reverse_translate_key",
    "translate_key",
    "wpm_to_chars_per_second",
]
