"""
Typing Metrics

Speed and accuracy formulas shared by the typing engine and the
anti-cheat validator.

Standard word length is 5 characters:
    WPM = (correct_chars / 5) / minutes
"""

import math


# =============================================================================
# Constants
# =============================================================================

CHARS_PER_WORD = 5

MS_PER_MINUTE = 60000.0


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def ms_to_minutes(ms: float) -> float:
    """Convert milliseconds to minutes."""
    return ms / MS_PER_MINUTE


def words_per_minute(chars: float, duration_ms: float) -> float:
    """
    Unrounded WPM for a character count over a duration.

    Returns 0.0 when the duration is not positive.
    """
    if duration_ms <= 0:
        return 0.0
    return (chars / CHARS_PER_WORD) / ms_to_minutes(duration_ms)


def calculate_wpm(correct_chars: int, duration_ms: float) -> int:
    """
    Calculate WPM based on correctly typed characters.

    Args:
        correct_chars: Number of correctly typed characters
        duration_ms: Duration in milliseconds

    Returns:
        WPM rounded to the nearest integer, or 0 if duration or count is invalid

    Example:
        >>> calculate_wpm(50, 60000)
        10
        >>> calculate_wpm(25, 30000)
        10
    """
    if duration_ms <= 0 or correct_chars < 0:
        return 0
    return round_half_up(words_per_minute(correct_chars, duration_ms))


def calculate_raw_wpm(total_keystrokes: int, duration_ms: float) -> int:
    """Raw WPM counts every keystroke, correct or not."""
    return calculate_wpm(total_keystrokes, duration_ms)


def calculate_net_wpm(total_chars: int, errors: int, duration_ms: float) -> int:
    """
    Net WPM penalises each uncorrected error by one word.

        Net WPM = ((total_chars / 5) - errors) / minutes

    Never negative.
    """
    if duration_ms <= 0 or total_chars < 0:
        return 0
    gross_words = total_chars / CHARS_PER_WORD
    net_words = gross_words - errors
    return max(0, round_half_up(net_words / ms_to_minutes(duration_ms)))


def calculate_accuracy(correct_chars: int, total_chars: int) -> int:
    """
    Accuracy as a whole percentage.

    100 when nothing was typed yet; 0 for negative counts.
    """
    if total_chars == 0:
        return 100
    if correct_chars < 0 or total_chars < 0:
        return 0
    return round_half_up((correct_chars / total_chars) * 100)


def wpm_to_chars_per_second(wpm: float) -> float:
    # WPM * 5 chars/word / 60 seconds
    return (wpm * CHARS_PER_WORD) / 60


def chars_per_second_to_wpm(cps: float) -> int:
    return round_half_up((cps * 60) / CHARS_PER_WORD)
