"""
Typing Integrity Anti-Cheat Validator

Rule-based plausibility checks for a completed typing session.

Every check recomputes an expected value from lower-level facts
(keystrokes, errors, duration or the raw keystroke log) and compares it
with the client-reported number under an explicit tolerance. Reported
derived numbers are never trusted on their own.

All checks are pure functions of an AntiCheatInput returning a list of
Violations (empty when the check passes or does not apply).
"""

import logging
from typing import List

from integrity.processors.latency import calculate_latency_stats
from integrity.processors.metrics import CHARS_PER_WORD, ms_to_minutes, round_half_up
from integrity.schemas.inputs import AntiCheatInput, KeystrokeEvent
from integrity.schemas.outputs import AntiCheatFlag, Verdict, Violation


logger = logging.getLogger(__name__)


# =============================================================================
# Thresholds
# =============================================================================

MAX_LEGITIMATE_WPM = 250

# Relative tolerance between reported and recomputed WPM
WPM_TOLERANCE = 0.25

# Absolute tolerance in accuracy percentage points
ACCURACY_TOLERANCE = 5

# Latencies below this are faster than a human finger can alternate keys
MIN_KEYSTROKE_LATENCY_MS = 15

# Share of too-fast keystrokes tolerated (key rollover)
MAX_FAST_KEYSTROKE_RATIO = 0.05

# Robotic timing: spread below max(MIN_LATENCY_STDDEV_MS, MIN_LATENCY_CV * mean),
# never above MAX_LATENCY_STDDEV_CUTOFF_MS so slow human typists pass
MIN_LATENCY_STDDEV_MS = 5.0
MIN_LATENCY_CV = 0.05
MAX_LATENCY_STDDEV_CUTOFF_MS = 15.0
MIN_ROBOTIC_SAMPLE = 10

# Relative tolerance between reported and log-implied duration
DURATION_TOLERANCE = 0.20


def _latencies_after_first(logs: List[KeystrokeEvent]) -> List[int]:
    """The first keystroke has no predecessor, so its latency is meaningless."""
    return [entry.latency_ms for entry in logs[1:]]


def _relative_diff(expected: float, reported: float, baseline: float) -> float:
    """Relative difference against ``baseline``, floored at 1 so zero never divides."""
    return abs(expected - reported) / max(baseline, 1)


# =============================================================================
# Checks
# =============================================================================

def check_unrealistic_wpm(data: AntiCheatInput) -> List[Violation]:
    """Hard ceiling on both reported speeds; may emit two violations."""
    violations: List[Violation] = []

    if data.wpm > MAX_LEGITIMATE_WPM:
        violations.append(Violation(
            flag=AntiCheatFlag.UNREALISTIC_WPM,
            message=f"WPM of {data.wpm} exceeds maximum legitimate threshold of {MAX_LEGITIMATE_WPM}",
        ))

    if data.raw_wpm > MAX_LEGITIMATE_WPM:
        violations.append(Violation(
            flag=AntiCheatFlag.UNREALISTIC_WPM,
            message=f"Raw WPM of {data.raw_wpm} exceeds maximum legitimate threshold of {MAX_LEGITIMATE_WPM}",
        ))

    return violations


def check_wpm_consistency(data: AntiCheatInput) -> List[Violation]:
    """Reported WPM must agree with keystrokes, errors and duration within 25% of itself."""
    if data.duration_ms <= 0 or data.keystrokes == 0:
        return []

    correct_chars = max(0, data.keystrokes - data.errors)
    expected_wpm = (correct_chars / CHARS_PER_WORD) / ms_to_minutes(data.duration_ms)

    if _relative_diff(expected_wpm, data.wpm, baseline=data.wpm) > WPM_TOLERANCE:
        return [Violation(
            flag=AntiCheatFlag.WPM_MISMATCH,
            message=(
                f"Reported WPM ({data.wpm}) does not match calculated WPM "
                f"({round_half_up(expected_wpm)}) from keystrokes and duration"
            ),
        )]

    return []


def check_accuracy_consistency(data: AntiCheatInput) -> List[Violation]:
    """Reported accuracy must be within 5 points of keystrokes vs errors."""
    if data.keystrokes == 0:
        return []

    correct_chars = max(0, data.keystrokes - data.errors)
    expected_accuracy = correct_chars * 100 / data.keystrokes

    if abs(expected_accuracy - data.accuracy) > ACCURACY_TOLERANCE:
        return [Violation(
            flag=AntiCheatFlag.ACCURACY_MISMATCH,
            message=(
                f"Reported accuracy ({data.accuracy}%) does not match calculated accuracy "
                f"({round_half_up(expected_accuracy)}%) from keystrokes and errors"
            ),
        )]

    return []


def check_keystroke_timing(data: AntiCheatInput) -> List[Violation]:
    """Too many sub-15ms gaps between keystrokes means scripted input."""
    if not data.keystroke_logs:
        return []

    latencies = _latencies_after_first(data.keystroke_logs)
    if not latencies:
        return []

    fast_count = sum(1 for latency in latencies if latency < MIN_KEYSTROKE_LATENCY_MS)
    ratio = fast_count / len(latencies)

    if ratio > MAX_FAST_KEYSTROKE_RATIO:
        return [Violation(
            flag=AntiCheatFlag.IMPOSSIBLY_FAST_KEYSTROKES,
            message=(
                f"{round_half_up(ratio * 100)}% of keystrokes have latency below "
                f"{MIN_KEYSTROKE_LATENCY_MS}ms, suggesting automated input"
            ),
        )]

    return []


def check_robotic_timing(data: AntiCheatInput) -> List[Violation]:
    """
    Human typing has natural variance; macros space keys near-uniformly.

    Needs at least MIN_ROBOTIC_SAMPLE logged keystrokes. The spread of the
    latencies after the first keystroke is compared against
    ``max(MIN_LATENCY_STDDEV_MS, MIN_LATENCY_CV * mean)``, capped at
    MAX_LATENCY_STDDEV_CUTOFF_MS.
    """
    if not data.keystroke_logs or len(data.keystroke_logs) < MIN_ROBOTIC_SAMPLE:
        return []

    stats = calculate_latency_stats(_latencies_after_first(data.keystroke_logs))
    cutoff = min(
        max(MIN_LATENCY_STDDEV_MS, MIN_LATENCY_CV * stats.avg_latency_ms),
        MAX_LATENCY_STDDEV_CUTOFF_MS,
    )

    if stats.std_dev_latency_ms < cutoff:
        return [Violation(
            flag=AntiCheatFlag.ROBOTIC_TIMING,
            message=(
                f"Keystroke latency standard deviation ({round_half_up(stats.std_dev_latency_ms)}ms) "
                f"is below {round_half_up(cutoff)}ms, suggesting automated input"
            ),
        )]

    return []


def check_duration_consistency(data: AntiCheatInput) -> List[Violation]:
    """Reported duration must be within 20% of the duration the keystroke log implies."""
    if not data.keystroke_logs:
        return []

    last = data.keystroke_logs[-1]
    log_duration = last.timestamp_ms + last.latency_ms

    if _relative_diff(log_duration, data.duration_ms, baseline=log_duration) > DURATION_TOLERANCE:
        return [Violation(
            flag=AntiCheatFlag.DURATION_MISMATCH,
            message=(
                f"Reported duration ({data.duration_ms}ms) does not match "
                f"keystroke log duration (~{log_duration}ms)"
            ),
        )]

    return []


def check_keystroke_count_consistency(data: AntiCheatInput) -> List[Violation]:
    """Reported keystroke count must equal the log length exactly."""
    if not data.keystroke_logs:
        return []

    logged = len(data.keystroke_logs)
    if logged != data.keystrokes:
        return [Violation(
            flag=AntiCheatFlag.KEYSTROKE_COUNT_MISMATCH,
            message=(
                f"Reported keystroke count ({data.keystrokes}) does not match "
                f"keystroke log count ({logged})"
            ),
        )]

    return []


# =============================================================================
# Entry Point
# =============================================================================

def detect_anti_cheat(data: AntiCheatInput) -> Verdict:
    """
    Run every check and union their violations.

    Args:
        data: Reported stats and optional keystroke log

    Returns:
        Verdict with ``passed == (len(violations) == 0)``
    """
    violations: List[Violation] = []

    violations.extend(check_unrealistic_wpm(data))
    violations.extend(check_wpm_consistency(data))
    violations.extend(check_accuracy_consistency(data))
    violations.extend(check_keystroke_timing(data))
    violations.extend(check_robotic_timing(data))
    violations.extend(check_duration_consistency(data))
    violations.extend(check_keystroke_count_consistency(data))

    verdict = Verdict.from_violations(violations)

    if not verdict.passed:
        logger.info(f"Anti-cheat flagged session: {[f.value for f in verdict.flags]}")

    return verdict
