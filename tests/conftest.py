"""
Typing Integrity Test Suite - Shared Pytest Fixtures

This conftest.py provides fixtures for all test categories including:
- A controllable millisecond clock for the typing engine
- Engine factories wired to the fake clock
- Keystroke log and anti-cheat input builders

Usage:
    pytest tests/ -v -s
"""

from typing import Callable, Iterable, List, Optional

import pytest

from integrity.engine import TypingEngine
from integrity.schemas.inputs import AntiCheatInput, KeystrokeEvent


# =============================================================================
# Clock
# =============================================================================

class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start_ms: float = 1_000_000.0) -> None:
        self.now_ms = start_ms

    def __call__(self) -> float:
        return self.now_ms

    def advance(self, ms: float) -> None:
        self.now_ms += ms


@pytest.fixture
def fake_clock() -> FakeClock:
    """Fresh fake clock per test."""
    return FakeClock()


# =============================================================================
# Engine Fixtures
# =============================================================================

@pytest.fixture
def make_engine(fake_clock) -> Callable[..., TypingEngine]:
    """
    Factory for engines on the fake clock with the live ticker disabled.

    Usage:
        engine = make_engine("hello", on_complete=callback)
    """
    engines: List[TypingEngine] = []

    def _make_engine(target_text: str, **kwargs) -> TypingEngine:
        kwargs.setdefault("clock", fake_clock)
        kwargs.setdefault("live_updates", False)
        engine = TypingEngine(target_text, **kwargs)
        engines.append(engine)
        return engine

    yield _make_engine

    for engine in engines:
        engine.close()


@pytest.fixture
def type_keys(fake_clock) -> Callable[..., None]:
    """
    Type a string into an engine, advancing the clock before each key.

    ``gaps`` gives per-key delays in ms; defaults to 100ms each.
    """
    def _type_keys(engine: TypingEngine, keys: str, gaps: Optional[Iterable[float]] = None) -> None:
        gap_list = list(gaps) if gaps is not None else [100.0] * len(keys)
        for key, gap in zip(keys, gap_list):
            fake_clock.advance(gap)
            engine.handle_key_press(key)

    return _type_keys


# =============================================================================
# Keystroke Log Builders
# =============================================================================

def build_keystroke_log(latencies: List[int], errors_at: Iterable[int] = ()) -> List[KeystrokeEvent]:
    """
    Build a log whose first entry has latency 0 followed by ``latencies``.

    Timestamps accumulate the latencies, as the engine records them.
    """
    error_positions = set(errors_at)
    log: List[KeystrokeEvent] = []
    timestamp = 0
    for i, latency in enumerate([0] + list(latencies)):
        timestamp += latency
        is_correct = i not in error_positions
        log.append(KeystrokeEvent(
            timestamp_ms=timestamp,
            expected="a",
            actual="a" if is_correct else "s",
            is_correct=is_correct,
            latency_ms=latency,
        ))
    return log


def human_latencies(count: int) -> List[int]:
    """Deterministic human-like latencies: ~150ms mean with ±40ms swing."""
    pattern = [110, 190, 140, 175, 120, 160, 205, 130, 150, 115, 185, 145]
    return [pattern[i % len(pattern)] for i in range(count)]


@pytest.fixture
def keystroke_log_builder() -> Callable[..., List[KeystrokeEvent]]:
    return build_keystroke_log


@pytest.fixture
def human_log() -> List[KeystrokeEvent]:
    """100 keystrokes with natural timing variance."""
    return build_keystroke_log(human_latencies(99))


@pytest.fixture
def make_input() -> Callable[..., AntiCheatInput]:
    """
    Factory for AntiCheatInput with Example 1 defaults.

    Usage:
        data = make_input(wpm=300)
    """
    def _make_input(**overrides) -> AntiCheatInput:
        fields = dict(
            wpm=37,
            raw_wpm=40,
            accuracy=92,
            keystrokes=100,
            errors=8,
            duration_ms=30000,
        )
        fields.update(overrides)
        return AntiCheatInput(**fields)

    return _make_input
