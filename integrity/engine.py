"""
Typing Integrity Engine

Stateful keystroke capture for one practice attempt against a fixed
target text. Converts key events into a keystroke log and live/final
TypingStats, with backspace undoing the counted contribution of the
previous keystroke.

States:
    NOT_STARTED -> STARTED -> COMPLETE
    any state   -> NOT_STARTED  (escape / reset / new target text)

Usage:
    with TypingEngine("hello world", on_complete=save_session) as engine:
        for ch in keys:
            engine.handle_key(ch)

An engine that is started but abandoned keeps its live-stats ticker
running until close() is called (the context manager does this).
"""

from __future__ import annotations

import logging
import threading
import time
from enum import Enum
from typing import Callable, Dict, List, Optional

from integrity.processors.latency import calculate_latency_stats
from integrity.processors.layouts import KeyboardLayout, reverse_translate_key, translate_key
from integrity.processors.metrics import (
    calculate_accuracy,
    calculate_raw_wpm,
    calculate_wpm,
    round_half_up,
)
from integrity.schemas.inputs import KeystrokeEvent
from integrity.schemas.outputs import TypingStats


logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

# Live stats refresh cadence while a session is running
LIVE_STATS_INTERVAL_MS = 500

# Raw terminal characters understood by handle_key()
BACKSPACE_KEYS = {"\x7f", "\b"}
ESCAPE_KEY = "\x1b"
TAB_KEY = "\t"


Clock = Callable[[], float]
CompleteCallback = Callable[[TypingStats, List[KeystrokeEvent]], None]
KeystrokeCallback = Callable[[KeystrokeEvent], None]
StatsCallback = Callable[[TypingStats], None]


def monotonic_ms() -> float:
    """Default engine clock in milliseconds."""
    return time.monotonic() * 1000.0


class SessionState(str, Enum):
    """Lifecycle of a typing session."""
    NOT_STARTED = "NOT_STARTED"
    STARTED = "STARTED"
    COMPLETE = "COMPLETE"


# =============================================================================
# Live Stats Ticker
# =============================================================================

class LiveStatsTicker:
    """
    Repeating, cancellable timer on a daemon thread.

    Calls ``callback`` every ``interval_ms`` until stopped. Stopping is
    idempotent and safe from inside the callback.
    """

    def __init__(self, interval_ms: float, callback: Callable[[], object]) -> None:
        self._interval_s = interval_ms / 1000.0
        self._callback = callback
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive() and not self._stop_event.is_set()

    def start(self) -> None:
        if self.is_running:
            return
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._run,
            args=(self._stop_event,),
            name="live-stats-ticker",
            daemon=True,
        )
        self._thread.start()

    def stop(self) -> None:
        self._stop_event.set()
        thread = self._thread
        self._thread = None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=self._interval_s * 2)

    def _run(self, stop_event: threading.Event) -> None:
        while not stop_event.wait(self._interval_s):
            try:
                self._callback()
            except Exception:
                logger.exception("Live stats refresh failed")


# =============================================================================
# Typing Engine
# =============================================================================

class TypingEngine:
    """
    Keystroke-capture state machine for a single practice attempt.

    Every operation is a synchronous state transition. The only background
    activity is the LiveStatsTicker, which replaces the read-only
    ``live_stats`` snapshot and never touches the counters.

    Attributes:
        _cursor: Next position to type in the target text.
        _typed_text: Characters typed so far, truncated on backspace.
        _errors: Incorrect positions -> character actually typed.
        _keystroke_log: Ordered KeystrokeEvents for counted keystrokes.
        _correct_chars / _keystrokes / _error_count: Authoritative counters.
    """

    def __init__(
        self,
        target_text: str,
        on_complete: Optional[CompleteCallback] = None,
        on_keystroke: Optional[KeystrokeCallback] = None,
        on_stats: Optional[StatsCallback] = None,
        clock: Optional[Clock] = None,
        live_updates: bool = True,
        live_interval_ms: float = LIVE_STATS_INTERVAL_MS,
        layout: KeyboardLayout = KeyboardLayout.QWERTY,
    ) -> None:
        self._target_text = target_text
        self._layout = KeyboardLayout(layout)
        self._on_complete = on_complete
        self._on_keystroke = on_keystroke
        self._on_stats = on_stats
        self._clock: Clock = clock or monotonic_ms
        self._live_updates = live_updates
        self._ticker = LiveStatsTicker(live_interval_ms, self.refresh_live_stats)
        self._lock = threading.RLock()
        self._clear()

    def _clear(self) -> None:
        """Reset all session state (caller holds the lock or owns the engine)."""
        self._cursor = 0
        self._typed_text = ""
        self._errors: Dict[int, str] = {}
        self._keystroke_log: List[KeystrokeEvent] = []
        self._started_at: Optional[float] = None
        self._last_keystroke_at: Optional[float] = None
        self._is_complete = False
        self._hint_used = False
        self._correct_chars = 0
        self._keystrokes = 0
        self._error_count = 0
        self._live_stats = TypingStats()
        self._final_stats: Optional[TypingStats] = None

    # -------------------------------------------------------------------------
    # Read-only state
    # -------------------------------------------------------------------------

    @property
    def target_text(self) -> str:
        return self._target_text

    @property
    def cursor_position(self) -> int:
        return self._cursor

    @property
    def typed_text(self) -> str:
        return self._typed_text

    @property
    def errors(self) -> Dict[int, str]:
        return dict(self._errors)

    @property
    def keystroke_log(self) -> List[KeystrokeEvent]:
        return list(self._keystroke_log)

    @property
    def correct_chars(self) -> int:
        return self._correct_chars

    @property
    def keystrokes(self) -> int:
        return self._keystrokes

    @property
    def error_count(self) -> int:
        return self._error_count

    @property
    def is_started(self) -> bool:
        return self._started_at is not None

    @property
    def is_complete(self) -> bool:
        return self._is_complete

    @property
    def state(self) -> SessionState:
        if self._is_complete:
            return SessionState.COMPLETE
        if self._started_at is not None:
            return SessionState.STARTED
        return SessionState.NOT_STARTED

    @property
    def layout(self) -> KeyboardLayout:
        return self._layout

    @property
    def hint_used(self) -> bool:
        return self._hint_used

    @property
    def current_char(self) -> Optional[str]:
        if self._cursor < len(self._target_text):
            return self._target_text[self._cursor]
        return None

    @property
    def next_physical_key(self) -> Optional[str]:
        """QWERTY key that produces current_char on the typist's layout."""
        char = self.current_char
        if char is None:
            return None
        return reverse_translate_key(char, self._layout)

    @property
    def is_correct_so_far(self) -> bool:
        return not self._errors

    @property
    def progress(self) -> float:
        """Percentage of the target text covered by the cursor."""
        if not self._target_text:
            return 0.0
        return self._cursor / len(self._target_text) * 100

    @property
    def live_stats(self) -> TypingStats:
        """Last snapshot published by the ticker (or final stats once complete)."""
        if self._final_stats is not None:
            return self._final_stats
        return self._live_stats

    @property
    def stats(self) -> TypingStats:
        """Fresh snapshot computed at the current time."""
        with self._lock:
            if self._final_stats is not None:
                return self._final_stats
            if self._started_at is None:
                return TypingStats()
            return self._compute_stats(self._clock())

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start(self) -> None:
        """
        Start the session clock without typing a key.

        The first keystroke's latency is then measured from this moment.
        """
        with self._lock:
            if self._started_at is not None:
                return
            now = self._clock()
            self._started_at = now
            self._last_keystroke_at = now
        logger.debug("Typing session started explicitly")
        self._start_ticker()

    def reset(self) -> None:
        """Discard the current attempt and return to NOT_STARTED."""
        self._ticker.stop()
        with self._lock:
            self._clear()
        logger.debug("Typing session reset")

    def set_target_text(self, target_text: str) -> None:
        """Switch to a new target text; a changed text resets the session."""
        if target_text == self._target_text:
            return
        self.reset()
        with self._lock:
            self._target_text = target_text

    def close(self) -> None:
        """Stop background refreshes; state is left as-is."""
        self._ticker.stop()

    def __enter__(self) -> "TypingEngine":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # -------------------------------------------------------------------------
    # Key Handling
    # -------------------------------------------------------------------------

    def handle_key(self, char: str) -> Optional[str]:
        """
        Dispatch a raw terminal character.

        Backspace/DEL undo, ESC resets, TAB returns a hint, anything else
        is a key press.
        """
        if char in BACKSPACE_KEYS:
            self.handle_backspace()
            return None
        if char == ESCAPE_KEY:
            self.handle_escape()
            return None
        if char == TAB_KEY:
            return self.handle_tab()
        self.handle_key_press(char)
        return None

    def handle_key_press(self, key: str) -> None:
        """
        Record a typed character against the next target position.

        ``key`` is the physical key; it is translated through the
        engine's keyboard layout before comparison.
        No-op once complete or when the cursor is at the end. Reaching the
        end of the target text completes the session and fires
        ``on_complete`` exactly once.
        """
        key = translate_key(key, self._layout)
        final_stats: Optional[TypingStats] = None
        final_log: List[KeystrokeEvent] = []
        started_now = False

        with self._lock:
            if self._is_complete or self._cursor >= len(self._target_text):
                return

            now = self._clock()
            if self._started_at is None:
                self._started_at = now
                self._last_keystroke_at = now
                started_now = True

            timestamp_ms = round_half_up(now - self._started_at)
            latency_ms = 0
            if self._last_keystroke_at is not None:
                latency_ms = max(0, round_half_up(now - self._last_keystroke_at))
            self._last_keystroke_at = now

            position = self._cursor
            expected = self._target_text[position]
            is_correct = key == expected

            self._keystrokes += 1
            if is_correct:
                self._correct_chars += 1
            else:
                self._error_count += 1
                self._errors[position] = key

            event = KeystrokeEvent(
                timestamp_ms=timestamp_ms,
                expected=expected,
                actual=key,
                is_correct=is_correct,
                latency_ms=latency_ms,
            )
            self._keystroke_log.append(event)
            self._typed_text += key
            self._cursor = position + 1

            if self._cursor >= len(self._target_text):
                self._is_complete = True
                final_stats = self._compute_stats(now)
                self._final_stats = final_stats
                final_log = list(self._keystroke_log)

        if started_now:
            logger.debug(f"Typing session started ({len(self._target_text)} chars)")
            self._start_ticker()

        if self._on_keystroke is not None:
            self._on_keystroke(event)

        if final_stats is not None:
            self._ticker.stop()
            logger.debug(
                f"Typing session complete: wpm={final_stats.wpm}, "
                f"accuracy={final_stats.accuracy}, keystrokes={final_stats.keystrokes}"
            )
            if self._on_complete is not None:
                self._on_complete(final_stats, final_log)

    def handle_backspace(self) -> None:
        """
        Undo the previous keystroke.

        Reverses the cursor, typed text, error entry, log entry and the
        counter the removed character contributed to. No-op before start,
        after completion, or at position 0.
        """
        with self._lock:
            if self._started_at is None or self._is_complete or self._cursor <= 0:
                return

            self._last_keystroke_at = self._clock()

            position = self._cursor - 1
            was_correct = self._typed_text[position] == self._target_text[position]

            self._keystrokes = max(0, self._keystrokes - 1)
            if was_correct:
                self._correct_chars = max(0, self._correct_chars - 1)
            else:
                self._error_count = max(0, self._error_count - 1)

            if self._keystroke_log:
                self._keystroke_log.pop()
            self._errors.pop(position, None)
            self._typed_text = self._typed_text[:-1]
            self._cursor = position

    def handle_escape(self) -> None:
        """Restart: unconditionally reset to NOT_STARTED."""
        self.reset()

    def handle_tab(self) -> Optional[str]:
        """
        Reveal the next expected character.

        Marks the session as hinted; does not count as a keystroke.
        """
        with self._lock:
            if self._is_complete or self._cursor >= len(self._target_text):
                return None
            self._hint_used = True
            return self._target_text[self._cursor]

    # -------------------------------------------------------------------------
    # Stats
    # -------------------------------------------------------------------------

    def refresh_live_stats(self) -> Optional[TypingStats]:
        """
        Recompute the live snapshot from the running counters.

        Called by the ticker every LIVE_STATS_INTERVAL_MS; returns None
        when the session is not running.
        """
        with self._lock:
            if self._started_at is None or self._is_complete:
                return None
            snapshot = self._compute_stats(self._clock())
            self._live_stats = snapshot

        if self._on_stats is not None:
            self._on_stats(snapshot)
        return snapshot

    def _compute_stats(self, now: float) -> TypingStats:
        duration_ms = max(0, round_half_up(now - self._started_at))
        # Leading zero latency of the first keystroke carries no timing info
        latencies = [
            entry.latency_ms
            for i, entry in enumerate(self._keystroke_log)
            if i > 0 or entry.latency_ms > 0
        ]
        return TypingStats(
            wpm=calculate_wpm(self._correct_chars, duration_ms),
            raw_wpm=calculate_raw_wpm(self._keystrokes, duration_ms),
            accuracy=calculate_accuracy(self._keystrokes - self._error_count, self._keystrokes),
            keystrokes=self._keystrokes,
            errors=self._error_count,
            duration_ms=duration_ms,
            latency=calculate_latency_stats(latencies),
        )

    def _start_ticker(self) -> None:
        if self._live_updates:
            self._ticker.start()
