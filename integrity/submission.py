"""
Typing Integrity Submission Gate

Library-level boundary between a session-creation endpoint and the
anti-cheat validator:

    submission -> empty check -> detect_anti_cheat -> sinks (only on pass)

Persistence, webhook dispatch and leaderboard invalidation are downstream
sinks registered by the caller; the gate only decides whether they run.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from integrity.models.anticheat import detect_anti_cheat
from integrity.schemas.inputs import SessionSubmission
from integrity.schemas.outputs import SubmissionReceipt, Verdict


logger = logging.getLogger(__name__)


AcceptedSink = Callable[[SessionSubmission, Verdict], None]


# =============================================================================
# Exceptions
# =============================================================================

class SubmissionError(Exception):
    """Raised when a submission is refused before validation."""
    pass


class EmptySubmissionError(SubmissionError):
    """Raised for sessions with no keystrokes or no duration."""
    pass


# =============================================================================
# Gate
# =============================================================================

class SessionSubmissionGate:
    """
    Runs the validator for each submission and fans out trusted sessions.

    A rejected verdict is returned, not raised: no partial credit, and no
    sink is called.
    """

    def __init__(self, sinks: Optional[List[AcceptedSink]] = None) -> None:
        self._sinks: List[AcceptedSink] = list(sinks or [])
        self.accepted_count = 0
        self.rejected_count = 0

    def add_sink(self, sink: AcceptedSink) -> None:
        """Register a downstream effect for accepted sessions."""
        self._sinks.append(sink)

    def submit(self, submission: SessionSubmission) -> SubmissionReceipt:
        """
        Validate a submission and, when trusted, notify every sink in order.

        Raises:
            EmptySubmissionError: keystrokes or duration is zero
        """
        if submission.keystrokes == 0 or submission.duration_ms == 0:
            raise EmptySubmissionError(
                f"Empty session: keystrokes={submission.keystrokes}, "
                f"duration_ms={submission.duration_ms}"
            )

        verdict = detect_anti_cheat(submission)

        if not verdict.passed:
            self.rejected_count += 1
            logger.warning(
                f"Rejected session (challenge={submission.challenge_id}): "
                f"{[v.flag.value for v in verdict.violations]}"
            )
            for violation in verdict.violations:
                logger.warning(f"  {violation.flag.value}: {violation.message}")
            return SubmissionReceipt(accepted=False, verdict=verdict)

        self.accepted_count += 1
        logger.info(
            f"Accepted session (challenge={submission.challenge_id}): "
            f"wpm={submission.wpm}, accuracy={submission.accuracy}"
        )
        for sink in self._sinks:
            sink(submission, verdict)

        return SubmissionReceipt(accepted=True, verdict=verdict)
