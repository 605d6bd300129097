"""
Submission Gate Tests

Tests for SessionSubmissionGate: empty-session refusal, rejection without
downstream effects, sink fan-out on acceptance and audit logging.
"""

import logging

import pytest

from integrity.schemas.inputs import SessionSubmission
from integrity.schemas.outputs import AntiCheatFlag
from integrity.submission import EmptySubmissionError, SessionSubmissionGate, SubmissionError


def make_submission(**overrides) -> SessionSubmission:
    fields = dict(
        wpm=37,
        raw_wpm=40,
        accuracy=92,
        keystrokes=100,
        errors=8,
        duration_ms=30000,
        challenge_id="ch_42",
    )
    fields.update(overrides)
    return SessionSubmission(**fields)


@pytest.fixture
def recorded():
    return []


@pytest.fixture
def gate(recorded):
    return SessionSubmissionGate(sinks=[lambda submission, verdict: recorded.append(submission)])


class TestEmptySubmissions:
    """Empty sessions are refused before validation."""

    @pytest.mark.parametrize("overrides", [
        {"keystrokes": 0, "errors": 0, "wpm": 0, "raw_wpm": 0},
        {"duration_ms": 0},
    ])
    def test_empty_raises(self, gate, recorded, overrides):
        with pytest.raises(EmptySubmissionError):
            gate.submit(make_submission(**overrides))

        assert recorded == []

    def test_empty_error_is_submission_error(self):
        assert issubclass(EmptySubmissionError, SubmissionError)


class TestAcceptance:
    """Trusted sessions reach every sink in order."""

    def test_accepted(self, gate, recorded):
        submission = make_submission()

        receipt = gate.submit(submission)

        assert receipt.accepted is True
        assert receipt.verdict.passed is True
        assert recorded == [submission]
        assert gate.accepted_count == 1

    def test_sinks_called_in_order(self):
        order = []
        gate = SessionSubmissionGate()
        gate.add_sink(lambda s, v: order.append("persist"))
        gate.add_sink(lambda s, v: order.append("webhook"))
        gate.add_sink(lambda s, v: order.append("leaderboard"))

        gate.submit(make_submission())

        assert order == ["persist", "webhook", "leaderboard"]


class TestRejection:
    """Flagged sessions get no partial credit."""

    def test_rejected_without_sinks(self, gate, recorded):
        receipt = gate.submit(make_submission(wpm=300, raw_wpm=300, accuracy=50, errors=0))

        assert receipt.accepted is False
        assert receipt.verdict.passed is False
        assert AntiCheatFlag.UNREALISTIC_WPM in receipt.verdict.flags
        assert recorded == []
        assert gate.rejected_count == 1

    def test_rejection_is_logged(self, gate, caplog):
        with caplog.at_level(logging.WARNING, logger="integrity.submission"):
            gate.submit(make_submission(accuracy=40))

        assert "ACCURACY_MISMATCH" in caplog.text
        assert "ch_42" in caplog.text
