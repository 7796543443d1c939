"""Tests for the run-wide deadline."""

import pytest

from punchtrunk.deadline import Deadline, unbounded
from punchtrunk.exceptions import DeadlineExceeded


def test_zero_timeout_is_unbounded():
    deadline = Deadline(0)
    assert not deadline.enabled
    assert deadline.remaining() is None
    assert deadline.timeout_for("git log") is None
    assert not unbounded().enabled


def test_none_timeout_is_unbounded():
    assert Deadline(None).remaining() is None


def test_remaining_shrinks_but_stays_positive():
    deadline = Deadline(60)
    remaining = deadline.remaining()
    assert deadline.enabled
    assert 0 < remaining <= 60
    assert deadline.timeout_for("git diff") <= remaining


def test_expired_deadline_raises():
    deadline = Deadline(5)
    deadline._expires_at = 0.0
    assert deadline.expired
    assert deadline.remaining() == 0.0
    with pytest.raises(DeadlineExceeded) as exc_info:
        deadline.check("trunk fmt")
    assert exc_info.value.operation == "trunk fmt"
    with pytest.raises(DeadlineExceeded):
        deadline.timeout_for("trunk check")
