"""
Unit Tests for OperationResult
"""
import pytest

from collegemate.core.results import FailureKind, FAILURE_MESSAGES, OperationResult


class TestOperationResult:
    """Test success and failure constructors"""

    def test_ok(self):
        result = OperationResult.ok({"a": 1}, message="done")

        assert result.success is True
        assert result.failure is None
        assert result.value == {"a": 1}
        assert result.message == "done"

    @pytest.mark.parametrize("kind", list(FailureKind))
    def test_fail_carries_user_message(self, kind):
        """Test every failure kind has a user-facing message"""
        result = OperationResult.fail(kind)

        assert result.success is False
        assert result.failure == kind
        assert result.message == FAILURE_MESSAGES[kind]
        assert result.value is None

    def test_known_messages(self):
        assert FAILURE_MESSAGES[FailureKind.EXPIRED] == "OTP Expired. Please resend."
        assert FAILURE_MESSAGES[FailureKind.ALREADY_VOTED] == "You have already voted today! Come back tomorrow."
