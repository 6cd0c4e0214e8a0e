"""
Operation results for user-correctable failures.

Store, engine and orchestrator calls that can fail for a reason the user can
fix return an OperationResult instead of raising, so the caller can show the
exact reason at the point of the failed call.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class FailureKind(str, Enum):
    """Why an operation was refused"""
    DUPLICATE_EMAIL = "DUPLICATE_EMAIL"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    NO_PENDING_CHALLENGE = "NO_PENDING_CHALLENGE"
    EXPIRED = "EXPIRED"
    INCORRECT_CODE = "INCORRECT_CODE"
    ALREADY_VOTED = "ALREADY_VOTED"
    INVALID_OPTION = "INVALID_OPTION"


FAILURE_MESSAGES = {
    FailureKind.DUPLICATE_EMAIL: "Email already registered",
    FailureKind.INVALID_CREDENTIALS: "Invalid email or password",
    FailureKind.NO_PENDING_CHALLENGE: "No pending verification found.",
    FailureKind.EXPIRED: "OTP Expired. Please resend.",
    FailureKind.INCORRECT_CODE: "Incorrect OTP. Please try again.",
    FailureKind.ALREADY_VOTED: "You have already voted today! Come back tomorrow.",
    FailureKind.INVALID_OPTION: "Invalid option.",
}


@dataclass
class OperationResult:
    """Result of an auth or poll operation"""
    success: bool
    failure: Optional[FailureKind] = None
    message: Optional[str] = None
    value: Any = None

    @classmethod
    def ok(cls, value: Any = None, message: Optional[str] = None) -> "OperationResult":
        return cls(success=True, value=value, message=message)

    @classmethod
    def fail(cls, failure: FailureKind) -> "OperationResult":
        return cls(success=False, failure=failure, message=FAILURE_MESSAGES[failure])
