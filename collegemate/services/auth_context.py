"""
Transient auth state for one running portal.

Lifecycle:
- created empty at process start
- pending/challenge set when a login or signup is initiated
- challenge replaced on every resend, invalidated on expiry
- both cleared on successful verification, cancellation, or logout

Nothing here is persisted; restarting the process drops any flow in progress.
"""

from dataclasses import dataclass
from typing import Optional

from collegemate.schemas.auth import OTPChallenge, PendingAttempt


@dataclass
class AuthContext:
    pending: Optional[PendingAttempt] = None
    challenge: Optional[OTPChallenge] = None

    @property
    def has_pending(self) -> bool:
        return self.pending is not None

    def reset(self) -> None:
        self.pending = None
        self.challenge = None
