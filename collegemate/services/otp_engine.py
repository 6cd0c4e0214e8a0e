"""
OTP Challenge Engine
====================

Generates, holds, expires and verifies the single live one-time passcode.

The engine only judges code correctness and expiry. It knows nothing about
accounts or sessions; the auth orchestrator decides what a successful
verification commits.

Usage:
    engine = OTPChallengeEngine(context, delivery=LogDeliveryChannel())

    engine.issue("student@college.edu")
    result = engine.verify("482913")
    if not result.success:
        print(result.message)
"""

import math
import secrets
from datetime import datetime, timedelta
from typing import Callable, Optional

from collegemate.core.exceptions import AuthStateError
from collegemate.core.logging_config import logger
from collegemate.core.results import FailureKind, OperationResult
from collegemate.schemas.auth import OTPChallenge
from collegemate.services.auth_context import AuthContext
from collegemate.services.otp_delivery import (
    DeferredDispatcher,
    Dispatcher,
    LogDeliveryChannel,
    OTPDeliveryChannel,
)

OTP_MIN = 100000
OTP_MAX = 999999
DEFAULT_TTL_SECONDS = 60
DEFAULT_DELIVERY_DELAY_SECONDS = 0.5


def generate_code() -> str:
    """Uniform random 6-digit code, never with a leading zero"""
    return str(OTP_MIN + secrets.randbelow(OTP_MAX - OTP_MIN + 1))


class OTPChallengeEngine:
    """Issues and verifies the one live OTP challenge held in an AuthContext"""

    def __init__(
        self,
        context: AuthContext,
        delivery: Optional[OTPDeliveryChannel] = None,
        dispatcher: Optional[Dispatcher] = None,
        clock: Callable[[], datetime] = datetime.now,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        delivery_delay_seconds: float = DEFAULT_DELIVERY_DELAY_SECONDS,
        code_generator: Callable[[], str] = generate_code
    ):
        self.context = context
        self.delivery = delivery or LogDeliveryChannel()
        self.dispatcher = dispatcher or DeferredDispatcher()
        self.clock = clock
        self.ttl_seconds = ttl_seconds
        self.delivery_delay_seconds = delivery_delay_seconds
        self.code_generator = code_generator

    @property
    def challenge(self) -> Optional[OTPChallenge]:
        return self.context.challenge

    def issue(self, target_email: str) -> OTPChallenge:
        """
        Mint a new code for target_email, replacing any previous challenge.

        Delivery is handed to the dispatcher and happens after a short delay;
        this call returns as soon as the challenge is stored.
        """
        if not self.context.has_pending:
            raise AuthStateError("Cannot issue a one-time code without a pending login or signup")

        now = self.clock()
        challenge = OTPChallenge(
            code=self.code_generator(),
            target_email=target_email,
            issued_at=now,
            expires_at=now + timedelta(seconds=self.ttl_seconds),
        )
        self.context.challenge = challenge

        logger.info(f"[MOCK EMAIL SERVICE] Sending OTP to {target_email}")
        logger.debug(f"OTP for {target_email} expires at {challenge.expires_at.isoformat()}")

        code = challenge.code
        self.dispatcher.schedule(
            self.delivery_delay_seconds,
            lambda: self.delivery.deliver(target_email, code, self.ttl_seconds)
        )
        return challenge

    def resend(self, target_email: str) -> OTPChallenge:
        """Issue again; the previous code stops being verifiable immediately"""
        return self.issue(target_email)

    def verify(self, submitted: str) -> OperationResult:
        challenge = self.context.challenge
        if not self.context.has_pending or challenge is None:
            return OperationResult.fail(FailureKind.NO_PENDING_CHALLENGE)

        if challenge.is_expired(self.clock()):
            # Stays failed until a new code is issued; the pending attempt is kept for resend
            challenge.invalidated = True
            logger.log_auth_event("otp_verify", success=False, user_email=challenge.target_email,
                                  reason=FailureKind.EXPIRED.value)
            return OperationResult.fail(FailureKind.EXPIRED)

        if submitted != challenge.code:
            logger.log_auth_event("otp_verify", success=False, user_email=challenge.target_email,
                                  reason=FailureKind.INCORRECT_CODE.value)
            return OperationResult.fail(FailureKind.INCORRECT_CODE)

        self.context.challenge = None
        logger.log_auth_event("otp_verify", success=True, user_email=challenge.target_email)
        return OperationResult.ok()

    def seconds_remaining(self) -> int:
        """Whole seconds until the live code expires, 0 when there is none"""
        challenge = self.context.challenge
        if challenge is None or challenge.invalidated:
            return 0
        remaining = (challenge.expires_at - self.clock()).total_seconds()
        return max(0, math.ceil(remaining))
