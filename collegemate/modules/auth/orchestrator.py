"""
Auth Orchestrator
=================

Composes the credential store, session store and OTP engine into the two
public flows plus logout and the auth guard.

States:
    ANONYMOUS -> PENDING_LOGIN  -> AUTHENTICATED
    ANONYMOUS -> PENDING_SIGNUP -> AUTHENTICATED

Every failure is returned as an OperationResult and leaves no partial commit.
OTP engine failures are passed through unchanged.

Usage:
    auth = AuthOrchestrator(credentials, sessions, otp, context, navigator)

    result = auth.initiate_login("asha@college.edu", "secret")
    if result.success:
        result = auth.complete_verification(code_from_user)
"""

from enum import Enum
from typing import Optional

from collegemate.core.logging_config import logger
from collegemate.core.results import FailureKind, OperationResult
from collegemate.modules.auth.dependencies import (
    LANDING_ROUTE,
    LOGIN_ROUTE,
    Navigator,
    RecordingNavigator,
)
from collegemate.schemas.auth import Account, AttemptKind, PendingAttempt, Session
from collegemate.services.auth_context import AuthContext
from collegemate.services.credential_store import CredentialStore
from collegemate.services.otp_engine import OTPChallengeEngine
from collegemate.services.session_store import SessionStore


class AuthState(str, Enum):
    ANONYMOUS = "anonymous"
    PENDING_LOGIN = "pending_login"
    PENDING_SIGNUP = "pending_signup"
    AUTHENTICATED = "authenticated"


class AuthOrchestrator:
    """Login/signup flows gated by a one-time passcode"""

    def __init__(
        self,
        credentials: CredentialStore,
        sessions: SessionStore,
        otp: OTPChallengeEngine,
        context: Optional[AuthContext] = None,
        navigator: Optional[Navigator] = None
    ):
        self.credentials = credentials
        self.sessions = sessions
        self.otp = otp
        self.context = context or otp.context
        self.navigator = navigator or RecordingNavigator()

        if self.context is not otp.context:
            raise ValueError("Orchestrator and OTP engine must share one AuthContext")

    @property
    def state(self) -> AuthState:
        """
        Current flow state. A stored session wins over a pending attempt,
        so a signed-in user re-running login still reports AUTHENTICATED
        until the new verification commits.
        """
        if self.is_authenticated():
            return AuthState.AUTHENTICATED
        pending = self.context.pending
        if pending is None:
            return AuthState.ANONYMOUS
        if pending.kind == AttemptKind.SIGNUP:
            return AuthState.PENDING_SIGNUP
        return AuthState.PENDING_LOGIN

    @property
    def pending(self) -> Optional[PendingAttempt]:
        return self.context.pending

    # ==================== Flows ====================

    def initiate_login(self, email: str, password: str) -> OperationResult:
        """Check credentials, then send a code. Nothing changes on failure."""
        account = self.credentials.find_by_credentials(email, password)
        if account is None:
            logger.log_auth_event("login", success=False, user_email=email,
                                  reason=FailureKind.INVALID_CREDENTIALS.value)
            return OperationResult.fail(FailureKind.INVALID_CREDENTIALS)

        self.context.pending = PendingAttempt(kind=AttemptKind.LOGIN, account=account)
        self.otp.issue(email)
        logger.log_auth_event("login_initiated", success=True, user_email=email)
        return OperationResult.ok(message=f"We've sent a 6-digit code to {email}")

    def initiate_signup(self, candidate: Account) -> OperationResult:
        """Reject taken emails before anything is stored, then send a code"""
        if self.credentials.is_registered(candidate.email):
            logger.log_auth_event("signup", success=False, user_email=candidate.email,
                                  reason=FailureKind.DUPLICATE_EMAIL.value)
            return OperationResult.fail(FailureKind.DUPLICATE_EMAIL)

        self.context.pending = PendingAttempt(kind=AttemptKind.SIGNUP, account=candidate)
        self.otp.issue(candidate.email)
        logger.log_auth_event("signup_initiated", success=True, user_email=candidate.email)
        return OperationResult.ok(message=f"We've sent a 6-digit code to {candidate.email}")

    def complete_verification(self, submitted_code: str) -> OperationResult:
        """
        Verify the code and commit the pending attempt.

        SIGNUP registers the account (a duplicate that slipped in since
        initiation fails the flow and the user must start over) and then
        starts a session; LOGIN starts a session directly. The started
        Session is returned as result.value.
        """
        verification = self.otp.verify(submitted_code)
        if not verification.success:
            return verification

        pending = self.context.pending
        account = pending.account

        if pending.kind == AttemptKind.SIGNUP:
            registration = self.credentials.register(account)
            if not registration.success:
                self.context.reset()
                return registration
            account = registration.value

        session = self.sessions.start_session(account)
        self.context.reset()

        logger.log_auth_event(pending.kind.value.lower(), success=True, user_email=session.email)
        return OperationResult.ok(session, message="Verification Successful! Welcome.")

    def resend_code(self) -> OperationResult:
        """Issue a fresh code for whatever is pending, expired or not"""
        pending = self.context.pending
        if pending is None:
            return OperationResult.fail(FailureKind.NO_PENDING_CHALLENGE)

        self.otp.resend(pending.email)
        return OperationResult.ok(message=f"A new code was sent to {pending.email}")

    def cancel_verification(self) -> None:
        if self.context.pending is not None:
            logger.info(f"Verification cancelled for {self.context.pending.email}")
        self.context.reset()

    # ==================== Session ====================

    def current_user(self) -> Optional[Session]:
        return self.sessions.current_session()

    def is_authenticated(self) -> bool:
        return self.sessions.current_session() is not None

    def require_authentication(self) -> bool:
        """Guard for protected actions; bounces anonymous users to the login page"""
        if not self.is_authenticated():
            self.navigator.redirect(LOGIN_ROUTE)
            return False
        return True

    def log_out(self) -> None:
        """End the session, go to the landing page and reload, dropping any pending flow"""
        user = self.sessions.current_session()
        self.sessions.end_session()
        self.navigator.redirect(LANDING_ROUTE)
        self.navigator.reload()
        self.context.reset()
        logger.log_auth_event("logout", success=True, user_email=user.email if user else None)
