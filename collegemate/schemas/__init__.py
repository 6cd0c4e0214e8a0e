# Pydantic schemas
from collegemate.schemas.auth import (
    AttemptKind,
    Account,
    Session,
    PendingAttempt,
    OTPChallenge,
    LoginForm,
    SignupForm,
)
from collegemate.schemas.poll import (
    PollOption,
    POLL_OPTIONS,
    PollState,
    PollResults,
)
from collegemate.schemas.uploads import StudyUpload

__all__ = [
    "AttemptKind",
    "Account",
    "Session",
    "PendingAttempt",
    "OTPChallenge",
    "LoginForm",
    "SignupForm",
    "PollOption",
    "POLL_OPTIONS",
    "PollState",
    "PollResults",
    "StudyUpload",
]
