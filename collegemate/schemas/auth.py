from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime
from enum import Enum


class AttemptKind(str, Enum):
    """What a pending OTP verification will commit"""
    LOGIN = "LOGIN"
    SIGNUP = "SIGNUP"


class Account(BaseModel):
    """A registered student. Email is the unique key, compared exactly."""
    name: str
    college: str
    branch: str
    year: str
    roll_number: str
    email: str
    password: str  # Opaque, compared by exact match
    is_verified: bool = False


class Session(BaseModel):
    """Point-in-time snapshot of the signed-in account"""
    name: str
    college: str
    branch: str
    year: str
    roll_number: str
    email: str
    is_verified: bool = False
    started_at: Optional[datetime] = None

    @classmethod
    def from_account(cls, account: Account, started_at: Optional[datetime] = None) -> "Session":
        return cls(
            **account.model_dump(exclude={"password"}),
            started_at=started_at
        )


class PendingAttempt(BaseModel):
    """Login or signup waiting for its one-time passcode"""
    kind: AttemptKind
    account: Account

    @property
    def email(self) -> str:
        return self.account.email


class OTPChallenge(BaseModel):
    """The single live one-time passcode"""
    code: str = Field(..., pattern=r'^[1-9]\d{5}$')
    target_email: str
    issued_at: datetime
    expires_at: datetime
    invalidated: bool = False

    def is_expired(self, now: datetime) -> bool:
        return self.invalidated or now > self.expires_at


# ==========================================
# CLI form input
# ==========================================

class LoginForm(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class SignupForm(BaseModel):
    name: str = Field(..., min_length=1)
    college: str = Field(..., min_length=1)
    branch: str = Field(..., min_length=1)
    year: str = Field(..., min_length=1)
    roll_number: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("name", "college", "branch", "year", "roll_number")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    def to_account(self) -> Account:
        return Account(**self.model_dump())
