from collegemate.services.storage import (
    KeyValueStore,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    RedisKeyValueStore,
    StorageKeys,
    create_store,
)
from collegemate.services.credential_store import CredentialStore
from collegemate.services.session_store import SessionStore
from collegemate.services.auth_context import AuthContext
from collegemate.services.otp_engine import OTPChallengeEngine
from collegemate.services.poll_engine import DailyPollEngine
from collegemate.services.upload_store import UploadStore

__all__ = [
    # Storage
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "RedisKeyValueStore",
    "StorageKeys",
    "create_store",
    # Auth
    "CredentialStore",
    "SessionStore",
    "AuthContext",
    "OTPChallengeEngine",
    # Portal features
    "DailyPollEngine",
    "UploadStore",
]
