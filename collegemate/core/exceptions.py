"""
Custom Exceptions for CollegeMate
=================================

Expected, user-correctable outcomes (wrong password, expired code, second
vote of the day...) are returned as OperationResult values, see
collegemate.core.results. The exceptions below are reserved for faults the
user cannot fix from the UI:

1. Programmer errors (calling the auth flow out of order)
2. Storage backends that cannot be read or written
3. Invalid configuration

Usage:
    from collegemate.core.exceptions import StorageError

    try:
        store.set(key, value)
    except StorageError as e:
        logger.error(f"Could not persist {key}: {e}")
        raise
"""

from typing import Optional, Any, Dict


class CollegeMateError(Exception):
    """Base exception for all CollegeMate errors"""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


# ============================================
# Auth Flow Errors
# ============================================

class AuthStateError(CollegeMateError):
    """Auth flow driven out of order (e.g. issuing a code with nothing pending)"""

    def __init__(self, message: str = "Invalid authentication state"):
        super().__init__(message, code="AUTH_STATE_ERROR")


# ============================================
# Storage Errors
# ============================================

class StorageError(CollegeMateError):
    """Storage operation failed"""

    def __init__(self, message: str, key: Optional[str] = None):
        super().__init__(message, code="STORAGE_ERROR")
        if key:
            self.details["key"] = key


class CorruptStoreError(StorageError):
    """Persisted data could not be decoded"""

    def __init__(self, path: str, message: str = "Store file is not valid JSON"):
        super().__init__(f"{message}: {path}")
        self.code = "STORE_CORRUPT"
        self.details["path"] = path


# ============================================
# Configuration Errors
# ============================================

class ConfigurationError(CollegeMateError):
    """Settings name a backend or channel that does not exist"""

    def __init__(self, setting: str, value: Any, allowed: tuple):
        super().__init__(
            f"Unsupported {setting} '{value}'. Allowed: {', '.join(allowed)}",
            code="INVALID_CONFIGURATION",
            details={"setting": setting, "value": value, "allowed": list(allowed)}
        )
