"""
Unit Tests for Custom Exceptions
"""
from collegemate.core.exceptions import (
    CollegeMateError,
    AuthStateError,
    StorageError,
    CorruptStoreError,
    ConfigurationError,
)


class TestCollegeMateError:
    """Test base exception"""

    def test_defaults(self):
        """Test default code and empty details"""
        error = CollegeMateError("boom")

        assert error.message == "boom"
        assert error.code == "INTERNAL_ERROR"
        assert error.details == {}
        assert str(error) == "boom"

    def test_to_dict(self):
        """Test serialized form"""
        error = CollegeMateError("boom", code="X", details={"a": 1})

        assert error.to_dict() == {"code": "X", "message": "boom", "details": {"a": 1}}


class TestSubclasses:
    """Test error codes and details of each subclass"""

    def test_auth_state_error(self):
        error = AuthStateError()

        assert isinstance(error, CollegeMateError)
        assert error.code == "AUTH_STATE_ERROR"

    def test_storage_error_with_key(self):
        error = StorageError("write failed", key="collegemate_users")

        assert error.code == "STORAGE_ERROR"
        assert error.details == {"key": "collegemate_users"}

    def test_storage_error_without_key(self):
        assert StorageError("write failed").details == {}

    def test_corrupt_store_error(self):
        """Test corrupt store is a StorageError with its own code"""
        error = CorruptStoreError("/tmp/storage.json")

        assert isinstance(error, StorageError)
        assert error.code == "STORE_CORRUPT"
        assert error.details["path"] == "/tmp/storage.json"
        assert "/tmp/storage.json" in error.message

    def test_configuration_error(self):
        error = ConfigurationError("STORAGE_BACKEND", "sqlite", ("file", "memory"))

        assert error.code == "INVALID_CONFIGURATION"
        assert error.details["allowed"] == ["file", "memory"]
        assert "sqlite" in error.message
