"""
Credential Store - the durable list of registered accounts

Accounts are appended by signup and never updated or deleted here.
Email is the unique key and is compared exactly (case-sensitive).
"""

from typing import List, Optional

from pydantic import ValidationError

from collegemate.core.logging_config import logger
from collegemate.core.results import FailureKind, OperationResult
from collegemate.schemas.auth import Account
from collegemate.services.storage import KeyValueStore, StorageKeys


class CredentialStore:
    """Registered accounts over a KeyValueStore"""

    def __init__(self, store: KeyValueStore, keys: Optional[StorageKeys] = None):
        self.store = store
        self.keys = keys or StorageKeys()

    def _load_records(self) -> List[dict]:
        records = self.store.get(self.keys.accounts, [])
        if not isinstance(records, list):
            logger.warning(f"Ignoring malformed account list under {self.keys.accounts}")
            return []
        return records

    def list_accounts(self) -> List[Account]:
        """All registered accounts, in registration order"""
        accounts = []
        for record in self._load_records():
            try:
                accounts.append(Account.model_validate(record))
            except ValidationError as e:
                logger.warning(f"Skipping unreadable account record: {e.error_count()} error(s)")
        return accounts

    def is_registered(self, email: str) -> bool:
        return any(account.email == email for account in self.list_accounts())

    def find_by_credentials(self, email: str, password: str) -> Optional[Account]:
        for account in self.list_accounts():
            if account.email == email and account.password == password:
                return account
        return None

    def register(self, candidate: Account) -> OperationResult:
        """
        Persist a new account.

        Fails with DUPLICATE_EMAIL when the email is already taken. The stored
        copy is always marked verified; it is returned as result.value.
        """
        records = self._load_records()
        if any(record.get("email") == candidate.email for record in records if isinstance(record, dict)):
            logger.log_auth_event("register", success=False, user_email=candidate.email,
                                  reason=FailureKind.DUPLICATE_EMAIL.value)
            return OperationResult.fail(FailureKind.DUPLICATE_EMAIL)

        stored = candidate.model_copy(update={"is_verified": True})
        records.append(stored.model_dump(mode="json"))
        self.store.set(self.keys.accounts, records)

        logger.log_auth_event("register", success=True, user_email=stored.email)
        return OperationResult.ok(stored)
