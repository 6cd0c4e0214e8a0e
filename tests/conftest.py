"""
CollegeMate - Test Configuration and Fixtures
"""
import os
from datetime import datetime, timedelta

import pytest
from faker import Faker

# Set testing environment
os.environ['ENVIRONMENT'] = 'testing'
os.environ['STORAGE_BACKEND'] = 'memory'
os.environ['OTP_DELIVERY_CHANNEL'] = 'log'
os.environ['OTP_DELIVERY_DELAY_SECONDS'] = '0'

from collegemate.core.config import Settings
from collegemate.main import create_portal
from collegemate.modules.auth.dependencies import RecordingNavigator
from collegemate.schemas.auth import Account
from collegemate.services.auth_context import AuthContext
from collegemate.services.otp_delivery import ImmediateDispatcher, RecordingDeliveryChannel
from collegemate.services.storage import InMemoryKeyValueStore, StorageKeys

fake = Faker()


class FakeClock:
    """Manually advanced wall clock"""

    def __init__(self, start: datetime = None):
        self.now = start or datetime(2024, 3, 14, 9, 30, 0)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


def make_account(**overrides) -> Account:
    """Build a student account with realistic data"""
    data = {
        "name": fake.name(),
        "college": f"{fake.city()} Institute of Technology",
        "branch": "CSE",
        "year": "2nd Year",
        "roll_number": fake.bothify(text="21CS###"),
        "email": fake.unique.email(),
        "password": fake.password(length=12),
    }
    data.update(overrides)
    return Account(**data)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def keys() -> StorageKeys:
    return StorageKeys("collegemate")


@pytest.fixture
def memory_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def delivery() -> RecordingDeliveryChannel:
    return RecordingDeliveryChannel()


@pytest.fixture
def dispatcher() -> ImmediateDispatcher:
    return ImmediateDispatcher()


@pytest.fixture
def navigator() -> RecordingNavigator:
    return RecordingNavigator()


@pytest.fixture
def context() -> AuthContext:
    return AuthContext()


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        STORAGE_BACKEND="memory",
        STORAGE_NAMESPACE="collegemate",
        OTP_DELIVERY_CHANNEL="log",
        OTP_TTL_SECONDS=60,
    )


@pytest.fixture
def portal(test_settings, memory_store, clock, delivery, dispatcher, navigator):
    """Fully wired portal with an in-memory store and inline OTP delivery"""
    return create_portal(
        settings=test_settings,
        store=memory_store,
        clock=clock,
        delivery=delivery,
        dispatcher=dispatcher,
        navigator=navigator,
    )


@pytest.fixture
def account() -> Account:
    return make_account()


@pytest.fixture
def account_factory():
    return make_account
