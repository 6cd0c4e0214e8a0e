"""
CollegeMate portal wiring.

create_portal() builds one fully connected set of stores, engines and the
auth orchestrator from settings. Every collaborator can be overridden, which
is how tests get an in-memory store, a fixed clock and inline OTP delivery.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from collegemate.core.config import DELIVERY_CHANNELS, Settings, settings as default_settings
from collegemate.core.exceptions import ConfigurationError
from collegemate.core.logging_config import logger
from collegemate.modules.auth.dependencies import Navigator, RecordingNavigator
from collegemate.modules.auth.orchestrator import AuthOrchestrator
from collegemate.services.auth_context import AuthContext
from collegemate.services.credential_store import CredentialStore
from collegemate.services.otp_delivery import (
    DeferredDispatcher,
    Dispatcher,
    LogDeliveryChannel,
    OTPDeliveryChannel,
)
from collegemate.services.otp_engine import OTPChallengeEngine
from collegemate.services.poll_engine import DailyPollEngine
from collegemate.services.session_store import SessionStore
from collegemate.services.storage import KeyValueStore, StorageKeys, create_store
from collegemate.services.upload_store import UploadStore


@dataclass
class Portal:
    """Everything the UI layer talks to"""
    settings: Settings
    store: KeyValueStore
    context: AuthContext
    credentials: CredentialStore
    sessions: SessionStore
    otp: OTPChallengeEngine
    auth: AuthOrchestrator
    poll: DailyPollEngine
    uploads: UploadStore


def create_delivery_channel(settings: Settings) -> OTPDeliveryChannel:
    channel = settings.OTP_DELIVERY_CHANNEL
    if channel == "log":
        return LogDeliveryChannel()
    if channel == "console":
        # Imported lazily so the core never depends on the terminal UI
        from collegemate.cli.notifications import ConsoleDeliveryChannel
        return ConsoleDeliveryChannel()
    raise ConfigurationError("OTP_DELIVERY_CHANNEL", channel, DELIVERY_CHANNELS)


def create_portal(
    settings: Optional[Settings] = None,
    store: Optional[KeyValueStore] = None,
    clock: Callable[[], datetime] = datetime.now,
    delivery: Optional[OTPDeliveryChannel] = None,
    dispatcher: Optional[Dispatcher] = None,
    navigator: Optional[Navigator] = None
) -> Portal:
    settings = settings or default_settings
    store = store if store is not None else create_store(settings)
    keys = StorageKeys(settings.STORAGE_NAMESPACE)
    context = AuthContext()

    credentials = CredentialStore(store, keys)
    sessions = SessionStore(store, keys, clock=clock)
    otp = OTPChallengeEngine(
        context,
        delivery=delivery or create_delivery_channel(settings),
        dispatcher=dispatcher or DeferredDispatcher(),
        clock=clock,
        ttl_seconds=settings.OTP_TTL_SECONDS,
        delivery_delay_seconds=settings.OTP_DELIVERY_DELAY_SECONDS,
    )
    auth = AuthOrchestrator(
        credentials,
        sessions,
        otp,
        context=context,
        navigator=navigator or RecordingNavigator(),
    )

    logger.debug(f"Portal created with {type(store).__name__} (namespace '{keys.namespace}')")

    return Portal(
        settings=settings,
        store=store,
        context=context,
        credentials=credentials,
        sessions=sessions,
        otp=otp,
        auth=auth,
        poll=DailyPollEngine(store, keys, clock=clock),
        uploads=UploadStore(store, keys, clock=clock),
    )
