"""
OTP Delivery - out-of-band presentation of one-time passcodes

There is no real e-mail/SMS transport. A delivery channel "sends" the code by
showing it to the user somewhere other than the confirmation screen, and a
dispatcher decides when that happens. The engine never waits on delivery.
"""

import threading
from abc import ABC, abstractmethod
from typing import Callable, List, Tuple

from collegemate.core.logging_config import logger


class OTPDeliveryChannel(ABC):
    """Where a generated code is shown to the user"""

    @abstractmethod
    def deliver(self, email: str, code: str, ttl_seconds: int) -> None:
        """Present the code for the given address"""


class LogDeliveryChannel(OTPDeliveryChannel):
    """Writes the code to the application log (headless use)"""

    def deliver(self, email: str, code: str, ttl_seconds: int) -> None:
        logger.warning(f"COLLEGE MATE OTP for {email}: {code} (valid for {ttl_seconds} seconds)")


class RecordingDeliveryChannel(OTPDeliveryChannel):
    """Keeps every delivered code in memory"""

    def __init__(self):
        self.deliveries: List[Tuple[str, str]] = []

    def deliver(self, email: str, code: str, ttl_seconds: int) -> None:
        self.deliveries.append((email, code))

    @property
    def last_code(self) -> str:
        return self.deliveries[-1][1] if self.deliveries else ""


class Dispatcher(ABC):
    """Schedules deferred work"""

    @abstractmethod
    def schedule(self, delay_seconds: float, callback: Callable[[], None]) -> None:
        """Run callback after roughly delay_seconds without blocking the caller"""


class DeferredDispatcher(Dispatcher):
    """
    Fire-and-forget timer on a daemon thread.

    There is no cancellation: a resend schedules another delivery and both
    may land, but only the latest stored code is ever verifiable.
    """

    def schedule(self, delay_seconds: float, callback: Callable[[], None]) -> None:
        def run():
            try:
                callback()
            except Exception as e:
                logger.log_error_with_context(e, context="otp delivery")

        timer = threading.Timer(delay_seconds, run)
        timer.daemon = True
        timer.start()


class ImmediateDispatcher(Dispatcher):
    """Runs work inline, for tests and scripted flows"""

    def schedule(self, delay_seconds: float, callback: Callable[[], None]) -> None:
        callback()
