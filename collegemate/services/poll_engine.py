"""
Daily Poll Engine
=================

Vote tallies for the fixed three-option bunk poll.

- Tallies and the voted-today flag reset at the local date boundary
- At most one vote per store per day
- Every read and write reconciles the stored date first, so a stale day is
  never observed
"""

import math
from datetime import date, datetime
from typing import Callable, Dict, Optional

from collegemate.core.logging_config import logger
from collegemate.core.results import FailureKind, OperationResult
from collegemate.schemas.poll import POLL_OPTIONS, PollOption, PollResults, PollState, empty_counts
from collegemate.services.storage import KeyValueStore, StorageKeys


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class DailyPollEngine:
    """Bunk poll tallies over a KeyValueStore"""

    def __init__(
        self,
        store: KeyValueStore,
        keys: Optional[StorageKeys] = None,
        clock: Callable[[], datetime] = datetime.now
    ):
        self.store = store
        self.keys = keys or StorageKeys()
        self.clock = clock

    def current_date_key(self) -> date:
        """Local wall-clock date, the rollover boundary"""
        return self.clock().date()

    def reconcile_date(self) -> None:
        """Reset counts and the voted flag in one write if the stored date is not today"""
        today = self.current_date_key().isoformat()
        stored = self.store.get(self.keys.poll_date)
        if stored == today:
            return

        self.store.set_many({
            self.keys.poll_votes: empty_counts(),
            self.keys.poll_date: today,
            self.keys.poll_voted_today: False,
        })
        logger.log_poll_event("rollover", poll_date=today, previous_date=stored)

    def _read_counts(self) -> Dict[str, int]:
        stored = self.store.get(self.keys.poll_votes)
        counts = empty_counts()
        if isinstance(stored, dict):
            for option in POLL_OPTIONS:
                value = stored.get(option, 0)
                counts[option] = value if isinstance(value, int) and not isinstance(value, bool) and value > 0 else 0
        return counts

    def get_tally(self) -> PollState:
        self.reconcile_date()
        return PollState(
            vote_counts=self._read_counts(),
            poll_date=self.current_date_key(),
            has_voted_today=bool(self.store.get(self.keys.poll_voted_today, False)),
        )

    def has_voted_today(self) -> bool:
        self.reconcile_date()
        return bool(self.store.get(self.keys.poll_voted_today, False))

    def cast_vote(self, option: str) -> OperationResult:
        """Record one vote for today. The count and the voted flag are written together."""
        if isinstance(option, PollOption):
            option = option.value

        if self.has_voted_today():
            logger.log_poll_event("vote rejected", option=str(option), reason=FailureKind.ALREADY_VOTED.value)
            return OperationResult.fail(FailureKind.ALREADY_VOTED)

        if option not in POLL_OPTIONS:
            logger.log_poll_event("vote rejected", option=str(option), reason=FailureKind.INVALID_OPTION.value)
            return OperationResult.fail(FailureKind.INVALID_OPTION)

        counts = self._read_counts()
        counts[option] += 1
        self.store.set_many({
            self.keys.poll_votes: counts,
            self.keys.poll_voted_today: True,
        })

        logger.log_poll_event("vote", option=option, poll_date=self.current_date_key().isoformat())
        return OperationResult.ok(counts, message="Vote recorded! Thanks for participating 🎉")

    def get_results(self) -> PollResults:
        """
        Today's breakdown.

        Percentages divide by the real total, with 1 standing in only to avoid
        dividing by zero. The leading option is the strictly highest count;
        ties go to the option that comes first in POLL_OPTIONS.
        """
        counts = self.get_tally().vote_counts
        total = sum(counts.values())
        divisor = total or 1

        percentages = {
            option: round_half_up(counts[option] / divisor * 100) if total > 0 else 0
            for option in POLL_OPTIONS
        }

        leading = None
        if total > 0:
            leading = POLL_OPTIONS[0]
            for option in POLL_OPTIONS[1:]:
                if counts[option] > counts[leading]:
                    leading = option

        return PollResults(
            vote_counts=counts,
            total=total,
            percentages=percentages,
            leading_option=leading,
        )
