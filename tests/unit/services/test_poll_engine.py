"""
Unit Tests for Daily Poll Engine
Tests for: one vote per day, date rollover, percentages, leading option
"""
from datetime import date

import pytest

from collegemate.core.results import FailureKind
from collegemate.schemas.poll import POLL_OPTIONS, PollOption
from collegemate.services.poll_engine import DailyPollEngine, round_half_up

YES, NO, MAYBE = POLL_OPTIONS


@pytest.fixture
def poll(memory_store, keys, clock):
    return DailyPollEngine(memory_store, keys, clock=clock)


def seed_counts(store, keys, clock, counts, voted=False):
    store.set_many({
        keys.poll_votes: counts,
        keys.poll_date: clock().date().isoformat(),
        keys.poll_voted_today: voted,
    })


class TestRoundHalfUp:

    @pytest.mark.parametrize("value, expected", [(12.5, 13), (33.33, 33), (66.67, 67), (0.5, 1), (0.0, 0)])
    def test_rounding(self, value, expected):
        assert round_half_up(value) == expected


class TestTally:
    """Test reading today's counts"""

    def test_fresh_store_is_initialized(self, poll, memory_store, keys, clock):
        state = poll.get_tally()

        assert state.vote_counts == {YES: 0, NO: 0, MAYBE: 0}
        assert state.poll_date == date(2024, 3, 14)
        assert state.has_voted_today is False
        assert memory_store.get(keys.poll_date) == "2024-03-14"

    def test_same_day_counts_kept(self, poll, memory_store, keys, clock):
        seed_counts(memory_store, keys, clock, {YES: 3, NO: 1, MAYBE: 0}, voted=True)

        state = poll.get_tally()

        assert state.vote_counts == {YES: 3, NO: 1, MAYBE: 0}
        assert state.has_voted_today is True

    def test_rollover_resets_counts_and_flag(self, poll, memory_store, keys, clock):
        seed_counts(memory_store, keys, clock, {YES: 3, NO: 1, MAYBE: 2}, voted=True)
        clock.advance(days=1)

        state = poll.get_tally()

        assert state.vote_counts == {YES: 0, NO: 0, MAYBE: 0}
        assert state.has_voted_today is False
        assert memory_store.get(keys.poll_date) == "2024-03-15"
        assert memory_store.get(keys.poll_voted_today) is False

    def test_rollover_at_local_midnight(self, poll, memory_store, keys, clock):
        clock.now = clock.now.replace(hour=23, minute=59, second=59)
        seed_counts(memory_store, keys, clock, {YES: 1, NO: 0, MAYBE: 0}, voted=True)

        clock.advance(seconds=1)

        assert poll.has_voted_today() is False

    def test_malformed_counts_sanitized(self, poll, memory_store, keys, clock):
        seed_counts(memory_store, keys, clock, {YES: "lots", NO: -4, "Other": 9})

        assert poll.get_tally().vote_counts == {YES: 0, NO: 0, MAYBE: 0}

    def test_boolean_counts_ignored(self, poll, memory_store, keys, clock):
        seed_counts(memory_store, keys, clock, {YES: True, NO: 2, MAYBE: False})

        assert poll.get_tally().vote_counts == {YES: 0, NO: 2, MAYBE: 0}
        assert poll.get_results().total == 2


class TestCastVote:
    """Test voting rules"""

    def test_first_vote_recorded(self, poll, memory_store, keys):
        result = poll.cast_vote(YES)

        assert result.success is True
        assert result.value == {YES: 1, NO: 0, MAYBE: 0}
        assert result.message == "Vote recorded! Thanks for participating 🎉"
        assert poll.has_voted_today() is True
        assert memory_store.get(keys.poll_votes) == {YES: 1, NO: 0, MAYBE: 0}

    def test_enum_member_accepted(self, poll):
        assert poll.cast_vote(PollOption.MAYBE).value[MAYBE] == 1

    def test_second_vote_rejected(self, poll):
        poll.cast_vote(YES)

        result = poll.cast_vote(NO)

        assert result.failure == FailureKind.ALREADY_VOTED
        assert poll.get_tally().vote_counts == {YES: 1, NO: 0, MAYBE: 0}

    def test_invalid_option(self, poll):
        result = poll.cast_vote("Perhaps")

        assert result.failure == FailureKind.INVALID_OPTION
        assert poll.has_voted_today() is False

    def test_already_voted_checked_first(self, poll):
        poll.cast_vote(YES)

        assert poll.cast_vote("Perhaps").failure == FailureKind.ALREADY_VOTED

    def test_can_vote_again_next_day(self, poll, clock):
        poll.cast_vote(YES)
        clock.advance(days=1)

        result = poll.cast_vote(NO)

        assert result.success is True
        assert result.value == {YES: 0, NO: 1, MAYBE: 0}

    def test_votes_from_other_stores_accumulate(self, poll, memory_store, keys, clock):
        """Test a vote adds to counts already present for today"""
        seed_counts(memory_store, keys, clock, {YES: 2, NO: 5, MAYBE: 1})

        assert poll.cast_vote(MAYBE).value == {YES: 2, NO: 5, MAYBE: 2}


class TestResults:
    """Test percentages and leading option"""

    def test_no_votes(self, poll):
        results = poll.get_results()

        assert results.total == 0
        assert results.percentages == {YES: 0, NO: 0, MAYBE: 0}
        assert results.leading_option is None

    def test_percentages(self, poll, memory_store, keys, clock):
        seed_counts(memory_store, keys, clock, {YES: 2, NO: 1, MAYBE: 1})

        results = poll.get_results()

        assert results.total == 4
        assert results.percentages == {YES: 50, NO: 25, MAYBE: 25}
        assert results.leading_option == YES

    def test_single_vote(self, poll):
        poll.cast_vote(NO)

        results = poll.get_results()

        assert results.total == 1
        assert results.percentages == {YES: 0, NO: 100, MAYBE: 0}
        assert results.leading_option == NO

    def test_thirds_round_half_up(self, poll, memory_store, keys, clock):
        seed_counts(memory_store, keys, clock, {YES: 1, NO: 2, MAYBE: 0})

        assert poll.get_results().percentages == {YES: 33, NO: 67, MAYBE: 0}

    def test_eighths_round_up_at_half(self, poll, memory_store, keys, clock):
        seed_counts(memory_store, keys, clock, {YES: 1, NO: 7, MAYBE: 0})

        assert poll.get_results().percentages == {YES: 13, NO: 88, MAYBE: 0}

    @pytest.mark.parametrize("counts, leader", [
        ({YES: 2, NO: 2, MAYBE: 0}, YES),
        ({YES: 0, NO: 3, MAYBE: 3}, NO),
        ({YES: 1, NO: 1, MAYBE: 1}, YES),
        ({YES: 0, NO: 0, MAYBE: 4}, MAYBE),
    ])
    def test_ties_go_to_first_option(self, poll, memory_store, keys, clock, counts, leader):
        seed_counts(memory_store, keys, clock, counts)

        assert poll.get_results().leading_option == leader
