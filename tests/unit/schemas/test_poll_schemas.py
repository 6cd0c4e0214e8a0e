"""
Unit Tests for Poll Schemas
"""
from collegemate.schemas.poll import POLL_OPTIONS, PollOption, PollResults, empty_counts


class TestPollOptions:

    def test_labels_and_order(self):
        assert POLL_OPTIONS == ["Yes 😎", "No 🤓", "Maybe 🤔"]
        assert PollOption.YES.value == POLL_OPTIONS[0]

    def test_empty_counts(self):
        counts = empty_counts()

        assert counts == {"Yes 😎": 0, "No 🤓": 0, "Maybe 🤔": 0}
        assert list(counts) == POLL_OPTIONS

    def test_empty_counts_are_independent(self):
        first = empty_counts()
        first["Yes 😎"] = 5

        assert empty_counts()["Yes 😎"] == 0


class TestPollResults:

    def test_leading_option_optional(self):
        results = PollResults(vote_counts=empty_counts(), total=0, percentages=empty_counts())

        assert results.leading_option is None
