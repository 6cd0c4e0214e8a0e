from pydantic import BaseModel
from typing import Dict, Optional
from datetime import date
from enum import Enum


class PollOption(str, Enum):
    """Daily bunk poll options. Labels are persisted verbatim; order is display order."""
    YES = "Yes 😎"
    NO = "No 🤓"
    MAYBE = "Maybe 🤔"


POLL_OPTIONS = [option.value for option in PollOption]


def empty_counts() -> Dict[str, int]:
    return {option: 0 for option in POLL_OPTIONS}


class PollState(BaseModel):
    vote_counts: Dict[str, int]
    poll_date: date
    has_voted_today: bool = False


class PollResults(BaseModel):
    vote_counts: Dict[str, int]
    total: int  # Raw number of votes, may be 0
    percentages: Dict[str, int]
    leading_option: Optional[str] = None  # None until someone votes
