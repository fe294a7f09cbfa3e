from dataclasses import dataclass, field
from datetime import date as date_type
from typing import List, Optional
import enum


class FeelingEnum(enum.Enum):
    Angry = "Angry"
    Bored = "Bored"
    Great = "Great"
    Good = "Good"
    Normal = "Normal"
    Sad = "Sad"


VALID_FEELINGS = frozenset(feeling.value for feeling in FeelingEnum)


@dataclass(frozen=True)
class Rating:
    date: date_type
    description: str = ""
    feeling: str = ""
    tags: List[str] = field(default_factory=list)


def is_valid_rating(rating: Optional[Rating]) -> bool:
    """A rating is valid when its feeling is one of FeelingEnum, matched exactly"""
    return rating is not None and len(rating.feeling) > 0 and rating.feeling in VALID_FEELINGS
