from pydantic import BaseModel, Field, ConfigDict, field_validator, field_serializer
from typing import List
from datetime import date as date_type

from models.rating import Rating
from utils.date_codec import decode_wire, encode_wire


class RatingCreate(BaseModel):
    """Schema for submitting a rating"""
    date: date_type = Field(..., description="Calendar day in YYYY-MM-DD format")
    description: str = Field("", description="Free text about the day")
    feeling: str = Field("", description="One of Angry, Bored, Great, Good, Normal, Sad")
    tags: List[str] = Field(default_factory=list, description="Tags for this rating")

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, v):
        if isinstance(v, date_type):
            return v
        return decode_wire(v)

    @field_validator("description", "feeling", mode="before")
    @classmethod
    def null_text(cls, v):
        return "" if v is None else v

    @field_validator("tags", mode="before")
    @classmethod
    def null_tags(cls, v):
        return [] if v is None else v

    def to_rating(self) -> Rating:
        return Rating(
            date=self.date,
            description=self.description,
            feeling=self.feeling,
            tags=list(self.tags),
        )


class RatingResponse(BaseModel):
    """Schema for a stored rating"""
    model_config = ConfigDict(from_attributes=True)

    date: date_type
    description: str
    feeling: str
    tags: List[str]

    @field_serializer("date")
    def serialize_date(self, value: date_type) -> str:
        return encode_wire(value)
