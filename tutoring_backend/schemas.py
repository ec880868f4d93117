import datetime as dt
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, field_serializer

NOT_SPECIFIED = "Not specified"


def or_not_specified(value) -> str:
    """Placeholder for optional booking fields left blank on the form."""
    if value is None or value == "":
        return NOT_SPECIFIED
    return str(value)


class Ack(BaseModel):
    success: bool
    message: Optional[str] = None


class BookingDetails(BaseModel):
    """Snapshot of a stored booking, handed to the notification tasks."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    surname: str
    age: Optional[Union[int, str]] = None
    gender: Optional[str] = None
    township: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    province: Optional[str] = None
    phone: str
    email: str
    school: Optional[str] = None
    grade: Optional[str] = None
    subject: str
    topic: str
    questions_path: Optional[str] = None
    comments: Optional[str] = None
    datetime: str
    meet_link: str
    payment_method: Optional[str] = None
    proof_of_payment_path: Optional[str] = None


class TestimonialOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    rating: int
    comment: Optional[str] = None
    created_at: Optional[dt.datetime] = None

    @field_serializer("created_at")
    def serialize_created_at(self, value: Optional[dt.datetime]):
        # same shape SQLite's CURRENT_TIMESTAMP stores
        return value.strftime("%Y-%m-%d %H:%M:%S") if value else None


class TestimonialList(BaseModel):
    success: bool = True
    testimonials: List[TestimonialOut]
    averageRating: Union[int, float]
