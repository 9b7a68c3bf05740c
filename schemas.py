from typing import Optional
from datetime import date
from pydantic import BaseModel


class TripPatch(BaseModel):
    """Fields a client may change on an existing trip.

    Completion state and cost are owned by ``end_trip``; anything outside this
    list is rejected.
    """
    model_config = {"extra": "forbid"}

    start_date: Optional[date] = None
    end_date: Optional[date] = None
    location: Optional[str] = None
