"""
Pydantic schemas for prediction and query-record endpoints.
"""

import datetime as dt
from typing import Literal, Optional

from pydantic import BaseModel, Field

DelayLabel = Literal["On Time", "Delayed"]


# Request schemas

class PredictionInput(BaseModel):
    """Schema for a delay prediction request."""
    route: str = Field(..., min_length=1, description="Route number/identifier")
    stop: str = Field(..., min_length=1, description="Stop ID")
    datetime: dt.datetime

    class Config:
        str_strip_whitespace = True


# Response schemas

class QueryRecordResponse(BaseModel):
    """Schema for a stored prediction query."""
    id: int
    route: str
    stop: str
    datetime: dt.datetime
    weather: Optional[str]
    prediction: int
    confidence: float
    created_at: dt.datetime

    class Config:
        from_attributes = True


class PredictionOutput(QueryRecordResponse):
    """Schema for the predict response: the stored record plus its label."""
    confidence: float = Field(..., ge=0, le=100)
    label: DelayLabel
