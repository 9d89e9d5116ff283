"""
Pydantic schemas for aggregate statistics.

Serialized with camelCase keys (``totalQueries``, ``averageDelay`` ...).
"""

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from transit_delay.schemas.prediction import QueryRecordResponse


class DashboardStats(BaseModel):
    """Summary statistics over every stored query."""
    total_queries: int
    average_delay: float
    on_time_percentage: float
    recent_queries: list[QueryRecordResponse] = Field(default_factory=list)

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class RouteStats(BaseModel):
    """Statistics for a single route."""
    route: str
    average_delay: float
    query_count: int
    on_time_percentage: float

    class Config:
        alias_generator = to_camel
        populate_by_name = True
