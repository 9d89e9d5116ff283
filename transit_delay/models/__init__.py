# Database models
from transit_delay.models.query_record import QueryRecord

__all__ = [
    "QueryRecord",
]
