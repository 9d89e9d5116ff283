"""
Query store - append-only access to the ``queries`` table.

Only insert and select operations exist; rows are never updated or deleted.
"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from transit_delay.models import QueryRecord

logger = logging.getLogger(__name__)

# Largest LIMIT the drivers accept (signed 64-bit)
MAX_LIMIT = 2**63 - 1


class QueryStore:
    """Record store bound to one session. The caller owns the transaction."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert(
        self,
        route: str,
        stop: str,
        datetime: datetime,
        prediction: int,
        confidence: float,
        weather: Optional[str] = None,
    ) -> QueryRecord:
        """
        Add a record and flush it so ``id`` and ``created_at`` are assigned.
        """
        record = QueryRecord(
            route=route,
            stop=stop,
            datetime=datetime,
            weather=weather,
            prediction=prediction,
            confidence=confidence,
        )
        try:
            self.db.add(record)
            await self.db.flush()
            await self.db.refresh(record)
        except SQLAlchemyError:
            logger.exception("Query save failed for route=%s stop=%s", route, stop)
            raise
        return record

    async def select_all(self) -> list[QueryRecord]:
        result = await self.db.execute(select(QueryRecord).order_by(QueryRecord.id))
        return list(result.scalars().all())

    async def select_recent(self, limit: int, route: Optional[str] = None) -> list[QueryRecord]:
        """
        Most recent records first (``created_at`` desc, then ``id`` desc).

        A limit of 0 returns nothing; a limit above the row count returns
        every row. The route filter ignores surrounding whitespace, as
        stored routes are stripped.
        """
        if limit <= 0:
            return []
        limit = min(limit, MAX_LIMIT)
        route = route.strip() if route else None

        query = select(QueryRecord)
        if route:
            query = query.where(QueryRecord.route == route)
        query = query.order_by(
            QueryRecord.created_at.desc(),
            QueryRecord.id.desc(),
        ).limit(limit)

        result = await self.db.execute(query)
        return list(result.scalars().all())
