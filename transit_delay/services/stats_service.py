"""
Statistics service - dashboard and per-route aggregates.

Counts, averages and on-time counts are computed by the database; rounding
happens here so results are identical across database backends.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import case, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from transit_delay.config import ON_TIME_THRESHOLD_MINUTES
from transit_delay.models import QueryRecord
from transit_delay.schemas.prediction import QueryRecordResponse
from transit_delay.schemas.stats import DashboardStats, RouteStats
from transit_delay.services.query_store import QueryStore

logger = logging.getLogger(__name__)

DASHBOARD_RECENT_LIMIT = 5
DASHBOARD_DECIMALS = 2
ROUTE_DECIMALS = 1


def round_half_up(value, places: int) -> float:
    """
    Round half away from zero, so -0.25 becomes -0.3 at one decimal.

    ``value`` may be a float or a Decimal (Postgres returns AVG as numeric).
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def _on_time_count(threshold: int):
    return func.sum(case((QueryRecord.prediction <= threshold, 1), else_=0))


def _percentage(part: int, total: int) -> float:
    return part * 100 / total if total else 0.0


async def get_dashboard_stats(
    db: AsyncSession,
    on_time_threshold: int = ON_TIME_THRESHOLD_MINUTES,
    recent_limit: int = DASHBOARD_RECENT_LIMIT,
) -> DashboardStats:
    """
    Summary over all stored queries.

    With no records the result is all zeros and an empty recent list.
    """
    try:
        result = await db.execute(
            select(
                func.count(QueryRecord.id),
                func.avg(QueryRecord.prediction),
                _on_time_count(on_time_threshold),
            )
        )
        total, avg_delay, on_time = result.one()

        if not total:
            return DashboardStats(
                total_queries=0,
                average_delay=0,
                on_time_percentage=0,
                recent_queries=[],
            )

        recent = await QueryStore(db).select_recent(recent_limit)
    except SQLAlchemyError:
        logger.exception("Dashboard stats retrieval failed")
        raise

    return DashboardStats(
        total_queries=total,
        average_delay=round_half_up(avg_delay, DASHBOARD_DECIMALS),
        on_time_percentage=round_half_up(_percentage(on_time or 0, total), DASHBOARD_DECIMALS),
        recent_queries=[QueryRecordResponse.model_validate(r) for r in recent],
    )


async def get_route_stats(
    db: AsyncSession,
    on_time_threshold: int = ON_TIME_THRESHOLD_MINUTES,
) -> list[RouteStats]:
    """
    One entry per distinct route, busiest first.

    Routes with equal query counts are ordered by name, compared by code
    point so SQLite and Postgres collations give the same order.
    """
    query_count = func.count(QueryRecord.id)
    query = (
        select(
            QueryRecord.route,
            query_count.label("query_count"),
            func.avg(QueryRecord.prediction).label("average_delay"),
            _on_time_count(on_time_threshold).label("on_time"),
        )
        .group_by(QueryRecord.route)
        .order_by(query_count.desc())
    )

    try:
        result = await db.execute(query)
        rows = sorted(result.all(), key=lambda row: (-row.query_count, row.route))
    except SQLAlchemyError:
        logger.exception("Route stats retrieval failed")
        raise

    return [
        RouteStats(
            route=row.route,
            query_count=row.query_count,
            average_delay=round_half_up(row.average_delay, ROUTE_DECIMALS),
            on_time_percentage=round_half_up(
                _percentage(row.on_time or 0, row.query_count), ROUTE_DECIMALS
            ),
        )
        for row in rows
    ]
