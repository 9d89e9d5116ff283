"""
Query history API endpoints.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from transit_delay.config import Settings
from transit_delay.database import get_db
from transit_delay.dependencies import get_app_settings
from transit_delay.schemas.prediction import QueryRecordResponse
from transit_delay.services.query_store import QueryStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/recent", response_model=list[QueryRecordResponse])
async def recent_queries(
    limit: Optional[int] = Query(None, ge=0, description="Max records, default 10"),
    route: Optional[str] = Query(None, min_length=1, description="Only this route"),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """
    Most recent queries, newest first.
    """
    if limit is None:
        limit = settings.recent_queries_default_limit

    try:
        return await QueryStore(db).select_recent(limit, route=route)
    except SQLAlchemyError:
        logger.exception("Get recent queries failed")
        raise


@router.get("", response_model=list[QueryRecordResponse])
async def all_queries(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """
    Latest queries up to the configured cap, for admin/debugging.
    """
    try:
        return await QueryStore(db).select_recent(settings.all_queries_limit)
    except SQLAlchemyError:
        logger.exception("Get all queries failed")
        raise
