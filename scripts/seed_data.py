"""
Seed the database with demo prediction queries.

Run with: python -m scripts.seed_data [count]
"""

import asyncio
import logging
import random
import sys
from datetime import timedelta

from transit_delay.config import get_settings
from transit_delay.database import Database
from transit_delay.logging_config import configure_logging
from transit_delay.schemas.prediction import PredictionInput
from transit_delay.services.predictor import DelayPredictor, predict_delay
from transit_delay.services.query_store import QueryStore
from transit_delay.utils.timezone import utc_now

logger = logging.getLogger(__name__)

# Demo routes and their stops
DEMO_ROUTES = {
    "2": ["1045", "1052", "1108"],
    "6": ["2210", "2234"],
    "28": ["3301", "3315", "3340", "3362"],
    "80": ["4401"],
}


async def seed_queries(database: Database, count: int, rng: random.Random) -> int:
    """Run ``count`` predictions through the normal predict flow."""
    predictor = DelayPredictor(rng=rng)
    now = utc_now()

    for _ in range(count):
        route = rng.choice(list(DEMO_ROUTES))
        request = PredictionInput(
            route=route,
            stop=rng.choice(DEMO_ROUTES[route]),
            datetime=now + timedelta(minutes=rng.randint(0, 24 * 60)),
        )
        async with database.session_maker() as db:
            await predict_delay(db, request, predictor)

    async with database.session_maker() as db:
        return len(await QueryStore(db).select_all())


async def main(count: int = 50) -> None:
    settings = get_settings()
    configure_logging(settings.log_level)

    database = Database(settings.async_database_url)
    try:
        await database.init_db()
        total = await seed_queries(database, count, random.Random())
        logger.info("Seeded %d queries (%d total in database)", count, total)
    finally:
        await database.dispose()


if __name__ == "__main__":
    asyncio.run(main(int(sys.argv[1]) if len(sys.argv) > 1 else 50))
