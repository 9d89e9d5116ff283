"""
Delay Predictor Service

Placeholder model: generates a random delay and confidence score for a
route/stop/time request. History is never consulted. Weather is a
placeholder value until a weather feed is integrated.
"""

import logging
import random
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from transit_delay.config import ON_TIME_THRESHOLD_MINUTES
from transit_delay.models import QueryRecord
from transit_delay.schemas.prediction import PredictionInput, PredictionOutput
from transit_delay.services.query_store import QueryStore
from transit_delay.utils.timezone import to_utc

logger = logging.getLogger(__name__)

MIN_DELAY_MINUTES = 0
MAX_DELAY_MINUTES = 15
MIN_CONFIDENCE = 70
MAX_CONFIDENCE = 95
WEATHER_CONDITIONS = ("Clear", "Rainy", "Cloudy", "Snowy")

ON_TIME_LABEL = "On Time"
DELAYED_LABEL = "Delayed"


def delay_label(delay_minutes: int, threshold: int = ON_TIME_THRESHOLD_MINUTES) -> str:
    """Label a delay as on time when it is at or below the threshold."""
    return ON_TIME_LABEL if delay_minutes <= threshold else DELAYED_LABEL


@dataclass
class Prediction:
    """Generated fields for one request."""
    delay_minutes: int
    confidence: float
    weather: Optional[str]
    label: str


class DelayPredictor:
    """
    Random placeholder model.

    Pass a seeded ``random.Random`` to get reproducible output.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        on_time_threshold: int = ON_TIME_THRESHOLD_MINUTES,
    ):
        self.rng = rng or random.Random()
        self.on_time_threshold = on_time_threshold

    def predict(self, request: PredictionInput) -> Prediction:
        delay = self.rng.randint(MIN_DELAY_MINUTES, MAX_DELAY_MINUTES)
        confidence = self.rng.randint(MIN_CONFIDENCE, MAX_CONFIDENCE)
        weather = self.rng.choice(WEATHER_CONDITIONS)

        return Prediction(
            delay_minutes=delay,
            confidence=float(confidence),
            weather=weather,
            label=delay_label(delay, self.on_time_threshold),
        )


async def predict_delay(
    db: AsyncSession,
    request: PredictionInput,
    predictor: DelayPredictor,
) -> PredictionOutput:
    """
    Generate a prediction and store it.

    The insert is committed before returning; on failure the session is
    rolled back and nothing is stored.
    """
    prediction = predictor.predict(request)
    store = QueryStore(db)

    try:
        record = await store.insert(
            route=request.route,
            stop=request.stop,
            datetime=to_utc(request.datetime),
            prediction=prediction.delay_minutes,
            confidence=prediction.confidence,
            weather=prediction.weather,
        )
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("Prediction failed for route=%s stop=%s", request.route, request.stop)
        raise

    logger.info(
        "Stored prediction %s: route=%s stop=%s delay=%smin (%s)",
        record.id, record.route, record.stop, record.prediction, prediction.label,
    )
    return to_prediction_output(record, prediction.label)


def to_prediction_output(record: QueryRecord, label: str) -> PredictionOutput:
    return PredictionOutput(
        id=record.id,
        route=record.route,
        stop=record.stop,
        datetime=record.datetime,
        weather=record.weather,
        prediction=record.prediction,
        confidence=record.confidence,
        label=label,
        created_at=record.created_at,
    )
