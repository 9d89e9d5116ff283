"""
Prediction API endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from transit_delay.database import get_db
from transit_delay.dependencies import get_predictor
from transit_delay.schemas.prediction import PredictionInput, PredictionOutput
from transit_delay.services.predictor import DelayPredictor, predict_delay

router = APIRouter()


@router.post("/predict", response_model=PredictionOutput)
async def predict(
    request: PredictionInput,
    db: AsyncSession = Depends(get_db),
    predictor: DelayPredictor = Depends(get_predictor),
):
    """
    Predict the delay for a route/stop/time and store the query.

    Empty route or stop and unparseable datetimes are rejected with 422
    before anything is stored.
    """
    return await predict_delay(db, request, predictor)
