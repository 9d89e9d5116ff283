"""
FastAPI dependencies shared by the routers.

Settings and the predictor live on ``app.state`` (set by ``create_app``),
so tests can swap them with ``app.dependency_overrides``.
"""

from fastapi import Request

from transit_delay.config import Settings
from transit_delay.services.predictor import DelayPredictor


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_predictor(request: Request) -> DelayPredictor:
    return request.app.state.predictor
