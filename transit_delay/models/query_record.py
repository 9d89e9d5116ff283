"""QueryRecord model - one persisted prediction request and its result."""

import datetime as dt

from sqlalchemy import DateTime, Float, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from transit_delay.database import Base
from transit_delay.utils.timezone import utc_now_naive


class QueryRecord(Base):
    """
    A prediction request made by a user, together with the generated
    delay, confidence and weather placeholder.

    Rows are append-only: inserted once by the predict flow, never
    updated or deleted.
    """

    __tablename__ = "queries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Request
    route: Mapped[str] = mapped_column(Text, nullable=False)  # Route number/identifier
    stop: Mapped[str] = mapped_column(Text, nullable=False)  # Stop ID
    datetime: Mapped[dt.datetime] = mapped_column(DateTime, nullable=False)  # Requested time (UTC)

    # Prediction
    weather: Mapped[str | None] = mapped_column(Text)
    prediction: Mapped[int] = mapped_column(Integer, nullable=False)  # Delay in minutes, negative = early
    confidence: Mapped[float] = mapped_column(Float, nullable=False)  # 0-100

    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime,
        default=utc_now_naive,
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<QueryRecord {self.id} route={self.route} stop={self.stop} - {self.prediction}min>"
