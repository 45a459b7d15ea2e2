"""
DatasetReading model - hourly aggregated historical readings.

Rows are produced by the dataset loader, one per (file, calendar hour).
This is the series the analytics endpoint consumes, ordered by
recorded_at ascending.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import String, Float, Integer, DateTime, Index
from sqlalchemy.orm import Mapped, mapped_column

from fansense.models.base import Base


class DatasetReading(Base):
    """
    One hourly bucket of dataset readings for a single room fan.

    temperature/humidity are hourly means, mode/speed the most common
    value in the hour, op_time/e_spent/e_saved hourly totals.
    """

    __tablename__ = 'dataset_readings'

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    room_type: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        comment='Room name from the CSV filename (Bedroom, Lounge, ...)'
    )

    fan_number: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
        default='1',
    )

    # Timestamp of the middle raw record of the hour
    recorded_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        index=True,
    )

    temperature: Mapped[float] = mapped_column(Float, nullable=False)
    humidity: Mapped[float] = mapped_column(Float, nullable=False)

    mode: Mapped[int] = mapped_column(Integer, default=0)
    speed: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        comment='Fan speed percent'
    )

    op_time: Mapped[int] = mapped_column(Integer, default=0, comment='Operating time')
    e_spent: Mapped[float] = mapped_column(Float, default=0.0, comment='Energy spent')
    e_saved: Mapped[float] = mapped_column(Float, default=0.0, comment='Energy saved')

    source: Mapped[str] = mapped_column(String(16), default='dataset')

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index('ix_dataset_readings_room_time', 'room_type', 'fan_number', 'recorded_at'),
    )

    def __repr__(self) -> str:
        return f'<DatasetReading {self.room_type}/{self.fan_number} @ {self.recorded_at}>'
