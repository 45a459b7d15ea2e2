"""
SensorReading model - live readings posted by the device.

Append-only: every POST to /api/sensor-data adds one row. The dashboard
reads the most recent rows back as the "realtime" history series.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from sqlalchemy import String, Float, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from fansense.models.base import Base


class FanSpeed(str, Enum):
    """
    Discrete fan power levels reported by the device.

    Charts and analytics use the percent encoding.
    """
    OFF = 'OFF'
    LOW = 'LOW'
    MID = 'MID'
    MAX = 'MAX'

    @property
    def percent(self) -> int:
        return FAN_SPEED_PERCENT[self]

    @classmethod
    def to_percent(cls, label: Optional[str]) -> int:
        """
        Map a fan label to its percent value.

        Unrecognized labels are treated as MAX.
        """
        try:
            return cls((label or '').upper()).percent
        except ValueError:
            return FAN_SPEED_PERCENT[cls.MAX]


FAN_SPEED_PERCENT = {
    FanSpeed.OFF: 0,
    FanSpeed.LOW: 33,
    FanSpeed.MID: 66,
    FanSpeed.MAX: 100,
}


class SensorReading(Base):
    """One live (temperature, humidity, fan speed) observation."""

    __tablename__ = 'sensor_readings'

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    temperature: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        comment='Temperature in degrees Celsius'
    )

    humidity: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        default=0.0,
        comment='Relative humidity in percent'
    )

    fan_speed: Mapped[str] = mapped_column(
        String(8),
        nullable=False,
        default=FanSpeed.OFF.value,
        comment='Fan level label (OFF, LOW, MID, MAX)'
    )

    # Device-side observation time as received
    timestamp: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        index=True,
        comment='Record creation time'
    )

    def __repr__(self) -> str:
        return f'<SensorReading {self.temperature}C {self.humidity}% {self.fan_speed}>'

    @property
    def fan_speed_percent(self) -> int:
        return FanSpeed.to_percent(self.fan_speed)
