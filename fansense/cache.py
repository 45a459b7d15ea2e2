"""
In-memory holder for the most recent live sensor reading.

The device posts a reading every few seconds and the dashboard polls
GET /api/sensor-data far more often. Serving that poll from memory keeps
the gauges responsive even when the database is slow or unavailable.

One LatestReadingCache is created per Flask app and stored in
app.extensions; the POST handler is its only writer.
"""

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone

from fansense.models.sensor_reading import FanSpeed

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class LiveReading:
    """A single live observation as reported by the device."""
    temperature: float = 0.0
    humidity: float = 0.0
    fan_speed: str = FanSpeed.OFF.value
    timestamp: datetime = field(default_factory=_utc_now)

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict for API responses."""
        return {
            'temperature': self.temperature,
            'humidity': self.humidity,
            'fanSpeed': self.fan_speed,
            'timestamp': self.timestamp.isoformat(),
        }


class LatestReadingCache:
    """
    Thread-safe, single-writer cache of the latest live reading.

    Starts with a zeroed reading (fan OFF) until the device reports.
    """

    def __init__(self):
        self._reading = LiveReading()
        self._lock = threading.RLock()

        # Statistics
        self._updates = 0
        self._reads = 0

    def get(self) -> LiveReading:
        """Return the most recent reading."""
        with self._lock:
            self._reads += 1
            return self._reading

    def update(
        self,
        temperature: float,
        humidity: float,
        fan_speed: str,
    ) -> LiveReading:
        """
        Replace the cached reading.

        The fan label is stored upper-cased; the timestamp is set here.
        """
        reading = LiveReading(
            temperature=temperature,
            humidity=humidity,
            fan_speed=fan_speed.upper(),
        )

        with self._lock:
            self._reading = reading
            self._updates += 1

        logger.debug(
            f'Latest reading: {temperature}C {humidity}% fan={reading.fan_speed}'
        )
        return reading

    @property
    def stats(self) -> dict:
        """Get cache statistics."""
        with self._lock:
            return {
                'updates': self._updates,
                'reads': self._reads,
                'last_update': self._reading.timestamp.isoformat() if self._updates else None,
            }
