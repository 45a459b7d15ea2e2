"""
Live sensor data API endpoints.

Provides endpoints for:
- POST /api/sensor-data - Device reports a reading
- GET /api/sensor-data  - Dashboard polls the latest reading

The latest reading is served from the app-owned LatestReadingCache.
Each POST is also appended to sensor_readings for the history charts.
"""

import logging
import math

from flask import Blueprint, jsonify, request, current_app

from fansense.cache import LatestReadingCache
from fansense.models import SensorReading, FanSpeed
from fansense.models.base import get_session

logger = logging.getLogger(__name__)

sensor_data_bp = Blueprint('sensor_data', __name__, url_prefix='/api/sensor-data')


def _latest_cache() -> LatestReadingCache:
    return current_app.extensions['latest_reading']


@sensor_data_bp.route('', methods=['POST'])
def post_sensor_data():
    """
    Accept a reading from the device.

    Body: {"temperature": float, "humidity": float?, "fanSpeed": str?}

    temperature is required. humidity defaults to 0 and fanSpeed to OFF.
    A database failure is logged but does not fail the request; the
    reading is still served from memory.
    """
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        return jsonify({'error': 'Invalid request body'}), 400

    try:
        temperature = float(body.get('temperature'))
    except (TypeError, ValueError):
        temperature = math.nan
    if not math.isfinite(temperature):
        return jsonify({'error': 'Invalid temperature value'}), 400

    try:
        humidity = float(body.get('humidity'))
    except (TypeError, ValueError):
        humidity = 0.0
    if not math.isfinite(humidity):
        humidity = 0.0

    fan_speed = str(body.get('fanSpeed') or FanSpeed.OFF.value)

    reading = _latest_cache().update(temperature, humidity, fan_speed)

    try:
        with get_session() as session:
            session.add(SensorReading(
                temperature=reading.temperature,
                humidity=reading.humidity,
                fan_speed=reading.fan_speed,
                timestamp=reading.timestamp,
            ))
    except Exception as e:
        logger.error(f'Failed to store sensor reading: {e}')

    return jsonify({
        'success': True,
        'message': 'Data received successfully',
        'data': reading.to_dict(),
    })


@sensor_data_bp.route('', methods=['GET'])
def get_sensor_data():
    """Return the most recent live reading."""
    return jsonify({
        'success': True,
        'data': _latest_cache().get().to_dict(),
    })
