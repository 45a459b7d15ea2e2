"""
Analytics API endpoint.

Provides:
- GET /api/analytics - Descriptive, diagnostic and predictive statistics

Analytics are computed over the dataset readings only, oldest first so
trends and forecasts run forward in time. Nothing is persisted; every
request recomputes from the stored rows.
"""

import logging
import time

from flask import Blueprint, jsonify
from sqlalchemy import select

from fansense.analytics import build_analytics
from fansense.config import config
from fansense.models import DatasetReading
from fansense.models.base import SessionLocal

logger = logging.getLogger(__name__)

analytics_bp = Blueprint('analytics', __name__, url_prefix='/api/analytics')


@analytics_bp.route('', methods=['GET'])
def get_analytics():
    """
    Compute the analytics payload from all dataset readings.

    Returns analytics=null with a message when no dataset rows exist.
    """
    start_time = time.perf_counter()

    try:
        with SessionLocal() as session:
            stmt = select(
                DatasetReading.temperature,
                DatasetReading.humidity,
                DatasetReading.speed,
            ).order_by(DatasetReading.recorded_at.asc(), DatasetReading.id.asc())
            rows = session.execute(stmt).all()

        temperatures = [row.temperature for row in rows]
        humidities = [row.humidity for row in rows]
        fan_speeds = [row.speed or 0 for row in rows]

        analytics = build_analytics(
            temperatures,
            humidities,
            fan_speeds,
            window=config.analytics.moving_average_window,
            steps_ahead=config.analytics.forecast_steps,
        )

    except Exception as e:
        logger.error(f'Analytics error: {e}')
        return jsonify({'error': str(e) or 'Failed to calculate analytics'}), 500

    if analytics is None:
        return jsonify({
            'success': True,
            'message': 'No dataset data available for analytics',
            'analytics': None,
        })

    query_time_ms = (time.perf_counter() - start_time) * 1000
    logger.debug(f'Analytics over {len(rows)} rows in {query_time_ms:.1f}ms')

    return jsonify({
        'success': True,
        'analytics': analytics,
    })
