"""
Historical data API endpoint.

Provides:
- GET /api/historical-data - Time-series rows for the dashboard charts

Query parameters:
- source: realtime | dataset | all (default all)
- limit: max rows to return (default from config)

Rows from both sources share one shape so the charts can plot them
together:
    {time, timestamp, temperature, humidity, fanSpeed, source}
"""

import logging
from datetime import datetime
from typing import List, Optional

from flask import Blueprint, jsonify, request
from sqlalchemy import select

from fansense.config import config
from fansense.models import SensorReading, DatasetReading
from fansense.models.base import SessionLocal

logger = logging.getLogger(__name__)

historical_data_bp = Blueprint('historical_data', __name__, url_prefix='/api/historical-data')

SOURCES = ('realtime', 'dataset', 'all')


def _row(when: datetime, temperature: float, humidity: float, fan_speed: int, source: str) -> dict:
    return {
        'time': when.strftime('%H:%M'),
        'timestamp': when.isoformat(),
        'temperature': temperature,
        'humidity': humidity,
        'fanSpeed': fan_speed,
        'source': source,
    }


def fetch_realtime(limit: int) -> List[dict]:
    """Most recent live readings, newest first, fan labels as percent."""
    with SessionLocal() as session:
        stmt = (
            select(SensorReading)
            .order_by(SensorReading.created_at.desc(), SensorReading.id.desc())
            .limit(limit)
        )
        readings = session.execute(stmt).scalars().all()

    return [
        _row(r.created_at, r.temperature, r.humidity, r.fan_speed_percent, 'realtime')
        for r in readings
    ]


def fetch_dataset(limit: Optional[int]) -> List[dict]:
    """Dataset readings, newest first. limit=None returns every row."""
    with SessionLocal() as session:
        stmt = select(DatasetReading).order_by(DatasetReading.recorded_at.desc())
        if limit is not None:
            stmt = stmt.limit(limit)
        readings = session.execute(stmt).scalars().all()

    return [
        _row(r.recorded_at, r.temperature, r.humidity, r.speed or 0, 'dataset')
        for r in readings
    ]


@historical_data_bp.route('', methods=['GET'])
def get_historical_data():
    """
    Get historical readings by source.

    With source=dataset and no explicit limit, all dataset rows are
    returned. For source=all, rows are merged newest first and truncated
    to limit; count reports the merged total before truncation.
    """
    source = request.args.get('source', 'all')
    if source not in SOURCES:
        return jsonify({'error': f'source must be one of {", ".join(SOURCES)}'}), 400

    limit_arg = request.args.get('limit')
    try:
        limit = int(limit_arg) if limit_arg is not None else config.history.default_limit
    except ValueError:
        return jsonify({'error': 'limit must be an integer'}), 400
    limit = max(0, min(limit, config.history.max_limit))

    try:
        if source == 'realtime':
            data = fetch_realtime(limit)
            return jsonify({'success': True, 'data': data, 'count': len(data)})

        if source == 'dataset':
            data = fetch_dataset(limit if limit_arg is not None else None)
            return jsonify({'success': True, 'data': data, 'count': len(data)})

        data = fetch_realtime(limit) + fetch_dataset(limit)
        data.sort(key=lambda row: row['timestamp'], reverse=True)

        return jsonify({
            'success': True,
            'data': data[:limit],
            'count': len(data),
        })

    except Exception as e:
        logger.error(f'Error fetching historical data: {e}')
        return jsonify({'error': str(e) or 'Failed to fetch historical data'}), 500
