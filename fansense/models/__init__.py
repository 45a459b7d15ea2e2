"""
Database models for FanSense.

Two append-only tables:
1. sensor_readings  - live device posts
2. dataset_readings - hourly aggregated CSV history
"""

from fansense.models.base import Base, engine, SessionLocal, init_db, get_session
from fansense.models.sensor_reading import SensorReading, FanSpeed
from fansense.models.dataset_reading import DatasetReading

__all__ = [
    'Base',
    'engine',
    'SessionLocal',
    'init_db',
    'get_session',
    'SensorReading',
    'FanSpeed',
    'DatasetReading',
]
