"""
FanSense Backend Package.

IoT fan and climate dashboard API built with Flask, SQLAlchemy, and NumPy.

Modules:
    api/         REST endpoints for live sensor data, history, and analytics
    models/      SQLAlchemy ORM models (SensorReading, DatasetReading)
    ingestion/   CSV dataset loader with hourly aggregation
    analytics/   NumPy-based descriptive, diagnostic and predictive statistics
    cache.py     Thread-safe holder for the latest live sensor reading
    config.py    Centralized configuration from environment variables
"""

__version__ = '1.0.0'
