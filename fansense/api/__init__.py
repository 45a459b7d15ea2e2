"""
API module for FanSense.

Provides REST endpoints for:
- Live sensor readings
- Historical time-series data
- Analytics
"""

from fansense.api.sensor_data import sensor_data_bp
from fansense.api.historical_data import historical_data_bp
from fansense.api.analytics import analytics_bp

__all__ = ['sensor_data_bp', 'historical_data_bp', 'analytics_bp']
