"""
Analytics module for FanSense.

Pure NumPy statistics over chronological climate series:
- Descriptive summaries (mean, median, spread)
- Diagnostic correlations, trends and heat index
- Predictive forecasts, moving averages and fan speed recommendations
"""

from fansense.analytics.engine import (
    DescriptiveStats,
    descriptive_stats,
    correlation,
    trend,
    heat_index,
    forecast_next,
    moving_average,
    optimal_fan_speed,
    build_analytics,
)

__all__ = [
    'DescriptiveStats',
    'descriptive_stats',
    'correlation',
    'trend',
    'heat_index',
    'forecast_next',
    'moving_average',
    'optimal_fan_speed',
    'build_analytics',
]
