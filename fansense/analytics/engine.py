"""
Descriptive, diagnostic and predictive statistics for climate readings.

Turns chronological series of temperature, humidity and fan speed samples
into the analytics payload the dashboard renders:

1. Descriptive: mean, median, spread and extremes per series
2. Diagnostic: Pearson correlations, least-squares trends, heat index
3. Predictive: one-step linear forecast, moving average, and a rule-based
   optimal fan speed for the forecasted conditions

Every function here is pure. Degenerate input (empty series, mismatched
lengths, constant series, too few points) maps to a fixed fallback value
instead of an exception, so route handlers can call straight through.

Series are usually hourly buckets from the dataset loader, which is why
trends are reported per 1000 samples.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

logger = logging.getLogger(__name__)

# Trend slopes are per sample; scale them to something readable
TREND_SCALE = 1000

# Below these the heat index equals the air temperature
HEAT_INDEX_MIN_TEMP_C = 27
HEAT_INDEX_MIN_HUMIDITY = 40

# Rothfusz-style regression coefficients (Celsius form)
_HI_C1 = -8.78469475556
_HI_C2 = 1.61139411
_HI_C3 = 2.33854883889
_HI_C4 = -0.14611605
_HI_C5 = -0.012308094
_HI_C6 = -0.0164248277778
_HI_C7 = 0.002211732
_HI_C8 = 0.00072546
_HI_C9 = -0.000003582


@dataclass(frozen=True)
class DescriptiveStats:
    """Summary statistics for one series. Floats are rounded to 2 dp."""
    mean: float = 0.0
    median: float = 0.0
    min: float = 0.0
    max: float = 0.0
    std_dev: float = 0.0
    variance: float = 0.0
    count: int = 0

    def to_dict(self) -> dict:
        """Convert to the JSON shape consumed by the dashboard."""
        return {
            'mean': self.mean,
            'median': self.median,
            'min': self.min,
            'max': self.max,
            'stdDev': self.std_dev,
            'variance': self.variance,
            'count': self.count,
        }


def _as_array(series: Sequence[float]) -> np.ndarray:
    return np.asarray(series, dtype=np.float64)


def _round(value: float, digits: int = 2) -> float:
    # Adding 0.0 turns -0.0 into 0.0
    return round(float(value), digits) + 0.0


def _last_or_zero(values: np.ndarray) -> float:
    return float(values[-1]) if len(values) else 0.0


def _least_squares(values: np.ndarray) -> Optional[Tuple[float, float]]:
    """
    Fit value = slope * index + intercept with the closed-form sums.

    Returns None when the fit is undefined (fewer than 2 points).
    """
    n = len(values)
    if n < 2:
        return None

    x = np.arange(n, dtype=np.float64)
    sum_x = x.sum()
    sum_y = values.sum()
    sum_xy = np.dot(x, values)
    sum_x2 = np.dot(x, x)

    denominator = n * sum_x2 - sum_x * sum_x
    if denominator == 0:
        return None

    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n
    return float(slope), float(intercept)


# -------------------------------------------------------------------------
# Descriptive analytics
# -------------------------------------------------------------------------

def descriptive_stats(series: Sequence[float]) -> DescriptiveStats:
    """
    Compute mean, median, min, max, population variance and std dev.

    An empty series yields all zeros with count 0.
    """
    values = _as_array(series)
    if len(values) == 0:
        return DescriptiveStats()

    variance = np.var(values)  # ddof=0: population variance

    return DescriptiveStats(
        mean=_round(np.mean(values)),
        median=_round(np.median(values)),
        min=_round(np.min(values)),
        max=_round(np.max(values)),
        std_dev=_round(np.sqrt(variance)),
        variance=_round(variance),
        count=int(len(values)),
    )


# -------------------------------------------------------------------------
# Diagnostic analytics
# -------------------------------------------------------------------------

def correlation(series_x: Sequence[float], series_y: Sequence[float]) -> float:
    """
    Pearson correlation coefficient between two equal-length series.

    Returns 0 for mismatched lengths, empty input, or when either series
    is constant. The result is unrounded; callers round for display.
    """
    x = _as_array(series_x)
    y = _as_array(series_y)

    if len(x) != len(y) or len(x) == 0:
        if len(x) != len(y):
            logger.debug(f'Correlation length mismatch: {len(x)} vs {len(y)}')
        return 0.0

    n = len(x)
    sum_x = x.sum()
    sum_y = y.sum()
    sum_xy = np.dot(x, y)
    sum_x2 = np.dot(x, x)
    sum_y2 = np.dot(y, y)

    numerator = n * sum_xy - sum_x * sum_y
    # Float cancellation can push a constant series slightly below zero
    spread = (n * sum_x2 - sum_x * sum_x) * (n * sum_y2 - sum_y * sum_y)
    if spread <= 0:
        return 0.0

    r = numerator / np.sqrt(spread)
    return float(np.clip(r, -1.0, 1.0))


def trend(series: Sequence[float]) -> float:
    """
    Least-squares slope over sample index, scaled by 1000, 4 dp.

    Returns 0 for fewer than 2 samples.
    """
    fit = _least_squares(_as_array(series))
    if fit is None:
        return 0.0

    slope, _ = fit
    return _round(slope * TREND_SCALE, 4)


def heat_index(temperature_c: float, humidity_pct: float) -> float:
    """
    Apparent temperature from air temperature and relative humidity.

    Below 27°C or 40% humidity the temperature is returned unchanged.
    """
    t = temperature_c
    h = humidity_pct
    if t < HEAT_INDEX_MIN_TEMP_C or h < HEAT_INDEX_MIN_HUMIDITY:
        return t

    hi = (
        _HI_C1 +
        _HI_C2 * t +
        _HI_C3 * h +
        _HI_C4 * t * h +
        _HI_C5 * t * t +
        _HI_C6 * h * h +
        _HI_C7 * t * t * h +
        _HI_C8 * t * h * h +
        _HI_C9 * t * t * h * h
    )
    return _round(hi)


# -------------------------------------------------------------------------
# Predictive analytics
# -------------------------------------------------------------------------

def forecast_next(series: Sequence[float], steps_ahead: int = 1) -> float:
    """
    Extrapolate the least-squares line steps_ahead samples past the end.

    With fewer than 2 samples, returns the last sample (0 if empty).
    """
    values = _as_array(series)
    fit = _least_squares(values)
    if fit is None:
        return _last_or_zero(values)

    slope, intercept = fit
    target_index = len(values) - 1 + steps_ahead
    return _round(intercept + slope * target_index)


def moving_average(series: Sequence[float], window: int = 5) -> float:
    """
    Mean of the last `window` samples.

    With fewer than `window` samples, returns the last sample (0 if empty).
    """
    values = _as_array(series)
    if len(values) < window or window <= 0:
        return _last_or_zero(values)

    return _round(np.mean(values[-window:]))


def optimal_fan_speed(temperature_c: float, humidity_pct: float) -> int:
    """
    Classify conditions into a fan speed percent (0, 33, 66 or 100).

    Rules are checked in order; the first match wins.
    """
    if temperature_c <= 25:
        return 0
    if temperature_c <= 27 and humidity_pct <= 60:
        return 33
    if temperature_c <= 27 or (temperature_c <= 29 and humidity_pct <= 70):
        return 66
    return 100


# -------------------------------------------------------------------------
# Aggregate report
# -------------------------------------------------------------------------

def build_analytics(
    temperature: Sequence[float],
    humidity: Sequence[float],
    fan_speed: Sequence[float],
    latest: Optional[Tuple[float, float]] = None,
    realtime_count: int = 0,
    window: int = 5,
    steps_ahead: int = 1,
) -> Optional[dict]:
    """
    Compose the full analytics payload from three parallel series.

    Args:
        temperature: Temperature samples, oldest first.
        humidity: Humidity samples, oldest first.
        fan_speed: Fan speed percent samples, oldest first.
        latest: Most recent (temperature, humidity) pair used for the heat
            index. Defaults to the last sample of each series.
        realtime_count: How many samples came from live device posts.
        window: Moving average window.
        steps_ahead: How far past the last sample to forecast.

    Returns:
        Nested dict with descriptive, diagnostic, predictive and dataPoints
        sections, or None when there is no temperature data at all.
    """
    if len(temperature) == 0:
        return None

    if latest is None:
        latest = (
            float(temperature[-1]),
            float(humidity[-1]) if len(humidity) else 0.0,
        )
    current_temp, current_humidity = latest

    predicted_temp = forecast_next(temperature, steps_ahead)
    predicted_humidity = forecast_next(humidity, steps_ahead)

    total = len(temperature)

    return {
        'descriptive': {
            'temperature': descriptive_stats(temperature).to_dict(),
            'humidity': descriptive_stats(humidity).to_dict(),
            'fanSpeed': descriptive_stats(fan_speed).to_dict(),
        },
        'diagnostic': {
            'correlations': {
                'tempHumidity': _round(correlation(temperature, humidity), 4),
                'tempFanSpeed': _round(correlation(temperature, fan_speed), 4),
                'humidityFanSpeed': _round(correlation(humidity, fan_speed), 4),
            },
            'trends': {
                'temperature': trend(temperature),
                'humidity': trend(humidity),
            },
            'heatIndex': heat_index(current_temp, current_humidity),
        },
        'predictive': {
            'forecast': {
                'temperature': predicted_temp,
                'humidity': predicted_humidity,
            },
            'movingAverages': {
                'temperature': moving_average(temperature, window),
                'humidity': moving_average(humidity, window),
            },
            'optimalFanSpeed': optimal_fan_speed(predicted_temp, predicted_humidity),
        },
        'dataPoints': {
            'total': total,
            'realtime': realtime_count,
            'dataset': total - realtime_count,
        },
    }
