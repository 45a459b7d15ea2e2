"""
Configuration management for FanSense.

Loads settings from environment variables with sensible defaults.
All configuration is centralized here to avoid magic strings scattered
throughout the codebase.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class DatabaseConfig:
    """Database configuration."""
    url: str = os.getenv('DATABASE_URL', 'sqlite:///fansense.db')

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith('sqlite')


@dataclass(frozen=True)
class DatasetConfig:
    """CSV dataset ingestion settings."""
    directory: str = os.getenv('DATASET_DIR', os.path.join('..', 'Dataset'))

    # Insert aggregated rows in chunks to bound memory
    batch_size: int = 1000


@dataclass(frozen=True)
class HistoryConfig:
    """Historical data endpoint limits."""
    default_limit: int = int(os.getenv('HISTORY_LIMIT', '1000'))
    max_limit: int = 10000


@dataclass(frozen=True)
class AnalyticsConfig:
    """Analytics window settings."""
    moving_average_window: int = int(os.getenv('MOVING_AVERAGE_WINDOW', '5'))
    forecast_steps: int = 1


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration."""
    database: DatabaseConfig
    dataset: DatasetConfig
    history: HistoryConfig
    analytics: AnalyticsConfig

    # Flask settings
    secret_key: str
    debug: bool


def load_config() -> AppConfig:
    """Load and validate all configuration."""
    return AppConfig(
        database=DatabaseConfig(),
        dataset=DatasetConfig(),
        history=HistoryConfig(),
        analytics=AnalyticsConfig(),
        secret_key=os.getenv('SECRET_KEY', 'dev-key-change-in-prod'),
        debug=os.getenv('FLASK_DEBUG', '0') == '1',
    )


# Singleton instance
config = load_config()
