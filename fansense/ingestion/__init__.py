"""
Data ingestion module for FanSense.

Loads the historical CSV dataset, aggregates it into hourly buckets,
and stores it in the relational database.
"""

from fansense.ingestion.dataset_loader import aggregate_by_hour, load_dataset

__all__ = ['aggregate_by_hour', 'load_dataset']
