"""
Dataset loader - CSV fan logs into hourly dataset_readings rows.

Each CSV in the dataset directory holds per-minute readings for one room
fan, named like ``Bedroom_Fan_2.csv``. Minute data is far more than the
dashboard needs, so rows are collapsed into calendar-hour buckets before
insert:

- temperature, humidity: hourly mean (2 dp)
- mode, speed: most common value in the hour
- op_time, e_spent, e_saved: hourly totals
- recorded_at: datetime of the middle raw record of the hour

Usage:
    python -m fansense.ingestion.dataset_loader --dir ../Dataset

Expected CSV header:
    S.No.,datetime,temperature,humidity,mode,speed,opTime,eSpent,eSaved
"""

import argparse
import csv
import logging
import sys
from collections import Counter, OrderedDict
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from sqlalchemy import delete
from sqlalchemy.orm import Session

from fansense.config import config
from fansense.models import DatasetReading, init_db
from fansense.models.base import SessionLocal

logger = logging.getLogger(__name__)


# -------------------------------------------------------------------------
# Parsing
# -------------------------------------------------------------------------

def parse_csv(path: Path) -> List[Dict[str, str]]:
    """
    Read a CSV file into a list of row dicts keyed by header.

    Values are stripped; short rows are padded with empty strings.
    """
    rows = []
    with open(path, 'r', encoding='utf-8', newline='') as f:
        reader = csv.reader(f)
        header = None
        for line in reader:
            if not line or not any(cell.strip() for cell in line):
                continue
            if header is None:
                header = [h.strip() for h in line]
                continue
            values = [v.strip() for v in line]
            rows.append({
                name: values[i] if i < len(values) else ''
                for i, name in enumerate(header)
            })
    return rows


def parse_datetime(text: Optional[str]) -> datetime:
    """
    Parse 'DD/MM/YYYY H:MM' into a naive datetime.

    Only day, month, year, hour and minute are read; seconds or trailing
    text after them are ignored. Falls back to the current time when any
    of those parts is missing or not a valid date.
    """
    if not text or not text.strip():
        return datetime.now()

    parts = text.split()
    if len(parts) >= 2:
        date_parts = parts[0].split('/')
        time_parts = parts[1].split(':')
        if len(date_parts) >= 3 and len(time_parts) >= 2:
            try:
                day, month, year = (int(p) for p in date_parts[:3])
                hour, minute = (int(p) for p in time_parts[:2])
                return datetime(year, month, day, hour, minute)
            except ValueError:
                pass

    logger.warning(f'Error parsing date: {text!r}, using current date')
    return datetime.now()


def _to_float(value: Optional[str]) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _to_int(value: Optional[str]) -> int:
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return 0


def room_and_fan_from_filename(filename: str) -> Tuple[str, str]:
    """'Bedroom_Fan_2.csv' -> ('Bedroom', '2'). Fan number defaults to '1'."""
    parts = Path(filename).stem.split('_')
    room_type = parts[0]
    fan_number = parts[2] if len(parts) > 2 and parts[2] else '1'
    return room_type, fan_number


def rows_to_readings(rows: Iterable[Dict[str, str]]) -> List[dict]:
    """
    Convert raw CSV rows into typed reading dicts.

    Rows without a datetime are dropped; numeric fields default to 0.
    """
    readings = []
    for row in rows:
        raw_dt = row.get('datetime', '')
        if not raw_dt or not raw_dt.strip():
            continue

        readings.append({
            'recorded_at': parse_datetime(raw_dt),
            'temperature': _to_float(row.get('temperature')),
            'humidity': _to_float(row.get('humidity')),
            'mode': _to_int(row.get('mode')),
            'speed': _to_int(row.get('speed')),
            'op_time': _to_int(row.get('opTime')),
            'e_spent': _to_float(row.get('eSpent')),
            'e_saved': _to_float(row.get('eSaved')),
        })
    return readings


# -------------------------------------------------------------------------
# Hourly aggregation
# -------------------------------------------------------------------------

def _most_common(values: Iterable[int]) -> int:
    # Counter keeps insertion order, so ties go to the first value seen
    return Counter(values).most_common(1)[0][0]


def aggregate_by_hour(
    readings: List[dict],
    room_type: str,
    fan_number: str,
) -> List[dict]:
    """
    Collapse readings into one row per calendar hour.

    Returns rows sorted by recorded_at ascending, ready for insert.
    """
    groups: 'OrderedDict[datetime, List[dict]]' = OrderedDict()
    for reading in readings:
        hour_key = reading['recorded_at'].replace(minute=0, second=0, microsecond=0)
        groups.setdefault(hour_key, []).append(reading)

    aggregated = []
    for group in groups.values():
        count = len(group)
        avg_temp = sum(r['temperature'] for r in group) / count
        avg_humidity = sum(r['humidity'] for r in group) / count

        aggregated.append({
            'room_type': room_type,
            'fan_number': fan_number,
            'recorded_at': group[count // 2]['recorded_at'],
            'temperature': round(avg_temp, 2),
            'humidity': round(avg_humidity, 2),
            'mode': _most_common(r['mode'] for r in group),
            'speed': _most_common(r['speed'] for r in group),
            'op_time': sum(r['op_time'] for r in group),
            'e_spent': round(sum(r['e_spent'] for r in group), 2),
            'e_saved': round(sum(r['e_saved'] for r in group), 2),
            'source': 'dataset',
        })

    aggregated.sort(key=lambda row: row['recorded_at'])
    return aggregated


# -------------------------------------------------------------------------
# Loading
# -------------------------------------------------------------------------

def _batch_insert(rows: List[dict], session: Session, batch_size: int) -> int:
    """Bulk insert rows in chunks of batch_size. Returns rows inserted."""
    inserted = 0
    for start in range(0, len(rows), batch_size):
        batch = rows[start:start + batch_size]
        session.execute(DatasetReading.__table__.insert(), batch)
        inserted += len(batch)
    return inserted


def load_file(path: Path, session: Session, batch_size: Optional[int] = None) -> int:
    """Parse, aggregate and insert one CSV file. Returns rows inserted."""
    batch_size = batch_size or config.dataset.batch_size
    room_type, fan_number = room_and_fan_from_filename(path.name)

    readings = rows_to_readings(parse_csv(path))
    logger.info(f'  Parsed {len(readings)} valid records from {path.name}')

    rows = aggregate_by_hour(readings, room_type, fan_number)
    if readings:
        reduction = round((1 - len(rows) / len(readings)) * 100)
        logger.info(f'  Aggregated to {len(rows)} hourly records (reduced by {reduction}%)')

    inserted = _batch_insert(rows, session, batch_size)
    logger.info(f'  Inserted {inserted} aggregated records from {path.name}')
    return inserted


def load_dataset(
    directory: Optional[str] = None,
    session_factory: Callable[[], Session] = SessionLocal,
    clear: bool = False,
) -> int:
    """
    Load every CSV in the dataset directory.

    Args:
        directory: Folder containing the CSV files (config default if None)
        session_factory: Session constructor, overridable for tests
        clear: Delete existing dataset rows before loading

    Returns:
        Total count of hourly rows inserted.
    """
    dataset_dir = Path(directory or config.dataset.directory)
    if not dataset_dir.is_dir():
        raise FileNotFoundError(f'Dataset directory not found: {dataset_dir}')

    files = sorted(p for p in dataset_dir.iterdir() if p.suffix.lower() == '.csv')
    logger.info(f'Found {len(files)} CSV files')

    total = 0
    with session_factory() as session:
        try:
            if clear:
                result = session.execute(delete(DatasetReading))
                logger.info(f'Cleared {result.rowcount} existing dataset records')

            for path in files:
                logger.info(f'Processing {path.name}...')
                total += load_file(path, session)

            session.commit()
        except Exception:
            session.rollback()
            raise

    logger.info(f'Total records inserted: {total}')
    return total


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line entry point."""
    parser = argparse.ArgumentParser(description='Load fan dataset CSVs into the database.')
    parser.add_argument('--dir', default=config.dataset.directory, help='Dataset directory')
    parser.add_argument('--clear', action='store_true', help='Delete existing dataset rows first')
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if config.debug else logging.INFO,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )

    init_db()
    try:
        load_dataset(args.dir, clear=args.clear)
    except Exception as e:
        logger.error(f'Error loading dataset: {e}')
        return 1

    logger.info('Dataset loading completed!')
    return 0


if __name__ == '__main__':
    sys.exit(main())
