"""Dataset loader tests: CSV parsing, hourly aggregation, and inserts."""

from datetime import datetime

import pytest
from sqlalchemy import func, select

from fansense.ingestion.dataset_loader import (
    aggregate_by_hour,
    load_dataset,
    parse_csv,
    parse_datetime,
    room_and_fan_from_filename,
    rows_to_readings,
)
from fansense.models import DatasetReading
from fansense.models.base import SessionLocal


CSV_TEXT = """S.No.,datetime,temperature,humidity,mode,speed,opTime,eSpent,eSaved
1,01/04/2021 0:01,25.0,60,1,33,1,0.5,0.1
2,01/04/2021 0:02,26.0,62,1,33,1,0.5,0.1
3,01/04/2021 0:03,27.0,64,2,66,1,0.5,0.2
4,01/04/2021 1:00,30.0,70,3,100,1,1.0,0.0
5,,29,70,3,100,1,1,0
"""


@pytest.fixture
def dataset_dir(tmp_path):
    (tmp_path / 'Bedroom_Fan_2.csv').write_text(CSV_TEXT, encoding='utf-8')
    (tmp_path / 'notes.txt').write_text('ignored', encoding='utf-8')
    return tmp_path


def _reading(minute, mode=1, speed=33, temperature=25.0, hour=0):
    return {
        'recorded_at': datetime(2021, 4, 1, hour, minute),
        'temperature': temperature,
        'humidity': 60.0,
        'mode': mode,
        'speed': speed,
        'op_time': 1,
        'e_spent': 0.5,
        'e_saved': 0.1,
    }


class TestParsing:

    def test_parse_csv(self, dataset_dir):
        rows = parse_csv(dataset_dir / 'Bedroom_Fan_2.csv')

        assert len(rows) == 5
        assert rows[0]['datetime'] == '01/04/2021 0:01'
        assert rows[0]['temperature'] == '25.0'
        assert rows[4]['datetime'] == ''

    def test_parse_csv_pads_short_rows(self, tmp_path):
        path = tmp_path / 'short.csv'
        path.write_text('a,b,c\n1,2\n', encoding='utf-8')

        assert parse_csv(path) == [{'a': '1', 'b': '2', 'c': ''}]

    def test_parse_datetime(self):
        assert parse_datetime('01/04/2021 13:45') == datetime(2021, 4, 1, 13, 45)
        assert parse_datetime('15/12/2020 0:05') == datetime(2020, 12, 15, 0, 5)

    @pytest.mark.parametrize('text', [
        '01/04/2021 0:01:30',
        '01/04/2021 0:01 AM',
        ' 01/04/2021   0:01 ',
    ])
    def test_parse_datetime_ignores_seconds_and_trailing_text(self, text):
        assert parse_datetime(text) == datetime(2021, 4, 1, 0, 1)

    def test_seconds_keep_rows_in_their_own_hour(self):
        readings = rows_to_readings([
            {'datetime': '01/04/2021 0:01:30', 'temperature': '25'},
            {'datetime': '01/04/2021 0:02:45', 'temperature': '27'},
        ])
        rows = aggregate_by_hour(readings, 'Lounge', '1')

        assert len(rows) == 1
        assert rows[0]['recorded_at'] == datetime(2021, 4, 1, 0, 2)
        assert rows[0]['temperature'] == 26.0

    @pytest.mark.parametrize('text', ['', '   ', None, 'not a date', '2021-04-01', '31/02/2021 10:00', '01/04/2021'])
    def test_parse_datetime_falls_back_to_now(self, text):
        before = datetime.now()
        parsed = parse_datetime(text)
        assert before <= parsed <= datetime.now()

    def test_rows_to_readings_drops_blank_datetimes(self):
        readings = rows_to_readings([
            {'datetime': '01/04/2021 0:01', 'temperature': 'x', 'speed': '66'},
            {'datetime': '', 'temperature': '30'},
        ])

        assert len(readings) == 1
        assert readings[0]['temperature'] == 0.0
        assert readings[0]['speed'] == 66
        assert readings[0]['humidity'] == 0.0

    @pytest.mark.parametrize('filename,expected', [
        ('Bedroom_Fan_2.csv', ('Bedroom', '2')),
        ('Drawingroom_Fan_3.csv', ('Drawingroom', '3')),
        ('Lounge.csv', ('Lounge', '1')),
    ])
    def test_room_and_fan_from_filename(self, filename, expected):
        assert room_and_fan_from_filename(filename) == expected


class TestAggregateByHour:

    def test_hour_buckets(self, dataset_dir):
        readings = rows_to_readings(parse_csv(dataset_dir / 'Bedroom_Fan_2.csv'))
        rows = aggregate_by_hour(readings, 'Bedroom', '2')

        assert len(rows) == 2
        first, second = rows

        assert first['recorded_at'] == datetime(2021, 4, 1, 0, 2)
        assert first['temperature'] == 26.0
        assert first['humidity'] == 62.0
        assert first['mode'] == 1
        assert first['speed'] == 33
        assert first['op_time'] == 3
        assert first['e_spent'] == 1.5
        assert first['e_saved'] == 0.4
        assert first['room_type'] == 'Bedroom'
        assert first['fan_number'] == '2'
        assert first['source'] == 'dataset'

        assert second['recorded_at'] == datetime(2021, 4, 1, 1, 0)
        assert second['temperature'] == 30.0
        assert second['speed'] == 100

    def test_mode_tie_goes_to_first_value_seen(self):
        readings = [_reading(1, mode=2, speed=66), _reading(2, mode=1, speed=33)]
        rows = aggregate_by_hour(readings, 'Lounge', '1')

        assert rows[0]['mode'] == 2
        assert rows[0]['speed'] == 66

    def test_sorted_ascending(self):
        readings = [_reading(5, hour=3), _reading(5, hour=1), _reading(5, hour=2)]
        rows = aggregate_by_hour(readings, 'Lounge', '1')

        assert [r['recorded_at'].hour for r in rows] == [1, 2, 3]

    def test_empty(self):
        assert aggregate_by_hour([], 'Lounge', '1') == []


class TestLoadDataset:

    def test_inserts_hourly_rows(self, dataset_dir):
        assert load_dataset(str(dataset_dir)) == 2

        with SessionLocal() as session:
            rows = session.execute(
                select(DatasetReading).order_by(DatasetReading.recorded_at)
            ).scalars().all()

        assert [r.temperature for r in rows] == [26.0, 30.0]
        assert {r.room_type for r in rows} == {'Bedroom'}

    def test_clear_replaces_existing(self, dataset_dir):
        load_dataset(str(dataset_dir))
        load_dataset(str(dataset_dir), clear=True)

        with SessionLocal() as session:
            count = session.execute(select(func.count(DatasetReading.id))).scalar_one()

        assert count == 2

    def test_missing_directory(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_dataset(str(tmp_path / 'missing'))
