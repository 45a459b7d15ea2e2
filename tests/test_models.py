"""Session scope and model helper tests."""

import threading

import pytest
from sqlalchemy import func, select

from fansense.models import FanSpeed, SensorReading
from fansense.models.base import SessionLocal, get_session


def _count() -> int:
    with SessionLocal() as session:
        return session.execute(select(func.count(SensorReading.id))).scalar_one()


def test_get_session_commits():
    with get_session() as session:
        session.add(SensorReading(temperature=25.0, humidity=50.0, fan_speed='LOW'))

    assert _count() == 1


def test_get_session_rolls_back_and_reraises():
    with pytest.raises(RuntimeError):
        with get_session() as session:
            session.add(SensorReading(temperature=25.0, humidity=50.0, fan_speed='LOW'))
            session.flush()
            raise RuntimeError('boom')

    assert _count() == 0


def test_rows_readable_after_session_closes():
    with get_session() as session:
        reading = SensorReading(temperature=27.0, humidity=61.0, fan_speed='MID')
        session.add(reading)

    assert reading.temperature == 27.0
    assert reading.fan_speed_percent == 66


def test_pooled_connection_usable_from_another_thread():
    # Checks a connection into the pool from this thread first
    assert _count() == 0

    results = []
    worker = threading.Thread(target=lambda: results.append(_count()))
    worker.start()
    worker.join()

    assert results == [0]


@pytest.mark.parametrize('label,expected', [('OFF', 0), ('low', 33), ('MID', 66), ('MAX', 100), ('turbo', 100)])
def test_to_percent(label, expected):
    assert FanSpeed.to_percent(label) == expected
