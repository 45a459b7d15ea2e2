"""LatestReadingCache tests."""

from fansense.cache import LatestReadingCache, LiveReading


def test_initial_reading_is_zeroed():
    reading = LatestReadingCache().get()

    assert reading.temperature == 0
    assert reading.humidity == 0
    assert reading.fan_speed == 'OFF'


def test_update_replaces_reading():
    cache = LatestReadingCache()
    cache.update(27.5, 61.0, 'mid')

    reading = cache.get()
    assert reading.temperature == 27.5
    assert reading.humidity == 61.0
    assert reading.fan_speed == 'MID'


def test_update_returns_stored_reading():
    cache = LatestReadingCache()
    returned = cache.update(30.0, 70.0, 'MAX')

    assert returned is cache.get()


def test_to_dict_shape():
    data = LiveReading(temperature=25.0, humidity=50.0, fan_speed='LOW').to_dict()

    assert set(data) == {'temperature', 'humidity', 'fanSpeed', 'timestamp'}
    assert data['fanSpeed'] == 'LOW'
    assert isinstance(data['timestamp'], str)


def test_stats():
    cache = LatestReadingCache()
    assert cache.stats['last_update'] is None

    cache.update(25.0, 50.0, 'LOW')
    cache.get()

    stats = cache.stats
    assert stats['updates'] == 1
    assert stats['reads'] == 1
    assert stats['last_update'] is not None


def test_caches_are_independent():
    first = LatestReadingCache()
    second = LatestReadingCache()
    first.update(31.0, 80.0, 'MAX')

    assert second.get().temperature == 0
