"""Shared fixtures: temporary SQLite database and Flask test client."""

import os
import shutil
import tempfile

# Must be set before fansense.config is imported
_TMP_DIR = tempfile.mkdtemp(prefix='fansense-test-')
os.environ['DATABASE_URL'] = f'sqlite:///{os.path.join(_TMP_DIR, "test.db")}'

import pytest

import fansense.models  # noqa: F401  registers tables on Base.metadata
from fansense.models.base import Base, engine


@pytest.fixture(autouse=True)
def fresh_schema():
    """Recreate every table so each test starts empty."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def app():
    from fansense.app import create_app

    app = create_app()
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


def pytest_sessionfinish(session, exitstatus):
    engine.dispose()
    shutil.rmtree(_TMP_DIR, ignore_errors=True)
