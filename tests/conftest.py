import pytest
from fastapi.testclient import TestClient

from seatbook.db.session import Database
from seatbook.main import create_app
from tests.factories import make_event


@pytest.fixture
def database(tmp_path):
    database = Database(f"sqlite:///{tmp_path / 'seatbook.db'}")
    database.create_all()
    yield database
    database.dispose()


@pytest.fixture
def db(database):
    session = database.session()
    yield session
    session.close()


@pytest.fixture
def client(database):
    with TestClient(create_app(database)) as client:
        yield client


@pytest.fixture
def event(db):
    """Two seats: LEFT A1, LEFT A2."""
    return make_event(db)
