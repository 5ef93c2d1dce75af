import pytest

from src.config import TestConfig
from src.extensions import db
from src.main import create_app
from store.record_store import InMemoryRecordStore, SqlRecordStore, get_record_store
from store.seed import seed_demo_data


@pytest.fixture
def app():
    app = create_app(TestConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def seeded_client(app):
    with app.app_context():
        seed_demo_data(get_record_store())
    return app.test_client()


@pytest.fixture
def store():
    return InMemoryRecordStore()


@pytest.fixture
def seeded_store():
    store = InMemoryRecordStore()
    seed_demo_data(store)
    return store


@pytest.fixture
def sql_store(app):
    with app.app_context():
        yield SqlRecordStore(db.session)
