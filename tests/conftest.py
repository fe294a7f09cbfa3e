import mongomock
import pytest
from fastapi.testclient import TestClient

from config import Settings, UserConfig, get_settings
from database import get_store
from functions.user_store import UserRecordStore

ALICE = ("alice", "wonderland")
BOB = ("bob", "builder")


@pytest.fixture
def collection():
    """A fresh in-memory Ratings collection per test"""
    return mongomock.MongoClient()["myday"]["Ratings"]


@pytest.fixture
def store(collection):
    store = UserRecordStore(collection, timeout=5)
    store.ensure_indexes()
    return store


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        _env_file=None,
        LOG_DIR=str(tmp_path),
        USER_CONFIGS=[
            UserConfig(username=ALICE[0], password=ALICE[1]),
            UserConfig(username=BOB[0], password=BOB[1]),
        ],
    )


@pytest.fixture
def client(store, test_settings):
    from main import app

    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_settings] = lambda: test_settings
    yield TestClient(app)
    app.dependency_overrides.clear()
