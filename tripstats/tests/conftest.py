import os
import sys
import sqlite3
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


@pytest.fixture(scope="session")
def tmp_db_path(tmp_path_factory):
    path = tmp_path_factory.mktemp("db") / "trips_test.db"
    # Point the app at this temp DB
    os.environ["TRIP_DB_PATH"] = str(path)
    return str(path)


@pytest.fixture()
def store(tmp_db_path):
    from tripstats.services.trip_store import TripStore
    return TripStore(tmp_db_path)


@pytest.fixture()
def client(tmp_db_path):
    from tripstats.api import app
    from fastapi.testclient import TestClient
    return TestClient(app)


@pytest.fixture(autouse=True)
def _clean_db(tmp_db_path):
    # Safety: only ever wipe the temp DB, never a real one
    assert os.environ.get("TRIP_DB_PATH") == tmp_db_path, "Refusing to clean non-temp DB"
    conn = sqlite3.connect(tmp_db_path)
    try:
        conn.execute("DROP TABLE IF EXISTS trips")
        conn.execute("DROP TABLE IF EXISTS operation_log")
        conn.commit()
    finally:
        conn.close()
    yield
