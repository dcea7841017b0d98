"""
Trip repository tests: schema lifecycle and the two aggregate sums.
"""
from datetime import datetime, timezone

import pytest

from tripstats.db import get_conn
from tripstats.domain.trip import Trip, to_db_time
from tripstats.repository import trip_repo

UTC = timezone.utc


def _trip(distance, commit):
    return Trip(distance=distance, start_time=commit, end_time=commit, commit_time=commit)


@pytest.fixture()
def db(tmp_path):
    return str(tmp_path / "repo.db")


def test_ensure_schema_is_idempotent_and_keeps_rows(db):
    with get_conn(db) as conn:
        trip_repo.ensure_schema(conn)
        trip_repo.insert_trip(conn, _trip(1.5, datetime(2024, 3, 1, tzinfo=UTC)))
        trip_repo.ensure_schema(conn)
        trip_repo.ensure_schema(conn)
        assert trip_repo.count_all(conn) == 1
    with get_conn(db) as conn:
        trip_repo.ensure_schema(conn)
        rows = trip_repo.list_trips_since(conn, to_db_time(datetime(1970, 1, 1, tzinfo=UTC)))
        assert len(rows) == 1
        assert rows[0]["distance"] == 1.5


def test_insert_returns_new_ids_and_allows_duplicates(db):
    t = _trip(2.0, datetime(2024, 3, 1, tzinfo=UTC))
    with get_conn(db) as conn:
        trip_repo.ensure_schema(conn)
        id1 = trip_repo.insert_trip(conn, t)
        id2 = trip_repo.insert_trip(conn, t)
        assert id2 > id1
        assert trip_repo.count_all(conn) == 2


def test_sums_are_zero_when_nothing_matches(db):
    with get_conn(db) as conn:
        trip_repo.ensure_schema(conn)
        assert trip_repo.has_any(conn) is False
        s = to_db_time(datetime(2024, 1, 1, tzinfo=UTC))
        e = to_db_time(datetime(2024, 2, 1, tzinfo=UTC))
        assert trip_repo.sum_distance_since(conn, s) == 0.0
        assert trip_repo.sum_distance_between(conn, s, e) == 0.0


def test_sum_between_is_inclusive_on_both_ends(db):
    start = datetime(2024, 3, 14, tzinfo=UTC)
    end = datetime(2024, 3, 15, tzinfo=UTC)
    with get_conn(db) as conn:
        trip_repo.ensure_schema(conn)
        trip_repo.insert_trip(conn, _trip(1.0, start))
        trip_repo.insert_trip(conn, _trip(2.0, datetime(2024, 3, 14, 12, tzinfo=UTC)))
        trip_repo.insert_trip(conn, _trip(4.0, end))
        trip_repo.insert_trip(conn, _trip(8.0, datetime(2024, 3, 15, 0, 0, 1, tzinfo=UTC)))
        trip_repo.insert_trip(conn, _trip(16.0, datetime(2024, 3, 13, 23, 59, tzinfo=UTC)))
        assert trip_repo.has_any(conn) is True
        assert trip_repo.sum_distance_between(conn, to_db_time(start), to_db_time(end)) == 7.0
        assert trip_repo.sum_distance_since(conn, to_db_time(end)) == 12.0


def test_drop_table_removes_everything(db):
    with get_conn(db) as conn:
        trip_repo.ensure_schema(conn)
        trip_repo.insert_trip(conn, _trip(1.0, datetime(2024, 3, 1, tzinfo=UTC)))
        trip_repo.drop_table(conn)
        trip_repo.drop_table(conn)
        trip_repo.ensure_schema(conn)
        assert trip_repo.count_all(conn) == 0
