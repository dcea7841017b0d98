from __future__ import annotations

from sqlite3 import Connection

from ..domain.trip import Trip, to_db_time

# "commit" is an SQL keyword and must stay quoted.
DDL = """
CREATE TABLE IF NOT EXISTS trips (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  distance REAL NOT NULL,
  start_time TEXT NOT NULL,
  end_time TEXT NOT NULL,
  "commit" TEXT NOT NULL
)
"""

SUM_SINCE_SQL = 'SELECT COALESCE(SUM(distance), 0) FROM trips WHERE "commit" >= ?'
SUM_BETWEEN_SQL = 'SELECT COALESCE(SUM(distance), 0) FROM trips WHERE "commit" >= ? AND "commit" <= ?'


def ensure_schema(conn: Connection) -> None:
    conn.execute(DDL)


def drop_table(conn: Connection) -> None:
    conn.execute("DROP TABLE IF EXISTS trips")


def insert_trip(conn: Connection, trip: Trip) -> int:
    cur = conn.execute(
        'INSERT INTO trips(distance, start_time, end_time, "commit") VALUES(?,?,?,?)',
        (
            trip.distance,
            to_db_time(trip.start_time),
            to_db_time(trip.end_time),
            to_db_time(trip.commit_time),
        ),
    )
    return int(cur.lastrowid)


def list_trips_since(conn: Connection, since: str):
    return conn.execute(
        'SELECT id, distance, start_time, end_time, "commit" FROM trips WHERE "commit" >= ?',
        (since,),
    ).fetchall()


def has_any(conn: Connection) -> bool:
    return conn.execute("SELECT 1 FROM trips LIMIT 1").fetchone() is not None


def count_all(conn: Connection) -> int:
    return int(conn.execute("SELECT COUNT(1) AS c FROM trips").fetchone()["c"])


def sum_distance_since(conn: Connection, start: str) -> float:
    return float(conn.execute(SUM_SINCE_SQL, (start,)).fetchone()[0])


def sum_distance_between(conn: Connection, start: str, end: str) -> float:
    """Both ends inclusive."""
    return float(conn.execute(SUM_BETWEEN_SQL, (start, end)).fetchone()[0])
