"""
Trip store: persistence and distance statistics for recorded trips.

Every public operation is a coroutine that hands one synchronous unit of
work to a worker thread. The unit opens its own connection, makes sure the
trips table exists, does its reads/writes and closes the connection again,
whether it succeeds or fails. Nothing is shared between operations except
the database file.
"""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone, tzinfo

from ..db import get_conn
from ..domain.periods import period_bounds
from ..domain.trip import Trip, TripDistanceStats, ensure_utc, normalize_trip_times, to_db_time
from ..repository import trip_repo

logger = logging.getLogger(__name__)


class TripStore:

    def __init__(self, db_path: str, tz: tzinfo | None = None):
        self._db_path = db_path
        self.tz = tz or timezone.utc

    @property
    def db_path(self) -> str:
        return self._db_path

    async def clear_all(self) -> int:
        """Drop the trips table. Returns how many trips were removed."""
        return await asyncio.to_thread(self._clear_all)

    async def add_trip(self, trip: Trip) -> Trip:
        """Normalize the trip's times to UTC and insert it. Sets trip.id."""
        return await asyncio.to_thread(self._add_trip, trip)

    async def get_trips_after(self, instant: datetime) -> list[Trip]:
        """Trips committed at or after instant, in store order."""
        return await asyncio.to_thread(self._get_trips_after, instant)

    async def get_stats(self, now: datetime | None = None) -> TripDistanceStats:
        """
        Distance totals for the current and previous day/week/month.

        Periods are aligned in now's own zone; by default now is the current
        instant in self.tz. Current-period totals have no upper bound, previous
        periods run from their start to the current period's start inclusive.
        """
        if now is None:
            now = datetime.now(self.tz)
        return await asyncio.to_thread(self._get_stats, now)

    def _clear_all(self) -> int:
        with get_conn(self._db_path) as conn:
            trip_repo.ensure_schema(conn)
            removed = trip_repo.count_all(conn)
            trip_repo.drop_table(conn)
        logger.info("Dropped trips table (%d trips) in %s", removed, self._db_path)
        return removed

    def _add_trip(self, trip: Trip) -> Trip:
        normalize_trip_times(trip)
        with get_conn(self._db_path) as conn:
            trip_repo.ensure_schema(conn)
            trip.id = trip_repo.insert_trip(conn, trip)
        logger.debug("Inserted trip %s (distance=%s, commit=%s)", trip.id, trip.distance, trip.commit_time)
        return trip

    def _get_trips_after(self, instant: datetime) -> list[Trip]:
        since = to_db_time(ensure_utc(instant))
        with get_conn(self._db_path) as conn:
            trip_repo.ensure_schema(conn)
            rows = trip_repo.list_trips_since(conn, since)
        return [Trip.from_row(r) for r in rows]

    def _get_stats(self, now: datetime) -> TripDistanceStats:
        with get_conn(self._db_path) as conn:
            trip_repo.ensure_schema(conn)
            if not trip_repo.has_any(conn):
                return TripDistanceStats()

            b = period_bounds(now)
            logger.debug("Stats boundaries for %s: %s", now.isoformat(), b)

            def since(start: datetime) -> float:
                return trip_repo.sum_distance_since(conn, to_db_time(start))

            def between(start: datetime, end: datetime) -> float:
                return trip_repo.sum_distance_between(conn, to_db_time(start), to_db_time(end))

            return TripDistanceStats(
                daily=since(b.day),
                weekly=since(b.week),
                monthly=since(b.month),
                prev_day=between(b.prev_day, b.day),
                prev_week=between(b.prev_week, b.week),
                prev_month=between(b.prev_month, b.month),
            )
