from __future__ import annotations

from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from typing import Optional


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Return dt as an aware UTC datetime. Naive values are taken as UTC."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_db_time(dt: datetime) -> str:
    """
    Canonical storage text for an instant: UTC, fixed width
    ``YYYY-MM-DD HH:MM:SS.ffffff``, so SQL text comparison is chronological.
    """
    return ensure_utc(dt).replace(tzinfo=None).isoformat(sep=" ", timespec="microseconds")


def from_db_time(text: str | None) -> datetime | None:
    if text is None:
        return None
    return datetime.fromisoformat(text).replace(tzinfo=timezone.utc)


def is_unset(dt: datetime | None) -> bool:
    # datetime.min is the "not committed yet" sentinel, same as None; any
    # tzinfo attached to it is ignored
    return dt is None or dt.replace(tzinfo=None) == datetime.min


@dataclass
class Trip:
    distance: float
    start_time: datetime
    end_time: datetime
    commit_time: Optional[datetime] = None
    id: Optional[int] = None

    @classmethod
    def from_row(cls, row) -> "Trip":
        return cls(
            id=row["id"],
            distance=float(row["distance"]),
            start_time=from_db_time(row["start_time"]),
            end_time=from_db_time(row["end_time"]),
            commit_time=from_db_time(row["commit"]),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "distance": self.distance,
            "start_time": self.start_time.isoformat() if self.start_time else None,
            "end_time": self.end_time.isoformat() if self.end_time else None,
            "commit_time": self.commit_time.isoformat() if self.commit_time else None,
        }


@dataclass
class TripDistanceStats:
    daily: float = 0.0
    weekly: float = 0.0
    monthly: float = 0.0
    prev_day: float = 0.0
    prev_week: float = 0.0
    prev_month: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)


def normalize_trip_times(trip: Trip, now: datetime | None = None) -> Trip:
    """
    Bring a trip's times into the storage basis before it is written:
    - an unset commit time becomes `now` (default: current UTC instant)
    - every time field is converted to UTC
    The trip is updated in place and returned.
    """
    if is_unset(trip.commit_time):
        trip.commit_time = now or datetime.now(timezone.utc)
    trip.commit_time = ensure_utc(trip.commit_time)
    trip.start_time = ensure_utc(trip.start_time)
    trip.end_time = ensure_utc(trip.end_time)
    return trip
