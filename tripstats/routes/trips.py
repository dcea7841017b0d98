from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ..domain.trip import Trip, ensure_utc
from ..logs import LogContext
from ..services.config_svc import get_store
from ..services.trip_store import TripStore

router = APIRouter()

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class TripCreate(BaseModel):
    distance: float = Field(..., ge=0, allow_inf_nan=False)
    start_time: datetime
    end_time: datetime
    commit_time: Optional[datetime] = None  # unset: commit now


@router.post("/api/trips", status_code=201)
async def api_trip_create(body: TripCreate, store: TripStore = Depends(get_store)):
    log = LogContext("ADD_TRIP")
    log.set_payload(body.model_dump(mode="json"))
    try:
        start, end = ensure_utc(body.start_time), ensure_utc(body.end_time)
        if end < start:
            raise ValueError("end_time is before start_time")
        trip = await store.add_trip(
            Trip(distance=body.distance, start_time=start, end_time=end, commit_time=body.commit_time)
        )
        log.set_entity("trip", trip.id)
        log.set_after(trip.to_dict())
        log.write("OK")
        return {"message": "ok", "trip": trip.to_dict()}
    except ValueError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        log.write("ERROR", f"internal error: {e}")
        raise HTTPException(status_code=500, detail="internal error")


@router.get("/api/trips")
async def api_trip_list(since: Optional[datetime] = None, store: TripStore = Depends(get_store)):
    try:
        trips = await store.get_trips_after(since or EPOCH)
    except Exception:
        raise HTTPException(status_code=500, detail="internal error")
    return {"total": len(trips), "items": [t.to_dict() for t in trips]}


@router.get("/api/stats")
async def api_stats(now: Optional[datetime] = None, store: TripStore = Depends(get_store)):
    try:
        stats = await store.get_stats(now)
    except Exception:
        raise HTTPException(status_code=500, detail="internal error")
    return stats.to_dict()


@router.post("/api/trips/clear")
async def api_trip_clear(store: TripStore = Depends(get_store)):
    log = LogContext("CLEAR_TRIPS")
    try:
        removed = await store.clear_all()
        log.set_before({"trips": removed})
        log.write("OK")
        return {"message": "ok", "removed": removed}
    except Exception as e:
        log.write("ERROR", f"internal error: {e}")
        raise HTTPException(status_code=500, detail="internal error")
