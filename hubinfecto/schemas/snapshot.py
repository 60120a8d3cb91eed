"""
Schemas del snapshot en memoria y de escrituras optimistas de capacidad.
"""

from datetime import datetime

from pydantic import BaseModel

from hubinfecto.schemas.capacity import DailyCapacityData


class SnapshotInfo(BaseModel):
    version: int
    refreshed_at: datetime | None = None
    appointments: int = 0
    tasks: int = 0
    patients: int = 0
    capacity_days: int = 0


class CapacityWriteResponse(BaseModel):
    record: DailyCapacityData
    synced: bool
    sync_error: str | None = None
    rolled_back: bool = False
    snapshot_version: int
