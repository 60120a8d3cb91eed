"""
Endpoints del snapshot en memoria.
"""

from fastapi import APIRouter, Depends

from hubinfecto.api.deps import get_record_store, get_snapshot
from hubinfecto.schemas.snapshot import SnapshotInfo
from hubinfecto.services.record_store import RecordStore
from hubinfecto.services.snapshot import ClinicSnapshot

router = APIRouter()


@router.get("", response_model=SnapshotInfo)
async def snapshot_info(snapshot: ClinicSnapshot = Depends(get_snapshot)):
    return snapshot.info()


@router.post("/refresh", response_model=SnapshotInfo)
async def refresh_snapshot(
    snapshot: ClinicSnapshot = Depends(get_snapshot),
    store: RecordStore = Depends(get_record_store),
):
    """
    Recarga todos los registros desde el backend. Si el backend no
    responde el snapshot queda vacío; los cambios sólo locales se pierden.
    """
    await snapshot.refresh(store)
    return snapshot.info()
