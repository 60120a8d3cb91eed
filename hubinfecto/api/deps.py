"""
Dependencies compartidas por los routers: snapshot y record store
viven en `app.state` (una sola sesión de operador).
"""

from datetime import date

from fastapi import Depends, Request

from hubinfecto.config import Settings, get_settings
from hubinfecto.services.record_store import RecordStore
from hubinfecto.services.snapshot import ClinicSnapshot


def get_snapshot(request: Request) -> ClinicSnapshot:
    return request.app.state.snapshot


def get_record_store(request: Request) -> RecordStore:
    return request.app.state.record_store


def get_today(settings: Settings = Depends(get_settings)) -> date:
    return settings.today()
