"""Disaster Routes - the six Disaster Resource operations over HTTP.

Invariants:
    - Bodies and path ids validated by Pydantic before reaching the handler (400 on failure)
    - Caller resolved by get_caller and passed explicitly to the service
    - Every success is 200 {status, message, data}

Design Decisions:
    - Report counts is a POST sub-resource (/{id}/report): it is not a full replace
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from disaster_api.api.identity import get_caller
from disaster_api.core.domain_types import MAX_DB_INT, Caller
from disaster_api.core.responses import success_envelope
from disaster_api.infrastructure.database import get_db
from disaster_api.schemas.disaster import (
    DisasterCountReport, DisasterRead, DisasterWrite,
)
from disaster_api.services.disaster_service import DisasterService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/disasters", tags=["disasters"])

DisasterIdPath = Annotated[int, Path(gt=0, le=MAX_DB_INT)]


def get_disaster_service(db: AsyncSession = Depends(get_db)) -> DisasterService:
    return DisasterService(db)


def _ok(message: str, data) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=success_envelope(status.HTTP_200_OK, message, data),
    )


def _dump(disaster) -> dict:
    return DisasterRead.from_model(disaster).model_dump(mode="json")


@router.get("")
async def list_disasters(
    caller: Caller = Depends(get_caller),
    service: DisasterService = Depends(get_disaster_service),
):
    """List the caller's disaster locations."""
    disasters = await service.list_owned(caller)
    return _ok(
        "Success get list disasters location", [_dump(d) for d in disasters],
    )


@router.post("")
async def create_disaster(
    body: DisasterWrite,
    caller: Caller = Depends(get_caller),
    service: DisasterService = Depends(get_disaster_service),
):
    """Create a location owned by the caller, paired with the given types."""
    disaster = await service.create(caller, body)
    return _ok("Success create disaster location", _dump(disaster))


@router.get("/{disaster_id}")
async def show_disaster(
    disaster_id: DisasterIdPath,
    caller: Caller = Depends(get_caller),
    service: DisasterService = Depends(get_disaster_service),
):
    disaster = await service.show(caller, disaster_id)
    return _ok("Success get disaster location", _dump(disaster))


@router.put("/{disaster_id}")
async def update_disaster(
    disaster_id: DisasterIdPath,
    body: DisasterWrite,
    caller: Caller = Depends(get_caller),
    service: DisasterService = Depends(get_disaster_service),
):
    """Overwrite scalar fields and replace the type set."""
    disaster = await service.update(caller, disaster_id, body)
    return _ok("Success update disaster location", _dump(disaster))


@router.delete("/{disaster_id}")
async def delete_disaster(
    disaster_id: DisasterIdPath,
    caller: Caller = Depends(get_caller),
    service: DisasterService = Depends(get_disaster_service),
):
    """Delete a location and its pairings; responds with the deleted snapshot."""
    snapshot = await service.delete(caller, disaster_id)
    return _ok("Success delete location", snapshot.model_dump(mode="json"))


@router.post("/{disaster_id}/report")
async def report_disaster_counts(
    disaster_id: DisasterIdPath,
    body: DisasterCountReport,
    caller: Caller = Depends(get_caller),
    service: DisasterService = Depends(get_disaster_service),
):
    """Record incident counts for types already paired with the location."""
    disaster = await service.report_counts(caller, disaster_id, body)
    return _ok("Success report disaster count", _dump(disaster))
