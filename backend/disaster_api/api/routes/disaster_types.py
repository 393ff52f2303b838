"""Disaster Type Routes - read-only listing of the lookup table.

Invariants:
    - The lookup table is never mutated through the API
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from disaster_api.api.identity import get_caller
from disaster_api.core.domain_types import Caller
from disaster_api.core.responses import success_envelope
from disaster_api.infrastructure.database import get_db
from disaster_api.schemas.disaster import DisasterTypeRead
from disaster_api.services.disaster_service import list_disaster_types

router = APIRouter(prefix="/api/v1/disaster-types", tags=["disaster-types"])


@router.get("")
async def list_types(
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
):
    """All disaster types a location can be paired with."""
    types = await list_disaster_types(db)
    return success_envelope(
        status.HTTP_200_OK,
        "Success get list disaster types",
        [DisasterTypeRead(id=t.id, name=t.name).model_dump() for t in types],
    )
