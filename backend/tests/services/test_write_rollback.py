"""Failed commits roll back every write of the request: scalars and pairings alike."""

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from disaster_api.core.type_sync import TypeSyncPlan
from disaster_api.models.disaster import DisasterLocation
import disaster_api.services.disaster_service as service_module
from tests.services.disaster_factories import (
    OWNER_ID, as_user, disaster_payload, pairings,
)


@pytest.fixture
def failing_commit(monkeypatch):
    """Commit flushes the pending writes, then the store gives up."""
    async def commit(self):
        await self.flush()
        raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(AsyncSession, "commit", commit)


async def _city(db, disaster_id):
    result = await db.execute(
        select(DisasterLocation.city).where(DisasterLocation.id == disaster_id),
    )
    return result.scalar_one_or_none()


async def test_update_rolls_back_scalars_when_pairing_sync_fails(
    client, test_db, seed_disaster, monkeypatch,
):
    # Re-attaching a kept type collides with its existing pivot row on flush
    monkeypatch.setattr(
        service_module, "plan_type_sync",
        lambda current, desired: TypeSyncPlan(detach=(), attach=(1,), keep=(1, 2)),
    )

    res = await client.put(
        f"/api/v1/disasters/{seed_disaster.id}",
        json=disaster_payload(city="Shelbyville", disaster_types=[1, 2]),
        headers=as_user(OWNER_ID),
    )

    assert res.status_code == 503
    body = res.json()
    assert body["status"] == 503
    assert body["message"].startswith("Database")
    assert await _city(test_db, seed_disaster.id) == "Lowtown"
    assert await pairings(test_db, seed_disaster.id) == {1: 4, 2: 0}


async def test_update_rolls_back_when_commit_fails(
    client, test_db, seed_disaster, failing_commit,
):
    res = await client.put(
        f"/api/v1/disasters/{seed_disaster.id}",
        json=disaster_payload(city="Shelbyville", disaster_types=[3]),
        headers=as_user(OWNER_ID),
    )

    assert res.status_code == 503
    assert res.json() == {
        "status": 503,
        "message": "Database execute failed: Connection or operational error",
    }
    assert await _city(test_db, seed_disaster.id) == "Lowtown"
    assert await pairings(test_db, seed_disaster.id) == {1: 4, 2: 0}


async def test_delete_rolls_back_when_commit_fails(
    client, test_db, seed_disaster, failing_commit,
):
    res = await client.delete(
        f"/api/v1/disasters/{seed_disaster.id}", headers=as_user(OWNER_ID),
    )

    assert res.status_code == 503
    assert res.json()["status"] == 503
    assert await _city(test_db, seed_disaster.id) == "Lowtown"
    assert await pairings(test_db, seed_disaster.id) == {1: 4, 2: 0}


async def test_report_rolls_back_when_commit_fails(
    client, test_db, seed_disaster, failing_commit,
):
    res = await client.post(
        f"/api/v1/disasters/{seed_disaster.id}/report",
        json={"disaster_types": [{"id": 1, "count": 11}, {"id": 2, "count": 7}]},
        headers=as_user(OWNER_ID),
    )

    assert res.status_code == 503
    assert res.json()["status"] == 503
    assert await pairings(test_db, seed_disaster.id) == {1: 4, 2: 0}
