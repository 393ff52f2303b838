"""Disaster Resource Service - list, create, show, update, delete, report counts.

Invariants:
    - list returns only the caller's locations, also passed through the VIEW check
    - create/update: the resulting type set equals the submitted set exactly
    - update keeps counts of pairings present in both old and new sets
    - delete removes every pivot row before the location row, in one transaction
    - report changes counts of already-paired types only (never adds or removes pairings)
    - Unknown type ids fail validation before the location is even looked up

Design Decisions:
    - Re-read the location with its pairings after every commit
      (populate_existing): the response always reflects the stored state
    - Evaluator injected: routes and tests can swap policies without patching
"""

import logging
from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from disaster_api.core.authorization import (
    DENIAL_MESSAGES, AuthorizationEvaluator, OwnershipPolicy,
)
from disaster_api.core.domain_types import (
    Caller, Capability, DisasterId, DisasterTypeId,
)
from disaster_api.core.errors import (
    CapabilityDeniedError, ErrorContext, RequestValidationFailed,
    ResourceNotFoundError,
)
from disaster_api.core.type_sync import (
    merge_reported_counts, missing_type_ids, plan_type_sync,
)
from disaster_api.infrastructure.database import unit_of_work
from disaster_api.models.disaster import DisasterLocation
from disaster_api.models.disaster_type import DisasterType
from disaster_api.models.disaster_type_link import DisasterTypeLink
from disaster_api.schemas.disaster import (
    DisasterCountReport, DisasterRead, DisasterWrite,
)

logger = logging.getLogger(__name__)


def default_evaluator() -> AuthorizationEvaluator:
    """Evaluator with the ownership policy registered for disaster locations."""
    evaluator = AuthorizationEvaluator()
    evaluator.register(DisasterLocation, OwnershipPolicy())
    return evaluator


class DisasterService:
    """CRUD + count reporting for disaster locations."""

    def __init__(
        self, db: AsyncSession, evaluator: AuthorizationEvaluator | None = None,
    ):
        self.db = db
        self.evaluator = evaluator or default_evaluator()

    # ─── Queries ──────────────────────────────────────────────────

    async def list_owned(self, caller: Caller) -> list[DisasterLocation]:
        """All locations owned by the caller, store order, no pagination."""
        result = await self.db.execute(
            self._select_with_types()
            .where(DisasterLocation.user_id == caller.user_id)
            .order_by(DisasterLocation.id)
        )
        return self.evaluator.visible(caller, result.scalars().all())

    async def show(self, caller: Caller, disaster_id: DisasterId) -> DisasterLocation:
        disaster = await self.get_or_404(disaster_id)
        self.evaluator.authorize(caller, Capability.VIEW, disaster)
        return disaster

    async def get_or_404(self, disaster_id: DisasterId) -> DisasterLocation:
        result = await self.db.execute(
            self._select_with_types()
            .where(DisasterLocation.id == disaster_id)
            .execution_options(populate_existing=True)
        )
        disaster = result.scalar_one_or_none()
        if disaster is None:
            raise ResourceNotFoundError(
                "Disaster location", str(disaster_id),
                ErrorContext(disaster_id=disaster_id),
            )
        return disaster

    # ─── Commands ─────────────────────────────────────────────────

    async def create(
        self, caller: Caller, payload: DisasterWrite,
    ) -> DisasterLocation:
        await self._ensure_types_exist(payload.disaster_types)
        async with unit_of_work(self.db):
            disaster = DisasterLocation(
                user_id=caller.user_id, **payload.scalar_fields(),
            )
            disaster.type_links = [
                DisasterTypeLink(disaster_type_id=type_id)
                for type_id in payload.disaster_types
            ]
            self.db.add(disaster)
        logger.info(
            f"Disaster location {disaster.id} created",
            extra={"disaster_id": disaster.id, "user_id": caller.user_id},
        )
        return await self.get_or_404(disaster.id)

    async def update(
        self, caller: Caller, disaster_id: DisasterId, payload: DisasterWrite,
    ) -> DisasterLocation:
        await self._ensure_types_exist(payload.disaster_types)
        disaster = await self.get_or_404(disaster_id)
        self.evaluator.authorize(caller, Capability.UPDATE, disaster)

        plan = plan_type_sync(disaster.type_ids, payload.disaster_types)
        async with unit_of_work(self.db):
            for field, value in payload.scalar_fields().items():
                setattr(disaster, field, value)
            detach = set(plan.detach)
            stale = [
                link for link in disaster.type_links
                if link.disaster_type_id in detach
            ]
            for link in stale:
                disaster.type_links.remove(link)
            for type_id in plan.attach:
                disaster.type_links.append(
                    DisasterTypeLink(disaster_type_id=type_id),
                )
        change = "types unchanged" if plan.is_noop else (
            f"+{len(plan.attach)} / -{len(plan.detach)} / ={len(plan.keep)} types"
        )
        logger.info(
            f"Disaster location {disaster_id} updated ({change})",
            extra={"disaster_id": disaster_id, "user_id": caller.user_id},
        )
        return await self.get_or_404(disaster_id)

    async def delete(self, caller: Caller, disaster_id: DisasterId) -> DisasterRead:
        """Delete a location and its pairings; returns the pre-deletion snapshot."""
        disaster = await self.get_or_404(disaster_id)
        self.evaluator.authorize(caller, Capability.DELETE, disaster)

        snapshot = DisasterRead.from_model(disaster)
        async with unit_of_work(self.db):
            disaster.type_links.clear()
            await self.db.flush()
            await self.db.delete(disaster)
        logger.info(
            f"Disaster location {disaster_id} deleted",
            extra={"disaster_id": disaster_id, "user_id": caller.user_id},
        )
        return snapshot

    async def report_counts(
        self, caller: Caller, disaster_id: DisasterId, report: DisasterCountReport,
    ) -> DisasterLocation:
        """Set incident counts on pairings the location already has, keyed by type id."""
        pairs = report.as_pairs()
        await self._ensure_types_exist([type_id for type_id, _ in pairs], suffix=".id")
        disaster = await self.get_or_404(disaster_id)
        if self.evaluator.denies(caller, Capability.CHANGE_COUNT, disaster):
            raise CapabilityDeniedError(
                Capability.CHANGE_COUNT.value,
                DENIAL_MESSAGES[Capability.CHANGE_COUNT],
                ErrorContext(disaster_id=disaster_id, user_id=caller.user_id),
            )

        counts = merge_reported_counts(disaster.type_ids, pairs)
        async with unit_of_work(self.db):
            for link in disaster.type_links:
                if link.disaster_type_id in counts:
                    link.count = counts[link.disaster_type_id]
        logger.info(
            f"Disaster location {disaster_id}: counts reported for "
            f"{len(counts)} type(s)",
            extra={"disaster_id": disaster_id, "user_id": caller.user_id},
        )
        return await self.get_or_404(disaster_id)

    # ─── Helpers ──────────────────────────────────────────────────

    @staticmethod
    def _select_with_types():
        return select(DisasterLocation).options(
            selectinload(DisasterLocation.type_links)
            .selectinload(DisasterTypeLink.disaster_type),
        )

    async def _ensure_types_exist(
        self, type_ids: Sequence[DisasterTypeId], suffix: str = "",
    ) -> None:
        result = await self.db.execute(
            select(DisasterType.id).where(DisasterType.id.in_(set(type_ids))),
        )
        errors = missing_type_ids(
            type_ids, result.scalars().all(), "disaster_types", suffix,
        )
        if errors:
            raise RequestValidationFailed(errors)


async def list_disaster_types(db: AsyncSession) -> list[DisasterType]:
    """Lookup table contents, ordered by id."""
    result = await db.execute(select(DisasterType).order_by(DisasterType.id))
    return list(result.scalars().all())
