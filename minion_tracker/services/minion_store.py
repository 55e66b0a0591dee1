"""
Store for minion stat records.

Handles:
- Create / read / list / replace
- Soft delete (rows are never removed)
- Clamped HP adjustment, done as a single UPDATE statement
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, List

from sqlalchemy import case, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from minion_tracker.core.logging_config import get_logger
from minion_tracker.core.metrics import metrics
from minion_tracker.models.minion import Minion
from minion_tracker.schemas.minion import MinionCreate, MinionRecord
from minion_tracker.services.errors import MinionNotFoundError, MinionPersistenceError

logger = get_logger(__name__)


def clamp_hp(hp: int, delta: int, max_hp: int) -> int:
    """New HP after applying ``delta``: capped at ``max_hp`` first, then floored at 0."""
    return max(0, min(hp + delta, max_hp))


class MinionStore:
    """
    Persistence and lifecycle rules for minion stat records.

    The store works on the session it is given and keeps no other state.
    Only ``adjust_hp`` enforces ``0 <= hp <= max_hp``; ``replace`` writes
    whatever it is handed.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    @asynccontextmanager
    async def _persistence(self, operation: str) -> AsyncIterator[None]:
        """Roll back and re-raise database and driver failures as MinionPersistenceError."""
        try:
            yield
        except (SQLAlchemyError, OverflowError) as exc:
            # OverflowError comes straight from the driver for out-of-range integers
            await self._session.rollback()
            metrics.track_store_operation(operation, "error")
            raise MinionPersistenceError(operation, exc) from exc

    async def create(self, data: MinionCreate) -> MinionRecord:
        """
        Insert a new minion. The id is assigned by the database and the
        minion always starts active.
        """
        async with self._persistence("create"):
            minion = Minion(**data.model_dump(), active=True)
            self._session.add(minion)
            await self._session.commit()
            await self._session.refresh(minion)

        metrics.track_store_operation("create")
        logger.info(
            "Created minion",
            extra={"minion_id": minion.id, "minion_name": minion.name, "hp": minion.hp},
        )
        return MinionRecord.model_validate(minion)

    async def get(self, minion_id: int) -> MinionRecord:
        """
        Fetch a minion by id, active or not.

        Raises:
            MinionNotFoundError: if no row has this id
        """
        async with self._persistence("get"):
            result = await self._session.execute(
                select(Minion)
                .where(Minion.id == minion_id)
                .execution_options(populate_existing=True)
            )
            minion = result.scalar_one_or_none()

        if minion is None:
            metrics.track_store_operation("get", "not_found")
            raise MinionNotFoundError(minion_id)
        metrics.track_store_operation("get")
        return MinionRecord.model_validate(minion)

    async def list_active(self) -> List[MinionRecord]:
        """All active minions in creation order."""
        async with self._persistence("list_active"):
            result = await self._session.execute(
                select(Minion)
                .where(Minion.active.is_(True))
                .order_by(Minion.id)
                .execution_options(populate_existing=True)
            )
            minions = result.scalars().all()

        metrics.track_store_operation("list_active")
        return [MinionRecord.model_validate(m) for m in minions]

    async def replace(self, record: MinionRecord) -> bool:
        """
        Overwrite every field of the row with ``record.id``, including ``active``.

        HP is not clamped. An unknown id is not an error: nothing is written
        and False is returned.
        """
        async with self._persistence("replace"):
            result = await self._session.execute(
                update(Minion)
                .where(Minion.id == record.id)
                .values(**record.model_dump(exclude={"id"}))
                .execution_options(synchronize_session=False)
            )
            await self._session.commit()

        updated = result.rowcount > 0
        metrics.track_store_operation("replace", "success" if updated else "no_match")
        logger.info(
            "Replaced minion",
            extra={"minion_id": record.id, "rows_updated": result.rowcount},
        )
        return updated

    async def soft_delete(self, minion_id: int) -> None:
        """Mark a minion inactive. Unknown ids are ignored."""
        async with self._persistence("soft_delete"):
            result = await self._session.execute(
                update(Minion)
                .where(Minion.id == minion_id)
                .values(active=False)
                .execution_options(synchronize_session=False)
            )
            await self._session.commit()

        metrics.track_store_operation("soft_delete")
        logger.info(
            "Soft-deleted minion",
            extra={"minion_id": minion_id, "rows_updated": result.rowcount},
        )

    async def adjust_hp(self, minion_id: int, delta: int) -> MinionRecord:
        """
        Add ``delta`` to a minion's HP, clamped into ``[0, max_hp]``.

        The new value is computed by the database in one UPDATE so the
        read-modify-write of this row cannot be interleaved. Negative
        deltas are damage, positive deltas healing.

        Raises:
            MinionNotFoundError: if no row has this id
        """
        raised = Minion.hp + delta
        capped = case((raised > Minion.max_hp, Minion.max_hp), else_=raised)
        new_hp = case((capped < 0, 0), else_=capped)

        async with self._persistence("adjust_hp"):
            result = await self._session.execute(
                update(Minion)
                .where(Minion.id == minion_id)
                .values(hp=new_hp)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                await self._session.rollback()
                metrics.track_store_operation("adjust_hp", "not_found")
                raise MinionNotFoundError(minion_id)
            await self._session.commit()

        metrics.track_store_operation("adjust_hp")
        metrics.track_hp_adjustment(delta)
        minion = await self.get(minion_id)
        logger.info(
            "Adjusted minion HP",
            extra={
                "minion_id": minion_id,
                "delta": delta,
                "new_hp": minion.hp,
                "max_hp": minion.max_hp,
            },
        )
        return minion
