"""
Background completion sweeper.

Every SWEEPER_INTERVAL_SECONDS, promote appointments whose start is in the
past and whose status is still pending/confirmed to completed.

One pass is a single UPDATE ... WHERE statement, so a pass either applies
to every matching row or to none. A second pass right after the first finds
nothing to change. A user cancelling at the same moment races with the
pass; whichever write lands last wins, and both leave the record terminal.
"""

import asyncio
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from venue_platform.core.logging import get_logger
from venue_platform.core.metrics import record_sweeper_run
from venue_platform.models.appointment import ACTIVE_STATUSES, COMPLETED, Appointment

logger = get_logger(__name__)


async def complete_past_appointments(db: AsyncSession, now: Optional[datetime] = None) -> int:
    """Bulk-complete past-due active appointments. Returns the number changed."""
    now = now or datetime.now(timezone.utc)
    result = await db.execute(
        update(Appointment)
        .where(
            Appointment.appointment_date < now,
            Appointment.status.in_(ACTIVE_STATUSES),
        )
        .values(status=COMPLETED, updated_at=now)
        .execution_options(synchronize_session="fetch")
    )
    return result.rowcount or 0


class AppointmentSweeper:
    """Runs complete_past_appointments on a fixed interval in its own task."""

    def __init__(self, session_factory: async_sessionmaker, interval_seconds: float):
        self.session_factory = session_factory
        self.interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task] = None

    async def run_once(self, now: Optional[datetime] = None) -> Optional[int]:
        """One pass in a fresh session. Returns None when the pass failed."""
        try:
            async with self.session_factory() as session:
                completed = await complete_past_appointments(session, now)
                await session.commit()
        except Exception as e:
            logger.error("appointment_sweep_failed", error=str(e), exc_info=True)
            record_sweeper_run(None)
            return None

        record_sweeper_run(completed)
        if completed:
            logger.info("appointments_completed", count=completed)
        return completed

    async def _loop(self) -> None:
        while True:
            await self.run_once()
            await asyncio.sleep(self.interval_seconds)

    def start(self) -> None:
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self._loop(), name="appointment-sweeper")
            logger.info("appointment_sweeper_started", interval_seconds=self.interval_seconds)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("appointment_sweeper_stopped")

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()
