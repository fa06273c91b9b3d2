"""Delivery loop for reminders, driven by an APScheduler interval job.

Each tick:
1. Apply re-arm events whose cooldown has elapsed
2. Find reminders due at the current HH:mm that are not yet sent
3. Mark each one sent (persisted) BEFORE trying to deliver it
4. Deliver with best-effort motivation
5. Retire once-reminders, queue a re-arm for daily ones

A reminder is therefore delivered at most once per matching minute, even
if delivery fails.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Awaitable, Callable, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from logger import logger
from .config import REARM_COOLDOWN_SECONDS, TICK_SECONDS
from .errors import PersistenceFailure
from .executor import Transport, execute_reminder
from .models import Reminder, Repeat
from .store import ReminderStore

JOB_ID = "reminder_delivery_tick"


@dataclass
class PendingRearm:
    """A daily reminder waiting out its cooldown."""
    due_at: datetime
    reminder: Reminder


class DeliveryScheduler:
    """Scans the store every tick and delivers due reminders."""

    def __init__(
        self,
        store: ReminderStore,
        client,
        transport: Transport,
        cooldown: timedelta = timedelta(seconds=REARM_COOLDOWN_SECONDS),
        clock: Callable[[], datetime] = datetime.now,
        on_fatal: Optional[Callable[[Exception], Awaitable[None]]] = None
    ):
        self.store = store
        self.client = client
        self.transport = transport
        self.cooldown = cooldown
        self.clock = clock
        self.on_fatal = on_fatal
        self._pending_rearms: list[PendingRearm] = []

    @property
    def pending_rearms(self) -> list[PendingRearm]:
        return list(self._pending_rearms)

    def start(self, scheduler: AsyncIOScheduler) -> None:
        """Register the tick job on an APScheduler instance."""
        scheduler.add_job(
            self.run_tick,
            trigger=IntervalTrigger(seconds=TICK_SECONDS),
            id=JOB_ID,
            name="Deliver due reminders",
            replace_existing=True,
            max_instances=1,
            coalesce=True
        )
        logger.info(f"Started reminder delivery loop (every {TICK_SECONDS}s)")

    def recover(self, now: Optional[datetime] = None) -> None:
        """Finish reminders that were in flight when the process stopped.

        Daily reminders still marked sent get a fresh cooldown; once
        reminders still marked sent were already attempted and are retired.
        """
        now = now or self.clock()
        for reminder in [r for r in self.store.all() if r.sent]:
            if reminder.repeat is Repeat.DAILY:
                self._pending_rearms.append(PendingRearm(now + self.cooldown, reminder))
                logger.info(f"Recovered daily reminder '{reminder.text}', re-arm queued")
            elif self.store.contains(reminder):
                self.store.retire(reminder)
                logger.info(f"Retired in-flight one-time reminder '{reminder.text}'")

    async def run_tick(self) -> None:
        """APScheduler entry point. Persistence failures are fatal."""
        try:
            await self.tick()
        except PersistenceFailure as e:
            logger.critical(f"Reminder store write failed, stopping: {e}")
            if self.on_fatal:
                await self.on_fatal(e)
            else:
                raise

    async def tick(self, now: Optional[datetime] = None) -> int:
        """Run one delivery pass.

        Returns:
            Number of reminders delivery was attempted for
        """
        now = now or self.clock()

        async with self.store.lock:
            self._apply_rearms(now)

            current_minute = now.strftime("%H:%M")
            attempted = 0

            for reminder in self.store.scan_due(current_minute):
                # An earlier duplicate in this pass may have retired it
                if not self.store.contains(reminder) or reminder.sent:
                    continue

                self.store.mark_sent(reminder)
                attempted += 1

                await execute_reminder(reminder, self.client, self.transport)

                if reminder.repeat is Repeat.ONCE:
                    self.store.retire(reminder)
                else:
                    self._pending_rearms.append(PendingRearm(now + self.cooldown, reminder))

            return attempted

    def _apply_rearms(self, now: datetime) -> None:
        still_waiting = []
        for pending in self._pending_rearms:
            if pending.due_at <= now:
                self.store.rearm(pending.reminder)
            else:
                still_waiting.append(pending)
        self._pending_rearms = still_waiting
