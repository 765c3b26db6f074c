"""Content Scheduler — asyncio daemon advancing time-dependent content state."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping, Sequence
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from pawtal.application.interfaces import ContentRepository, SessionRepository
from pawtal.application.services.retention_policy import TrashRetentionPolicy
from pawtal.domain.clock import Clock, utc_now
from pawtal.domain.entities import CONTENT_TYPES, ContentType
from pawtal.infrastructure.logging.colored_logger import TaskLogger, TaskStage

logger = logging.getLogger(__name__)

# Tick period in seconds
DEFAULT_INTERVAL = 60


@dataclass
class MaintenanceRepositories:
    """Repositories one maintenance step works with, bound to a single session."""

    content: Mapping[str, ContentRepository]
    sessions: SessionRepository


@dataclass
class TickReport:
    """What one tick did: row counts per step and the steps that failed."""

    started_at: datetime
    counts: dict[str, int] = field(default_factory=dict)
    failed: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


SessionFactory = Callable[[], AbstractAsyncContextManager[Any]]
RepositoryBuilder = Callable[[Any], MaintenanceRepositories]


class ContentScheduler:
    """Periodic background task: publish due items, sweep trash, expire sessions.

    Runs as an asyncio.Task inside FastAPI's lifespan. Holds no state
    besides its collaborators; every tick recomputes eligibility from the
    database, so a restart loses nothing. Each step (per content type) runs
    in its own session and transaction, and a failing step is logged and
    left for the next tick without affecting the others.
    """

    def __init__(
        self,
        session_factory: SessionFactory,
        build_repositories: RepositoryBuilder,
        policy: TrashRetentionPolicy,
        interval: float = DEFAULT_INTERVAL,
        clock: Clock = utc_now,
        content_types: Sequence[ContentType] = CONTENT_TYPES,
    ) -> None:
        self._session_factory = session_factory
        self._build_repositories = build_repositories
        self._policy = policy
        self._interval = interval
        self._clock = clock
        self._type_names = [ct.name for ct in content_types]
        self._log = TaskLogger("ContentScheduler")
        self._running = False
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Start the background loop."""
        self._running = True
        self._task = asyncio.create_task(self._loop())
        logger.info("ContentScheduler started (interval=%ss)", self._interval)

    async def stop(self) -> None:
        """Cancel the background loop."""
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("ContentScheduler stopped")

    async def _loop(self) -> None:
        """Main loop — one tick, then sleep for the interval."""
        while self._running:
            try:
                await self.run_once()
            except asyncio.CancelledError:
                break
            except Exception:
                logger.exception("ContentScheduler tick error")

            await asyncio.sleep(self._interval)

    async def run_once(self) -> TickReport:
        """Run every maintenance step once against the current time."""
        now = self._clock()
        report = TickReport(started_at=now)

        with self._log.timed_tick():
            for name in self._type_names:
                await self._run_step(
                    report,
                    f"publish:{name}",
                    TaskStage.PUBLISH,
                    lambda repos, n=name: repos.content[n].publish_due(now),
                )
            for name in self._type_names:
                await self._run_step(
                    report,
                    f"trash_sweep:{name}",
                    TaskStage.TRASH_SWEEP,
                    lambda repos, n=name: self._policy.sweep(repos.content[n], now),
                )
            await self._run_step(
                report,
                "session_sweep",
                TaskStage.SESSION_SWEEP,
                lambda repos: repos.sessions.delete_expired(now),
            )

        self._log.stats(**report.counts, failed=len(report.failed))
        return report

    async def _run_step(
        self,
        report: TickReport,
        name: str,
        stage: tuple[str, str, str],
        step: Callable[[MaintenanceRepositories], Awaitable[int]],
    ) -> None:
        """Run one step in its own transaction, recording its outcome."""
        async with self._session_factory() as session:
            try:
                count = await step(self._build_repositories(session))
                await session.commit()
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                await session.rollback()
                report.failed.append(name)
                self._log.step_error(stage, f"{name} failed, retrying next tick", error=exc)
                return

        report.counts[name] = count
        self._log.step_complete(stage, name, count=count)
