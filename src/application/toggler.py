from __future__ import annotations

import asyncio
import logging
import time

from infrastructure.profiles.store import ProfileStore

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 300.0


class PermissionToggler:
    """Flips one profile permission on a fixed interval until stopped."""

    def __init__(
        self,
        store: ProfileStore,
        profile_name: str = "Admin",
        permission: str = "CanEdit",
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
    ):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be > 0")
        self._store = store
        self.profile_name = profile_name
        self.permission = permission
        self.interval_seconds = interval_seconds
        self.iterations = 0
        self._stop = asyncio.Event()
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task:
        if self._task is None or self._task.done():
            self._stop.clear()
            self._task = asyncio.create_task(self.run(), name="permission-toggler")
            logger.info(
                "Toggler started profile=%s permission=%s interval=%.1fs",
                self.profile_name,
                self.permission,
                self.interval_seconds,
            )
        return self._task

    async def stop(self) -> None:
        self._stop.set()
        task, self._task = self._task, None
        if task is None:
            return
        try:
            await task
        except asyncio.CancelledError:
            # Only absorb the toggler's own cancellation, never the caller's.
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                raise
        logger.info("Toggler stopped after %d iterations", self.iterations)

    async def run(self) -> None:
        while not self._stop.is_set():
            t = time.perf_counter()
            try:
                await self._store.toggle_bool_permission(self.profile_name, self.permission)
            except Exception:
                logger.exception("Toggler failed profile=%s permission=%s", self.profile_name, self.permission)
            self.iterations += 1
            logger.debug("Toggler iteration=%d finished in %.4fs", self.iterations, time.perf_counter() - t)

            try:
                await asyncio.wait_for(self._stop.wait(), timeout=self.interval_seconds)
            except asyncio.TimeoutError:
                continue
