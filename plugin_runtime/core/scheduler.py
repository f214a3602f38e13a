from __future__ import annotations

import logging
from typing import List, Optional

from .registry import Registry, TimedTask

logger = logging.getLogger(__name__)


class TimerScheduler:
    """Poll-driven runner for timed tasks.

    Every task keeps its own last-fire timestamp, so the poll cadence only
    decides how late a task may run, never how often. A due task is reset to
    the tick time after it runs (not advanced by its interval): after a stall
    a task fires once and then waits a full interval again.

    A task whose callback raises is disabled; the rest of the pass carries on.
    """

    def __init__(self, registry: Registry):
        self.registry = registry

    def due(self, now: float) -> List[TimedTask]:
        return [t for t in self.registry.timed_tasks() if t.is_due(now)]

    def tick(self, now: Optional[float] = None) -> List[TimedTask]:
        if now is None:
            now = self.registry.clock()
        fired: List[TimedTask] = []
        for task in self.due(now):
            # removed by an earlier callback in this pass
            if not self.registry.contains_timed(task):
                continue
            try:
                task.callback.invoke()
            except Exception:
                task.enabled = False
                logger.exception(
                    "Timed task %r from plugin %s failed; disabling it",
                    task.callback, task.plugin or "?",
                )
                continue
            task.last_reset = now
            task.fired += 1
            fired.append(task)
        return fired

    def enable(self, task: TimedTask, now: Optional[float] = None) -> None:
        task.enabled = True
        task.last_reset = self.registry.clock() if now is None else now

    def disabled(self) -> List[TimedTask]:
        return [t for t in self.registry.timed_tasks() if not t.enabled]
