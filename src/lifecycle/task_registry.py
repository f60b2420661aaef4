"""
Long-lived asyncio tasks of the process (API server, door sensor polling).

Registered tasks are cancelled on shutdown, and their failures are logged
and kept for /system/tasks instead of disappearing with the task. A failure
in an API, HARDWARE or INPUT task also stops the process
(see ShutdownCoordinator.wait_for_shutdown).

The controller's own timers (tick, door debounce, fade) are not tracked
here; OneShotTimer / PeriodicTimer own their tasks.
"""

from __future__ import annotations

import asyncio
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum, auto
from itertools import count
from typing import Any, Deque, Dict, Iterable, List, Optional

from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.TASK)


class TaskCategory(Enum):
    API = auto()
    HARDWARE = auto()
    INPUT = auto()
    BACKGROUND = auto()


@dataclass
class TaskRecord:
    id: int
    task: asyncio.Task
    category: TaskCategory
    description: str
    created_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    cancelled: bool = False
    error: Optional[BaseException] = None

    @property
    def label(self) -> str:
        return f"[Task {self.id}] {self.description}"

    def as_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "category": self.category.name,
            "description": self.description,
            "created_at": self.created_at,
        }
        if self.error is not None:
            out["error"] = f"{type(self.error).__name__}: {self.error}"
        return out


class TaskRegistry:
    """Process-wide; finished records are kept up to `keep_finished`"""

    _instance: Optional["TaskRegistry"] = None

    def __init__(self, keep_finished: int = 50) -> None:
        self._running: Dict[asyncio.Task, TaskRecord] = {}
        self._finished: Deque[TaskRecord] = deque(maxlen=keep_finished)
        self._ids = count(1)

    @classmethod
    def instance(cls) -> "TaskRegistry":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        cls._instance = None

    def register(self, task: asyncio.Task, category: TaskCategory, description: str) -> int:
        record = TaskRecord(id=next(self._ids), task=task, category=category, description=description)
        self._running[task] = record
        task.add_done_callback(self._on_task_done)
        log.debug(f"{record.label} registered", group=category.name)
        return record.id

    def _on_task_done(self, task: asyncio.Task) -> None:
        record = self._running.pop(task, None)
        if record is None:
            return

        if task.cancelled():
            record.cancelled = True
            log.debug(f"{record.label} cancelled")
        elif task.exception() is not None:
            record.error = task.exception()
            log.error(f"{record.label} failed", exception=record.error, group=record.category.name)
        else:
            log.debug(f"{record.label} finished")

        self._finished.append(record)

    def active(self) -> List[TaskRecord]:
        return [r for r in self._running.values() if not r.task.done()]

    def failed(self) -> List[TaskRecord]:
        return [r for r in self._finished if r.error is not None]

    def summary(self) -> str:
        return f"running={len(self.active())} finished={len(self._finished)} failed={len(self.failed())}"

    def get_tasks_for_shutdown(self, exclude: Optional[Iterable[asyncio.Task]] = None) -> List[asyncio.Task]:
        skip = set(exclude or ())
        return [r.task for r in self.active() if r.task not in skip]


def create_tracked_task(coro, *, category: TaskCategory, description: str) -> asyncio.Task:
    task = asyncio.get_running_loop().create_task(coro, name=description)
    TaskRegistry.instance().register(task, category, description)
    return task
