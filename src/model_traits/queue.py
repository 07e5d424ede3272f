"""Task queue contract and an in-memory worker queue."""

from __future__ import annotations

import traceback
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from functools import lru_cache
from threading import Lock
from typing import Any, Protocol, runtime_checkable

from loguru import logger
from tqdm import tqdm

from model_traits.config import Settings, get_settings


@runtime_checkable
class QueueableJob(Protocol):
    """Anything a queue can hold: an id, an attempts counter and ``handle()``."""

    job_id: str
    attempts: int

    def handle(self) -> Any: ...


@dataclass(slots=True, frozen=True)
class DispatchReceipt:
    """Acknowledgement returned when a job is queued."""

    job_id: str
    queue: str
    dispatched_at: str = field(
        default_factory=lambda: datetime.now(tz=timezone.utc).isoformat()
    )


@dataclass(slots=True)
class FailedJob:
    """Job that exhausted its attempts."""

    job_id: str
    job: QueueableJob
    error: str
    trace: str
    failed_at: str = field(
        default_factory=lambda: datetime.now(tz=timezone.utc).isoformat()
    )


@runtime_checkable
class TaskQueue(Protocol):
    """Accepts jobs and promises to handle them later."""

    def push(self, job: QueueableJob) -> DispatchReceipt: ...


class MemoryQueue:
    """FIFO queue worked in-process.

    Each job is popped under a lock, so a job is handled by at most one
    worker at a time. Failed jobs are re-queued until ``max_attempts`` is
    reached, then recorded in ``failed_jobs``.
    """

    def __init__(
        self,
        name: str | None = None,
        max_attempts: int | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.name = name or self.settings.default_queue
        self.max_attempts = max(1, max_attempts or self.settings.queue_max_attempts)
        self.failed_jobs: list[FailedJob] = []
        self._jobs: deque[QueueableJob] = deque()
        self._lock = Lock()

    def push(self, job: QueueableJob) -> DispatchReceipt:
        """Enqueue a job without running it."""
        with self._lock:
            self._jobs.append(job)
        logger.debug("Queued job {} on '{}'", job.job_id, self.name)
        return DispatchReceipt(job_id=job.job_id, queue=self.name)

    def size(self) -> int:
        """Number of jobs waiting."""
        with self._lock:
            return len(self._jobs)

    def __len__(self) -> int:
        return self.size()

    def work_next(self) -> bool:
        """Handle the next job. Returns False when the queue is empty."""
        with self._lock:
            if not self._jobs:
                return False
            job = self._jobs.popleft()

        job.attempts += 1
        try:
            job.handle()
        except Exception as err:
            self._handle_failure(job, err)
        else:
            logger.debug("Job {} done after {} attempt(s)", job.job_id, job.attempts)
        return True

    def work(self) -> int:
        """Drain the queue and return how many jobs were handled."""
        processed = 0
        with tqdm(
            total=self.size(),
            desc=f"Working queue '{self.name}'",
            unit="job",
            disable=not self.settings.queue_progress,
        ) as pbar:
            while self.work_next():
                processed += 1
                pbar.update(1)
        return processed

    def _handle_failure(self, job: QueueableJob, err: Exception) -> None:
        if job.attempts < self.max_attempts:
            logger.warning(
                "Job {} failed (attempt {}/{}), re-queueing: {}",
                job.job_id,
                job.attempts,
                self.max_attempts,
                err,
            )
            with self._lock:
                self._jobs.append(job)
            return

        trace = traceback.format_exc()
        self.failed_jobs.append(
            FailedJob(job_id=job.job_id, job=job, error=str(err), trace=trace)
        )
        logger.error("Job {} failed after {} attempt(s): {}", job.job_id, job.attempts, err)


_queue_override: TaskQueue | None = None


@lru_cache()
def _memory_queue() -> MemoryQueue:
    return MemoryQueue()


def get_default_queue() -> TaskQueue:
    """Queue used when a dispatcher is not handed one explicitly."""
    if _queue_override is not None:
        return _queue_override
    return _memory_queue()


def set_default_queue(queue: TaskQueue | None) -> None:
    """Swap the default queue; ``None`` resets it to a fresh in-memory one."""
    global _queue_override
    _queue_override = queue
    if queue is None:
        _memory_queue.cache_clear()
