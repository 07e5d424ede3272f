"""Queued pipeline job."""

from __future__ import annotations

import copy
from typing import Any, Callable, Iterable
from uuid import uuid4

from loguru import logger

from model_traits.pipeline.runner import Destination, Pipe, Pipeline


class DispatchablePipeline:
    """Snapshot of a pipeline call, handled later by a queue worker.

    The subject is copied with ``snapshot`` (a deep copy by default) when the
    job is created so later changes on the caller's side do not leak into
    the queued run. ``snapshot=None`` keeps the subject as given, for
    callers that already took their own copy. The pipe list is frozen at
    creation; the pipes themselves are kept by reference.
    """

    def __init__(
        self,
        subject: Any,
        pipes: Iterable[Pipe] | None = None,
        destination: Destination | None = None,
        pipeline: Pipeline | None = None,
        snapshot: Callable[[Any], Any] | None = copy.deepcopy,
    ) -> None:
        self.job_id = uuid4().hex
        self.subject = snapshot(subject) if snapshot is not None else subject
        self.pipes = list(pipes) if pipes is not None else None
        self.destination = destination
        self.pipeline = pipeline or Pipeline()
        self.attempts = 0

    def handle(self) -> Any:
        """Run the captured pipeline and return its result."""
        logger.debug("Handling queued pipeline {}", self.job_id)
        return self.pipeline.run(self.subject, self.pipes, self.destination)

    def __repr__(self) -> str:
        return f"DispatchablePipeline(job_id={self.job_id!r}, subject={type(self.subject).__name__})"
