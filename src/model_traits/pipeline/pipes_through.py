"""Mixin that sends the host object through a pipeline."""

from __future__ import annotations

import copy
from typing import Any, Iterable

from model_traits.pipeline.jobs import DispatchablePipeline
from model_traits.pipeline.runner import Destination, Pipe, Pipeline, normalize_pipes
from model_traits.queue import DispatchReceipt, TaskQueue, get_default_queue


class PipesThrough:
    """Adds ``pipe()`` and ``dispatch_pipeline()`` to a host class.

    Hosts customise behaviour by overriding the hooks:

    - ``make_pipeline()`` returns the ``Pipeline`` used for runs;
    - ``default_pipes()`` supplies pipes when none are passed and the
      pipeline has none configured;
    - ``pipeline_queue()`` returns the queue deferred runs go to;
    - ``pipeline_snapshot()`` returns the copy of the host a queued job
      carries. Defaults to a deep copy; hosts holding locks or open
      resources override it.
    """

    def make_pipeline(self) -> Pipeline:
        return Pipeline()

    def default_pipes(self) -> list[Pipe]:
        return []

    def pipeline_queue(self) -> TaskQueue:
        return get_default_queue()

    def pipeline_snapshot(self) -> Any:
        return copy.deepcopy(self)

    def pipe(
        self,
        pipes: Pipe | Iterable[Pipe] | None = None,
        destination: Destination | None = None,
    ) -> Any:
        """Send this object through the pipes and return the result."""
        pipeline = self.make_pipeline()
        return pipeline.run(self, self._pipes_for(pipeline, pipes), destination)

    def dispatch_pipeline(
        self,
        pipes: Pipe | Iterable[Pipe] | None = None,
        queue: TaskQueue | None = None,
    ) -> DispatchReceipt:
        """Queue a run of this object through the pipes.

        Nothing runs now; the queue worker handles the job later and its
        failures stay with the queue.
        """
        pipeline = self.make_pipeline()
        job = DispatchablePipeline(
            self.pipeline_snapshot(),
            pipeline.resolve_pipes(self._pipes_for(pipeline, pipes)),
            pipeline=pipeline,
            snapshot=None,
        )
        return (queue if queue is not None else self.pipeline_queue()).push(job)

    def _pipes_for(
        self,
        pipeline: Pipeline,
        pipes: Pipe | Iterable[Pipe] | None,
    ) -> list[Pipe] | None:
        explicit = normalize_pipes(pipes)
        if explicit is not None:
            return explicit
        if pipeline.resolve_pipes():
            # Let the pipeline use what it already carries.
            return None
        return self.default_pipes()
