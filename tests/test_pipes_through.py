"""Tests for the PipesThrough mixin and queued pipelines."""

from __future__ import annotations

from threading import Lock

from model_traits.pipeline import Pipeline, PipesThrough
from model_traits.queue import DispatchReceipt, MemoryQueue


class Order(PipesThrough):
    def __init__(self) -> None:
        self.foo = None


def _set_foo(value: str):
    def pipe(order, next):
        order.foo = value
        return next(order)

    return pipe


def test_pipe_runs_single_pipe() -> None:
    assert Order().pipe(_set_foo("bar")).foo == "bar"


def test_pipe_uses_custom_pipeline() -> None:
    class CustomOrder(Order):
        def make_pipeline(self) -> Pipeline:
            return Pipeline([_set_foo("bar")])

    assert CustomOrder().pipe().foo == "bar"


def test_pipe_falls_back_to_host_default_pipes() -> None:
    class DefaultOrder(Order):
        def default_pipes(self):
            return [_set_foo("default")]

    assert DefaultOrder().pipe().foo == "default"


def test_pipe_to_destination() -> None:
    def destination(order):
        order.foo = "quz"
        return order

    assert Order().pipe([_set_foo("bar")], destination).foo == "quz"


def test_dispatch_queues_without_running(queue: MemoryQueue) -> None:
    ran: list[bool] = []

    def pipe(order, next):
        ran.append(True)
        return next(order)

    receipt = Order().dispatch_pipeline([pipe])

    assert isinstance(receipt, DispatchReceipt)
    assert receipt.queue == "testing"
    assert ran == []
    assert len(queue) == 1

    assert queue.work() == 1
    assert ran == [True]
    assert len(queue) == 0


def test_dispatch_with_no_pipes_queues_a_job(queue: MemoryQueue) -> None:
    Order().dispatch_pipeline()

    assert queue.size() == 1


def _capture(results: list):
    def pipe(order, next):
        results.append(order)
        return next(order)

    return pipe


def test_dispatch_goes_to_explicit_empty_queue(queue: MemoryQueue, settings) -> None:
    mine = MemoryQueue(name="mine", settings=settings)

    receipt = Order().dispatch_pipeline([_set_foo("bar")], queue=mine)

    assert receipt.queue == "mine"
    assert len(mine) == 1
    assert len(queue) == 0


def test_queued_job_reproduces_sync_result(settings) -> None:
    queue = MemoryQueue(settings=settings)
    handled: list = []

    order = Order()
    order.dispatch_pipeline([_set_foo("bar"), _capture(handled)], queue=queue)

    assert queue.work() == 1
    assert handled[0].foo == order.pipe([_set_foo("bar")]).foo == "bar"


def test_queued_job_owns_a_snapshot_of_the_subject(queue: MemoryQueue) -> None:
    handled: list = []
    order = Order()
    order.dispatch_pipeline([_capture(handled), _set_foo("queued")])
    order.foo = "changed after dispatch"

    assert queue.work() == 1
    assert handled[0] is not order
    assert handled[0].foo == "queued"
    assert order.foo == "changed after dispatch"


def test_queued_job_keeps_pipes_from_dispatch_time(settings) -> None:
    class ConfiguredOrder(Order):
        def __init__(self) -> None:
            super().__init__()
            self.pipeline = Pipeline([_set_foo("bar")])

        def make_pipeline(self) -> Pipeline:
            return self.pipeline

    queue = MemoryQueue(settings=settings)
    handled: list = []
    order = ConfiguredOrder()
    order.pipeline.pipe(_capture(handled))

    order.dispatch_pipeline(queue=queue)
    order.pipeline.through(_set_foo("changed after dispatch"), _capture(handled))

    assert queue.work() == 1
    assert handled[0].foo == "bar"


def test_host_with_lock_overrides_snapshot(settings) -> None:
    class LockedOrder(Order):
        def __init__(self) -> None:
            super().__init__()
            self._lock = Lock()

        def pipeline_snapshot(self):
            snapshot = LockedOrder()
            snapshot.foo = self.foo
            return snapshot

    queue = MemoryQueue(settings=settings)
    handled: list = []
    order = LockedOrder()
    order.foo = "before"

    order.dispatch_pipeline([_capture(handled)], queue=queue)

    assert queue.work() == 1
    assert queue.failed_jobs == []
    assert handled[0] is not order
    assert handled[0].foo == "before"
