"""Pipeline runner that threads a subject through a chain of pipes."""

from __future__ import annotations

from functools import reduce
from typing import Any, Callable, Iterable, Sequence, Union

from loguru import logger

Next = Callable[[Any], Any]
Pipe = Union[Callable[[Any, Next], Any], Any]
Destination = Callable[[Any], Any]


def identity(subject: Any) -> Any:
    """Default destination: hand back the subject untouched."""
    return subject


def normalize_pipes(pipes: Pipe | Iterable[Pipe] | None) -> list[Pipe] | None:
    """Accept a single pipe or a sequence of pipes."""
    if pipes is None:
        return None
    if callable(pipes) or hasattr(pipes, "handle"):
        return [pipes]
    return list(pipes)


class Pipeline:
    """Sends a subject through an ordered list of pipes to a destination.

    A pipe is either a callable ``(subject, next)`` or an object exposing
    ``handle(subject, next)``. Each pipe decides whether to hand control to
    the rest of the chain by calling ``next``; returning without calling it
    short-circuits the run.

    Example:
        ```python
        def stamp(order, next):
            order.stamped = True
            return next(order)

        Pipeline([stamp]).run(order)
        ```
    """

    def __init__(self, pipes: Iterable[Pipe] | None = None) -> None:
        self.pipes: list[Pipe] = list(pipes) if pipes is not None else []

    def default_pipes(self) -> list[Pipe]:
        """Pipes used when neither the caller nor the instance supplies any."""
        return []

    def through(self, *pipes: Pipe) -> Pipeline:
        """Replace the configured pipes."""
        self.pipes = list(pipes)
        return self

    def pipe(self, *pipes: Pipe) -> Pipeline:
        """Append pipes to the configured ones."""
        self.pipes.extend(pipes)
        return self

    def resolve_pipes(self, pipes: Iterable[Pipe] | None = None) -> list[Pipe]:
        """Return the pipes a run would use."""
        if pipes is not None:
            return list(pipes)
        return list(self.pipes) or self.default_pipes()

    def run(
        self,
        subject: Any,
        pipes: Iterable[Pipe] | None = None,
        destination: Destination | None = None,
    ) -> Any:
        """Run the subject through the pipes and return the final result.

        Args:
            subject: Value handed to the first pipe.
            pipes: Pipes for this run. Falls back to the configured pipes,
                then to ``default_pipes()``.
            destination: Called with the subject once every pipe has called
                ``next``. Defaults to identity.

        Returns:
            Whatever the destination, or a short-circuiting pipe, returns.
        """
        chain = self.resolve_pipes(pipes)
        destination = destination or identity

        logger.debug("Running pipeline with {} pipe(s)", len(chain))

        if not chain:
            return destination(subject)

        runner = reduce(self._carry, reversed(chain), destination)
        return runner(subject)

    def _carry(self, stack: Next, pipe: Pipe) -> Next:
        def step(subject: Any) -> Any:
            return self._call_pipe(pipe, subject, stack)

        return step

    @staticmethod
    def _call_pipe(pipe: Pipe, subject: Any, stack: Next) -> Any:
        if hasattr(pipe, "handle"):
            return pipe.handle(subject, stack)
        if callable(pipe):
            return pipe(subject, stack)
        raise TypeError(f"Pipe {pipe!r} is neither callable nor exposes handle().")


def run_pipeline(
    subject: Any,
    pipes: Sequence[Pipe] | None = None,
    destination: Destination | None = None,
) -> Any:
    """Run a one-off pipeline."""
    return Pipeline().run(subject, pipes, destination)
