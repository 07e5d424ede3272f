"""Pipeline runner, queued pipeline jobs and the ``PipesThrough`` mixin."""

from .jobs import DispatchablePipeline
from .pipes_through import PipesThrough
from .runner import Pipeline, identity, run_pipeline

__all__ = [
    "Pipeline",
    "PipesThrough",
    "DispatchablePipeline",
    "identity",
    "run_pipeline",
]
