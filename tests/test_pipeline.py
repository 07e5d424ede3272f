"""Tests for the Pipeline runner."""

from __future__ import annotations

import pytest

from model_traits.pipeline import Pipeline, run_pipeline


def _marker(name: str):
    def pipe(subject: list[str], next):
        subject.append(name)
        return next(subject)

    return pipe


def test_pipes_run_in_order_before_destination() -> None:
    calls: list[str] = []

    def destination(subject: list[str]) -> list[str]:
        calls.append("destination")
        return subject

    result = Pipeline().run([], [_marker("first"), _marker("second")], destination)

    assert result == ["first", "second"]
    assert calls == ["destination"]


def test_empty_pipes_go_straight_to_destination() -> None:
    result = Pipeline().run(2, [], lambda subject: subject * 10)

    assert result == 20


def test_destination_defaults_to_identity() -> None:
    subject = {"status": "new"}

    assert run_pipeline(subject, []) is subject


def test_short_circuit_skips_rest_of_chain() -> None:
    seen: list[str] = []

    def stop(subject, next):
        seen.append("stop")
        return "halted"

    def never(subject, next):
        seen.append("never")
        return next(subject)

    def destination(subject):
        seen.append("destination")
        return subject

    result = Pipeline().run({}, [stop, never], destination)

    assert result == "halted"
    assert seen == ["stop"]


def test_pipe_can_rewrite_result_on_the_way_back() -> None:
    def wrap(subject, next):
        return {"wrapped": next(subject)}

    assert run_pipeline(1, [wrap], lambda subject: subject + 1) == {"wrapped": 2}


def test_handle_objects_are_accepted_as_pipes() -> None:
    class Upper:
        def handle(self, subject: str, next):
            return next(subject.upper())

    assert Pipeline([Upper()]).run("order") == "ORDER"


def test_configured_pipes_are_used_when_none_passed() -> None:
    pipeline = Pipeline().through(_marker("a")).pipe(_marker("b"))

    assert pipeline.run([]) == ["a", "b"]


def test_default_pipes_fill_in_for_unconfigured_pipeline() -> None:
    class Stamped(Pipeline):
        def default_pipes(self):
            return [_marker("default")]

    assert Stamped().run([]) == ["default"]
    assert Stamped().run([], []) == []


def test_errors_from_pipes_propagate_unchanged() -> None:
    def boom(subject, next):
        raise ValueError("bad subject")

    with pytest.raises(ValueError, match="bad subject"):
        run_pipeline({}, [boom])


def test_invalid_pipe_raises_type_error() -> None:
    with pytest.raises(TypeError):
        run_pipeline({}, [object()])
