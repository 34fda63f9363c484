from __future__ import annotations

import pytest

from feature_env.kernel.errors import InvalidFeatureError
from feature_env.kernel.feature import Feature, FeatureBuilder, new_feature
from feature_env.kernel.step import Level, Step, get_steps_by_level


def _noop(ctx, reporter, config):
    return ctx


def test_builder_keeps_declaration_order() -> None:
    # Steps are stored in declaration order with their levels.
    feature = (
        FeatureBuilder("pods")
        .setup(_noop)
        .assess("created", _noop)
        .assess("ready", _noop)
        .teardown(_noop)
        .feature()
    )
    assert isinstance(feature, Feature)
    assert feature.name == "pods"
    assert [(s.level, s.name) for s in feature.steps] == [
        (Level.SETUP, "setup"),
        (Level.ASSESS, "created"),
        (Level.ASSESS, "ready"),
        (Level.TEARDOWN, "teardown"),
    ]


def test_get_steps_by_level_preserves_order() -> None:
    # Partitioning by level keeps the relative order of steps.
    feature = (
        FeatureBuilder("f")
        .assess("b", _noop)
        .setup(_noop, name="s1")
        .assess("a", _noop)
        .setup(_noop, name="s2")
        .feature()
    )
    assert [s.name for s in get_steps_by_level(feature.steps, Level.ASSESS)] == ["b", "a"]
    assert [s.name for s in get_steps_by_level(feature.steps, Level.SETUP)] == ["s1", "s2"]
    assert get_steps_by_level(feature.steps, Level.TEARDOWN) == []


def test_feature_is_immutable() -> None:
    # Features cannot be changed once built.
    feature = FeatureBuilder("f").assess("a", _noop).feature()
    with pytest.raises(AttributeError):
        feature.name = "g"  # type: ignore[misc]
    assert isinstance(feature.steps, tuple)


def test_builder_validates_names() -> None:
    with pytest.raises(InvalidFeatureError):
        FeatureBuilder("")
    with pytest.raises(InvalidFeatureError):
        FeatureBuilder("f").assess("", _noop)
    with pytest.raises(InvalidFeatureError):
        FeatureBuilder("f").setup("not callable")  # type: ignore[arg-type]
    with pytest.raises(InvalidFeatureError):
        new_feature("")


def test_step_none_result_keeps_context() -> None:
    # A step returning None hands the incoming context to the next step.
    step = Step(level=Level.ASSESS, name="a", func=lambda ctx, reporter, config: None)
    marker = object()
    assert step(marker, None, None) is marker  # type: ignore[arg-type]


def test_new_feature_from_steps() -> None:
    steps = [Step(level=Level.SETUP, name="s", func=_noop)]
    feature = new_feature("f", steps)
    assert feature.steps == tuple(steps)
