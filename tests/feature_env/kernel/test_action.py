from __future__ import annotations

import pytest

from feature_env.config.envconf import Config
from feature_env.kernel.action import Action, ActionRole
from feature_env.kernel.context import Context, background
from feature_env.kernel.errors import ActionError, ContractViolation


def _increment(ctx: Context, config: Config) -> Context:
    return ctx.with_value("n", ctx.value("n", 0) + 1)


def test_run_threads_context_through_functions() -> None:
    # N incrementing functions starting from 0 end at N.
    action = Action(role=ActionRole.SETUP, funcs=tuple([_increment] * 5))
    ctx = action.run(background().with_value("n", 0), Config())
    assert ctx.value("n") == 5


def test_run_stops_at_first_failure() -> None:
    # Functions after the failing one never run; the error carries the last good context.
    calls: list[str] = []

    def first(ctx: Context, config: Config) -> Context:
        calls.append("first")
        return ctx.with_value("stage", "first")

    def boom(ctx: Context, config: Config) -> Context:
        calls.append("boom")
        raise RuntimeError("boom")

    def never(ctx: Context, config: Config) -> Context:
        calls.append("never")
        return ctx

    action = Action(role=ActionRole.BEFORE, funcs=(first, boom, never))
    with pytest.raises(ActionError) as excinfo:
        action.run(background(), Config())

    err = excinfo.value
    assert calls == ["first", "boom"]
    assert err.role is ActionRole.BEFORE
    assert err.index == 1
    assert err.context.value("stage") == "first"
    assert isinstance(err.cause, RuntimeError)
    assert err.__cause__ is err.cause


def test_none_function_and_none_result_keep_context() -> None:
    # None entries are skipped and a None return leaves the context unchanged.
    seen: list[object] = []

    def observe(ctx: Context, config: Config) -> None:
        seen.append(ctx.value("k"))

    action = Action(role=ActionRole.FINISH, funcs=(None, observe))
    start = background().with_value("k", "v")
    assert action.run(start, Config()) is start
    assert seen == ["v"]


def test_contract_violation_is_not_wrapped() -> None:
    # Misuse errors escape unchanged so they stay unrecoverable.
    def misuse(ctx: Context, config: Config) -> Context:
        raise ContractViolation("misuse")

    action = Action(role=ActionRole.AFTER, funcs=(misuse,))
    with pytest.raises(ContractViolation):
        action.run(background(), Config())


def test_config_is_passed_by_reference() -> None:
    # Every function sees the same Config object.
    config = Config().with_setting("seen", [])

    def record(ctx: Context, cfg: Config) -> Context:
        cfg.value("seen").append(cfg is config)
        return ctx

    Action(role=ActionRole.SETUP, funcs=(record, record)).run(background(), config)
    assert config.value("seen") == [True, True]
