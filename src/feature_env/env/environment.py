from __future__ import annotations

from dataclasses import dataclass, field

from feature_env.config.envconf import Config
from feature_env.env.filters import name_matches
from feature_env.kernel.action import Action, ActionRole
from feature_env.kernel.context import Context, background
from feature_env.kernel.errors import ActionError, ContractViolation, SuiteAborted
from feature_env.kernel.feature import Feature
from feature_env.kernel.step import EnvFunc, Level, Step, get_steps_by_level
from feature_env.observability.adapters.logging import LogSink, build_log_sink
from feature_env.observability.domain.logging import LogMessage
from feature_env.reporting.scope import Reporter
from feature_env.reporting.suite import SuiteRunner


@dataclass(slots=True)
class Environment:
    """Drives the suite lifecycle and per-feature execution.

    The environment owns the current context and replaces it with the output
    of every action and step, so each stage sees what the previous one
    produced. Registered actions form one append-only list; the role of each
    action decides when it runs and how its failure is handled:

    * setup: before the suite; the first failure aborts the process.
    * before/after: around every feature; the first failure fails the test.
    * finish: after the suite; failures are logged and the next one runs.
    """

    context: Context | None
    config: Config
    actions: list[Action] = field(default_factory=list)
    log_sink: LogSink | None = None
    _own_log_sink: LogSink | None = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.log_sink is None:
            self.log_sink = self._own_log_sink = build_log_sink(self.config.logging)

    def with_context(self, ctx: Context | None) -> Environment:
        # Derived environment: same config, copied actions; the receiver is left untouched.
        if ctx is None:
            raise ContractViolation("nil context")
        derived = Environment(context=ctx, config=self.config, actions=list(self.actions), log_sink=self.log_sink)
        derived._own_log_sink = self._own_log_sink
        return derived

    def setup(self, *funcs: EnvFunc) -> Environment:
        return self._register(ActionRole.SETUP, funcs)

    def before_test(self, *funcs: EnvFunc) -> Environment:
        return self._register(ActionRole.BEFORE, funcs)

    def after_test(self, *funcs: EnvFunc) -> Environment:
        return self._register(ActionRole.AFTER, funcs)

    def finish(self, *funcs: EnvFunc) -> Environment:
        return self._register(ActionRole.FINISH, funcs)

    def get_setup_actions(self) -> list[Action]:
        return self._actions_by_role(ActionRole.SETUP)

    def get_before_actions(self) -> list[Action]:
        return self._actions_by_role(ActionRole.BEFORE)

    def get_after_actions(self) -> list[Action]:
        return self._actions_by_role(ActionRole.AFTER)

    def get_finish_actions(self) -> list[Action]:
        return self._actions_by_role(ActionRole.FINISH)

    def run(self, suite: SuiteRunner) -> int:
        """Run setups, the suite and finishes; return the suite's exit status.

        Meant to be called once per process, e.g. ``sys.exit(env.run(PytestSuite(args)))``.
        A failing setup raises SuiteAborted (a SystemExit with status 1) without
        running the suite or any finish action.
        The log sink built from the config is closed on every way out.
        """
        ctx = self._require_context()
        try:
            self._run_setups(ctx)

            self._log("debug", "suite run started", phase="running")
            try:
                exit_code = suite.run()
            finally:
                self._run_finishes()

            self._log("debug", "suite completed", phase="exit", exit_code=exit_code)
            return exit_code
        finally:
            self.close()

    def close(self) -> None:
        # Only the sink built from the config is closed; it reopens on the next record.
        if self._own_log_sink is not None:
            self._own_log_sink.close()

    def test(self, reporter: Reporter, feature: Feature) -> None:
        """Execute one feature under `reporter`.

        Before actions, the feature and after actions run in that order with
        the context threaded through all three. A failing before or after
        action fails `reporter` with the feature name and the error, which
        ends this call.
        """
        ctx = self._require_context()

        for action in self.get_before_actions():
            try:
                ctx = action.run(ctx, self.config)
            except ActionError as err:
                self.context = err.context
                reporter.fail(f"BeforeTest failure: {feature.name}: {err.cause}")
            self.context = ctx

        ctx = self._exec_feature(ctx, reporter, feature)
        self.context = ctx

        for action in self.get_after_actions():
            try:
                ctx = action.run(ctx, self.config)
            except ActionError as err:
                self.context = err.context
                reporter.fail(f"AfterTest failure: {feature.name}: {err.cause}")
            self.context = ctx

    def _exec_feature(self, ctx: Context, reporter: Reporter, feature: Feature) -> Context:
        # Setups and teardowns run in the feature scope; each assessment gets its own sub-scope.
        config = self.config

        def feature_body(scope: Reporter) -> None:
            nonlocal ctx
            if not name_matches(config.feature_regex, feature.name):
                scope.skip(f'Skipping feature "{feature.name}": name not matched')

            for setup in get_steps_by_level(feature.steps, Level.SETUP):
                ctx = setup(ctx, scope, config)

            for assess in get_steps_by_level(feature.steps, Level.ASSESS):
                scope.run(assess.name, assessment_body(assess))

            for teardown in get_steps_by_level(feature.steps, Level.TEARDOWN):
                ctx = teardown(ctx, scope, config)

        def assessment_body(assess: Step):
            def body(scope: Reporter) -> None:
                nonlocal ctx
                if not name_matches(config.assessment_regex, assess.name):
                    scope.skip(f'Skipping assessment "{assess.name}": name not matched')
                ctx = assess(ctx, scope, config)

            return body

        reporter.run(feature.name, feature_body)
        return ctx

    def _register(self, role: ActionRole, funcs: tuple[EnvFunc, ...]) -> Environment:
        # Registering nothing is a no-op; otherwise exactly one action is appended.
        if not funcs:
            return self
        self.actions.append(Action(role=role, funcs=tuple(funcs)))
        return self

    def _actions_by_role(self, role: ActionRole) -> list[Action]:
        return [action for action in self.actions if action.role is role]

    def _run_setups(self, ctx: Context) -> None:
        # Fail fast: the first failing setup aborts the process.
        self._log("debug", "suite setup started", phase="setup")
        for index, action in enumerate(self.get_setup_actions()):
            try:
                ctx = action.run(ctx, self.config)
            except ActionError as err:
                self.context = err.context
                self._log("fatal", "setup action failed", phase="setup", action=index, error=str(err.cause))
                raise SuiteAborted(err) from err
            self.context = ctx

    def _run_finishes(self) -> None:
        # Best effort: a failing finish is logged and the remaining ones still run.
        ctx = self._require_context()
        for index, action in enumerate(self.get_finish_actions()):
            try:
                ctx = action.run(ctx, self.config)
            except ActionError as err:
                ctx = err.context
                self._log("error", "finish action failed", phase="finish", action=index, error=str(err.cause))
            self.context = ctx

    def _require_context(self) -> Context:
        if self.context is None:
            raise ContractViolation("context not set")
        return self.context

    def _log(self, level: str, message: str, **fields: object) -> None:
        assert self.log_sink is not None
        self.log_sink.emit(LogMessage(level=level, message=message, fields=fields))


def new_environment() -> Environment:
    # Background context and an empty config.
    return Environment(context=background(), config=Config())


def new_with_config(config: Config) -> Environment:
    return Environment(context=background(), config=config)


def new_with_context(ctx: Context | None, config: Config | None) -> Environment:
    # Unlike with_context, bad input here is an ordinary error the caller can handle.
    if ctx is None:
        raise ValueError("context is nil")
    if config is None:
        raise ValueError("environment config is nil")
    return Environment(context=ctx, config=config)
