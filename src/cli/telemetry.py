"""Telemetry wrappers for CLI invocation."""

from __future__ import annotations

import asyncio
import inspect
import logging
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from cyclopts.bind import normalize_tokens
from cyclopts.exceptions import CycloptsError
from opentelemetry import context as otel_context
from opentelemetry import trace
from opentelemetry.context import Context

from cli.actions import CommandOptions, flag_set_from_arguments, positional_values
from cli.context import RunContext
from cli.error_mapping import map_error
from cli.exit_codes import ExitCode
from cli.middleware import MiddlewareRunner, NextFn
from cli.result import ActionResult
from cli.result_action import render_result
from obs.otel.baggage import set_baggage_in_context
from obs.otel.constants import AttributeName
from obs.otel.domains import DOMAINS, Domain
from obs.otel.events import ROOT_COMMAND, command_event_name
from obs.otel.run_context import get_last_trace_id, reset_run_id, set_last_trace_id, set_run_id
from obs.otel.scopes import SCOPE_CLI
from obs.otel.tracing import get_tracer, set_span_attributes, span_trace_id
from obs.otel.usage import UsageAttributes, process_usage_attributes

if TYPE_CHECKING:
    from inspect import BoundArguments

    from cyclopts import App, ArgumentCollection

_LOGGER = logging.getLogger(__name__)


class TelemetryMiddleware:
    """Wrap an action with a command span and classify its failures.

    Parameters
    ----------
    options
        Metadata of the invocation being wrapped.
    usage
        Usage attributes applied to the span when it closes.
    domains
        Domain table used to anonymize service hosts in error details.
    """

    def __init__(
        self,
        options: CommandOptions,
        *,
        usage: UsageAttributes | None = None,
        domains: Sequence[Domain] = DOMAINS,
    ) -> None:
        self._options = options
        self._usage = usage if usage is not None else process_usage_attributes()
        self._domains = domains

    def run(self, ctx: Context | None, next_fn: NextFn) -> ActionResult:
        """Run ``next_fn`` inside a span named after the command.

        Exceptions raised by ``next_fn`` are classified onto the span and
        re-raised unchanged.

        Parameters
        ----------
        ctx
            Parent context; the current context when ``None``.
        next_fn
            Rest of the middleware chain.

        Returns
        -------
        ActionResult
            Result of ``next_fn`` stamped with the trace id.
        """
        # Command paths are assembled from registered command names only.
        span_name = command_event_name(self._options.command_path)
        span = get_tracer(SCOPE_CLI).start_span(span_name, context=ctx)
        trace_id = span_trace_id(span)
        set_last_trace_id(trace_id)
        _LOGGER.debug("TraceID: %s", trace_id)
        try:
            span_ctx = trace.set_span_in_context(span, ctx)
            if not self._options.is_child_action:
                span_ctx = set_baggage_in_context(
                    span_ctx,
                    {AttributeName.CMD_ENTRY: span_name},
                )
            if self._options.flags is not None:
                span.set_attribute(AttributeName.CMD_FLAGS, self._options.flags.changed_names())
            span.set_attribute(AttributeName.CMD_ARGS_COUNT, len(self._options.args))

            token = otel_context.attach(span_ctx)
            try:
                result = next_fn(span_ctx)
            except Exception as exc:
                map_error(exc, span, domains=self._domains)
                raise
            finally:
                otel_context.detach(token)

            if result is None:
                result = ActionResult()
            return result.with_trace_id(trace_id)
        finally:
            set_span_attributes(span, self._usage.snapshot())
            span.end()


def telemetry_middleware_factory(
    usage: UsageAttributes | None = None,
) -> Callable[[CommandOptions], TelemetryMiddleware]:
    """Return a middleware factory bound to ``usage``.

    Returns
    -------
    Callable[[CommandOptions], TelemetryMiddleware]
        Factory for :class:`MiddlewareRunner`.
    """

    def factory(options: CommandOptions) -> TelemetryMiddleware:
        return TelemetryMiddleware(options, usage=usage)

    return factory


@dataclass(frozen=True)
class ParsedInvocation:
    """Result of parsing one command line.

    Parameters
    ----------
    command_path
        Canonical command names, starting at the root command.
    command
        Resolved command callable.
    bound
        Arguments bound by the parser.
    ignored
        ``parse=False`` parameters, by name, with their type hints.
    arguments
        Argument collection the parser bound tokens into.
    """

    command_path: tuple[str, ...]
    command: Callable[..., object]
    bound: BoundArguments
    ignored: dict[str, object]
    arguments: ArgumentCollection


def parse_invocation(app: App, tokens: Sequence[str] | None) -> ParsedInvocation:
    """Parse ``tokens`` and keep the argument collection cyclopts bound them into.

    Errors are printed and re-raised rather than exiting the process.

    Returns
    -------
    ParsedInvocation
        Resolved command and its parsed arguments.

    Raises
    ------
    CycloptsError
        When the command line does not parse.
    """
    normalized = normalize_tokens(list(tokens or ()))
    overrides = {"print_error": True, "exit_on_error": False}
    with app.app_stack(normalized, overrides):
        try:
            _chain, apps, _unused = app.parse_commands(normalized, include_parent_meta=False)
            command, bound, _unused, ignored, arguments = app._parse_known_args(
                normalized,
                raise_on_unused_tokens=True,
            )
        except CycloptsError as exc:
            app._handle_parse_error(exc, normalized)
    # Commands are reported by their registered name, never by the alias typed.
    path = tuple(sub_app.name[0] for sub_app in apps[1:] if not sub_app.name[0].startswith("-"))
    return ParsedInvocation(
        command_path=path,
        command=command,
        bound=bound,
        ignored=dict(ignored),
        arguments=arguments,
    )


def build_command_options(parsed: ParsedInvocation) -> CommandOptions:
    """Describe a parsed invocation without retaining flag values.

    Returns
    -------
    CommandOptions
        Invocation metadata.
    """
    return CommandOptions(
        command_path=" ".join((ROOT_COMMAND, *parsed.command_path)),
        flags=flag_set_from_arguments(parsed.arguments),
        args=positional_values(parsed.arguments),
    )


def _call_command(command: Callable[..., object], bound: BoundArguments) -> ActionResult | None:
    result = command(*bound.args, **bound.kwargs)
    if inspect.iscoroutine(result):
        result = asyncio.run(result)
    if result is None or isinstance(result, ActionResult):
        return result
    if isinstance(result, int):
        return ActionResult(exit_code=result)
    msg = f"Unexpected command return type: {type(result).__name__}."
    raise TypeError(msg)


def invoke_with_telemetry(
    app: App,
    tokens: Sequence[str] | None,
    *,
    run_context: RunContext | None,
    runner: MiddlewareRunner | None = None,
) -> int:
    """Parse and run a command through the telemetry middleware.

    Args:
        app: CLI app instance.
        tokens: Command tokens to execute.
        run_context: Optional runtime context injected into commands.
        runner: Middleware chain; a telemetry-only chain by default.

    Returns:
        int: Process exit code.
    """
    try:
        parsed = parse_invocation(app, tokens)
    except CycloptsError as exc:
        return ExitCode.from_exception(exc)

    command, bound = parsed.command, parsed.bound
    if run_context is not None:
        for name, hint in parsed.ignored.items():
            if hint is RunContext or name == "run_context":
                bound.arguments[name] = run_context

    options = build_command_options(parsed)
    runner = runner or MiddlewareRunner([telemetry_middleware_factory()])
    run_token = set_run_id(run_context.run_id) if run_context is not None else None
    try:
        result = runner.run_action(None, options, lambda _ctx: _call_command(command, bound))
    except Exception as exc:
        _LOGGER.exception("Command execution failed.")
        trace_id = get_last_trace_id()
        if trace_id:
            sys.stderr.write(f"TraceID: {trace_id}\n")
        return ExitCode.from_exception(exc)
    finally:
        if run_token is not None:
            reset_run_id(run_token)
    return render_result(result)


__all__ = [
    "ParsedInvocation",
    "TelemetryMiddleware",
    "build_command_options",
    "invoke_with_telemetry",
    "parse_invocation",
    "telemetry_middleware_factory",
]
