"""Middleware chain that runs CLI actions."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import replace
from typing import Protocol, TypeAlias

from opentelemetry.context import Context

from cli.actions import CommandOptions
from cli.result import ActionResult

NextFn: TypeAlias = Callable[[Context | None], ActionResult | None]
Action: TypeAlias = Callable[[Context | None], ActionResult | None]


class Middleware(Protocol):
    """A step wrapped around an action; calls ``next_fn`` to continue."""

    def run(self, ctx: Context | None, next_fn: NextFn) -> ActionResult | None:
        """Run this step and the rest of the chain."""
        ...


MiddlewareFactory: TypeAlias = Callable[[CommandOptions], Middleware]


class MiddlewareRunner:
    """Run actions through an ordered list of middleware.

    Middleware instances are created per invocation from factories, so each
    sees the options of the action it wraps. The first factory is outermost.
    """

    def __init__(self, factories: Sequence[MiddlewareFactory] = ()) -> None:
        self._factories: list[MiddlewareFactory] = list(factories)

    def use(self, factory: MiddlewareFactory) -> None:
        """Append a middleware factory to the chain."""
        self._factories.append(factory)

    def run_action(
        self,
        ctx: Context | None,
        options: CommandOptions,
        action: Action,
    ) -> ActionResult:
        """Run ``action`` wrapped by every registered middleware.

        Parameters
        ----------
        ctx
            Parent context; the current context when ``None``.
        options
            Invocation metadata.
        action
            Action to run at the end of the chain.

        Returns
        -------
        ActionResult
            Result of the chain; an empty result when nothing was returned.
        """
        chain = [factory(options) for factory in self._factories]

        def call(index: int, current: Context | None) -> ActionResult | None:
            if index == len(chain):
                return action(current)
            return chain[index].run(current, lambda next_ctx: call(index + 1, next_ctx))

        result = call(0, ctx)
        return result if result is not None else ActionResult()

    def run_child_action(
        self,
        ctx: Context | None,
        options: CommandOptions,
        action: Action,
    ) -> ActionResult:
        """Run ``action`` as a nested invocation of the current command.

        Returns
        -------
        ActionResult
            Result of the chain.
        """
        return self.run_action(ctx, replace(options, is_child_action=True), action)


__all__ = ["Action", "Middleware", "MiddlewareFactory", "MiddlewareRunner", "NextFn"]
