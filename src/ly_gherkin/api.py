"""
Decorators used by step definition modules.

Example::

    from ly_gherkin import given, then

    @given("I have {int} and {int}")
    def step_numbers(context, first: int, second: int):
        context.numbers = [first, second]

    @then("the sum is {int}")
    def step_sum(context, total: int):
        assert sum(context.numbers) == total
"""
from __future__ import annotations

from typing import Any, Callable, TypeVar

from .expressions import ParameterType, StepPattern
from .model import StepKeyword
from .runtime.hooks import HookDefinition, HookType, get_hook_registry
from .runtime.registry import get_step_registry

__all__ = [
    "after",
    "after_all",
    "and_",
    "before",
    "before_all",
    "but",
    "define_parameter_type",
    "given",
    "then",
    "when",
]

Handler = TypeVar("Handler", bound=Callable[..., Any])


def _step(keyword: StepKeyword, pattern: StepPattern) -> Callable[[Handler], Handler]:
    def register_step(handler: Handler) -> Handler:
        get_step_registry().define(keyword, pattern, handler)
        return handler

    return register_step


def given(pattern: StepPattern) -> Callable[[Handler], Handler]:
    return _step(StepKeyword.GIVEN, pattern)


def when(pattern: StepPattern) -> Callable[[Handler], Handler]:
    return _step(StepKeyword.WHEN, pattern)


def then(pattern: StepPattern) -> Callable[[Handler], Handler]:
    return _step(StepKeyword.THEN, pattern)


def and_(pattern: StepPattern) -> Callable[[Handler], Handler]:
    return _step(StepKeyword.AND, pattern)


def but(pattern: StepPattern) -> Callable[[Handler], Handler]:
    return _step(StepKeyword.BUT, pattern)


def _hook(hook_type: HookType) -> Callable[[Handler], Handler]:
    def register_hook(handler: Handler) -> Handler:
        get_hook_registry().register(HookDefinition(hook_type, handler))
        return handler

    return register_hook


before = _hook(HookType.BEFORE)
after = _hook(HookType.AFTER)
before_all = _hook(HookType.BEFORE_ALL)
after_all = _hook(HookType.AFTER_ALL)


def define_parameter_type(
    name: str, regexp: str, transformer: Callable[[str], Any] = str
) -> ParameterType:
    """Add a placeholder to the expressions of the process-wide step registry."""
    parameter_type = ParameterType(name, regexp, transformer)
    get_step_registry().compiler.parameter_types.define(parameter_type)
    return parameter_type
