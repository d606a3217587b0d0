from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Sequence

from ..expressions import CompiledExpression, ExpressionCompiler, StepPattern
from ..model import StepKeyword

logger = logging.getLogger(__name__)

__all__ = ["StepDefinition", "StepMatch", "StepRegistry", "get_step_registry"]

StepHandler = Callable[..., Any]


@dataclass(frozen=True)
class StepDefinition:
    """A handler registered for a step pattern."""

    keyword: StepKeyword
    pattern: StepPattern
    handler: StepHandler
    expression: CompiledExpression

    def accepts(self, keyword: StepKeyword) -> bool:
        """And/But steps may use a definition of any keyword."""
        return keyword.is_conjunction or keyword is self.keyword


@dataclass(frozen=True)
class StepMatch:
    definition: StepDefinition
    arguments: Sequence[Any]


class StepRegistry:
    """Ordered step definitions. The earliest matching definition wins."""

    def __init__(self, compiler: ExpressionCompiler | None = None):
        self.compiler = compiler or ExpressionCompiler()
        self._definitions: list[StepDefinition] = []

    def __len__(self) -> int:
        return len(self._definitions)

    def register(self, definition: StepDefinition) -> None:
        logger.debug("Registering %s step %r", definition.keyword.value, definition.pattern)
        self._definitions.append(definition)

    def define(
        self, keyword: StepKeyword, pattern: StepPattern, handler: StepHandler
    ) -> StepDefinition:
        """Compile ``pattern`` and register a definition for it."""
        definition = StepDefinition(
            keyword=keyword,
            pattern=pattern,
            handler=handler,
            expression=self.compiler.compile(pattern),
        )
        self.register(definition)
        return definition

    def find_match(self, keyword: StepKeyword, text: str) -> StepMatch | None:
        for definition in self._definitions:
            if not definition.accepts(keyword):
                continue
            arguments = definition.expression.match(text)
            if arguments is not None:
                return StepMatch(definition=definition, arguments=arguments)
        return None

    def definitions(self) -> list[StepDefinition]:
        return list(self._definitions)

    def clear(self) -> None:
        self._definitions = []


_step_registry = StepRegistry()


def get_step_registry() -> StepRegistry:
    """Return the registry shared by the whole process."""
    return _step_registry
