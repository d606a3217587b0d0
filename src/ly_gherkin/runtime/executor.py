from __future__ import annotations

import inspect
import logging
from typing import Any

from ..errors import NoStepDefinitionError
from ..model import Step
from .context import Context
from .registry import StepMatch, StepRegistry, get_step_registry

logger = logging.getLogger(__name__)

__all__ = ["StepExecutor"]


class StepExecutor:
    """Run steps against the definitions of a registry."""

    def __init__(self, registry: StepRegistry | None = None):
        self.registry = registry or get_step_registry()

    async def execute(self, step: Step, context: Context) -> None:
        """
        Find the definition for ``step`` and call its handler.

        The handler receives the context followed by the converted pattern groups, the data
        table and the doc string, in that order.
        """
        match = self.registry.find_match(step.keyword, step.text)
        if match is None:
            raise NoStepDefinitionError(step.keyword.value, step.text)
        logger.debug("%s matched %r", step, match.definition.pattern)
        result = match.definition.handler(context, *self.arguments(match, step))
        if inspect.isawaitable(result):
            await result

    @staticmethod
    def arguments(match: StepMatch, step: Step) -> list[Any]:
        arguments = list(match.arguments)
        if step.data_table is not None:
            arguments.append(step.data_table)
        if step.doc_string is not None:
            arguments.append(step.doc_string)
        return arguments
