from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from .context import Context

logger = logging.getLogger(__name__)

__all__ = ["HookDefinition", "HookRegistry", "HookType", "get_hook_registry"]


class HookType(Enum):
    BEFORE_ALL = "before_all"
    AFTER_ALL = "after_all"
    BEFORE = "before"
    AFTER = "after"


@dataclass(frozen=True)
class HookDefinition:
    hook_type: HookType
    handler: Callable[[Context], Any]


class HookRegistry:
    """Lifecycle callbacks in registration order."""

    def __init__(self):
        self._hooks: list[HookDefinition] = []

    def register(self, hook: HookDefinition) -> None:
        logger.debug("Registering %s hook %r", hook.hook_type.value, hook.handler)
        self._hooks.append(hook)

    def hooks(self, hook_type: HookType) -> list[HookDefinition]:
        return [hook for hook in self._hooks if hook.hook_type is hook_type]

    async def execute_hooks(self, hook_type: HookType, context: Context) -> None:
        """Run the hooks of one type one after the other, awaiting each of them."""
        for hook in self.hooks(hook_type):
            logger.debug("Running %s hook %r", hook_type.value, hook.handler)
            result = hook.handler(context)
            if inspect.isawaitable(result):
                await result

    def clear(self) -> None:
        self._hooks = []


_hook_registry = HookRegistry()


def get_hook_registry() -> HookRegistry:
    """Return the registry shared by the whole process."""
    return _hook_registry
