"""Runtime used by generated test modules."""
from .context import Context, ContextManager
from .executor import StepExecutor
from .hooks import HookDefinition, HookRegistry, HookType, get_hook_registry
from .registry import StepDefinition, StepMatch, StepRegistry, get_step_registry

__all__ = [
    "Context",
    "ContextManager",
    "HookDefinition",
    "HookRegistry",
    "HookType",
    "StepDefinition",
    "StepExecutor",
    "StepMatch",
    "StepRegistry",
    "get_hook_registry",
    "get_step_registry",
]
