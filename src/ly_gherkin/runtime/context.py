from __future__ import annotations

from types import SimpleNamespace
from typing import Any

__all__ = ["Context", "ContextManager"]


class Context(SimpleNamespace):
    """
    The per-scenario world handed to every hook and step.

    Values can be read and written as attributes or as items. Item access only sees stored
    values, so a key such as ``get`` or ``clear`` never resolves to a method.
    """

    def __getitem__(self, key: str) -> Any:
        return vars(self)[key]

    def __setitem__(self, key: str, value: Any) -> None:
        vars(self)[key] = value

    def __delitem__(self, key: str) -> None:
        del vars(self)[key]

    def __contains__(self, key: str) -> bool:
        return key in vars(self)

    def get(self, key: str, default: Any = None) -> Any:
        return vars(self).get(key, default)

    def clear(self) -> None:
        vars(self).clear()


class ContextManager:
    """Owns the context of a single scenario."""

    def __init__(self):
        self._context = Context()

    def get_context(self) -> Context:
        return self._context

    def set(self, key: str, value: Any) -> None:
        vars(self._context)[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        return vars(self._context).get(key, default)

    def reset(self) -> None:
        """Remove every value while keeping the same context object."""
        vars(self._context).clear()
