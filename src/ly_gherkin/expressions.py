"""
Compile step patterns into regular expressions.

A pattern is either a compiled regular expression, used as written, or a string expression
with typed placeholders:

* ``{int}``: an integer, passed to the step as ``int``
* ``{float}``: a decimal number, passed as ``float``
* ``{word}``: a run of non-whitespace characters
* ``{string}``: single or double quoted text, passed without the quotes
* ``{}``: anything

Additional placeholders are added through a :class:`ParameterTypeRegistry`.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Pattern, Sequence, Union

from .errors import DuplicateParameterTypeError, UndefinedParameterTypeError

__all__ = [
    "CompiledExpression",
    "ExpressionCompiler",
    "ParameterType",
    "ParameterTypeRegistry",
    "StepPattern",
]

StepPattern = Union[str, Pattern[str]]

_PLACEHOLDER = re.compile(r"\{([^{}\s]*)\}")
# Matches the opening of a capturing group, named or not.
_CAPTURING_GROUP = re.compile(r"(?<!\\)\((?:\?P<\w+>)?(?!\?)")


def _unquote(value: str) -> str:
    return value[1:-1]


@dataclass(frozen=True)
class ParameterType:
    """A placeholder name, the text it matches and how the match is converted."""

    name: str
    regexp: str
    transformer: Callable[[str], Any] = str

    @property
    def group(self) -> str:
        """The regexp as a single capturing group."""
        return f"({_CAPTURING_GROUP.sub('(?:', self.regexp)})"

    def transform(self, value: str | None) -> Any:
        if value is None:
            return None
        return self.transformer(value)


PASS_THROUGH = ParameterType("", r".*")

BUILTIN_PARAMETER_TYPES = (
    ParameterType("int", r"-?\d+", int),
    ParameterType("float", r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?", float),
    ParameterType("word", r"[^\s]+"),
    ParameterType("string", r'"(?:[^"\\]|\\.)*"|\'(?:[^\'\\]|\\.)*\'', _unquote),
    PASS_THROUGH,
)


class ParameterTypeRegistry:
    """The placeholder vocabulary available to expressions."""

    def __init__(self, parameter_types: Sequence[ParameterType] = BUILTIN_PARAMETER_TYPES):
        self._types: dict[str, ParameterType] = {}
        for parameter_type in parameter_types:
            self.define(parameter_type)

    def __contains__(self, name: str) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[ParameterType]:
        yield from self._types.values()

    def define(self, parameter_type: ParameterType) -> None:
        if parameter_type.name in self._types:
            raise DuplicateParameterTypeError(parameter_type.name)
        self._types[parameter_type.name] = parameter_type

    def lookup(self, name: str) -> ParameterType | None:
        return self._types.get(name)


@dataclass(frozen=True)
class CompiledExpression:
    """
    A step pattern compiled to a regular expression.

    ``parameter_types`` holds one entry per capturing group, in group order.
    """

    source: StepPattern
    regex: Pattern[str]
    parameter_types: tuple[ParameterType, ...] = ()
    anchored: bool = field(default=True, repr=False)

    def match(self, text: str) -> list[Any] | None:
        """Return the converted arguments when ``text`` matches, otherwise ``None``."""
        found = self.regex.fullmatch(text) if self.anchored else self.regex.search(text)
        if found is None:
            return None
        return [
            parameter_type.transform(value)
            for parameter_type, value in zip(self.parameter_types, found.groups())
        ]


class ExpressionCompiler:
    """
    Turn step patterns into :class:`CompiledExpression` objects.

    Placeholders that are not in the registry are kept as literal text unless ``strict`` is set,
    in which case they raise :class:`UndefinedParameterTypeError`.
    """

    def __init__(
        self, parameter_types: ParameterTypeRegistry | None = None, *, strict: bool = False
    ):
        self.parameter_types = parameter_types or ParameterTypeRegistry()
        self.strict = strict

    def compile(self, pattern: StepPattern) -> CompiledExpression:
        if isinstance(pattern, re.Pattern):
            return CompiledExpression(
                source=pattern,
                regex=pattern,
                parameter_types=(PASS_THROUGH,) * pattern.groups,
                anchored=False,
            )
        parts: list[str] = []
        parameter_types: list[ParameterType] = []
        last_end = 0
        for placeholder in _PLACEHOLDER.finditer(pattern):
            parameter_type = self.parameter_types.lookup(placeholder.group(1))
            if parameter_type is None:
                if self.strict:
                    raise UndefinedParameterTypeError(placeholder.group(1), pattern)
                continue
            parts.append(re.escape(pattern[last_end : placeholder.start()]))
            parts.append(parameter_type.group)
            parameter_types.append(parameter_type)
            last_end = placeholder.end()
        parts.append(re.escape(pattern[last_end:]))
        return CompiledExpression(
            source=pattern,
            regex=re.compile("".join(parts)),
            parameter_types=tuple(parameter_types),
        )
