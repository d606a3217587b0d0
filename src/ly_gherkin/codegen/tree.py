"""
A small statement tree for the generated test modules.

Generated code is built from these nodes and rendered in one place. :func:`quote` is the
only function that turns text into source, so every string from a document is escaped the
same way.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence, Union

__all__ = [
    "Assign",
    "Await",
    "Blank",
    "Call",
    "ClassDef",
    "Expr",
    "FunctionDef",
    "Import",
    "ImportFrom",
    "Literal",
    "Module",
    "Name",
    "Try",
    "quote",
    "render",
]

INDENT = "    "

_ESCAPES = {
    "\\": "\\\\",
    "'": "\\'",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def quote(text: str) -> str:
    """Return ``text`` as a single quoted Python string literal."""
    escaped = []
    for char in text:
        if char in _ESCAPES:
            escaped.append(_ESCAPES[char])
        elif not char.isprintable():
            escaped.append(_escape_code_point(ord(char)))
        else:
            escaped.append(char)
    return "'" + "".join(escaped) + "'"


def _escape_code_point(code: int) -> str:
    if code < 0x100:
        return f"\\x{code:02x}"
    if code < 0x10000:
        return f"\\u{code:04x}"
    return f"\\U{code:08x}"


# Expressions


@dataclass(frozen=True)
class Literal:
    value: Any

    def render(self) -> str:
        value = self.value
        if isinstance(value, str):
            return quote(value)
        if isinstance(value, tuple):
            items = [Literal(item).render() for item in value]
            return f"({items[0]},)" if len(items) == 1 else f"({', '.join(items)})"
        if isinstance(value, list):
            return f"[{', '.join(Literal(item).render() for item in value)}]"
        if value is None or isinstance(value, (bool, int, float)):
            return repr(value)
        raise TypeError(f"Cannot render {type(value).__name__} as a literal")


@dataclass(frozen=True)
class Name:
    """A name or dotted attribute path."""

    id: str

    def render(self) -> str:
        return self.id


@dataclass(frozen=True)
class Call:
    func: Expression
    args: Sequence[Expression] = ()
    keywords: Sequence[tuple[str, Expression]] = ()

    def render(self) -> str:
        args = [arg.render() for arg in self.args]
        args += [f"{name}={value.render()}" for name, value in self.keywords]
        return f"{self.func.render()}({', '.join(args)})"


@dataclass(frozen=True)
class Await:
    value: Expression

    def render(self) -> str:
        return f"await {self.value.render()}"


Expression = Union[Literal, Name, Call, Await]


# Statements


@dataclass(frozen=True)
class Blank:
    def lines(self) -> list[str]:
        return [""]


@dataclass(frozen=True)
class Expr:
    value: Expression

    def lines(self) -> list[str]:
        return [self.value.render()]


@dataclass(frozen=True)
class Assign:
    target: str
    value: Expression

    def lines(self) -> list[str]:
        return [f"{self.target} = {self.value.render()}"]


@dataclass(frozen=True)
class Import:
    module: str
    comment: str | None = None

    def lines(self) -> list[str]:
        suffix = f"  # {self.comment}" if self.comment else ""
        return [f"import {self.module}{suffix}"]


@dataclass(frozen=True)
class ImportFrom:
    module: str
    names: Sequence[str]

    def lines(self) -> list[str]:
        return [f"from {self.module} import {', '.join(sorted(self.names))}"]


@dataclass(frozen=True)
class Try:
    body: Sequence[Statement]
    finally_body: Sequence[Statement]

    def lines(self) -> list[str]:
        return ["try:", *_block(self.body), "finally:", *_block(self.finally_body)]


@dataclass(frozen=True)
class FunctionDef:
    name: str
    params: Sequence[str] = ()
    body: Sequence[Statement] = ()
    docstring: str | None = None
    decorators: Sequence[Expression] = ()
    is_async: bool = False

    def lines(self) -> list[str]:
        prefix = "async def" if self.is_async else "def"
        header = f"{prefix} {self.name}({', '.join(self.params)}):"
        body: list[Statement] = list(self.body)
        if self.docstring is not None:
            body.insert(0, Expr(Literal(self.docstring)))
        return [*_decorators(self.decorators), header, *_block(body)]


@dataclass(frozen=True)
class ClassDef:
    name: str
    body: Sequence[Statement] = ()
    docstring: str | None = None
    decorators: Sequence[Expression] = ()

    def lines(self) -> list[str]:
        body: list[Statement] = list(self.body)
        if self.docstring is not None:
            body.insert(0, Expr(Literal(self.docstring)))
        return [*_decorators(self.decorators), f"class {self.name}:", *_block(body, spaced=True)]


@dataclass
class Module:
    docstring: str | None = None
    imports: list[Statement] = field(default_factory=list)
    body: list[Statement] = field(default_factory=list)

    def lines(self) -> list[str]:
        lines: list[str] = []
        if self.docstring is not None:
            lines += [Literal(self.docstring).render(), ""]
        for statement in self.imports:
            lines += statement.lines()
        for statement in self.body:
            lines += ["", ""] + statement.lines()
        return lines


Statement = Union[Blank, Expr, Assign, Import, ImportFrom, Try, FunctionDef, ClassDef]


def _decorators(decorators: Sequence[Expression]) -> list[str]:
    return [f"@{decorator.render()}" for decorator in decorators]


def _block(body: Sequence[Statement], spaced: bool = False) -> list[str]:
    lines: list[str] = []
    for index, statement in enumerate(body or [Expr(Name("pass"))]):
        # Definitions inside a class are separated by a blank line.
        if spaced and index and isinstance(statement, (FunctionDef, ClassDef)):
            lines.append("")
        lines += [f"{INDENT}{line}" if line else line for line in statement.lines()]
    return lines


def render(module: Module) -> str:
    return "\n".join(module.lines()) + "\n"
