"""Domain model for parsed Gherkin documents."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping

__all__ = [
    "Background",
    "DataTable",
    "DocString",
    "Examples",
    "Feature",
    "Rule",
    "Scenario",
    "Step",
    "StepKeyword",
]

DEFAULT_FEATURE_NAME = "Unnamed Feature"
DEFAULT_SCENARIO_NAME = "Unnamed Scenario"


class StepKeyword(Enum):
    """Keyword category of a step."""

    GIVEN = "Given"
    WHEN = "When"
    THEN = "Then"
    AND = "And"
    BUT = "But"

    @property
    def is_conjunction(self) -> bool:
        return self in (StepKeyword.AND, StepKeyword.BUT)

    @classmethod
    def from_keyword(cls, keyword: str, keyword_type: str | None = None) -> StepKeyword:
        """
        Map a keyword from the document to a keyword category.

        Localized keywords are resolved through the keyword type reported by the parser.
        """
        keyword = keyword.strip()
        for member in cls:
            if member.value == keyword:
                return member
        if keyword == "*":
            return cls.AND
        return _KEYWORD_TYPES.get(keyword_type or "", cls.AND)


_KEYWORD_TYPES: Mapping[str, StepKeyword] = {
    "Context": StepKeyword.GIVEN,
    "Action": StepKeyword.WHEN,
    "Outcome": StepKeyword.THEN,
    "Conjunction": StepKeyword.AND,
}


@dataclass(frozen=True)
class DataTable:
    """Rows of cells attached to a step."""

    rows: tuple[tuple[str, ...], ...] = ()

    def raw(self) -> list[list[str]]:
        return [list(row) for row in self.rows]

    def hashes(self) -> list[dict[str, str]]:
        """Use the first row as keys for every following row."""
        if not self.rows:
            return []
        header, *body = self.rows
        return [dict(zip(header, row)) for row in body]

    def rows_hash(self) -> dict[str, str]:
        """Read a two column table as key/value pairs."""
        if any(len(row) != 2 for row in self.rows):
            raise ValueError("rows_hash() requires a table with exactly two columns")
        return {key: value for key, value in self.rows}


@dataclass(frozen=True)
class DocString:
    """Free text attached to a step."""

    content: str
    content_type: str | None = None


@dataclass(frozen=True)
class Step:
    keyword: StepKeyword
    text: str
    data_table: DataTable | None = None
    doc_string: DocString | None = None

    def __str__(self) -> str:
        return f"{self.keyword.value} {self.text}"


@dataclass(frozen=True)
class Background:
    steps: tuple[Step, ...] = ()
    name: str = ""


@dataclass(frozen=True)
class Examples:
    """One example table of a scenario outline."""

    name: str = ""
    header: tuple[str, ...] = ()
    rows: tuple[tuple[str, ...], ...] = ()
    tags: tuple[str, ...] = ()

    def substitutions(self) -> list[dict[str, str]]:
        return [dict(zip(self.header, row)) for row in self.rows]


@dataclass(frozen=True)
class Scenario:
    name: str = DEFAULT_SCENARIO_NAME
    steps: tuple[Step, ...] = ()
    tags: tuple[str, ...] = ()
    outline: bool = False
    examples: tuple[Examples, ...] = ()
    description: str | None = None


@dataclass(frozen=True)
class Rule:
    """Named group of scenarios with its own background."""

    name: str
    background: Background | None = None
    scenarios: tuple[Scenario, ...] = ()
    tags: tuple[str, ...] = ()
    description: str | None = None


@dataclass(frozen=True)
class Feature:
    name: str = DEFAULT_FEATURE_NAME
    description: str | None = None
    tags: tuple[str, ...] = ()
    background: Background | None = None
    scenarios: tuple[Scenario, ...] = ()
    rules: tuple[Rule, ...] = ()
    language: str = "en"
