"""Convert the gherkin document produced by the grammar library into the domain model."""
from __future__ import annotations

from typing import Any, Mapping, Sequence

from .errors import MissingFeatureError
from .model import (
    DEFAULT_FEATURE_NAME,
    DEFAULT_SCENARIO_NAME,
    Background,
    DataTable,
    DocString,
    Examples,
    Feature,
    Rule,
    Scenario,
    Step,
    StepKeyword,
)

__all__ = ["AstMapper"]

Node = Mapping[str, Any]


class AstMapper:
    """Structural transform from the vendor AST to a Feature. No I/O happens here."""

    def map(self, document: Node, uri: str | None = None) -> Feature:
        feature = document.get("feature")
        if not feature:
            raise MissingFeatureError(uri)
        return self.map_feature(feature)

    def map_feature(self, feature: Node) -> Feature:
        background: Background | None = None
        scenarios: list[Scenario] = []
        rules: list[Rule] = []
        for child in feature.get("children", []):
            if "background" in child:
                background = self.map_background(child["background"])
            elif "scenario" in child:
                scenarios.append(self.map_scenario(child["scenario"]))
            elif "rule" in child:
                rules.append(self.map_rule(child["rule"]))
        return Feature(
            name=feature.get("name") or DEFAULT_FEATURE_NAME,
            description=_description(feature),
            tags=_tags(feature),
            background=background,
            scenarios=tuple(scenarios),
            rules=tuple(rules),
            language=feature.get("language") or "en",
        )

    def map_rule(self, rule: Node) -> Rule:
        background: Background | None = None
        scenarios: list[Scenario] = []
        for child in rule.get("children", []):
            if "background" in child:
                background = self.map_background(child["background"])
            elif "scenario" in child:
                scenarios.append(self.map_scenario(child["scenario"]))
        return Rule(
            name=rule.get("name", ""),
            background=background,
            scenarios=tuple(scenarios),
            tags=_tags(rule),
            description=_description(rule),
        )

    def map_background(self, background: Node) -> Background:
        return Background(
            steps=self.map_steps(background.get("steps", [])),
            name=background.get("name", ""),
        )

    def map_scenario(self, scenario: Node) -> Scenario:
        examples = tuple(self.map_examples(node) for node in scenario.get("examples", []))
        return Scenario(
            name=scenario.get("name") or DEFAULT_SCENARIO_NAME,
            steps=self.map_steps(scenario.get("steps", [])),
            tags=_tags(scenario),
            # Same rule as the gherkin pickle compiler: examples make an outline.
            outline=bool(examples),
            examples=examples,
            description=_description(scenario),
        )

    def map_examples(self, examples: Node) -> Examples:
        header = examples.get("tableHeader")
        if not header:
            return Examples(name=examples.get("name", ""), tags=_tags(examples))
        return Examples(
            name=examples.get("name", ""),
            header=_cells(header),
            rows=tuple(_cells(row) for row in examples.get("tableBody", [])),
            tags=_tags(examples),
        )

    def map_steps(self, steps: Sequence[Node]) -> tuple[Step, ...]:
        return tuple(self.map_step(step) for step in steps)

    def map_step(self, step: Node) -> Step:
        data_table = step.get("dataTable")
        doc_string = step.get("docString")
        return Step(
            keyword=StepKeyword.from_keyword(step["keyword"], step.get("keywordType")),
            text=step["text"],
            data_table=(
                DataTable(rows=tuple(_cells(row) for row in data_table.get("rows", [])))
                if data_table
                else None
            ),
            doc_string=(
                DocString(content=doc_string["content"], content_type=doc_string.get("mediaType"))
                if doc_string
                else None
            ),
        )


def _cells(row: Node) -> tuple[str, ...]:
    return tuple(cell["value"] for cell in row.get("cells", []))


def _tags(node: Node) -> tuple[str, ...]:
    return tuple(tag["name"] for tag in node.get("tags", []))


def _description(node: Node) -> str | None:
    description = (node.get("description") or "").strip()
    return description or None
