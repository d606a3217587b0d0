from __future__ import annotations

import keyword
import logging
import re
from dataclasses import dataclass, field
from typing import Mapping, Sequence

from ..model import Background, DataTable, DocString, Examples, Feature, Rule, Scenario, Step
from .tree import (
    Assign,
    Await,
    Blank,
    Call,
    ClassDef,
    Expr,
    Expression,
    FunctionDef,
    Import,
    ImportFrom,
    Literal,
    Module,
    Name,
    Statement,
    Try,
    render,
)

logger = logging.getLogger(__name__)

__all__ = ["CodeGenerator", "substitute"]

RUNTIME_NAMES = ("ContextManager", "HookType", "StepExecutor", "get_hook_registry")

_TOKEN = re.compile(r"<([^<>]+)>")


def substitute(text: str, values: Mapping[str, str]) -> str:
    """
    Replace every ``<name>`` token with the example value for ``name``.

    Tokens are replaced in a single pass, so values are never substituted again.
    """
    return _TOKEN.sub(lambda token: values.get(token.group(1), token.group(0)), text)


@dataclass
class _Names:
    """Identifiers already used in one class or module."""

    used: set[str] = field(default_factory=set)

    def claim(self, candidate: str) -> str:
        name, count = candidate, 1
        while name in self.used:
            count += 1
            name = f"{candidate}_{count}"
        self.used.add(name)
        return name


def _words(text: str) -> list[str]:
    words = re.findall(r"\w+", text)
    if not "".join(words).isidentifier():
        words = re.findall(r"[A-Za-z0-9_]+", text)
    return [word.strip("_") for word in words if word.strip("_")]


def _class_name(text: str, fallback: str) -> str:
    words = _words(text) or [fallback]
    return "Test" + "".join(word[0].upper() + word[1:] for word in words)


def _test_name(text: str, fallback: str) -> str:
    words = _words(text) or [fallback]
    return "test_" + "_".join(word.lower() for word in words)


def _marks(tags: Sequence[str]) -> list[Expression]:
    marks: list[Expression] = []
    for tag in tags:
        name = tag.lstrip("@").replace("-", "_").replace(".", "_")
        if name.isidentifier() and not keyword.iskeyword(name):
            marks.append(Name(f"pytest.mark.{name}"))
    return marks


@dataclass
class _Scope:
    """The background that applies to the tests of one generated class."""

    background: Background | None

    @property
    def has_background(self) -> bool:
        return self.background is not None and bool(self.background.steps)


class CodeGenerator:
    """
    Generate a pytest module for a feature.

    The feature becomes a test class. Rules and scenario outlines become nested classes and
    every scenario, or every example row of an outline, becomes a test method. The once per
    feature hooks run from ``setup_module`` and ``teardown_module`` since each generated module
    holds exactly one feature.
    """

    def __init__(self, step_modules: Sequence[str] = (), source: str | None = None):
        self.step_modules = list(step_modules)
        self.source = source
        self._uses_marks = False

    def generate(self, feature: Feature) -> str:
        self._uses_marks = False
        module = Module(docstring=self._module_docstring())
        feature_class = self.feature_class(feature)
        module.imports = self.imports()
        module.body = [
            self.module_hook("setup_module", "BEFORE_ALL"),
            self.module_hook("teardown_module", "AFTER_ALL"),
            feature_class,
        ]
        logger.debug("Generated %s for feature %r", feature_class.name, feature.name)
        return render(module)

    def _module_docstring(self) -> str:
        origin = f" from {self.source}" if self.source else ""
        return f"Tests generated by ly-gherkin{origin}. Do not edit."

    def imports(self) -> list[Statement]:
        imports: list[Statement] = [Import("asyncio"), Blank()]
        if self._uses_marks:
            imports += [Import("pytest"), Blank()]
        imports += [Import(module, comment="noqa: F401") for module in self.step_modules]
        imports += [
            ImportFrom("ly_gherkin.model", ["DataTable", "DocString", "Step", "StepKeyword"]),
            ImportFrom("ly_gherkin.runtime", RUNTIME_NAMES),
        ]
        return imports

    @staticmethod
    def module_hook(name: str, hook_type: str) -> FunctionDef:
        execute = Call(
            Name("get_hook_registry().execute_hooks"),
            [Name(f"HookType.{hook_type}"), Call(Name("ContextManager().get_context"))],
        )
        return FunctionDef(name, body=[Expr(Call(Name("asyncio.run"), [execute]))])

    def feature_class(self, feature: Feature) -> ClassDef:
        names = _Names()
        body = self.scope_body(_Scope(feature.background), feature.scenarios, names)
        for rule in feature.rules:
            body.append(self.rule_class(rule, names))
        docstring = f"Feature: {feature.name}"
        if feature.description:
            docstring += f"\n\n{feature.description}"
        return ClassDef(
            _class_name(feature.name, "Feature"),
            body=body,
            docstring=docstring,
            decorators=self._tag_marks(feature.tags),
        )

    def rule_class(self, rule: Rule, names: _Names) -> ClassDef:
        # A rule only uses its own background, never the background of the feature.
        body = self.scope_body(_Scope(rule.background), rule.scenarios, _Names())
        return ClassDef(
            names.claim(_class_name(rule.name, "Rule")),
            body=body,
            docstring=f"Rule: {rule.name}",
            decorators=self._tag_marks(rule.tags),
        )

    def scope_body(
        self, scope: _Scope, scenarios: Sequence[Scenario], names: _Names
    ) -> list[Statement]:
        body: list[Statement] = []
        if scope.has_background:
            body.append(self.background_method(scope))
            names.claim("background")
        for scenario in scenarios:
            if scenario.outline:
                body.append(self.outline_class(scenario, scope, names))
            else:
                name = names.claim(_test_name(scenario.name, "scenario"))
                body.append(
                    self.test_method(
                        name, scenario.name, scenario.steps, scope, self._tag_marks(scenario.tags)
                    )
                )
        return body

    def background_method(self, scope: _Scope) -> FunctionDef:
        assert scope.background is not None
        return FunctionDef(
            "background",
            params=["self", "executor", "context"],
            body=[self.execute_step(step) for step in scope.background.steps],
            is_async=True,
        )

    def outline_class(self, scenario: Scenario, scope: _Scope, names: _Names) -> ClassDef:
        body: list[Statement] = []
        if scope.has_background:
            body.append(self.background_method(scope))
        index = 0
        for examples in scenario.examples:
            marks = self._tag_marks(examples.tags)
            for values in examples.substitutions():
                index += 1
                body.append(
                    self.test_method(
                        f"test_example_{index}",
                        self._row_docstring(scenario, examples, values),
                        [self.substitute_step(step, values) for step in scenario.steps],
                        scope,
                        marks,
                    )
                )
        return ClassDef(
            names.claim(_class_name(scenario.name, "Outline")),
            body=body,
            docstring=f"Scenario Outline: {scenario.name}",
            decorators=self._tag_marks(scenario.tags),
        )

    @staticmethod
    def _row_docstring(scenario: Scenario, examples: Examples, values: Mapping[str, str]) -> str:
        row = ", ".join(f"{name}={value}" for name, value in values.items())
        label = f"{examples.name}: " if examples.name else ""
        return f"{substitute(scenario.name, values)} ({label}{row})"

    @staticmethod
    def substitute_step(step: Step, values: Mapping[str, str]) -> Step:
        data_table = step.data_table
        if data_table is not None:
            data_table = DataTable(
                rows=tuple(
                    tuple(substitute(cell, values) for cell in row) for row in data_table.rows
                )
            )
        doc_string = step.doc_string
        if doc_string is not None:
            doc_string = DocString(
                content=substitute(doc_string.content, values),
                content_type=doc_string.content_type,
            )
        return Step(
            keyword=step.keyword,
            text=substitute(step.text, values),
            data_table=data_table,
            doc_string=doc_string,
        )

    def test_method(
        self,
        name: str,
        docstring: str,
        steps: Sequence[Step],
        scope: _Scope,
        decorators: Sequence[Expression] = (),
    ) -> FunctionDef:
        hooks = Name("hooks.execute_hooks")
        scenario_steps: list[Statement] = [
            Expr(Await(Call(hooks, [Name("HookType.BEFORE"), Name("context")])))
        ]
        if scope.has_background:
            scenario_steps.append(
                Expr(Await(Call(Name("self.background"), [Name("executor"), Name("context")])))
            )
        scenario_steps += [self.execute_step(step) for step in steps]
        run_scenario = FunctionDef(
            "scenario",
            body=[
                Try(
                    body=scenario_steps,
                    finally_body=[
                        Expr(Await(Call(hooks, [Name("HookType.AFTER"), Name("context")])))
                    ],
                )
            ],
            is_async=True,
        )
        return FunctionDef(
            name,
            params=["self"],
            docstring=docstring,
            decorators=decorators,
            body=[
                Assign("context", Call(Name("ContextManager().get_context"))),
                Assign("executor", Call(Name("StepExecutor"))),
                Assign("hooks", Call(Name("get_hook_registry"))),
                run_scenario,
                Expr(Call(Name("asyncio.run"), [Call(Name("scenario"))])),
            ],
        )

    @staticmethod
    def step_expression(step: Step) -> Call:
        keywords: list[tuple[str, Expression]] = [
            ("keyword", Name(f"StepKeyword.{step.keyword.name}")),
            ("text", Literal(step.text)),
        ]
        if step.data_table is not None:
            data_table = Call(Name("DataTable"), [Literal(step.data_table.rows)])
            keywords.append(("data_table", data_table))
        if step.doc_string is not None:
            doc_string: list[tuple[str, Expression]] = [
                ("content", Literal(step.doc_string.content))
            ]
            if step.doc_string.content_type:
                doc_string.append(("content_type", Literal(step.doc_string.content_type)))
            keywords.append(("doc_string", Call(Name("DocString"), keywords=doc_string)))
        return Call(Name("Step"), keywords=keywords)

    def execute_step(self, step: Step) -> Expr:
        return Expr(
            Await(Call(Name("executor.execute"), [self.step_expression(step), Name("context")]))
        )

    def _tag_marks(self, tags: Sequence[str]) -> list[Expression]:
        marks = _marks(tags)
        if marks:
            self._uses_marks = True
        return marks
