from __future__ import annotations

import types
from textwrap import dedent


def feature_text(text: str) -> str:
    return dedent(text).strip() + "\n"


def load_module(source: str, name: str = "generated_feature") -> types.ModuleType:
    """Execute generated source as a module."""
    module = types.ModuleType(name)
    exec(compile(source, f"<{name}>", "exec"), module.__dict__)
    return module


def collect_tests(cls: type) -> list[tuple[type, str]]:
    """Test methods of a generated class and of its nested test classes, in order."""
    tests: list[tuple[type, str]] = []
    for name, value in vars(cls).items():
        if name.startswith("test_") and callable(value):
            tests.append((cls, name))
        elif name.startswith("Test") and isinstance(value, type):
            tests += collect_tests(value)
    return tests


def run_tests(cls: type) -> list[str]:
    """Run every generated test the way pytest would, with a new instance per test."""
    ran: list[str] = []
    for test_class, name in collect_tests(cls):
        getattr(test_class(), name)()
        ran.append(f"{test_class.__name__}.{name}")
    return ran
