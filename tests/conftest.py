from __future__ import annotations

from typing import Iterator

import pytest

from ly_gherkin.expressions import ExpressionCompiler
from ly_gherkin.runtime import get_hook_registry, get_step_registry


def _reset_registries():
    get_step_registry().clear()
    get_step_registry().compiler = ExpressionCompiler()
    get_hook_registry().clear()


@pytest.fixture(autouse=True)
def clean_registries() -> Iterator[None]:
    """Every test starts and ends with empty process-wide registries."""
    _reset_registries()
    yield
    _reset_registries()
