"""Runners for the ly-gherkin command line."""
from __future__ import annotations

from pathlib import Path
from tempfile import TemporaryDirectory
from typing import Iterable

from behave import fixture, use_fixture
from behave.model import Scenario

from features.steps.transform_env import TransformContext, TransformEnvironment


@fixture
def transform_environment(context: TransformContext) -> Iterable[TransformEnvironment]:
    with TemporaryDirectory() as tmp_dir:
        environment = TransformEnvironment(_path=Path(tmp_dir), verbose=False, project_files={})
        context.transform = environment
        yield environment


def before_scenario(context: TransformContext, _scenario: Scenario):
    use_fixture(transform_environment, context)
