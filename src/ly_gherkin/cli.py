#!/usr/bin/env python
"""
Generate pytest modules from Gherkin feature files.

Settings are read from the ``[tool.ly-gherkin]`` table of ``pyproject.toml``:

* include: regex selecting feature files when a directory is given
* output_dir: where the generated ``test_*.py`` modules are written
* steps: modules with step definitions, imported by every generated module
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Sequence

import click

from .config import NoProjectFile, TranspileConfiguration
from .errors import GherkinError
from .transformer import FeatureTransformer

logger = logging.getLogger(__name__)

__all__ = ["main"]


@click.command()
@click.option("--verbose", is_flag=True, default=False)
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for the generated modules. Overrides the configured output_dir.",
)
@click.argument("files", nargs=-1, type=click.Path(path_type=Path))
@click.version_option()
def main(verbose: bool, output_dir: Path | None, files: Sequence[Path]):
    if verbose:
        logging.basicConfig()
        logging.getLogger("ly_gherkin").setLevel(logging.DEBUG)

    try:
        config = TranspileConfiguration.get_config()
    except NoProjectFile as e:
        click.echo(
            f'"{e.proj_filename}" could not be located in the search paths: {e.search_paths!s}'
        )
        sys.exit(1)

    _transform_features(config, _resolve_files(config, files), output_dir)


def _resolve_files(config: TranspileConfiguration, files: Sequence[Path]) -> Sequence[Path]:
    # Recursively search directories provided on the command line.
    found_files = sorted(
        file_
        for part in files
        for file_ in (part.rglob("*") if part.is_dir() else [part])
        if config.include.search(file_.as_posix()) and file_.is_file()
    )
    if not found_files:
        click.echo("No feature files to transform.")
        sys.exit(0)
    return found_files


def _transform_features(
    config: TranspileConfiguration, files: Sequence[Path], output_dir: Path | None
):
    transformer = FeatureTransformer(step_modules=config.steps)
    written: dict[Path, Path] = {}
    _exit = 0
    for feature_file in files:
        target = config.output_path(feature_file, output_dir)
        if target in written:
            click.echo(f"{feature_file} could not be transformed:")
            click.echo(f"{target} was already written for {written[target]}")
            _exit = 1
            continue
        try:
            source = transformer.transform_file(feature_file)
        except GherkinError as e:
            click.echo(f"{feature_file} could not be transformed:")
            click.echo(str(e))
            _exit = 1
            continue
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(source, encoding="utf8")
        written[target] = feature_file
        logger.debug("Wrote %s", target)
        click.echo(f"- {feature_file} -> {target}")
    if _exit:
        click.echo("Transforming features failed.")
        sys.exit(1)
    click.echo("Features transformed successfully.")
