from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, ClassVar, Mapping, Pattern, Sequence

import toml

__all__ = ["NoProjectFile", "TranspileConfiguration"]


@dataclass
class TranspileConfiguration:
    """Configuration for turning feature files into tests, from ``[tool.ly-gherkin]``."""

    root: Path
    include: Pattern[str] = field(default_factory=lambda: re.compile(r"\.feature$"))
    output_dir: Path = Path("tests") / "features"
    steps: Sequence[str] = field(default_factory=list)
    _config_file: ClassVar[Path] = Path("pyproject.toml")
    _section: ClassVar[str] = "ly-gherkin"

    @classmethod
    def get_config(cls) -> TranspileConfiguration:
        pyproject = cls.get_configfile()
        config: Mapping[str, Any] = toml.load(pyproject).get("tool", {}).get(cls._section, {})
        return TranspileConfiguration(
            root=pyproject.parent,
            include=re.compile(config.get("include", r"\.feature$")),
            output_dir=Path(config.get("output_dir", cls.output_dir)),
            steps=list(config.get("steps", [])),
        )

    @classmethod
    def get_configfile(cls) -> Path:
        cwd = Path.cwd().absolute()
        paths = [cwd] + list(cwd.parents)
        for path in paths:
            pyproject = path / cls._config_file
            if pyproject.exists() and pyproject.is_file():
                break
        else:
            raise NoProjectFile(cls._config_file, search_paths=paths)
        return pyproject

    def output_path(self, feature_file: Path, output_dir: Path | None = None) -> Path:
        """Where the test module for ``feature_file`` is written."""
        directory = output_dir or self.root / self.output_dir
        module_name = re.sub(r"\W", "_", feature_file.stem)
        return directory / f"test_{module_name}.py"


class NoProjectFile(Exception):
    """No project file could be found."""

    def __init__(self, proj_filename: Path, search_paths: Sequence[Path]):
        self.proj_filename = proj_filename.as_posix()
        self.search_paths = [path.as_posix() for path in search_paths]
