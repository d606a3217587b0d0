from __future__ import annotations

from pathlib import Path
from typing import Sequence

from .codegen import CodeGenerator
from .mapper import AstMapper
from .model import Feature
from .parser import DocumentParser

__all__ = ["FeatureTransformer"]


class FeatureTransformer:
    """Turn one Gherkin document into the source of a pytest module."""

    def __init__(self, step_modules: Sequence[str] = ()):
        self.step_modules = list(step_modules)
        self.parser = DocumentParser()
        self.mapper = AstMapper()

    def parse(self, text: str, uri: str | None = None) -> Feature:
        return self.mapper.map(self.parser.parse(text, uri), uri)

    def transform(self, text: str, uri: str | None = None) -> str:
        feature = self.parse(text, uri)
        return CodeGenerator(step_modules=self.step_modules, source=uri).generate(feature)

    def transform_file(self, path: Path) -> str:
        return self.transform(path.read_text(encoding="utf8"), uri=path.as_posix())
