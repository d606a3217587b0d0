from __future__ import annotations

__all__ = [
    "DuplicateParameterTypeError",
    "GherkinError",
    "MissingFeatureError",
    "NoStepDefinitionError",
    "ParseError",
    "UndefinedParameterTypeError",
]


class GherkinError(Exception):
    """Base class for errors raised by ly-gherkin."""


class ParseError(GherkinError):
    """The document is not valid Gherkin."""

    def __init__(self, message: str, uri: str | None = None):
        self.message = message
        self.uri = uri
        super().__init__(f"{uri}: {message}" if uri else message)


class MissingFeatureError(GherkinError):
    """The document does not contain a feature."""

    def __init__(self, uri: str | None = None):
        self.uri = uri
        message = "No feature found in document"
        super().__init__(f"{uri}: {message}" if uri else message)


class NoStepDefinitionError(GherkinError):
    """No registered step definition matches a step."""

    def __init__(self, keyword: str, text: str):
        self.keyword = keyword
        self.text = text
        super().__init__(f"No step definition found for: {keyword} {text}")


class UndefinedParameterTypeError(GherkinError):
    """An expression uses a placeholder that is not defined."""

    def __init__(self, name: str, expression: str):
        self.name = name
        self.expression = expression
        super().__init__(f"Undefined parameter type {{{name}}} in expression {expression!r}")


class DuplicateParameterTypeError(GherkinError):
    """A placeholder name is defined twice."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Parameter type {{{name}}} is already defined")
