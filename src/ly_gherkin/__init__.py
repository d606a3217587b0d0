"""Compile Gherkin features into pytest modules and run their steps."""
from .api import (
    after,
    after_all,
    and_,
    before,
    before_all,
    but,
    define_parameter_type,
    given,
    then,
    when,
)
from .errors import (
    GherkinError,
    MissingFeatureError,
    NoStepDefinitionError,
    ParseError,
)
from .transformer import FeatureTransformer

__version__ = "0.1.0"

__all__ = [
    "FeatureTransformer",
    "GherkinError",
    "MissingFeatureError",
    "NoStepDefinitionError",
    "ParseError",
    "after",
    "after_all",
    "and_",
    "before",
    "before_all",
    "but",
    "define_parameter_type",
    "given",
    "then",
    "when",
]
