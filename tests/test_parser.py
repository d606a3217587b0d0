import pytest

from helpers import feature_text
from ly_gherkin.errors import MissingFeatureError, ParseError
from ly_gherkin.parser import DocumentParser
from ly_gherkin.transformer import FeatureTransformer

BROKEN = feature_text(
    """
    Feature: Broken
      Scenario: Stray text
        Given a step
        this line is not a step
    """
)


def test_parse_returns_gherkin_document():
    """Test that the grammar library's document is returned unchanged."""
    document = DocumentParser().parse(
        feature_text(
            """
            Feature: Math
              Scenario: Add
                Given I have 2 and 3
            """
        )
    )
    assert document["feature"]["name"] == "Math"
    scenario = document["feature"]["children"][0]["scenario"]
    assert scenario["steps"][0]["text"] == "I have 2 and 3"


def test_parse_error_carries_document_identity():
    """Test that grammar failures become ParseError naming the document."""
    with pytest.raises(ParseError) as excinfo:
        DocumentParser().parse(BROKEN, "broken.feature")
    assert excinfo.value.uri == "broken.feature"
    assert str(excinfo.value).startswith("broken.feature: ")
    assert "this line is not a step" in excinfo.value.message


def test_parse_error_does_not_affect_next_document():
    """Test that a failing document leaves the parser usable."""
    parser = DocumentParser()
    with pytest.raises(ParseError):
        parser.parse(BROKEN)
    document = parser.parse("Feature: Fine\n")
    assert document["feature"]["name"] == "Fine"


def test_empty_document_has_no_feature():
    """Test that a document without a feature raises MissingFeatureError."""
    with pytest.raises(MissingFeatureError) as excinfo:
        FeatureTransformer().transform("# only a comment\n", uri="empty.feature")
    assert excinfo.value.uri == "empty.feature"
