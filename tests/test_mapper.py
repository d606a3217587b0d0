import pytest

from helpers import feature_text
from ly_gherkin.errors import MissingFeatureError
from ly_gherkin.mapper import AstMapper
from ly_gherkin.model import DataTable, DocString, StepKeyword
from ly_gherkin.transformer import FeatureTransformer


def _step(keyword, text, keyword_type="Context", **extra):
    return {"keyword": keyword, "keywordType": keyword_type, "text": text, **extra}


def test_map_fixed_document():
    """Test the structural transform on a hand written vendor document."""
    document = {
        "feature": {
            "name": "Basket",
            "description": "  Shopping basket  ",
            "language": "en",
            "tags": [{"name": "@shop"}],
            "children": [
                {"background": {"name": "", "steps": [_step("Given ", "an empty basket")]}},
                {
                    "scenario": {
                        "name": "Add item",
                        "tags": [],
                        "steps": [
                            _step(
                                "When ",
                                "I add",
                                "Action",
                                dataTable={
                                    "rows": [{"cells": [{"value": "apple"}, {"value": "2"}]}]
                                },
                            ),
                            _step(
                                "Then ",
                                "I see",
                                "Outcome",
                                docString={"content": "{}", "mediaType": "json"},
                            ),
                        ],
                        "examples": [],
                    }
                },
                {
                    "rule": {
                        "name": "Discounts",
                        "children": [{"scenario": {"name": "", "steps": []}}],
                    }
                },
            ],
        }
    }
    feature = AstMapper().map(document)
    assert feature.name == "Basket"
    assert feature.description == "Shopping basket"
    assert feature.tags == ("@shop",)
    assert feature.background is not None
    assert feature.background.steps[0].keyword is StepKeyword.GIVEN
    scenario = feature.scenarios[0]
    assert not scenario.outline
    assert scenario.steps[0].data_table == DataTable(rows=(("apple", "2"),))
    assert scenario.steps[1].doc_string == DocString(content="{}", content_type="json")
    assert feature.rules[0].name == "Discounts"
    assert feature.rules[0].background is None
    assert feature.rules[0].scenarios[0].name == "Unnamed Scenario"


def test_missing_feature():
    """Test that a document without a feature node is rejected."""
    with pytest.raises(MissingFeatureError):
        AstMapper().map({"comments": []})


def test_defaults_are_empty_collections():
    """Test that absent collections map to empty tuples and the name gets a placeholder."""
    feature = AstMapper().map({"feature": {"name": "", "children": []}})
    assert feature.name == "Unnamed Feature"
    assert feature.description is None
    assert feature.tags == ()
    assert feature.scenarios == ()
    assert feature.rules == ()
    assert feature.background is None


def test_outline_examples_are_mapped():
    """Test that scenario outlines keep every example set in order."""
    feature = FeatureTransformer().parse(
        feature_text(
            """
            Feature: Eating
              Scenario Outline: eating
                Given there are <start> cucumbers
                When I eat <eat> cucumbers
                Then I should have <left> cucumbers

                Examples: small
                  | start | eat | left |
                  |    12 |   5 |    7 |
                  |    20 |   5 |   15 |

                @big
                Examples: large
                  | start | eat | left |
                  |   100 |  50 |   50 |
            """
        )
    )
    scenario = feature.scenarios[0]
    assert scenario.outline
    assert [examples.name for examples in scenario.examples] == ["small", "large"]
    assert scenario.examples[0].header == ("start", "eat", "left")
    assert scenario.examples[0].rows == (("12", "5", "7"), ("20", "5", "15"))
    assert scenario.examples[1].tags == ("@big",)


def test_conjunction_keywords():
    """Test that And, But and * keep their own keyword category."""
    feature = FeatureTransformer().parse(
        feature_text(
            """
            Feature: Keywords
              Scenario: All of them
                Given a
                And b
                But c
                * d
                When e
                Then f
            """
        )
    )
    keywords = [step.keyword for step in feature.scenarios[0].steps]
    assert keywords == [
        StepKeyword.GIVEN,
        StepKeyword.AND,
        StepKeyword.BUT,
        StepKeyword.AND,
        StepKeyword.WHEN,
        StepKeyword.THEN,
    ]


def test_localized_keywords_use_keyword_type():
    """Test that keywords of other languages map through the keyword type."""
    feature = FeatureTransformer().parse(
        feature_text(
            """
            # language: fr
            Fonctionnalité: Calcul
              Scénario: Addition
                Soit 2 et 3
                Quand j'additionne
                Alors le résultat est 5
            """
        )
    )
    assert feature.language == "fr"
    keywords = [step.keyword for step in feature.scenarios[0].steps]
    assert keywords == [StepKeyword.GIVEN, StepKeyword.WHEN, StepKeyword.THEN]


def test_rule_background_is_not_merged():
    """Test that a rule owns its background and does not inherit the feature's."""
    feature = FeatureTransformer().parse(
        feature_text(
            """
            Feature: Scoped backgrounds
              Background:
                Given the feature background

              Rule: First
                Background:
                  Given the rule background

                Scenario: inside
                  Then something
            """
        )
    )
    assert [step.text for step in feature.background.steps] == ["the feature background"]
    assert [step.text for step in feature.rules[0].background.steps] == ["the rule background"]
