"""Response contract tests: envelope → text → JSON → typed record."""
import json

import pytest

from conftest import CONCEPT_JSON, completion
from modules.errors import EmptyCompletionFailure, MalformedJsonFailure, SchemaMismatchFailure
from modules.schemas import (
    CodeBlockExplanation,
    ConceptExplanation,
    RelatedConceptExplanation,
    WhyExplanation,
)
from modules.validator import extract_content, parse_completion, parse_json, validate_result


MINIMAL = '{"explanation":"x","scenarioApplication":"y","codeExamples":[],"relatedConcepts":[],"visualDiagram":""}'


# ------------------------------------------------------------------
# Completion extraction
# ------------------------------------------------------------------
@pytest.mark.parametrize(
    "envelope",
    [
        {"choices": []},
        {},
        {"choices": [{"message": {}}]},
        {"choices": [{"message": {"content": None}}]},
        {"choices": [{"message": {"content": ""}}]},
        {"choices": [{}]},
        [],
    ],
)
def test_missing_completion_is_empty_failure(envelope):
    with pytest.raises(EmptyCompletionFailure):
        extract_content(envelope)


def test_first_choice_wins():
    envelope = {"choices": [{"message": {"content": "first"}}, {"message": {"content": "second"}}]}
    assert extract_content(envelope) == "first"


# ------------------------------------------------------------------
# JSON parsing
# ------------------------------------------------------------------
def test_not_json_is_malformed():
    with pytest.raises(MalformedJsonFailure) as exc:
        parse_completion(completion("not json"), ConceptExplanation)
    assert exc.value.raw == "not json"
    assert "not json" not in exc.value.message


def test_fenced_json_is_rejected_by_default():
    fenced = "Here you go:\n```json\n" + MINIMAL + "\n```"
    with pytest.raises(MalformedJsonFailure):
        parse_completion(completion(fenced), ConceptExplanation, tolerant=False)


def test_fenced_json_accepted_when_tolerant():
    fenced = "Here you go:\n```json\n" + MINIMAL + "\n```\nEnjoy!"
    result = parse_completion(completion(fenced), ConceptExplanation, tolerant=True)
    assert result.explanation == "x"


def test_tolerant_still_fails_on_prose():
    with pytest.raises(MalformedJsonFailure):
        parse_json("Sorry, I can't help with that.", tolerant=True)


# ------------------------------------------------------------------
# Typed results
# ------------------------------------------------------------------
def test_minimal_concept_explanation():
    result = parse_completion(completion(MINIMAL), ConceptExplanation)
    assert isinstance(result, ConceptExplanation)
    assert result.explanation == "x"
    assert result.scenario_application == "y"
    assert len(result.code_examples) == 0


def test_full_concept_explanation_round_trips_to_wire():
    result = parse_completion(completion(json.dumps(CONCEPT_JSON)), ConceptExplanation)
    assert [c.syntax_tag for c in result.code_examples] == ["js", "python", "java"]
    assert result.code_examples[1].display_language == "Python (FastAPI)"
    assert result.to_wire() == CONCEPT_JSON


def test_code_example_count_not_enforced():
    data = dict(CONCEPT_JSON, codeExamples=CONCEPT_JSON["codeExamples"][:1])
    assert len(validate_result(data, ConceptExplanation).code_examples) == 1


def test_missing_field_is_schema_mismatch():
    data = {k: v for k, v in CONCEPT_JSON.items() if k != "codeExamples"}
    with pytest.raises(SchemaMismatchFailure) as exc:
        validate_result(data, ConceptExplanation)
    assert any("codeExamples" in e for e in exc.value.errors)
    assert exc.value.expected == "ConceptExplanation"


def test_mistyped_field_is_schema_mismatch():
    data = dict(CONCEPT_JSON, relatedConcepts="Throttling")
    with pytest.raises(SchemaMismatchFailure):
        validate_result(data, ConceptExplanation)


def test_json_array_is_schema_mismatch():
    with pytest.raises(SchemaMismatchFailure):
        parse_completion(completion("[1, 2, 3]"), ConceptExplanation)


def test_related_concept_explanation():
    data = {"relatedConceptExplanation": "a", "relatedConceptInScenario": "b"}
    result = validate_result(data, RelatedConceptExplanation)
    assert result.related_concept_in_scenario == "b"


def test_code_block_explanation_with_smart_comments():
    data = {
        "blockType": "conditional",
        "intent": "Reject clients over the limit",
        "bestPractices": ["Return 429"],
        "principles": ["Fail fast"],
        "smartComments": [
            {"line": 1, "type": "security", "message": "Check before work"},
            {"line": 2, "type": "principle", "message": "Early return", "principle": "Guard clause"},
        ],
    }
    result = validate_result(data, CodeBlockExplanation)
    assert result.condition_explanation is None
    assert result.smart_comments[0].category == "security"
    assert result.smart_comments[1].principle == "Guard clause"


@pytest.mark.parametrize(
    "comment",
    [
        {"line": 0, "type": "security", "message": "m"},
        {"line": -3, "type": "security", "message": "m"},
        {"line": 1, "type": "style", "message": "m"},
        {"line": 1, "type": "warning"},
    ],
)
def test_bad_smart_comment_is_schema_mismatch(comment):
    data = {
        "blockType": "loop",
        "intent": "i",
        "bestPractices": [],
        "principles": [],
        "smartComments": [comment],
    }
    with pytest.raises(SchemaMismatchFailure):
        validate_result(data, CodeBlockExplanation)


def test_why_explanation():
    data = {
        "approach": "Fixed window counter",
        "reasoning": "Simple and cheap",
        "tradeoffs": ["Bursts at window edges"],
        "alternatives": [
            {"name": "Token bucket", "description": "Refill tokens", "pros": ["Smooth"], "cons": ["State"]},
        ],
    }
    result = validate_result(data, WhyExplanation)
    assert result.alternatives[0].name == "Token bucket"
    assert result.alternatives[0].cons == ["State"]


def test_results_are_immutable():
    result = validate_result(json.loads(MINIMAL), ConceptExplanation)
    with pytest.raises(Exception):
        result.explanation = "changed"
