"""
Request and result shapes for the explanation pipeline.

Result models use the camelCase keys the prompts ask the model to return as
aliases, so `Model.model_validate(parsed_json)` checks the wire shape and
`model_dump(by_alias=True)` gives it back.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field


class RequestKind(str, Enum):
    CONCEPT = "concept"
    RELATED_CONCEPT = "related_concept"
    CODE_BLOCK = "code_block"
    WHY = "why"


@dataclass(frozen=True)
class ExplanationRequest:
    """One user action's worth of input. `auxiliary` holds the kind-specific strings:

    RELATED_CONCEPT → related_concept
    CODE_BLOCK      → code, language
    WHY             → previous_response (JSON text of the earlier explanation)
    """

    kind: RequestKind
    subject_concept: str
    scenario: str
    credential: str = field(repr=False)
    auxiliary: Mapping[str, str] = field(default_factory=dict)

    def aux(self, name: str) -> str:
        return self.auxiliary.get(name, "")


class _Result(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


# ── Concept explanation ────────────────────────────────────────────────

class CodeExample(_Result):
    display_language: str = Field(alias="language")
    syntax_tag: str = Field(alias="syntax")
    code: str


class ConceptExplanation(_Result):
    explanation: str
    scenario_application: str = Field(alias="scenarioApplication")
    code_examples: list[CodeExample] = Field(alias="codeExamples")
    related_concepts: list[str] = Field(alias="relatedConcepts")
    visual_diagram: str = Field(alias="visualDiagram")


# ── Related concept drill-down ─────────────────────────────────────────

class RelatedConceptExplanation(_Result):
    related_concept_explanation: str = Field(alias="relatedConceptExplanation")
    related_concept_in_scenario: str = Field(alias="relatedConceptInScenario")


# ── Selected code block ────────────────────────────────────────────────

class SmartComment(_Result):
    line: int = Field(gt=0)
    category: Literal["security", "improvement", "principle", "warning"] = Field(alias="type")
    message: str
    principle: Optional[str] = None


class CodeBlockExplanation(_Result):
    block_type: str = Field(alias="blockType")
    intent: str
    condition_explanation: Optional[str] = Field(default=None, alias="conditionExplanation")
    best_practices: list[str] = Field(alias="bestPractices")
    principles: list[str]
    smart_comments: list[SmartComment] = Field(alias="smartComments")


# ── "Why this approach" ────────────────────────────────────────────────

class Alternative(_Result):
    name: str
    description: str
    pros: list[str]
    cons: list[str]


class WhyExplanation(_Result):
    approach: str
    reasoning: str
    tradeoffs: list[str]
    alternatives: list[Alternative]
