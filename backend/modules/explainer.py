"""
Explanation pipeline: prompt → API call → validated result, for every request kind.

Each kind only differs in its prompt (see prompts.PROMPT_BUILDERS), its result
model and its token ceiling; the last two live in KIND_CONFIGS.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

import httpx
from pydantic import BaseModel

from config import config
from modules import prompts
from modules.errors import PipelineFailure
from modules.llm_client import call_chat
from modules.schemas import (
    CodeBlockExplanation,
    ConceptExplanation,
    ExplanationRequest,
    RelatedConceptExplanation,
    RequestKind,
    WhyExplanation,
)
from modules.validator import parse_completion

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KindConfig:
    result_model: type[BaseModel]
    max_tokens: int


KIND_CONFIGS: dict[RequestKind, KindConfig] = {
    RequestKind.CONCEPT: KindConfig(
        ConceptExplanation, config.MAX_TOKENS_CONCEPT,
    ),
    RequestKind.RELATED_CONCEPT: KindConfig(
        RelatedConceptExplanation, config.MAX_TOKENS_RELATED,
    ),
    RequestKind.CODE_BLOCK: KindConfig(
        CodeBlockExplanation, config.MAX_TOKENS_CODE_BLOCK,
    ),
    RequestKind.WHY: KindConfig(
        WhyExplanation, config.MAX_TOKENS_WHY,
    ),
}


def run(request: ExplanationRequest, http_client: Optional[httpx.Client] = None) -> BaseModel:
    """Run one request through the pipeline. Raises a PipelineFailure subclass on failure."""
    kind_config = KIND_CONFIGS[request.kind]
    messages = prompts.build_messages(request)

    logger.info("Requesting %s explanation for %r", request.kind.value, request.subject_concept)
    try:
        envelope = call_chat(
            messages,
            credential=request.credential,
            max_tokens=kind_config.max_tokens,
            http_client=http_client,
        )
        return parse_completion(envelope, kind_config.result_model)
    except PipelineFailure as e:
        logger.warning("%s request failed: %s: %s", request.kind.value, type(e).__name__, e.message)
        raise


# ── Entry points, one per call site ────────────────────────────────────

def explain_concept(
    concept: str,
    scenario: str,
    credential: str,
    http_client: Optional[httpx.Client] = None,
) -> ConceptExplanation:
    """Explain a concept against a scenario, with code in three languages and a diagram."""
    request = ExplanationRequest(RequestKind.CONCEPT, concept, scenario, credential)
    return run(request, http_client)


def explain_related_concept(
    related_concept: str,
    original_concept: str,
    scenario: str,
    credential: str,
    http_client: Optional[httpx.Client] = None,
) -> RelatedConceptExplanation:
    request = ExplanationRequest(
        RequestKind.RELATED_CONCEPT,
        original_concept,
        scenario,
        credential,
        {"related_concept": related_concept},
    )
    return run(request, http_client)


def explain_code_block(
    code: str,
    language: str,
    credential: str,
    concept: str = "",
    scenario: str = "",
    http_client: Optional[httpx.Client] = None,
) -> CodeBlockExplanation:
    """Explain selected lines of a code example, with per-line smart comments."""
    request = ExplanationRequest(
        RequestKind.CODE_BLOCK,
        concept,
        scenario,
        credential,
        {"code": code, "language": language},
    )
    return run(request, http_client)


def explain_why(
    previous: Union[ConceptExplanation, str],
    concept: str,
    scenario: str,
    credential: str,
    http_client: Optional[httpx.Client] = None,
) -> WhyExplanation:
    """Ask for the reasoning behind an earlier concept explanation."""
    if isinstance(previous, ConceptExplanation):
        previous = previous.model_dump_json(by_alias=True, indent=2)
    request = ExplanationRequest(
        RequestKind.WHY,
        concept,
        scenario,
        credential,
        {"previous_response": previous},
    )
    return run(request, http_client)
