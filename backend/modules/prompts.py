"""
Prompt Builder: turns an ExplanationRequest into the [system, user] message
pair sent to the model. Caller strings are inserted exactly as given.
"""

from modules.schemas import ExplanationRequest, RequestKind


SYSTEM_PROMPT = "You are a helpful programming tutor. Always return valid JSON responses."


CONCEPT_PROMPT = """You are a senior software engineer assistant helping developers understand programming concepts in real-world use cases.

The user wants to understand: "{concept}"
In the context of: "{scenario}"

Return a JSON response with the following structure:
{{
  "explanation": "A clear, beginner-friendly explanation of the concept",
  "scenarioApplication": "How the concept is used in the provided context",
  "codeExamples": [
    {{
      "language": "Node.js (Express)",
      "syntax": "js",
      "code": "// Actual working code example"
    }},
    {{
      "language": "Python (FastAPI)",
      "syntax": "python",
      "code": "# Actual working code example"
    }},
    {{
      "language": "Java (Spring Boot)",
      "syntax": "java",
      "code": "// Actual working code example"
    }}
  ],
  "relatedConcepts": ["Related concept 1", "Related concept 2", "Related concept 3"],
  "visualDiagram": "A Mermaid.js diagram that explains the concept in simple terms a 10-year-old could understand, showing the flow with simple nodes like User, Server, Database, etc."
}}

Code quality rules for every example:
1. Practical, complete and working code that demonstrates the concept in the given scenario.
2. Follow secure coding practices: validate input, never hard-code secrets, handle errors explicitly.
3. Use meaningful, descriptive names for variables, functions and classes.
4. Write idiomatic code for each language and framework, following its usual conventions.
5. Add short comments only where they help a learner follow the flow.

The visual diagram should be a valid Mermaid.js syntax diagram (sequenceDiagram, graph, or flowchart) that shows the concept flow in the scenario using simple terms."""


RELATED_CONCEPT_PROMPT = """You are a senior software engineer assistant. The user originally asked about "{concept}" in the context of "{scenario}".

Now they want to understand the related concept: "{related_concept}"

Explain how "{related_concept}" relates to their original scenario "{scenario}" and how it could enhance or be relevant to their use case with "{concept}".

Return a JSON response with:
{{
  "relatedConceptExplanation": "Clear explanation of what {related_concept} means",
  "relatedConceptInScenario": "How {related_concept} would be relevant, useful, or enhance the {scenario} scenario with {concept}"
}}"""


CODE_BLOCK_PROMPT = """You are a senior software engineer acting as a code tutor.

A learner selected the following {language} code while studying "{concept}" in the context of "{scenario}":

```
{code}
```

Explain what this block does and review it line by line. Line numbers start at 1 and refer to the lines of the block above.

Return a JSON response with the following structure:
{{
  "blockType": "The kind of block (e.g. function, loop, conditional, route handler, class)",
  "intent": "What the block is trying to achieve, in plain words",
  "conditionExplanation": "If the block contains a condition, what it checks and why (omit otherwise)",
  "bestPractices": ["Best practice the block follows or should follow"],
  "principles": ["Clean code or design principle illustrated by the block"],
  "smartComments": [
    {{
      "line": 1,
      "type": "security | improvement | principle | warning",
      "message": "A short comment about that line",
      "principle": "Name of the principle involved (optional)"
    }}
  ]
}}"""


WHY_PROMPT = """You are a senior software engineer explaining your design decisions to a learner.

The learner asked about "{concept}" in the context of "{scenario}" and received this answer:

{previous_response}

Explain WHY this approach was chosen for the scenario, what it trades off, and which alternatives were considered.

Return a JSON response with the following structure:
{{
  "approach": "Short name or summary of the chosen approach",
  "reasoning": "Why this approach fits the scenario",
  "tradeoffs": ["Tradeoff made by choosing this approach"],
  "alternatives": [
    {{
      "name": "Alternative approach",
      "description": "How it would work",
      "pros": ["Advantage"],
      "cons": ["Disadvantage"]
    }}
  ]
}}"""


def concept_prompt(req: ExplanationRequest) -> str:
    return CONCEPT_PROMPT.format(concept=req.subject_concept, scenario=req.scenario)


def related_concept_prompt(req: ExplanationRequest) -> str:
    return RELATED_CONCEPT_PROMPT.format(
        concept=req.subject_concept,
        scenario=req.scenario,
        related_concept=req.aux("related_concept"),
    )


def code_block_prompt(req: ExplanationRequest) -> str:
    return CODE_BLOCK_PROMPT.format(
        concept=req.subject_concept,
        scenario=req.scenario,
        language=req.aux("language"),
        code=req.aux("code"),
    )


def why_prompt(req: ExplanationRequest) -> str:
    return WHY_PROMPT.format(
        concept=req.subject_concept,
        scenario=req.scenario,
        previous_response=req.aux("previous_response"),
    )


PROMPT_BUILDERS = {
    RequestKind.CONCEPT: concept_prompt,
    RequestKind.RELATED_CONCEPT: related_concept_prompt,
    RequestKind.CODE_BLOCK: code_block_prompt,
    RequestKind.WHY: why_prompt,
}


def build_messages(req: ExplanationRequest) -> list[dict]:
    """Return the [system, user] message list for a request."""
    user_prompt = PROMPT_BUILDERS[req.kind](req)
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": user_prompt},
    ]
