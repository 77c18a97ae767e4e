"""
Concept Explainer: FastAPI Backend
Explains programming concepts through the OpenAI API and keeps a local
learning-progress record.
"""

import json
import logging
from contextlib import asynccontextmanager
from typing import Any, Callable, Optional, Union

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from config import config
from modules import catalog
from modules import explainer
from modules.credentials import CredentialStore
from modules.errors import MissingCredential
from modules.learning_stats import StatsStore, summarize
from modules.lifecycle import ExplanationCall, RequestStatus
from modules.storage import JsonFileStorage, Storage

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("openai").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


# ── Pydantic models ────────────────────────────────────────────────────

class CredentialRequest(BaseModel):
    api_key: str = Field(min_length=1)

class ExplainRequest(BaseModel):
    concept: str = Field(min_length=1)
    scenario: str = Field(min_length=1)
    api_key: Optional[str] = None

class RelatedConceptRequest(BaseModel):
    related_concept: str = Field(min_length=1)
    concept: str
    scenario: str
    api_key: Optional[str] = None

class CodeBlockRequest(BaseModel):
    code: str = Field(min_length=1)
    language: str
    concept: str = ""
    scenario: str = ""
    api_key: Optional[str] = None

class WhyRequest(BaseModel):
    previous_response: Union[dict, str]
    concept: str
    scenario: str
    api_key: Optional[str] = None

class TrackRequest(BaseModel):
    event: str
    concept: Optional[str] = None
    principle: Optional[str] = None


# ── Application state ──────────────────────────────────────────────────

class AppState:
    """Stores backed by one storage medium, plus an optional HTTP client for the API calls."""

    def __init__(self):
        self.storage: Storage | None = None
        self.stats: StatsStore | None = None
        self.credentials: CredentialStore | None = None
        self.http_client: httpx.Client | None = None

    def configure(self, storage: Storage, http_client: httpx.Client | None = None) -> None:
        self.storage = storage
        self.stats = StatsStore(storage, key=config.STATS_KEY)
        self.credentials = CredentialStore(storage, key=config.CREDENTIAL_KEY)
        self.http_client = http_client


state = AppState()


# ── Lifespan ───────────────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    if state.storage is None:
        state.configure(JsonFileStorage(config.STORAGE_FILE))
        logger.info("Loaded local storage from %s", config.STORAGE_FILE)
    yield


# ── FastAPI app ────────────────────────────────────────────────────────

app = FastAPI(title="Concept Explainer", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(MissingCredential)
async def missing_credential_handler(request: Request, exc: MissingCredential) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": str(exc), "error": "MissingCredential"})


# ── Credential ─────────────────────────────────────────────────────────

@app.get("/api/credential")
async def get_credential() -> dict:
    return {"configured": state.credentials.load() is not None}


@app.post("/api/credential")
async def save_credential(req: CredentialRequest):
    try:
        state.credentials.save(req.api_key)
    except ValueError as e:
        return JSONResponse(status_code=400, content={"detail": str(e), "error": "ValueError"})
    return {"configured": True}


@app.delete("/api/credential")
async def clear_credential() -> dict:
    state.credentials.clear()
    return {"configured": False}


# ── Explanations ───────────────────────────────────────────────────────

def _run_call(fn: Callable[[], Any], event: str, **track: Any) -> Any:
    """Run one pipeline call; track the interaction on success, 502 on failure."""
    call = ExplanationCall()
    result = call.execute(fn)
    if call.status is RequestStatus.FAILED:
        return JSONResponse(
            status_code=502,
            content={"detail": call.error, "error": type(call.failure).__name__},
        )
    state.stats.track(event, **track)
    return {"status": call.status.value, "result": result.to_wire()}


@app.post("/api/explain")
def explain(req: ExplainRequest):
    credential = state.credentials.resolve(req.api_key)
    return _run_call(
        lambda: explainer.explain_concept(
            req.concept, req.scenario, credential, http_client=state.http_client,
        ),
        "concept_explored",
        concept=req.concept,
    )


@app.post("/api/related-concept")
def related_concept(req: RelatedConceptRequest):
    credential = state.credentials.resolve(req.api_key)
    return _run_call(
        lambda: explainer.explain_related_concept(
            req.related_concept, req.concept, req.scenario, credential,
            http_client=state.http_client,
        ),
        "related_concept_clicked",
    )


@app.post("/api/code-block")
def code_block(req: CodeBlockRequest):
    credential = state.credentials.resolve(req.api_key)
    return _run_call(
        lambda: explainer.explain_code_block(
            req.code, req.language, credential,
            concept=req.concept, scenario=req.scenario, http_client=state.http_client,
        ),
        "block_explanation",
    )


@app.post("/api/why")
def why(req: WhyRequest):
    credential = state.credentials.resolve(req.api_key)
    previous = req.previous_response
    if isinstance(previous, dict):
        previous = json.dumps(previous, indent=2)
    return _run_call(
        lambda: explainer.explain_why(
            previous, req.concept, req.scenario, credential, http_client=state.http_client,
        ),
        "why_clicked",
    )


# ── Learning stats ─────────────────────────────────────────────────────

def _stats_payload() -> dict:
    stats = state.stats.stats
    return {"stats": stats.to_dict(), "summary": summarize(stats)}


@app.get("/api/stats")
async def get_stats() -> dict:
    return _stats_payload()


@app.post("/api/stats/track")
async def track_interaction(req: TrackRequest) -> dict:
    state.stats.track(req.event, concept=req.concept, principle=req.principle)
    return _stats_payload()


@app.delete("/api/stats")
async def clear_stats() -> dict:
    state.stats.clear()
    return _stats_payload()


# ── Learning hub ───────────────────────────────────────────────────────

@app.get("/api/learning-paths")
async def learning_paths(q: str = "", category: str = "All", difficulty: str = "All") -> dict:
    return {
        "paths": catalog.search_paths(q, category, difficulty),
        "trending": catalog.trending_paths(),
        "categories": catalog.CATEGORIES,
        "difficulties": catalog.DIFFICULTY_LEVELS,
    }


@app.get("/api/health")
async def health() -> dict:
    return {"status": "ok"}
