"""
Learning Stats: the local, gamified progress record.

Loaded from storage once, mutated by tracked interactions, written back after
every mutation, and removed entirely on clear().
"""

import json
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Optional

from modules.storage import Storage

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _parse_time(value: object) -> Optional[datetime]:
    if not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _string_list(data: dict, key: str) -> list[str]:
    value = data.get(key, [])
    if not isinstance(value, list):
        raise TypeError(f"{key} must be a list, got {type(value).__name__}")
    return [str(item) for item in value]


@dataclass
class LearningStats:
    concepts_explored: list[str] = field(default_factory=list)
    security_advice_accepted: int = 0
    clean_code_principles_applied: list[str] = field(default_factory=list)
    questions_asked: int = 0
    block_explanations_requested: int = 0
    why_button_clicks: int = 0
    last_active: datetime = field(default_factory=_utcnow)

    def to_dict(self) -> dict:
        return {
            "conceptsExplored": list(self.concepts_explored),
            "securityAdviceAccepted": self.security_advice_accepted,
            "cleanCodePrinciplesApplied": list(self.clean_code_principles_applied),
            "questionsAsked": self.questions_asked,
            "blockExplanationsRequested": self.block_explanations_requested,
            "whyButtonClicks": self.why_button_clicks,
            "lastActive": self.last_active.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict, fallback_time: Optional[datetime] = None) -> "LearningStats":
        """Rebuild a record. A missing or unreadable lastActive falls back to `fallback_time`."""
        last_active = _parse_time(data.get("lastActive")) or fallback_time or _utcnow()
        return cls(
            concepts_explored=_string_list(data, "conceptsExplored"),
            security_advice_accepted=int(data.get("securityAdviceAccepted", 0)),
            clean_code_principles_applied=_string_list(data, "cleanCodePrinciplesApplied"),
            questions_asked=int(data.get("questionsAsked", 0)),
            block_explanations_requested=int(data.get("blockExplanationsRequested", 0)),
            why_button_clicks=int(data.get("whyButtonClicks", 0)),
            last_active=last_active,
        )

    @property
    def total_interactions(self) -> int:
        return (
            len(self.concepts_explored)
            + self.security_advice_accepted
            + self.questions_asked
            + self.block_explanations_requested
            + self.why_button_clicks
        )


# ── Dashboard summary ──────────────────────────────────────────────────

SECURITY_BADGE_THRESHOLD = 5
SECURITY_ADVICE_GOAL = 10

LEVELS = [
    (5, "Beginner", 20),
    (15, "Learning", 50),
    (30, "Advancing", 75),
]


def progress_level(total_interactions: int) -> dict:
    for limit, level, progress in LEVELS:
        if total_interactions < limit:
            return {"level": level, "progress": progress}
    return {"level": "Expert", "progress": 100}


def summarize(stats: LearningStats) -> dict:
    total = stats.total_interactions
    return {
        "totalInteractions": total,
        **progress_level(total),
        "securityProgress": min(stats.security_advice_accepted, SECURITY_ADVICE_GOAL),
        "securityGoal": SECURITY_ADVICE_GOAL,
        "securityBadge": stats.security_advice_accepted >= SECURITY_BADGE_THRESHOLD,
    }


# ── Store ──────────────────────────────────────────────────────────────

class StatsStore:
    """
    Owns the in-memory LearningStats and mirrors it to `storage` under `key`.
    Mutations hold a lock, so events from concurrent requests apply one at a time.
    """

    def __init__(
        self,
        storage: Storage,
        key: str = "learning_stats",
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.storage = storage
        self.key = key
        self.clock = clock
        self._lock = threading.RLock()
        self.stats = self._load()

    def _default(self) -> LearningStats:
        return LearningStats(last_active=self.clock())

    def _load(self) -> LearningStats:
        raw = self.storage.get(self.key)
        if raw is None:
            return self._default()
        try:
            data = json.loads(raw)
            if not isinstance(data, dict):
                raise TypeError(f"expected an object, got {type(data).__name__}")
            return LearningStats.from_dict(data, fallback_time=self.clock())
        except (ValueError, TypeError) as e:
            logger.warning("Failed to parse learning stats, using defaults: %s", e)
            return self._default()

    def save(self) -> None:
        with self._lock:
            self.storage.set(self.key, json.dumps(self.stats.to_dict()))

    def track(self, event: str, concept: Optional[str] = None, principle: Optional[str] = None) -> LearningStats:
        """Apply one tracked interaction and persist the result."""
        with self._lock:
            stats = self.stats
            stats.last_active = self.clock()

            if event == "concept_explored":
                if concept and concept not in stats.concepts_explored:
                    stats.concepts_explored.append(concept)
            elif event == "security_advice_accepted":
                stats.security_advice_accepted += 1
            elif event == "principle_applied":
                if principle and principle not in stats.clean_code_principles_applied:
                    stats.clean_code_principles_applied.append(principle)
            elif event in ("question_asked", "related_concept_clicked"):
                stats.questions_asked += 1
            elif event == "block_explanation":
                stats.block_explanations_requested += 1
            elif event == "why_clicked":
                stats.why_button_clicks += 1
            else:
                logger.debug("Untracked interaction %r, only refreshing last_active", event)

            self.save()
            return stats

    def clear(self) -> LearningStats:
        with self._lock:
            self.stats = self._default()
            self.storage.remove(self.key)
            return self.stats
