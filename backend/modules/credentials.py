"""Credential store: keeps the user's API key in local storage between visits."""

import logging
from typing import Optional

from config import config
from modules.errors import MissingCredential
from modules.storage import Storage

logger = logging.getLogger(__name__)


class CredentialStore:
    def __init__(self, storage: Storage, key: str = "openai_api_key"):
        self.storage = storage
        self.key = key

    def save(self, credential: str) -> None:
        credential = credential.strip()
        if not credential:
            raise ValueError("API key cannot be empty")
        self.storage.set(self.key, credential)
        logger.info("API key saved")

    def load(self) -> Optional[str]:
        return self.storage.get(self.key)

    def clear(self) -> None:
        self.storage.remove(self.key)

    def resolve(self, explicit: Optional[str] = None) -> str:
        """Explicit key, then the saved one, then OPENAI_API_KEY from the environment."""
        for candidate in (explicit, self.load(), config.OPENAI_API_KEY):
            if candidate and candidate.strip():
                return candidate.strip()
        raise MissingCredential("No OpenAI API key set. Save one first.")
