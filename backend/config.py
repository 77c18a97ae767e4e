import os
from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "").strip()
    OPENAI_BASE_URL: str = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")
    LLM_MODEL: str = os.getenv("LLM_MODEL", "gpt-4.1-2025-04-14")
    LLM_TEMPERATURE: float = float(os.getenv("LLM_TEMPERATURE", "0.7"))
    MAX_TOKENS_CONCEPT: int = int(os.getenv("MAX_TOKENS_CONCEPT", "2000"))
    MAX_TOKENS_WHY: int = int(os.getenv("MAX_TOKENS_WHY", "1500"))
    MAX_TOKENS_CODE_BLOCK: int = int(os.getenv("MAX_TOKENS_CODE_BLOCK", "1200"))
    MAX_TOKENS_RELATED: int = int(os.getenv("MAX_TOKENS_RELATED", "1000"))
    DATA_DIR: str = os.getenv("DATA_DIR", os.path.join(os.path.dirname(__file__), "..", "data"))
    STORAGE_FILE: str = os.getenv("STORAGE_FILE", os.path.join(DATA_DIR, "storage.json"))
    STATS_KEY: str = "learning_stats"
    CREDENTIAL_KEY: str = "openai_api_key"
    TOLERANT_JSON: bool = _flag("TOLERANT_JSON")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

config = Config()
