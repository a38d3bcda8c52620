import os
from typing import List, Optional

import openai
from dotenv import load_dotenv

# ============================================================
# CONFIG
# ============================================================
load_dotenv()

MODEL_NAME = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
API_HOST = os.getenv("API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("API_PORT", "8001"))


def cors_origins() -> List[str]:
    raw = os.getenv("CORS_ORIGINS", "*")
    return [o.strip() for o in raw.split(",") if o.strip()] or ["*"]


def openai_configured() -> bool:
    return bool(os.getenv("OPENAI_API_KEY"))


def get_openai_client() -> Optional[openai.OpenAI]:
    """OpenAI client, or None when OPENAI_API_KEY is unset (heuristic mode)."""
    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        return None
    return openai.OpenAI(api_key=api_key)
