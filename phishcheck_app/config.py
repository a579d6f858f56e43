# phishcheck_app/config.py
"""
Environment configuration for the phishing URL analyzer.

Loads .env from the project root when available and exposes the inference
backend, model identifier and transport settings as a Settings object.
"""

from pathlib import Path
from typing import Optional
import os

from pydantic import BaseModel

_ROOT = Path(__file__).resolve().parent.parent
_ENV_PATH = _ROOT / ".env"

BACKEND_OPENAI = "openai"
BACKEND_WORKERS_AI = "workers-ai"

DEFAULT_MODELS = {
    BACKEND_OPENAI: "gpt-4o-mini",
    BACKEND_WORKERS_AI: "@hf/thebloke/deepseek-coder-6.7b-base-awq",
}


def load_env() -> None:
    """Load .env from project root. Safe to call multiple times."""
    from dotenv import load_dotenv
    load_dotenv(_ENV_PATH)


class Settings(BaseModel):
    backend: str = BACKEND_OPENAI
    model: str = DEFAULT_MODELS[BACKEND_OPENAI]
    temperature: float = 0.2
    timeout_sec: float = 60.0
    cloudflare_account_id: Optional[str] = None
    cloudflare_api_token: Optional[str] = None


def get_settings() -> Settings:
    """
    Read settings from the environment.

    INFERENCE_BACKEND picks the collaborator ("openai" | "workers-ai");
    MODEL overrides the backend's default model identifier.
    """
    load_env()
    backend = (os.getenv("INFERENCE_BACKEND") or BACKEND_OPENAI).strip().lower()
    if backend in ("workers_ai", "workersai", "cloudflare"):
        backend = BACKEND_WORKERS_AI
    if backend not in DEFAULT_MODELS:
        raise ValueError(f"Unknown INFERENCE_BACKEND: {backend!r}")

    model = (os.getenv("MODEL") or "").strip() or DEFAULT_MODELS[backend]
    return Settings(
        backend=backend,
        model=model,
        temperature=float(os.getenv("TEMPERATURE", "0.2")),
        timeout_sec=float(os.getenv("INFERENCE_TIMEOUT_SEC", "60")),
        cloudflare_account_id=(os.getenv("CLOUDFLARE_ACCOUNT_ID") or "").strip() or None,
        cloudflare_api_token=(os.getenv("CLOUDFLARE_API_TOKEN") or "").strip() or None,
    )
