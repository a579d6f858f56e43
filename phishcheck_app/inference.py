# phishcheck_app/inference.py
"""
Inference collaborators: the hosted model the analyzer delegates to.

Every client exposes run(messages) -> text, where messages is the
role-tagged chat list [{"role": ..., "content": ...}, ...].
"""

from typing import Dict, Iterator, List, Optional, Protocol

import httpx

from phishcheck_app.config import BACKEND_OPENAI, BACKEND_WORKERS_AI, Settings, get_settings
from phishcheck_app.logger import get_logger

logger = get_logger(__name__)

WORKERS_AI_URL = "https://api.cloudflare.com/client/v4/accounts/{account_id}/ai/run/{model}"

Messages = List[Dict[str, str]]


class InferenceError(RuntimeError):
    """The inference backend answered with an error or an unusable payload."""


class InferenceClient(Protocol):
    def run(self, messages: Messages) -> str: ...

    def close(self) -> None: ...


# --- OpenAI ---

class OpenAIInference:
    def __init__(self, model: str, temperature: float = 0.2, client=None):
        self.model = model
        self.temperature = temperature
        self._client = client
        self._owns_client = client is None

    def run(self, messages: Messages) -> str:
        if self._client is None:
            from openai import OpenAI
            self._client = OpenAI()
        resp = self._client.chat.completions.create(
            model=self.model,
            messages=messages,
            temperature=self.temperature,
        )
        if not resp.choices:
            raise InferenceError(f"{self.model} returned no choices")
        return resp.choices[0].message.content or ""

    def close(self) -> None:
        if self._owns_client and self._client is not None:
            self._client.close()
            self._client = None


# --- Cloudflare Workers AI (REST) ---

class WorkersAIInference:
    """POST {"messages": [...]} to /ai/run/{model}; the completion is result.response."""

    def __init__(
        self,
        account_id: str,
        api_token: str,
        model: str,
        timeout: float = 60.0,
        http_client: Optional[httpx.Client] = None,
    ):
        self.model = model
        self.url = WORKERS_AI_URL.format(account_id=account_id, model=model)
        self._configured = bool(account_id and api_token)
        self._headers = {"Authorization": f"Bearer {api_token}"}
        self._http = http_client or httpx.Client(timeout=timeout)

    def run(self, messages: Messages) -> str:
        if not self._configured:
            raise InferenceError("CLOUDFLARE_ACCOUNT_ID and CLOUDFLARE_API_TOKEN are required for workers-ai")
        try:
            resp = self._http.post(self.url, headers=self._headers, json={"messages": messages})
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise InferenceError(f"Workers AI returned HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise InferenceError(f"Workers AI request failed: {e}") from e

        payload = resp.json()
        if not payload.get("success", True):
            errors = "; ".join(str(err.get("message", err)) for err in payload.get("errors") or [])
            raise InferenceError(f"Workers AI error: {errors or 'unknown'}")
        text = (payload.get("result") or {}).get("response")
        if not isinstance(text, str):
            raise InferenceError(f"Workers AI result.response is not text: {type(text).__name__}")
        return text

    def close(self) -> None:
        self._http.close()


def build_inference_client(settings: Settings) -> InferenceClient:
    if settings.backend == BACKEND_WORKERS_AI:
        return WorkersAIInference(
            account_id=settings.cloudflare_account_id or "",
            api_token=settings.cloudflare_api_token or "",
            model=settings.model,
            timeout=settings.timeout_sec,
        )
    if settings.backend == BACKEND_OPENAI:
        return OpenAIInference(settings.model, temperature=settings.temperature)
    raise ValueError(f"Unknown inference backend: {settings.backend!r}")


def get_inference_client() -> Iterator[InferenceClient]:
    """
    FastAPI dependency: one client per request, closed once the response is done.

    Configuration errors surface as InferenceError so the route answers with
    the same plain-text 500 as a failed model call. Tests replace this
    dependency through app.dependency_overrides.
    """
    try:
        settings = get_settings()
        client = build_inference_client(settings)
    except ValueError as e:
        raise InferenceError(f"inference backend misconfigured: {e}") from e
    logger.debug("inference_client_selected", backend=settings.backend, model=settings.model)
    try:
        yield client
    finally:
        client.close()
