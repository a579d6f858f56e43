# phishcheck_app/extraction.py
from typing import Callable, List, Optional, Tuple
import json, re

from pydantic import BaseModel, ValidationError, field_validator

from phishcheck_app.logger import get_logger

logger = get_logger(__name__)

RISK_LEVELS = ("low", "medium", "high")
SCORE_MIN, SCORE_MAX = 1, 10

FALLBACK_SCORE = 5
FALLBACK_RISK_LEVEL = "medium"
FALLBACK_REASONING = "Could not parse structured analysis. Original response: "
FALLBACK_RECOMMENDATIONS = "Please review the URL manually."

FENCED_JSON_RE = re.compile(r"```json([\s\S]*?)```")
BRACE_SPAN_RE = re.compile(r"\{[\s\S]*\}")


class ExtractError(ValueError):
    """No strategy produced a valid AnalysisResult."""


class AnalysisResult(BaseModel):
    score: int
    risk_level: str  # "low" | "medium" | "high"
    reasoning: str
    recommendations: str

    @field_validator("score", mode="before")
    @classmethod
    def _clamp_score(cls, v):
        if isinstance(v, bool):
            raise ValueError("score must be a number")
        if isinstance(v, str):
            v = v.strip().split("/")[0].strip()
        try:
            n = round(float(v))
        except (TypeError, ValueError, OverflowError):
            raise ValueError(f"score must be a number, got {v!r}")
        return max(SCORE_MIN, min(SCORE_MAX, n))

    @field_validator("risk_level", mode="before")
    @classmethod
    def _closed_risk_level(cls, v):
        level = str(v).strip().lower()
        if level not in RISK_LEVELS:
            raise ValueError(f"risk_level must be one of {RISK_LEVELS}, got {v!r}")
        return level

    @field_validator("reasoning", "recommendations", mode="before")
    @classmethod
    def _as_text(cls, v):
        # Models sometimes answer with a list of bullet points.
        if isinstance(v, (list, tuple)):
            return " ".join(str(x).strip() for x in v)
        if v is None:
            raise ValueError("field is required")
        return str(v)


# --- Strategies: each returns a candidate JSON string or None ---

def fenced_json_block(text: str) -> Optional[str]:
    m = FENCED_JSON_RE.search(text)
    return m.group(1).strip() if m else None


def brace_span(text: str) -> Optional[str]:
    """Earliest '{' to latest '}'."""
    m = BRACE_SPAN_RE.search(text)
    return m.group(0) if m else None


def whole_text(text: str) -> Optional[str]:
    return text if text.strip() else None


STRATEGIES: Tuple[Callable[[str], Optional[str]], ...] = (fenced_json_block, brace_span, whole_text)


def decode_candidate(candidate: str) -> AnalysisResult:
    try:
        data = json.loads(candidate)
    except json.JSONDecodeError as e:
        raise ExtractError(f"invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ExtractError(f"expected a JSON object, got {type(data).__name__}")
    try:
        return AnalysisResult.model_validate(data)
    except ValidationError as e:
        raise ExtractError(f"wrong shape: {e.error_count()} error(s)") from e


def extract_analysis(text: str) -> AnalysisResult:
    """
    Locate and parse the AnalysisResult embedded in a model reply.

    Strategies run in order (fenced ```json block, brace span, whole text);
    a strategy that finds nothing or yields an undecodable candidate falls
    through to the next. Raises ExtractError when all of them fail.
    """
    errors: List[str] = []
    for strategy in STRATEGIES:
        candidate = strategy(text or "")
        if candidate is None:
            errors.append(f"{strategy.__name__}: no match")
            continue
        try:
            return decode_candidate(candidate)
        except ExtractError as e:
            errors.append(f"{strategy.__name__}: {e}")
    raise ExtractError("; ".join(errors))


def fallback_analysis(text: str) -> AnalysisResult:
    return AnalysisResult(
        score=FALLBACK_SCORE,
        risk_level=FALLBACK_RISK_LEVEL,
        reasoning=FALLBACK_REASONING + (text or ""),
        recommendations=FALLBACK_RECOMMENDATIONS,
    )


def parse_analysis(text: str) -> AnalysisResult:
    """Extraction with the fixed fallback assessment; never raises."""
    try:
        return extract_analysis(text)
    except ExtractError as e:
        logger.warning("analysis_fallback", reason=str(e), reply_chars=len(text or ""))
        return fallback_analysis(text)
