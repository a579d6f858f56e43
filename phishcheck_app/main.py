# phishcheck_app/main.py
from fastapi import Depends, FastAPI, Form, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, Response
from typing import Dict, List

from phishcheck_app.extraction import parse_analysis
from phishcheck_app.inference import InferenceClient, InferenceError, get_inference_client
from phishcheck_app.logger import get_logger
from phishcheck_app.pages import render_form, render_report

logger = get_logger(__name__)

app = FastAPI(title="Phishing URL Analyzer", version="0.1.0")

# --- Prompt ---
SYSTEM_PROMPT = "You are a cybersecurity expert specializing in URL analysis."

USER_PROMPT = (
    'Analyze this URL: "{url}"\n'
    "\n"
    "Identify if it shows signs of being a phishing attempt based on:\n"
    "1. Suspicious domain structure (typosquatting, misleading names)\n"
    "2. Unusual URL patterns (excessive subdomains, random strings)\n"
    "3. Presence of brand names in unexpected domains\n"
    "4. Deceptive paths or query parameters\n"
    "\n"
    "Rate the phishing probability from 1-10 and explain your reasoning.\n"
    "Format your response as JSON with fields:\n"
    "{{\n"
    '  "score": number,\n'
    '  "risk_level": "low|medium|high",\n'
    '  "reasoning": "string",\n'
    '  "recommendations": "string"\n'
    "}}"
)


def build_messages(target: str) -> List[Dict[str, str]]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": USER_PROMPT.format(url=target)},
    ]


def analyze_url(target: str, client: InferenceClient) -> Response:
    """Prompt the model, extract its assessment and render the report page.

    A failed inference call is the only non-200 outcome (500, plain text);
    an unparseable reply degrades to the fallback assessment.
    """
    logger.info("analysis_requested", url=target)
    try:
        text = client.run(build_messages(target))
    except Exception as e:
        logger.error("inference_failed", url=target, error=str(e), error_type=type(e).__name__)
        return PlainTextResponse(f"Error analyzing URL: {e}", status_code=500)
    logger.info("inference_completed", url=target, reply_chars=len(text))

    analysis = parse_analysis(text)
    logger.info("analysis_rendered", url=target, score=analysis.score, risk_level=analysis.risk_level)
    return HTMLResponse(render_report(target, analysis))


@app.exception_handler(InferenceError)
async def inference_error_handler(request: Request, exc: InferenceError):
    # Raised while resolving the client, before analyze_url runs.
    logger.error("inference_failed", path=request.url.path, error=str(exc), error_type=type(exc).__name__)
    return PlainTextResponse(f"Error analyzing URL: {exc}", status_code=500)


# Other methods on these paths get 405 from the router.
@app.api_route("/{path:path}", methods=["GET", "HEAD"], response_class=HTMLResponse)
def form(path: str):
    return HTMLResponse(render_form())


@app.post("/{path:path}")
def analyze(
    path: str,
    url: str = Form(""),
    client: InferenceClient = Depends(get_inference_client),
):
    return analyze_url(url, client)
