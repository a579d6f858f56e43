# phishcheck_app/pages.py
from jinja2 import Environment

from phishcheck_app.extraction import AnalysisResult

# Autoescape: the URL and all model text are untrusted.
_env = Environment(autoescape=True)

EXAMPLE_URLS = [
    ("Banking phishing example", "https://secure-bankofamerica.com.phishing.example/login"),
    ("Legitimate URL example", "https://www.sherilnagoor.com"),
]

FORM_TEMPLATE = """<!DOCTYPE html>
<html>
  <head>
    <title>Phishing URL Detector</title>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <style>
      body { font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif; line-height: 1.6; max-width: 800px; margin: 0 auto; padding: 20px; }
      h1 { color: #333; }
      form { margin-top: 20px; }
      input[type="text"] { width: 100%; padding: 10px; font-size: 16px; border: 1px solid #ddd; border-radius: 4px; box-sizing: border-box; }
      button { background-color: #0051c3; color: white; border: none; padding: 10px 15px; font-size: 16px; border-radius: 4px; cursor: pointer; margin-top: 10px; }
      button:hover { background-color: #003da0; }
      .examples { margin-top: 30px; }
      .example { cursor: pointer; color: #0066cc; margin-right: 15px; }
      .example:hover { text-decoration: underline; }
    </style>
  </head>
  <body>
    <h1>Phishing URL Detector</h1>
    <p>Enter a URL to analyze for potential phishing indicators using a hosted language model.</p>

    <form method="POST">
      <input type="text" name="url" placeholder="Enter URL to analyze" required>
      <button type="submit">Analyze URL</button>
    </form>

    <div class="examples">
      <p>Examples to try:</p>
      {% for label, example in examples %}
      <span class="example">
        <a href="#" data-url="{{ example }}" onclick="document.querySelector('input[name=url]').value=this.dataset.url">{{ label }}</a>
      </span>
      {% endfor %}
    </div>
  </body>
</html>
"""

REPORT_TEMPLATE = """<!DOCTYPE html>
<html>
  <head>
    <title>Phishing URL Analysis</title>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <style>
      body { font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif; line-height: 1.6; max-width: 800px; margin: 0 auto; padding: 20px; }
      .result { border: 1px solid #ddd; border-radius: 8px; padding: 20px; margin-top: 20px; }
      .high { border-left: 5px solid #ff4d4d; }
      .medium { border-left: 5px solid #ffcc00; }
      .low { border-left: 5px solid #66cc66; }
      h2 { margin-top: 0; }
      .score { font-size: 24px; font-weight: bold; }
      a.back { display: inline-block; margin-top: 20px; color: #0066cc; text-decoration: none; }
      a.back:hover { text-decoration: underline; }
    </style>
  </head>
  <body>
    <h1>Phishing URL Analysis</h1>
    <p>Analysis for: <code>{{ url }}</code></p>

    <div class="result {{ analysis.risk_level }}">
      <h2>Risk Assessment</h2>
      <p class="score">Score: {{ analysis.score }}/10 ({{ analysis.risk_level | upper }} RISK)</p>
      <h3>Reasoning:</h3>
      <p>{{ analysis.reasoning }}</p>
      <h3>Recommendations:</h3>
      <p>{{ analysis.recommendations }}</p>
    </div>

    <a href="/" class="back">&larr; Analyze another URL</a>
  </body>
</html>
"""

_form = _env.from_string(FORM_TEMPLATE)
_report = _env.from_string(REPORT_TEMPLATE)


def render_form() -> str:
    return _form.render(examples=EXAMPLE_URLS)


def render_report(url: str, analysis: AnalysisResult) -> str:
    return _report.render(url=url, analysis=analysis)
