"""
Pytest fixtures: a recording inference double and a TestClient wired to it.
"""

from __future__ import annotations

import pytest


class FakeInference:
    """Returns a canned reply (or raises) and records every messages list it receives."""

    def __init__(self, reply: str = "", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.calls: list[list[dict[str, str]]] = []
        self.closed = False

    def run(self, messages):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return self.reply

    def close(self):
        self.closed = True


@pytest.fixture
def fake_inference():
    return FakeInference()


@pytest.fixture
def client(fake_inference):
    """FastAPI TestClient with get_inference_client overridden by fake_inference."""
    from fastapi.testclient import TestClient

    from phishcheck_app.inference import get_inference_client
    from phishcheck_app.main import app

    app.dependency_overrides[get_inference_client] = lambda: fake_inference
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def app_client():
    """TestClient on the real dependency wiring (backend chosen from the environment)."""
    from fastapi.testclient import TestClient

    from phishcheck_app.main import app

    app.dependency_overrides.clear()
    return TestClient(app)
