"""
Shared fixtures: a scripted LLM adapter, a throwaway upload directory and
a TestClient wired to both.
"""

import copy
import json

import pytest
from fastapi.testclient import TestClient

from legaldoc.agent.llm_adapters import LLMAdapter
from legaldoc.core.config import settings
from legaldoc.main import app
from legaldoc.services.llm_service import LLMService, get_llm_service


SAMPLE_ANALYSIS = {
    "simplified": "The contract renews every year unless you cancel 90 days before it ends.",
    "riskAssessment": {
        "overallRisk": "high",
        "riskFactors": [
            {
                "clause": "This agreement automatically renews unless cancelled 90 days in advance.",
                "risk": "high",
                "explanation": "You can be locked into another term if you miss the window.",
                "impact": "Financial: another full year of fees."
            }
        ]
    },
    "keyTerms": [
        {
            "term": "Automatic renewal",
            "definition": "The contract extends itself without a new signature.",
            "importance": "You must act to stop it."
        }
    ],
    "actionItems": [
        {
            "action": "Put the cancellation deadline in your calendar",
            "priority": "high",
            "deadline": "90 days before the renewal date"
        },
        {
            "action": "Ask for a shorter notice period",
            "priority": "medium"
        }
    ],
    "warnings": ["Missing the notice window renews the contract for a full term."]
}


class FakeLLMAdapter(LLMAdapter):
    """Returns a scripted answer and records every prompt it receives."""

    def __init__(self, response: str = "", error: Exception = None):
        self.response = response
        self.error = error
        self.prompts = []

    def query(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def sample_analysis():
    return copy.deepcopy(SAMPLE_ANALYSIS)


@pytest.fixture
def fake_llm(sample_analysis):
    return FakeLLMAdapter(json.dumps(sample_analysis))


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    path = tmp_path / "uploads"
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(path))
    return path


@pytest.fixture
def client(fake_llm, upload_dir):
    app.dependency_overrides[get_llm_service] = lambda: LLMService(fake_llm)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def leftover_files(upload_dir):
    """Callable listing whatever is still in the upload directory."""
    def _list():
        if not upload_dir.exists():
            return []
        return list(upload_dir.iterdir())
    return _list
