from typing import Dict, Any, List, Optional
import re
import json
import logging
import requests
import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from legaldoc.core.errors import OracleError

logger = logging.getLogger(__name__)


class LLMAdapter:
    def query(self, prompt: str) -> str:
        """
        Send a prompt, return the model's raw text answer.
        Raises OracleError when the service cannot produce one.
        """
        raise NotImplementedError("Implement in subclass")


def _error_message(response: requests.Response) -> str:
    try:
        error_data = response.json()
    except ValueError:
        error_data = {}
    if isinstance(error_data, dict) and isinstance(error_data.get("error"), dict):
        return error_data["error"].get("message", f"HTTP {response.status_code}")
    return f"HTTP {response.status_code}"


class MockLLMAdapter(LLMAdapter):
    """
    Mock LLM that splits the legal text into sentences and scores
    them with keyword matching. Answers in the same JSON shape as the real
    models, for local development without an API key.
    """
    HIGH_RISK_KEYWORDS = [
        "penalty", "forfeit", "prohibited", "automatic increase", "automatically renew",
        "non-refundable", "indemnify", "waive", "liquidated damages", "sole discretion",
    ]
    MEDIUM_RISK_KEYWORDS = [
        "must", "required", "responsible", "obligation", "mandatory", "shall", "terminate",
    ]
    GLOSSARY = {
        "indemnify": "To compensate someone for loss or damage they suffer.",
        "liquidated damages": "A fixed amount agreed in advance to be paid if the contract is broken.",
        "renew": "To extend the agreement for another term.",
        "terminate": "To bring the agreement to an end.",
        "waive": "To voluntarily give up a right.",
        "jurisdiction": "The courts or laws that govern disputes under the agreement.",
        "confidential": "Information that must not be shared with others.",
    }

    PROMPT_TEXT_PATTERN = re.compile(
        r'LEGAL TEXT:\n"(.*?)"\n\n\s*(?:SPECIFIC QUESTION:|Please provide a detailed analysis)',
        re.DOTALL,
    )

    def query(self, prompt: str) -> str:
        match = self.PROMPT_TEXT_PATTERN.search(prompt)
        text = match.group(1) if match else prompt
        return json.dumps(self.analyze(text))

    def analyze(self, text: str) -> Dict[str, Any]:
        sentences = [s.strip() for s in re.split(r"(?<=[.!?])\s+|\n{2,}", text) if s.strip()]

        risk_factors = []
        for sentence in sentences:
            risk = self._classify_risk(sentence.lower())
            if risk == "low":
                continue
            risk_factors.append({
                "clause": sentence if len(sentence) < 200 else sentence[:197] + "...",
                "risk": risk,
                "explanation": self._explain(risk),
                "impact": "Financial/Legal impact depends on how this clause is enforced.",
            })

        if any(f["risk"] == "high" for f in risk_factors):
            overall_risk = "high"
        elif risk_factors:
            overall_risk = "medium"
        else:
            overall_risk = "low"

        return {
            "simplified": self._summarize(sentences),
            "riskAssessment": {
                "overallRisk": overall_risk,
                "riskFactors": risk_factors,
            },
            "keyTerms": self._key_terms(text.lower()),
            "actionItems": self._action_items(text, risk_factors),
            "warnings": [
                f"High-risk clause: {f['clause']}" for f in risk_factors if f["risk"] == "high"
            ],
        }

    def _classify_risk(self, text_lower: str) -> str:
        if any(k in text_lower for k in self.HIGH_RISK_KEYWORDS):
            return "high"
        if any(k in text_lower for k in self.MEDIUM_RISK_KEYWORDS):
            return "medium"
        return "low"

    @staticmethod
    def _explain(risk: str) -> str:
        if risk == "high":
            return "This clause can bind you or cost you money without further action on your part."
        return "This clause places an obligation on you that you should understand before agreeing."

    @staticmethod
    def _summarize(sentences: List[str]) -> str:
        if not sentences:
            return "The document does not contain any readable clauses."
        summary = " ".join(sentences[:3])
        return f"In plain terms, this document says: {summary}"

    def _key_terms(self, text_lower: str) -> List[Dict[str, str]]:
        return [
            {
                "term": term,
                "definition": definition,
                "importance": "This term affects your rights and obligations under the agreement.",
            }
            for term, definition in self.GLOSSARY.items()
            if term in text_lower
        ]

    @staticmethod
    def _action_items(text: str, risk_factors: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        items = []
        notice = re.search(r"(\d+)\s*days?", text.lower())
        for factor in risk_factors:
            item = {
                "action": f"Review this clause carefully: {factor['clause']}",
                "priority": factor["risk"],
            }
            if notice and factor["risk"] == "high":
                item["deadline"] = f"At least {notice.group(1)} days before the relevant date"
            items.append(item)
        return items


class ClaudeLLMAdapter(LLMAdapter):
    """
    Claude (Anthropic) LLM adapter.
    """
    API_URL = "https://api.anthropic.com/v1/messages"

    def __init__(self, api_key: Optional[str], model_name: str, timeout: float = 30, max_tokens: int = 4096):
        if not api_key:
            raise OracleError("CLAUDE_API_KEY is not configured")
        self.api_key = api_key
        self.model_name = model_name
        self.timeout = timeout
        self.max_tokens = max_tokens

    def query(self, prompt: str) -> str:
        headers = {
            "Content-Type": "application/json",
            "x-api-key": self.api_key,
            "anthropic-version": "2023-06-01"
        }

        data = {
            "model": self.model_name,
            "max_tokens": self.max_tokens,
            "messages": [
                {
                    "role": "user",
                    "content": prompt
                }
            ]
        }

        try:
            response = requests.post(self.API_URL, headers=headers, json=data, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise OracleError("AI service timed out") from e
        except requests.exceptions.RequestException as e:
            raise OracleError(f"Network error: {e}") from e

        if response.status_code != 200:
            message = _error_message(response)
            logger.error("Claude API error: %s", message)
            raise OracleError(f"AI service error: {message}")

        try:
            return response.json()["content"][0]["text"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise OracleError("AI service returned an unexpected response") from e


class GeminiLLMAdapter(LLMAdapter):
    """
    Google Gemini adapter using the google-generativeai SDK.
    """

    def __init__(self, api_key: Optional[str], model_name: str, timeout: float = 30, max_tokens: int = 4096):
        if not api_key:
            raise OracleError("GEMINI_API_KEY is not configured")
        self.api_key = api_key
        self.model_name = model_name
        self.timeout = timeout
        self.max_tokens = max_tokens

    def query(self, prompt: str) -> str:
        genai.configure(api_key=self.api_key)
        model = genai.GenerativeModel(self.model_name)

        try:
            response = model.generate_content(
                prompt,
                generation_config={"max_output_tokens": self.max_tokens},
                request_options={"timeout": self.timeout}
            )
        except google_exceptions.DeadlineExceeded as e:
            raise OracleError("AI service timed out") from e
        except google_exceptions.GoogleAPIError as e:
            message = getattr(e, "message", None) or str(e)
            logger.error("Gemini API error: %s", message)
            raise OracleError(f"AI service error: {message}") from e

        try:
            return response.text
        except (ValueError, AttributeError, IndexError) as e:
            raise OracleError("AI service returned an unexpected response") from e
