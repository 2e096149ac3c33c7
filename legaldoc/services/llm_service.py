"""
LLM Service - Handles all LLM interactions
"""
import logging
from typing import Optional

from legaldoc.agent.llm_adapters import LLMAdapter, GeminiLLMAdapter, ClaudeLLMAdapter, MockLLMAdapter
from legaldoc.agent.prompts import build_legal_analysis_prompt
from legaldoc.core.config import settings
from legaldoc.core.errors import OracleError

logger = logging.getLogger(__name__)


def create_adapter(provider: str) -> LLMAdapter:
    """Build the adapter named by the LLM_PROVIDER setting"""
    if provider == "gemini":
        return GeminiLLMAdapter(
            api_key=settings.GEMINI_API_KEY,
            model_name=settings.GEMINI_MODEL,
            timeout=settings.LLM_TIMEOUT_SECONDS,
            max_tokens=settings.LLM_MAX_TOKENS,
        )
    if provider == "claude":
        return ClaudeLLMAdapter(
            api_key=settings.CLAUDE_API_KEY,
            model_name=settings.CLAUDE_MODEL,
            timeout=settings.LLM_TIMEOUT_SECONDS,
            max_tokens=settings.LLM_MAX_TOKENS,
        )
    if provider == "mock":
        return MockLLMAdapter()
    raise OracleError(f"Unknown LLM provider: {provider}")


class LLMService:
    def __init__(self, llm: Optional[LLMAdapter] = None):
        """Use the given adapter, or build one from settings on first use"""
        self._llm = llm

    @property
    def llm(self) -> LLMAdapter:
        if self._llm is None:
            self._llm = create_adapter(settings.LLM_PROVIDER)
        return self._llm

    def analyze_document(self, text: str, query: Optional[str] = None) -> str:
        """
        Ask the LLM to analyze legal text

        Args:
            text: Legal text to analyze
            query: Optional question narrowing the analysis

        Returns:
            Raw text answer from the LLM
        """
        prompt = build_legal_analysis_prompt(text, query)
        response_text = self.llm.query(prompt)
        logger.info("LLM analysis response received (%d characters)", len(response_text))
        return response_text


def get_llm_service() -> LLMService:
    """
    FastAPI dependency for the LLM service

    Usage:
        @router.post("/analyze")
        def analyze(llm: LLMService = Depends(get_llm_service)):
            ...
    """
    return LLMService()
