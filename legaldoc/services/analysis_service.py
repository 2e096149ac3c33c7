"""
Analysis Service - Turns raw LLM output into an AnalysisResult
"""
import re
import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import ValidationError as PydanticValidationError

from legaldoc.core.errors import ParseError, SchemaError
from legaldoc.models.schemas import AnalysisResult

logger = logging.getLogger(__name__)

CODE_FENCE_PATTERN = re.compile(r"```[a-zA-Z]*\n?")
REQUIRED_FIELDS = ("simplified", "riskAssessment")
OPTIONAL_LIST_FIELDS = ("keyTerms", "actionItems", "warnings")


class AnalysisService:

    @staticmethod
    def parse_response(response_text: str) -> Dict[str, Any]:
        """Strip Markdown code fences and decode the LLM's JSON"""
        clean_text = CODE_FENCE_PATTERN.sub("", response_text).strip()
        try:
            analysis_data = json.loads(clean_text)
        except json.JSONDecodeError as e:
            logger.error("JSON parsing error: %s", e)
            raise ParseError("Failed to parse analysis from AI service") from e

        if not isinstance(analysis_data, dict):
            raise SchemaError("Invalid analysis response structure")

        # Validate response structure
        if any(not analysis_data.get(field) for field in REQUIRED_FIELDS):
            raise SchemaError("Invalid analysis response structure")

        return analysis_data

    @staticmethod
    def build_metadata(
        text_length: int,
        file_name: Optional[str] = None,
        file_size: Optional[int] = None,
        has_query: Optional[bool] = None
    ) -> Dict[str, Any]:
        return {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "textLength": text_length,
            "fileName": file_name,
            "fileSize": file_size,
            "hasQuery": has_query,
        }

    @staticmethod
    def build_result(response_text: str, metadata: Dict[str, Any]) -> AnalysisResult:
        """
        Parse the LLM answer and attach request metadata

        Args:
            response_text: Raw LLM output
            metadata: Output of build_metadata

        Returns:
            Validated AnalysisResult
        """
        analysis_data = AnalysisService.parse_response(response_text)
        # Optional lists sometimes come back as null
        for field in OPTIONAL_LIST_FIELDS:
            if analysis_data.get(field) is None:
                analysis_data.pop(field, None)
        try:
            return AnalysisResult.model_validate({**analysis_data, "metadata": metadata})
        except PydanticValidationError as e:
            logger.error("Analysis response failed validation: %s", e)
            raise SchemaError("Invalid analysis response structure") from e

# Singleton instance
analysis_service = AnalysisService()
