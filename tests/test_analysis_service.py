"""
Unit tests for AnalysisService: parsing raw LLM output into an
AnalysisResult.
"""

import json

import pytest

from legaldoc.core.errors import ParseError, SchemaError
from legaldoc.models.schemas import AnalysisResult, RiskLevel
from legaldoc.services.analysis_service import analysis_service


@pytest.fixture
def metadata():
    return analysis_service.build_metadata(text_length=72, has_query=False)


class TestParseResponse:

    def test_raw_json(self, sample_analysis):
        assert analysis_service.parse_response(json.dumps(sample_analysis)) == sample_analysis

    @pytest.mark.parametrize("template", [
        "```json\n{}\n```",
        "```\n{}\n```",
        "  ```json{}```  ",
        "```JSON\n{}\n```",
        "```javascript\n{}\n```",
    ])
    def test_code_fences_stripped(self, sample_analysis, template):
        raw = json.dumps(sample_analysis)
        fenced = template.replace("{}", raw)

        assert analysis_service.parse_response(fenced) == analysis_service.parse_response(raw)

    def test_invalid_json_is_parse_error(self):
        with pytest.raises(ParseError, match="Failed to parse analysis"):
            analysis_service.parse_response("Sure! Here is your analysis: {simplified: ...")

    def test_non_object_is_schema_error(self):
        with pytest.raises(SchemaError):
            analysis_service.parse_response("[1, 2, 3]")

    @pytest.mark.parametrize("missing", ["simplified", "riskAssessment"])
    def test_missing_required_field_is_schema_error(self, sample_analysis, missing):
        del sample_analysis[missing]
        with pytest.raises(SchemaError, match="Invalid analysis response structure"):
            analysis_service.parse_response(json.dumps(sample_analysis))


class TestBuildMetadata:

    def test_text_request(self):
        metadata = analysis_service.build_metadata(text_length=10, has_query=True)

        assert metadata["textLength"] == 10
        assert metadata["hasQuery"] is True
        assert metadata["fileName"] is None
        assert metadata["timestamp"].endswith("Z")

    def test_upload_request(self):
        metadata = analysis_service.build_metadata(
            text_length=10, file_name="lease.pdf", file_size=2048, has_query=False
        )

        assert metadata["fileName"] == "lease.pdf"
        assert metadata["fileSize"] == 2048


class TestBuildResult:

    def test_composes_result_with_metadata(self, sample_analysis, metadata):
        result = analysis_service.build_result(json.dumps(sample_analysis), metadata)

        assert isinstance(result, AnalysisResult)
        assert result.simplified == sample_analysis["simplified"]
        assert result.riskAssessment.overallRisk == RiskLevel.HIGH
        assert len(result.riskAssessment.riskFactors) == 1
        assert result.actionItems[1].deadline is None
        assert result.metadata.textLength == 72

    def test_optional_sections_may_be_absent_or_null(self, sample_analysis, metadata):
        del sample_analysis["keyTerms"]
        sample_analysis["actionItems"] = None
        sample_analysis["warnings"] = None

        result = analysis_service.build_result(json.dumps(sample_analysis), metadata)

        assert result.keyTerms == []
        assert result.actionItems == []
        assert result.warnings == []

    def test_levels_normalized(self, sample_analysis, metadata):
        sample_analysis["riskAssessment"]["overallRisk"] = "High"
        sample_analysis["riskAssessment"]["riskFactors"][0]["risk"] = " MEDIUM "
        sample_analysis["actionItems"][0]["priority"] = "Low"

        result = analysis_service.build_result(json.dumps(sample_analysis), metadata)

        assert result.riskAssessment.overallRisk == RiskLevel.HIGH
        assert result.riskAssessment.riskFactors[0].risk == RiskLevel.MEDIUM
        assert result.actionItems[0].priority == RiskLevel.LOW

    def test_unknown_level_is_schema_error(self, sample_analysis, metadata):
        sample_analysis["riskAssessment"]["overallRisk"] = "extreme"
        with pytest.raises(SchemaError):
            analysis_service.build_result(json.dumps(sample_analysis), metadata)

    def test_llm_metadata_is_replaced(self, sample_analysis, metadata):
        sample_analysis["metadata"] = {"timestamp": "yesterday", "textLength": -1}

        result = analysis_service.build_result(json.dumps(sample_analysis), metadata)

        assert result.metadata.textLength == 72
