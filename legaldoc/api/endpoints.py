"""
API Endpoints - Legal document analysis
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from legaldoc.core.errors import ValidationError
from legaldoc.models.schemas import AnalyzeRequest, AnalysisResult
from legaldoc.services.document_service import document_service
from legaldoc.services.analysis_service import analysis_service
from legaldoc.services.llm_service import LLMService, get_llm_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/analyze", response_model=AnalysisResult, response_model_exclude_none=True)
def analyze(req: AnalyzeRequest, llm: LLMService = Depends(get_llm_service)):
    """Analyze legal text typed by the user"""
    text = document_service.validate_text(req.text)

    logger.info("Analyzing legal text (%d characters)", len(text))

    response_text = llm.analyze_document(text, req.query)
    result = analysis_service.build_result(
        response_text,
        analysis_service.build_metadata(
            text_length=len(text),
            has_query=bool(req.query)
        )
    )

    logger.info("Legal analysis completed successfully")
    return result


@router.post("/upload", response_model=AnalysisResult, response_model_exclude_none=True)
def upload(
    document: Optional[UploadFile] = File(None),
    query: Optional[str] = Form(None),
    llm: LLMService = Depends(get_llm_service)
):
    """Analyze an uploaded PDF or text document"""
    if document is None:
        raise ValidationError("No file uploaded")

    content = document.file.read()
    document_service.validate_upload(document.filename, document.content_type, len(content))

    logger.info("Processing uploaded file: %s (%d bytes)", document.filename, len(content))

    with document_service.temporary_upload(content, document.filename) as path:
        extracted_text = document_service.extract_text(path, document.content_type)

    response_text = llm.analyze_document(extracted_text, query)
    result = analysis_service.build_result(
        response_text,
        analysis_service.build_metadata(
            text_length=len(extracted_text),
            file_name=document.filename,
            file_size=len(content),
            has_query=bool(query)
        )
    )

    logger.info("File analysis completed successfully")
    return result
