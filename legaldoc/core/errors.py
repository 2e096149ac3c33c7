"""
Error taxonomy for the analysis service

Every failure raised while handling a request is one of these. The
exception handlers in legaldoc.main turn them into {error, message} bodies.
"""
from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "ValidationError"
    EXTRACTION = "ExtractionError"
    PARSE = "ParseError"
    SCHEMA = "SchemaError"
    ORACLE = "OracleError"
    INTERNAL = "InternalError"
    NOT_FOUND = "Not Found"


class AnalysisError(Exception):
    """Base class for errors reported to the caller."""

    kind = ErrorKind.INTERNAL
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.kind.value, "message": self.message}


class ValidationError(AnalysisError):
    """Missing input, or input outside the size/type bounds."""
    kind = ErrorKind.VALIDATION
    status_code = 400


class ExtractionError(AnalysisError):
    """Uploaded file is unreadable or contains no text."""
    kind = ErrorKind.EXTRACTION
    status_code = 400


class ParseError(AnalysisError):
    """Oracle output is not valid JSON."""
    kind = ErrorKind.PARSE


class SchemaError(AnalysisError):
    """Oracle output is JSON but not a usable analysis."""
    kind = ErrorKind.SCHEMA


class OracleError(AnalysisError):
    """The generation service could not be reached or answered badly."""
    kind = ErrorKind.ORACLE


class InternalError(AnalysisError):
    kind = ErrorKind.INTERNAL
