"""
Pydantic models for request/response validation
"""
from enum import Enum
from pydantic import BaseModel, field_validator
from typing import Optional, List


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


def _normalize_level(value):
    # The model answers "High", " medium " and so on
    if isinstance(value, str):
        return value.strip().lower()
    return value


class AnalyzeRequest(BaseModel):
    text: Optional[str] = None
    query: Optional[str] = None

class RiskFactor(BaseModel):
    clause: str
    risk: RiskLevel
    explanation: str
    impact: str

    @field_validator("risk", mode="before")
    @classmethod
    def normalize_risk(cls, value):
        return _normalize_level(value)

class RiskAssessment(BaseModel):
    overallRisk: RiskLevel
    riskFactors: List[RiskFactor] = []

    @field_validator("overallRisk", mode="before")
    @classmethod
    def normalize_overall_risk(cls, value):
        return _normalize_level(value)

class KeyTerm(BaseModel):
    term: str
    definition: str
    importance: str

class ActionItem(BaseModel):
    action: str
    priority: RiskLevel
    deadline: Optional[str] = None

    @field_validator("priority", mode="before")
    @classmethod
    def normalize_priority(cls, value):
        return _normalize_level(value)

class AnalysisMetadata(BaseModel):
    timestamp: str
    textLength: int
    fileName: Optional[str] = None
    fileSize: Optional[int] = None
    hasQuery: Optional[bool] = None

class AnalysisResult(BaseModel):
    simplified: str
    riskAssessment: RiskAssessment
    keyTerms: List[KeyTerm] = []
    actionItems: List[ActionItem] = []
    warnings: List[str] = []
    metadata: AnalysisMetadata

class ErrorResponse(BaseModel):
    error: str
    message: str
