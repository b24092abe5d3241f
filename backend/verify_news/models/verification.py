from enum import Enum
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

# Upper bound on sources kept per verification
MAX_SOURCES = 3


class Verdict(str, Enum):
    """The only verdicts a verification may carry"""
    TRUE = "True"
    FALSE = "False"
    PARTIALLY_TRUE = "Partially True"
    INCONCLUSIVE = "Inconclusive"


class Source(BaseModel):
    """A cited piece of evidence (search result retained for the record)"""
    url: str = Field(..., min_length=1)
    title: Optional[str] = None
    snippet: str = ""


class VerificationRequest(BaseModel):
    """Request model for claim verification"""
    query_text: Optional[str] = None


class VerificationRecord(BaseModel):
    """Internal verification model (matches MongoDB document)"""
    id: str
    query_text: str
    verdict: Verdict
    explanation: str
    sources: List[Source] = Field(default_factory=list, max_length=MAX_SOURCES)
    created_at: datetime


class VerificationResult(BaseModel):
    """Response model returned by the verification endpoint"""
    verdict: Verdict
    explanation: str
    sources: List[Source]
    cached: bool


class ErrorResponse(BaseModel):
    error: str
