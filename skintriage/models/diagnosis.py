# skintriage/models/diagnosis.py

from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

Severity = Literal["mild", "moderate", "severe"]
Urgency = Literal["low", "medium", "high", "urgent"]


class DiagnosisResult(BaseModel):
    model_config = ConfigDict(extra="forbid")

    condition: str
    confidence: int = Field(..., ge=0, le=100)
    severity: Severity
    description: str
    symptoms: List[str]
    recommendations: List[str]
    urgency: Urgency
    requires_immediate_attention: bool
    common_causes: List[str]
    when_to_see_doctor: str


class DiagnosisRequest(BaseModel):
    """Validated, sanitized input for a single analysis."""
    image_reference: str
    symptoms: Optional[str] = None


class ModelReply(BaseModel):
    """The parts of a chat-completion message the extraction chain looks at."""
    tool_arguments: List[str] = Field(default_factory=list)
    content: Optional[str] = None
