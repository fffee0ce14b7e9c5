# skintriage/schemas/analysis.py

from pydantic import BaseModel, ConfigDict, Field, StrictStr
from typing import Literal, Optional

from skintriage.models.diagnosis import DiagnosisResult


class AnalyzeSkinRequest(BaseModel):
    model_config = ConfigDict(validate_by_name=True)

    # Presence is checked by the service so a missing URL reads as InvalidInput
    image_url: Optional[StrictStr] = Field(None, alias="imageUrl")
    symptoms: Optional[StrictStr] = None


class AnalyzeSkinResponse(BaseModel):
    success: Literal[True] = True
    analysis: DiagnosisResult
    disclaimer: str
