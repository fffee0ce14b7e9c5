# skintriage/services/extraction.py
"""
Turning a model reply into a DiagnosisResult.

Extraction runs an ordered chain of strategies; the first one that yields a
schema-valid result wins:

1. StructuredExtraction  - arguments of the forced tool call
2. TextScrapeExtraction  - first balanced {...} span in the free text
3. DefaultSubstitution   - a fixed, conservative record

The last strategy always succeeds, so callers never see a partial result.
"""

import json
from enum import Enum
from typing import Any, Optional, Sequence

from pydantic import BaseModel, ValidationError

from skintriage.core.logger import logger
from skintriage.models.diagnosis import DiagnosisResult, ModelReply


class ExtractionOutcome(str, Enum):
    PARSED_STRUCTURED = "parsed_structured"
    PARSED_FALLBACK_TEXT = "parsed_fallback_text"
    DEFAULT_SUBSTITUTED = "default_substituted"


class ExtractionResult(BaseModel):
    result: DiagnosisResult
    outcome: ExtractionOutcome


DEFAULT_DIAGNOSIS = DiagnosisResult(
    condition="Analysis Available",
    confidence=75,
    severity="moderate",
    description="The image could not be assessed automatically. A dermatologist should review it.",
    symptoms=[],
    recommendations=["Consult with a dermatologist for proper diagnosis"],
    urgency="medium",
    requires_immediate_attention=False,
    common_causes=[],
    when_to_see_doctor="If symptoms persist or worsen",
)


def default_diagnosis() -> DiagnosisResult:
    return DEFAULT_DIAGNOSIS.model_copy(deep=True)


def validate_diagnosis(data: Any) -> Optional[DiagnosisResult]:
    if not isinstance(data, dict):
        return None
    try:
        return DiagnosisResult.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Model output failed diagnosis schema validation: {e.error_count()} error(s)")
        return None


def find_balanced_json_object(text: str) -> Optional[str]:
    """
    Return the first balanced `{...}` span in `text`, ignoring braces inside
    JSON string literals, or None if no span closes.
    """
    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start:i + 1]
    return None


class StructuredExtraction:
    outcome = ExtractionOutcome.PARSED_STRUCTURED

    def extract(self, reply: ModelReply) -> Optional[DiagnosisResult]:
        for arguments in reply.tool_arguments:
            try:
                data = json.loads(arguments)
            except json.JSONDecodeError as e:
                logger.warning(f"Tool call arguments are not valid JSON: {e}")
                continue
            result = validate_diagnosis(data)
            if result is not None:
                return result
        return None


class TextScrapeExtraction:
    outcome = ExtractionOutcome.PARSED_FALLBACK_TEXT

    def extract(self, reply: ModelReply) -> Optional[DiagnosisResult]:
        if not reply.content:
            return None
        span = find_balanced_json_object(reply.content)
        if span is None:
            return None
        try:
            data = json.loads(span)
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse JSON found in model text: {e}")
            return None
        return validate_diagnosis(data)


class DefaultSubstitution:
    outcome = ExtractionOutcome.DEFAULT_SUBSTITUTED

    def extract(self, reply: ModelReply) -> DiagnosisResult:
        return default_diagnosis()


DEFAULT_EXTRACTION_CHAIN = (
    StructuredExtraction(),
    TextScrapeExtraction(),
    DefaultSubstitution(),
)


def extract_diagnosis(reply: ModelReply, chain: Sequence = DEFAULT_EXTRACTION_CHAIN) -> ExtractionResult:
    for strategy in chain:
        result = strategy.extract(reply)
        if result is not None:
            return ExtractionResult(result=result, outcome=strategy.outcome)
    # A chain without a DefaultSubstitution still honours the always-populated contract
    return ExtractionResult(result=default_diagnosis(), outcome=ExtractionOutcome.DEFAULT_SUBSTITUTED)
