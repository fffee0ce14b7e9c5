# skintriage/services/diagnosis_engine.py

import re
from typing import Optional

from fastapi.concurrency import run_in_threadpool

from skintriage.core.logger import logger
from skintriage.models.diagnosis import DiagnosisRequest, DiagnosisResult
from skintriage.models.user import CurrentUser
from skintriage.services.extraction import ExtractionOutcome, extract_diagnosis
from skintriage.services.prompt_templates import ANALYSIS_DISCLAIMER
from skintriage.services.storage import is_authorized_image_reference
from skintriage.services.vision import request_skin_analysis
from skintriage.utils.errors import InvalidInputError, UnauthorizedError

MAX_SYMPTOMS_LENGTH = 5000

_PROMPT_CONTROL_CHARS = re.compile(r"[<>{}]")


def sanitize_symptoms(symptoms: str) -> str:
    return _PROMPT_CONTROL_CHARS.sub("", symptoms)[:MAX_SYMPTOMS_LENGTH]


def validate_analysis_request(image_url, symptoms, user: CurrentUser) -> DiagnosisRequest:
    """Reject bad input before the model is ever called; return a sanitized request."""
    if not image_url:
        raise InvalidInputError("Image URL is required")
    if not isinstance(image_url, str):
        raise InvalidInputError("Image URL must be a string")
    if not is_authorized_image_reference(image_url, user.user_id):
        logger.warning(f"Rejected image reference outside storage origin for user {user.user_id}")
        raise InvalidInputError("Image URL must reference an image in this application's storage")

    if symptoms is not None:
        if not isinstance(symptoms, str):
            raise InvalidInputError("Symptoms must be a string")
        if len(symptoms) > MAX_SYMPTOMS_LENGTH:
            raise InvalidInputError(f"Symptoms must be less than {MAX_SYMPTOMS_LENGTH} characters")
        symptoms = sanitize_symptoms(symptoms).strip() or None

    return DiagnosisRequest(image_reference=image_url.strip(), symptoms=symptoms)


async def analyze_skin(image_url, symptoms, user: Optional[CurrentUser]) -> dict:
    """
    Validate, dispatch one vision call, extract a DiagnosisResult and pair it
    with the disclaimer. Persistence is left to the caller.
    """
    if user is None:
        raise UnauthorizedError()
    request = validate_analysis_request(image_url, symptoms, user)

    reply = await run_in_threadpool(request_skin_analysis, request.image_reference, request.symptoms)
    extraction = extract_diagnosis(reply)

    if extraction.outcome is ExtractionOutcome.DEFAULT_SUBSTITUTED:
        logger.warning("Could not extract a diagnosis from the model reply, substituted default record")
    else:
        logger.info(f"Diagnosis extracted via {extraction.outcome.value}")

    result: DiagnosisResult = extraction.result
    return {"result": result, "disclaimer": ANALYSIS_DISCLAIMER}
