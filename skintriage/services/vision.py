# skintriage/services/vision.py

import openai
from openai import OpenAI

from skintriage.core.config import settings
from skintriage.core.logger import logger
from skintriage.models.diagnosis import ModelReply
from skintriage.services.prompt_templates import (
    SKIN_ANALYSIS_TOOL,
    SKIN_ANALYSIS_TOOL_NAME,
    build_analysis_messages,
)
from skintriage.utils.errors import QuotaExhaustedError, RateLimitedError, UpstreamError


def translate_upstream_error(exc: Exception) -> Exception:
    """Map an OpenAI SDK failure onto the service's error taxonomy."""
    if isinstance(exc, openai.APIStatusError):
        if exc.status_code == 429:
            return RateLimitedError("Rate limit exceeded. Please try again later.")
        if exc.status_code == 402:
            return QuotaExhaustedError("AI analysis quota exhausted. Please add credits to continue.")
        return UpstreamError("Failed to analyze image")
    if isinstance(exc, openai.APIConnectionError):
        # also covers APITimeoutError
        return UpstreamError("AI analysis service unreachable")
    return UpstreamError("Failed to analyze image")


def to_model_reply(completion) -> ModelReply:
    """Pull tool-call arguments and free text out of a chat completion."""
    if not completion.choices:
        return ModelReply()
    message = completion.choices[0].message
    arguments = [
        call.function.arguments
        for call in (message.tool_calls or [])
        if getattr(call, "function", None) is not None
        and call.function.name == SKIN_ANALYSIS_TOOL_NAME
        and call.function.arguments
    ]
    return ModelReply(tool_arguments=arguments, content=message.content)


def request_skin_analysis(image_url: str, symptoms=None) -> ModelReply:
    """
    One blocking call to the vision model with a forced structured tool call.
    No retries: 429/402 and other failures are translated and raised to the caller.
    """
    if not settings.OPENAI_API_KEY:
        logger.error("OpenAI API key is missing.")
        raise UpstreamError("Vision model API key not configured")

    logger.info("Sending request to OpenAI for skin analysis...")
    try:
        with OpenAI(
            api_key=settings.OPENAI_API_KEY,
            base_url=settings.OPENAI_BASE_URL,
            max_retries=0,
            timeout=settings.VISION_TIMEOUT_SECONDS,
        ) as client:
            completion = client.chat.completions.create(
                model=settings.VISION_MODEL,
                messages=build_analysis_messages(image_url, symptoms),
                tools=[SKIN_ANALYSIS_TOOL],
                tool_choice={"type": "function", "function": {"name": SKIN_ANALYSIS_TOOL_NAME}},
                max_tokens=settings.VISION_MAX_TOKENS,
                temperature=settings.VISION_TEMPERATURE,
            )
    except openai.OpenAIError as e:
        logger.error(f"OpenAI API error: {e}")
        raise translate_upstream_error(e) from e

    logger.info("OpenAI response received")
    return to_model_reply(completion)
