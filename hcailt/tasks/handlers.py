"""
Workflow step handlers.

Each handler turns a validated request into one dispatcher call and shapes
the answer into the endpoint's response model. Handlers hold no state.
"""

import logging
import re

from hcailt.dispatcher.handlers import ChatDispatcher, ChatRequest
from hcailt.errors import ScoreParseError
from hcailt.schemas.api import (
    DomainCheckRequest,
    DomainCheckResponse,
    LLMRequest,
    QualityEstimateRequest,
    QualityEstimateResponse,
    SimplifyRequest,
    SimplifyResponse,
    TranslateRequest,
    TranslateResponse,
)
from hcailt.tasks import prompts

logger = logging.getLogger(__name__)

SCORE_PATTERN = re.compile(r"[0-9]+")


def _chat_request(payload: LLMRequest, system_prompt: str, user_prompt: str) -> ChatRequest:
    return ChatRequest(
        provider=payload.provider,
        model=payload.model,
        temperature=payload.temperature,
        system_prompt=system_prompt,
        user_prompt=user_prompt,
    )


def is_medical_answer(answer: str) -> bool:
    """True if the model's yes/no answer contains "yes" (case-insensitive)."""
    return "yes" in answer.strip().lower()


def parse_quality_score(answer: str) -> int:
    """
    Extract the 0-100 quality score from a model answer.

    The first run of ASCII digits is taken as the score.

    Raises:
        ScoreParseError: No digits found, or the number is outside 0-100.
    """
    match = SCORE_PATTERN.search(answer)
    if not match:
        raise ScoreParseError(
            f"Could not parse QE score from response: '{answer}'", raw=answer
        )
    digits = match.group(0)
    # Over three significant digits is out of range, whatever its length
    if len(digits.lstrip("0")) > 3 or int(digits) > 100:
        raise ScoreParseError(
            f"QE score '{digits}' outside 0-100 range. Raw: '{answer}'",
            raw=answer,
        )
    return int(digits)


async def check_domain(
    dispatcher: ChatDispatcher, payload: DomainCheckRequest
) -> DomainCheckResponse:
    answer = await dispatcher.dispatch(
        _chat_request(
            payload,
            prompts.DOMAIN_CHECK_SYSTEM_PROMPT,
            prompts.domain_check_user_prompt(payload.text),
        )
    )
    return DomainCheckResponse(is_medical=is_medical_answer(answer), raw=answer)


async def translate(
    dispatcher: ChatDispatcher, payload: TranslateRequest
) -> TranslateResponse:
    translation = await dispatcher.dispatch(
        _chat_request(
            payload,
            prompts.TRANSLATE_SYSTEM_PROMPT,
            prompts.translate_user_prompt(payload.text),
        )
    )
    return TranslateResponse(translation=translation)


async def simplify(
    dispatcher: ChatDispatcher, payload: SimplifyRequest
) -> SimplifyResponse:
    plain_text = await dispatcher.dispatch(
        _chat_request(
            payload,
            prompts.PLAIN_LANGUAGE_SYSTEM_PROMPT,
            prompts.plain_language_user_prompt(
                payload.original_text, payload.translated_text
            ),
        )
    )
    return SimplifyResponse(plain_text=plain_text)


async def estimate_quality(
    dispatcher: ChatDispatcher, payload: QualityEstimateRequest
) -> QualityEstimateResponse:
    """
    Score the plain-language text against the original and its translation.

    Raises:
        ScoreParseError: The model answer holds no usable 0-100 score.
    """
    answer = await dispatcher.dispatch(
        _chat_request(
            payload,
            prompts.QUALITY_ESTIMATE_SYSTEM_PROMPT,
            prompts.quality_estimate_user_prompt(
                payload.original_text,
                payload.translated_text,
                payload.simplified_text,
            ),
        )
    )
    try:
        score = parse_quality_score(answer)
    except ScoreParseError as e:
        logger.warning(f"QE parse failed: {e.message}")
        raise
    return QualityEstimateResponse(score=score)
