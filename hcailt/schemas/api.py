"""
Pydantic Schemas for the HCAILT API

This module defines the request and response models for the workflow endpoints:
- LLMRequest: provider/model/temperature fields shared by every endpoint
- Translate, Simplify, QualityEstimate and DomainCheck request/response pairs
- Error, health and provider catalogue schemas

Wire names are camelCase (as sent by the browser client); Python attribute
names are snake_case through field aliases.
"""

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from hcailt.registry.providers import ProviderName


DEFAULT_TEMPERATURE = 0.3


def _require_text(value: str, error_type: str, message: str) -> str:
    if not value:
        raise PydanticCustomError(error_type, message)
    return value


def coerce_temperature(value: Any) -> float:
    """
    Coerce a raw temperature into [0, 1].

    Numbers are used as-is, numeric strings are parsed, anything else
    (including blank strings, booleans and non-finite values) falls back
    to DEFAULT_TEMPERATURE. The result is clamped to [0, 1].
    """
    if isinstance(value, bool):
        number = DEFAULT_TEMPERATURE
    elif isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str) and value.strip():
        try:
            number = float(value)
        except ValueError:
            number = DEFAULT_TEMPERATURE
    else:
        number = DEFAULT_TEMPERATURE

    if not math.isfinite(number):
        number = DEFAULT_TEMPERATURE
    return min(1.0, max(0.0, number))


# =============================================================================
# REQUEST MODELS
# =============================================================================


class LLMRequest(BaseModel):
    """
    Fields shared by every workflow request.

    provider defaults to "openai" and is not checked here: an unknown name
    reaches the dispatcher, which rejects it as UnsupportedProviderError.
    model is required and temperature is coerced and clamped (default 0.3).
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        validate_default=True,  # missing text fields must hit their validators
        protected_namespaces=(),
    )

    provider: str = Field(
        default=ProviderName.OPENAI.value,
        description="LLM provider to use (openai, google, groq or fireworks)",
    )

    model: str = Field(
        default="",
        description="Provider-specific model identifier",
        examples=["gpt-5.1", "models/gemini-2.5-flash"],
    )

    temperature: float = Field(
        default=DEFAULT_TEMPERATURE,
        ge=0.0,
        le=1.0,
        description="Sampling temperature; numeric strings accepted, clamped to [0, 1]",
    )

    @field_validator("provider", mode="before")
    @classmethod
    def validate_provider(cls, v: Any) -> Any:
        if v is None:
            return ProviderName.OPENAI.value
        return v

    @field_validator("model")
    @classmethod
    def validate_model(cls, v: str) -> str:
        return _require_text(v, "model_required", "Model is required")

    @field_validator("temperature", mode="before")
    @classmethod
    def validate_temperature(cls, v: Any) -> float:
        return coerce_temperature(v)


class TranslateRequest(LLMRequest):
    """Request body for /translate."""

    text: str = Field(default="", description="Spanish medical text to translate")

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        return _require_text(v, "text_required", "Text is required")


class DomainCheckRequest(LLMRequest):
    """Request body for /domain-check."""

    text: str = Field(default="", description="Text to classify as medical or not")

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        return _require_text(v, "text_required", "Text is required")


class SimplifyRequest(LLMRequest):
    """Request body for /plain."""

    original_text: str = Field(
        default="", alias="originalText", description="Original Spanish text"
    )

    translated_text: str = Field(
        default="", alias="translatedText", description="Technical English translation"
    )

    @field_validator("original_text")
    @classmethod
    def validate_original_text(cls, v: str) -> str:
        return _require_text(v, "original_text_required", "Original text is required")

    @field_validator("translated_text")
    @classmethod
    def validate_translated_text(cls, v: str) -> str:
        return _require_text(
            v, "translated_text_required", "Translated text is required"
        )


class QualityEstimateRequest(SimplifyRequest):
    """Request body for /qe."""

    simplified_text: str = Field(
        default="", alias="simplifiedText", description="Plain-language text to score"
    )

    @field_validator("simplified_text")
    @classmethod
    def validate_simplified_text(cls, v: str) -> str:
        return _require_text(
            v, "simplified_text_required", "Simplified text is required"
        )


# =============================================================================
# RESPONSE MODELS
# =============================================================================


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class TranslateResponse(_CamelModel):
    translation: str = Field(..., description="English translation")


class SimplifyResponse(_CamelModel):
    plain_text: str = Field(..., alias="plainText", description="Plain-language text")


class QualityEstimateResponse(_CamelModel):
    score: int = Field(..., ge=0, le=100, description="Quality score (0-100)")


class DomainCheckResponse(_CamelModel):
    is_medical: bool = Field(
        ..., alias="isMedical", description="Whether the text is medical"
    )
    raw: str = Field(..., description="Unparsed model answer")


class ErrorResponse(BaseModel):
    """Uniform error body for every failed request."""

    error: str = Field(..., description="Human-readable error message")


# =============================================================================
# HEALTH & CATALOGUE MODELS
# =============================================================================


class HealthResponse(BaseModel):
    status: str = Field(..., description="'healthy' or 'degraded'")
    service: str = Field(default="hcailt-backend")
    version: str
    providers: dict[str, bool] = Field(
        default_factory=dict,
        description="Provider name -> credential configured",
    )
    uptime_seconds: float = Field(default=0.0, ge=0.0)


class ProviderInfo(BaseModel):
    name: str
    display_name: str
    credential_env: str
    configured: bool
    role_model: str
    max_attempts: int
    models: list[str]


class ProvidersResponse(BaseModel):
    providers: list[ProviderInfo]
    default_provider: str
    default_temperatures: dict[str, float]
    temperature_locked_models: dict[str, float]
