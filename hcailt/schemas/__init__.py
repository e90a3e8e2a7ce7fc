"""
Schemas module: Pydantic request/response models.

This module provides validated data models for the HCAILT API:
- Request models for /translate, /plain, /qe and /domain-check
- Response models for each workflow step
- Error, health and provider catalogue models

Example usage:
    from hcailt.schemas import TranslateRequest

    request = TranslateRequest.model_validate(
        {"text": "Paciente con disnea.", "model": "gpt-5.1", "temperature": "0.3"}
    )
"""

from hcailt.schemas.api import (
    DEFAULT_TEMPERATURE,
    # Request models
    LLMRequest,
    TranslateRequest,
    SimplifyRequest,
    QualityEstimateRequest,
    DomainCheckRequest,
    # Response models
    TranslateResponse,
    SimplifyResponse,
    QualityEstimateResponse,
    DomainCheckResponse,
    ErrorResponse,
    # Health & catalogue models
    HealthResponse,
    ProviderInfo,
    ProvidersResponse,
    # Utilities
    coerce_temperature,
)

__all__ = [
    "DEFAULT_TEMPERATURE",
    # Request models
    "LLMRequest",
    "TranslateRequest",
    "SimplifyRequest",
    "QualityEstimateRequest",
    "DomainCheckRequest",
    # Response models
    "TranslateResponse",
    "SimplifyResponse",
    "QualityEstimateResponse",
    "DomainCheckResponse",
    "ErrorResponse",
    # Health & catalogue models
    "HealthResponse",
    "ProviderInfo",
    "ProvidersResponse",
    # Utilities
    "coerce_temperature",
]
