"""
Error taxonomy for the HCAILT API.

Every error raised by this package carries the HTTP status code it maps
to at the API boundary, where it is rendered as ``{"error": message}``.
Provider SDK exceptions are not wrapped; they reach the route handlers
unchanged and are reported as 500.
"""


class HcailtError(Exception):
    """Base class for errors raised by this package."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class RequestValidationFailed(HcailtError):
    """Malformed or missing request fields."""

    status_code = 400


class ConfigurationError(HcailtError):
    """The process configuration cannot serve the request."""

    status_code = 500


class MissingCredentialError(ConfigurationError):
    """No credential configured for the requested provider."""

    def __init__(self, variable: str) -> None:
        super().__init__(f"{variable} is missing. Set it as an environment variable.")
        self.variable = variable


class UnsupportedProviderError(HcailtError):
    """Provider name outside the supported set."""

    status_code = 500

    def __init__(self, provider: object) -> None:
        super().__init__(f"Unsupported provider: {provider}")
        self.provider = provider


class UpstreamError(HcailtError):
    """A provider call failed (raised for raw HTTP providers)."""

    status_code = 500

    def __init__(self, message: str, status: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status = status
        self.body = body


class ScoreParseError(HcailtError):
    """The model output contains no usable quality score."""

    status_code = 422

    def __init__(self, message: str, raw: str) -> None:
        super().__init__(message)
        self.raw = raw
