"""Error taxonomy for the improvement gateway.

Fatal errors propagate to the HTTP layer. Recoverable conditions
(rate limiting, absent or malformed provider content) are absorbed by the
fallback path inside ImproveService and never reach callers.
"""


class GatewayError(Exception):
    """Base class for all gateway errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InputValidationError(GatewayError):
    """The request is unusable, e.g. the text is blank."""


class ConfigurationError(GatewayError):
    """The provider credential is not configured."""


class ProviderUnavailableError(GatewayError):
    """Persistent 5xx responses or transport failures after all retries."""


class InvalidProviderRequestError(GatewayError):
    """The provider rejected the request with a non-retryable 4xx status."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(GatewayError):
    """Provider content could not be decoded into a JSON object."""
