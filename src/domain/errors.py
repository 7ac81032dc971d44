"""Domain Errors

Error taxonomy shared by the invoice lifecycle, the notification worker
and the messaging gateway. Every error carries a stable code that use cases
copy into `libs.result.Error` and the API maps to an HTTP status.
"""

from enum import Enum


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    INVALID_STATE = "INVALID_STATE"
    TRANSIENT_DELIVERY = "TRANSIENT_DELIVERY"
    PROVIDER_CONFIGURATION = "PROVIDER_CONFIGURATION"


class DomainError(Exception):
    code: ErrorCode = ErrorCode.VALIDATION_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    """Malformed or missing input. Never retried."""
    code = ErrorCode.VALIDATION_ERROR


class NotFoundError(DomainError):
    """Referenced entity is absent or outside the caller's tenant scope."""
    code = ErrorCode.NOT_FOUND


class InvalidStateError(DomainError):
    """Operation is not legal for the entity's current lifecycle state."""
    code = ErrorCode.INVALID_STATE


class TransientDeliveryError(DomainError):
    """Gateway timeout or non-2xx response. Retried by the notification worker."""
    code = ErrorCode.TRANSIENT_DELIVERY


class ProviderConfigurationError(DomainError):
    """Missing or unusable provider credentials. Retrying cannot help."""
    code = ErrorCode.PROVIDER_CONFIGURATION
