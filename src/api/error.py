"""API error type and the use case error -> HTTP status mapping."""

from fastapi import status
from libs.result import Error
from src.domain.errors import ErrorCode

STATUS_BY_CODE = {
    ErrorCode.VALIDATION_ERROR.value: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NOT_FOUND.value: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_STATE.value: status.HTTP_409_CONFLICT,
    ErrorCode.PROVIDER_CONFIGURATION.value: status.HTTP_400_BAD_REQUEST,
    ErrorCode.TRANSIENT_DELIVERY.value: status.HTTP_502_BAD_GATEWAY,
    "UNAUTHORIZED": status.HTTP_401_UNAUTHORIZED,
}


def status_for(error: Error) -> int:
    """Domain codes map to 4xx, operation *_FAILED codes to 500"""
    return STATUS_BY_CODE.get(error.code, status.HTTP_500_INTERNAL_SERVER_ERROR)


class ClientError(Exception):
    """Raised by routes; rendered as {"error": {"code": ..., "message": ...}}"""

    def __init__(self, error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(error.message)
        self.error = error
        self.status_code = status_code

    @classmethod
    def from_error(cls, error: Error) -> "ClientError":
        return cls(error, status_code=status_for(error))

    def to_dict(self) -> dict:
        return {"error": {"code": self.error.code, "message": self.error.message}}
