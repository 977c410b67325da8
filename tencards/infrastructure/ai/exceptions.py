"""Errors raised inside the model client before they are folded into a Result."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ServiceError:
    """Machine-readable failure returned by the model client."""

    code: str
    message: str
    details: object = None


class ModelClientError(Exception):
    """Base exception for model provider calls."""

    code = "PROVIDER_ERROR"

    def __init__(self, message: str, *, code: str | None = None, details: object = None) -> None:
        self.message = message
        if code is not None:
            self.code = code
        self.details = details
        super().__init__(message)

    def to_service_error(self) -> ServiceError:
        return ServiceError(code=self.code, message=self.message, details=self.details)


class CredentialError(ModelClientError):
    code = "CREDENTIAL_ERROR"


class ModelTimeoutError(ModelClientError):
    code = "TIMEOUT"


class ModelNetworkError(ModelClientError):
    code = "NETWORK_ERROR"


class ModelAPIError(ModelClientError):
    """Non-2xx response from the provider."""

    def __init__(
        self,
        message: str,
        status_code: int,
        *,
        retry_after: str | None = None,
        details: object = None,
    ) -> None:
        self.status_code = status_code
        self.retry_after = retry_after
        super().__init__(message, code=self._code_for_status(status_code), details=details)

    @staticmethod
    def _code_for_status(status_code: int) -> str:
        if status_code in (401, 403):
            return "PROVIDER_UNAUTHORIZED"
        if status_code == 429:
            return "RATE_LIMITED"
        if 400 <= status_code < 500:
            return "PROVIDER_BAD_REQUEST"
        return "PROVIDER_ERROR"


class InvalidResponseError(ModelClientError):
    code = "INVALID_RESPONSE"


class InvalidSchemaError(ModelClientError):
    code = "INVALID_SCHEMA"


class SchemaMismatchError(ModelClientError):
    code = "SCHEMA_MISMATCH"
