from typing import Any, Mapping, Optional


class ServiceValidationError(Exception):
    """Raised when input data is invalid or a precondition for a service call is not met.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (field errors, validation info)
        code: optional machine-readable error code
        http_status: suggested HTTP status code for handlers (400)
    """

    http_status = 400

    def __init__(self, message: str = "Invalid input", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code

    def __str__(self) -> str:
        return self.message


class NotFoundError(Exception):
    """Raised when a requested resource was not found.

    Attributes are similar to ServiceValidationError. http_status is 404.
    """

    http_status = 404

    def __init__(self, message: str = "Not found", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code

    def __str__(self) -> str:
        return self.message


class StoreError(Exception):
    """Raised when the record store fails to complete an operation.

    ``operation`` and ``key`` identify what was attempted so handlers can log
    it; neither is ever sent to the client. http_status is 500.
    """

    http_status = 500

    def __init__(self, operation: str, key: Optional[str] = None, message: str = "Record store failure"):
        super().__init__(message)
        self.operation = operation
        self.key = key
        self.message = message

    def __str__(self) -> str:
        if self.key is not None:
            return f"{self.message} during {self.operation} ({self.key})"
        return f"{self.message} during {self.operation}"
