"""Service-layer exceptions. Routers render these as JSON {error, code}."""


class ServiceError(Exception):
    def __init__(self, message: str, code: str = "UNKNOWN_ERROR", original_error: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.original_error = original_error


class NotFoundError(ServiceError):
    def __init__(self, message: str = "No data found"):
        super().__init__(message, "NOT_FOUND")


class ValidationFailed(ServiceError):
    def __init__(self, message: str):
        super().__init__(message, "VALIDATION_ERROR")


HTTP_STATUS_BY_CODE = {
    "NOT_FOUND": 404,
    "CONFLICT": 409,
    "VALIDATION_ERROR": 400,
    "INVALID_FILTER": 400,
}


def http_status_for(error: ServiceError) -> int:
    return HTTP_STATUS_BY_CODE.get(error.code, 500)
