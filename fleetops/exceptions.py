class AppError(Exception):
    def __init__(self, message: str, code: str = "INTERNAL_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class NotFoundError(AppError):
    def __init__(self, resource: str, resource_id: str):
        super().__init__(f"{resource} '{resource_id}' not found", code="NOT_FOUND")


class ValidationError(AppError):
    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class UnauthorizedError(AppError):
    def __init__(self, message: str):
        super().__init__(message, code="UNAUTHORIZED")


class BackendError(AppError):
    """The backend record API rejected a request or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message, code="BACKEND_ERROR")


class RecordNotFoundError(BackendError):
    def __init__(self, message: str):
        super().__init__(message, status_code=404)


class GeocodeError(AppError):
    def __init__(self, message: str, code: str = "GEOCODE_ERROR"):
        super().__init__(message, code=code)


class InvalidCredentialsError(GeocodeError):
    """The geocoding provider refused the configured key; retrying cannot help."""

    def __init__(self, message: str):
        super().__init__(message, code="GEOCODE_INVALID_CREDENTIALS")
