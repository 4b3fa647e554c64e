"""
Domain-specific errors for the content bounded context.

All errors raised from the domain and application layers are defined here.
Each kind carries the HTTP status it is translated to at the interface layer.
No framework imports allowed.
"""

HTTP_401 = 401
HTTP_403 = 403
HTTP_404 = 404
HTTP_422 = 422


class ConduitDomainError(Exception):
    """Base error for all content domain errors."""

    status_code = HTTP_422

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class UnauthorizedError(ConduitDomainError):
    """Raised when an operation requires a caller and none is present."""

    status_code = HTTP_401

    def __init__(self, message: str = "Login required") -> None:
        super().__init__(message)


class ForbiddenError(ConduitDomainError):
    """Raised when the caller is not the owner of the resource."""

    status_code = HTTP_403

    def __init__(self, resource: str) -> None:
        super().__init__(f"Only the author can modify this {resource}")
        self.resource = resource


class NotFoundError(ConduitDomainError):
    """Raised when a requested resource does not exist."""

    status_code = HTTP_404

    def __init__(self, resource: str, key: object | None = None) -> None:
        if key is None:
            super().__init__(f"{resource} not found")
        else:
            super().__init__(f"{resource} not found: {key}")
        self.resource = resource
        self.key = key


class FieldRequiredError(ConduitDomainError):
    """Raised when a mandatory payload field is missing or empty."""

    status_code = HTTP_422

    def __init__(self, field: str) -> None:
        super().__init__(f"{field} can't be blank")
        self.field = field


class AlreadyTakenError(ConduitDomainError):
    """Raised when a value would violate a uniqueness constraint."""

    status_code = HTTP_422

    def __init__(self, field: str, value: str | None = None) -> None:
        super().__init__(f"{field} has already been taken")
        self.field = field
        self.value = value


class ValidationError(ConduitDomainError):
    """Raised when a supplied value fails a semantic check."""

    status_code = HTTP_422
