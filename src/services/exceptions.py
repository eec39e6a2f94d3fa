"""Domain errors raised by services and translated to HTTP responses in one place."""


class AssetsAPIError(Exception):
    """Base class for errors that end a request with a JSON error body."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AssetsAPIError):
    """One or more fields are missing, malformed or already taken."""

    status_code = 400

    def __init__(self, errors: list[str] | str):
        if isinstance(errors, str):
            errors = [errors]
        super().__init__(", ".join(errors))
        self.errors = errors


class InvalidCredentials(AssetsAPIError):
    status_code = 400

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class Unauthenticated(AssetsAPIError):
    """Missing, malformed, expired or revoked bearer token."""

    status_code = 401

    def __init__(self, message: str = "Please authenticate."):
        super().__init__(message)


class Unauthorized(AssetsAPIError):
    """Authenticated, but not allowed to touch this resource."""

    status_code = 401

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message)


class NotFound(AssetsAPIError):
    status_code = 404


class Conflict(AssetsAPIError):
    status_code = 400


class AlreadyLiked(Conflict):
    def __init__(self, message: str = "Asset already liked"):
        super().__init__(message)


class NotLiked(Conflict):
    def __init__(self, message: str = "Asset has not yet been liked"):
        super().__init__(message)
