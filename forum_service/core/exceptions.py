"""Error taxonomy shared by the data access layer, the integrations and the API."""


class ApiError(Exception):
    """Base class for every error that maps onto an HTTP response."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ClientInputError(ApiError):
    """Missing or invalid required field, or a malformed id."""

    status_code = 400
    default_message = "Invalid request"


class NotFoundError(ApiError):
    """The target of a read, update or delete does not exist."""

    status_code = 404
    default_message = "Resource not found"


class ConflictError(ApiError):
    """A create would violate a uniqueness constraint."""

    status_code = 409
    default_message = "Resource already exists"


class UpstreamFailure(ApiError):
    """
    The store or the media host failed.

    The message is for the server log only; callers always receive the
    generic default message.
    """

    status_code = 500
