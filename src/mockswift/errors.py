"""Swift-compatible error definitions for MockSwift."""


class SwiftError(Exception):
    """A Swift API error with code, message, and HTTP status.

    Raising a SwiftError aborts processing of the current request. The
    server's exception handler turns it into a response with
    ``http_status`` and an error body built from ``code`` and ``message``.

    Attributes:
        code: Short machine-readable error code (e.g. "NoSuchContainer").
        message: Human-readable error description.
        http_status: The HTTP status code to return.
    """

    def __init__(self, code: str, message: str, http_status: int = 400) -> None:
        """Initialize the Swift error.

        Args:
            code: Swift error code.
            message: Error description.
            http_status: HTTP status code (default 400).
        """
        super().__init__(message)
        self.code = code
        self.message = message
        self.http_status = http_status

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.http_status}, {self.code!r}, {self.message!r})"


# -- Resolution errors ---------------------------------------------------------


class InvalidURI(SwiftError):
    """The request path does not have the /v1/AUTH_<account> shape."""

    def __init__(self, message: str = "Couldn't parse the specified URI") -> None:
        super().__init__(code="InvalidURI", message=message, http_status=404)


class NoSuchAccount(SwiftError):
    """The specified account does not exist."""

    def __init__(self, message: str = "The specified account does not exist") -> None:
        super().__init__(code="NoSuchAccount", message=message, http_status=404)


class NoSuchContainer(SwiftError):
    """The specified container does not exist."""

    def __init__(self, message: str = "The specified container does not exist") -> None:
        super().__init__(code="NoSuchContainer", message=message, http_status=404)


# -- Handler errors ------------------------------------------------------------


class NoSuchKey(SwiftError):
    """The specified object does not exist."""

    def __init__(self, message: str = "The specified key does not exist.") -> None:
        super().__init__(code="NoSuchKey", message=message, http_status=404)


class NoSuchVersion(SwiftError):
    """The requested version does not match the stored object."""

    def __init__(self, message: str = "The specified version does not exist.") -> None:
        super().__init__(code="NoSuchVersion", message=message, http_status=404)


class ContainerNotEmpty(SwiftError):
    """The container still holds objects and cannot be deleted."""

    def __init__(
        self, message: str = "The container you tried to delete is not empty."
    ) -> None:
        super().__init__(code="Conflict", message=message, http_status=409)


class BadRequest(SwiftError):
    """The request is malformed."""

    def __init__(self, message: str = "Bad Request") -> None:
        super().__init__(code="BadRequest", message=message, http_status=400)


class Unauthorized(SwiftError):
    """Missing or unknown auth token, or bad credentials."""

    def __init__(self, message: str = "This server could not verify that you are authorized.") -> None:
        super().__init__(code="Unauthorized", message=message, http_status=401)


class MethodNotAllowed(SwiftError):
    """The method is not allowed against this resource."""

    def __init__(
        self, message: str = "The specified method is not allowed against this resource."
    ) -> None:
        super().__init__(code="MethodNotAllowed", message=message, http_status=405)


class PreconditionFailed(SwiftError):
    """At least one of the preconditions did not hold."""

    def __init__(
        self, message: str = "At least one of the pre-conditions you specified did not hold."
    ) -> None:
        super().__init__(code="PreconditionFailed", message=message, http_status=412)


class InvalidRange(SwiftError):
    """The requested range is not satisfiable."""

    def __init__(self, message: str = "The requested range is not satisfiable.") -> None:
        super().__init__(code="InvalidRange", message=message, http_status=416)


class UnprocessableEntity(SwiftError):
    """The supplied ETag does not match the uploaded data."""

    def __init__(
        self, message: str = "The ETag you specified did not match what we received."
    ) -> None:
        super().__init__(code="UnprocessableEntity", message=message, http_status=422)


class InternalError(SwiftError):
    """An internal server error occurred."""

    def __init__(self, message: str = "We encountered an internal error. Please try again.") -> None:
        super().__init__(code="InternalError", message=message, http_status=500)
