"""Errors raised by the passwordless API client."""


class PasswordlessError(Exception):
    """Base class for every error raised by the client."""


class TransportError(PasswordlessError):
    """The HTTP exchange itself failed (DNS, TCP, TLS, ...)."""

    def __init__(self, method: str, url: str, cause: Exception):
        self.method = method
        self.url = url
        super().__init__(f"{method} {url} failed: {cause}")


class HttpStatusError(PasswordlessError):
    """The service answered with a status outside 2xx."""

    def __init__(self, status_code: int, body: str, response=None):
        self.status_code = status_code
        self.body = body
        self.response = response
        super().__init__(f"Request failed with status code {status_code}: {body}")


class DecodeError(PasswordlessError):
    """The response body was not JSON, or not the JSON shape we expected."""

    def __init__(self, message: str, body: str):
        self.body = body
        super().__init__(f"{message}: {body}")


class PasswordlessValidationError(PasswordlessError, ValueError):
    """A required argument was missing or empty; no request was sent."""

    def __init__(self, field: str, message: str | None = None):
        self.field = field
        super().__init__(message or f"{field} is required and must not be empty")
