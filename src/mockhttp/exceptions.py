"""Exceptions raised by mockhttp."""


class MockHttpError(Exception):
    """Base class for all mockhttp errors."""
    pass


class BodyFileError(MockHttpError):
    """A file-backed response body could not be resolved."""

    def __init__(self, path: str, message: str):
        super().__init__(f"{message}: {path}")
        self.path = path


class BodyFileNotFoundError(BodyFileError):
    """Raised when a file-backed response body does not exist."""

    def __init__(self, path: str):
        super().__init__(path, "body file not found")


class BodyFileReadError(BodyFileError):
    """Raised when a file-backed response body exists but cannot be read."""

    def __init__(self, path: str):
        super().__init__(path, "body file could not be read")


class BadRequestError(MockHttpError, ValueError):
    """Raised by the host adapter for a request it cannot parse."""
    status_code: int = 400


class PayloadTooLargeError(BadRequestError):
    """Raised when a request body exceeds the configured limit."""
    status_code: int = 413


class InvalidHeaderError(MockHttpError, ValueError):
    """Raised when a response header cannot be written as valid HTTP."""
    pass
