"""Errors raised while serving a request, each carrying its HTTP status."""


class FileServerError(Exception):
    status_code = 500

    def __init__(self, message="Internal server error"):
        super().__init__(message)
        self.message = message


class BadRequestError(FileServerError):
    status_code = 400


class PathEscapeError(BadRequestError, ValueError):
    """A client path that would land outside the served root."""

    def __init__(self, message="path escapes the base directory"):
        super().__init__(message)


class NotFoundError(FileServerError):
    status_code = 404


class AccessDeniedError(FileServerError):
    status_code = 403

    def __init__(self, message="Access denied: only local network connections are allowed"):
        super().__init__(message)
