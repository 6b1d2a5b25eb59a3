# Error taxonomy for the listing pipeline.
# Created: 2026-10-19


class DirstreamError(Exception):
    """Base exception for listing errors."""


class ForbiddenPath(DirstreamError):
    """The requested path normalizes outside the configured root."""

    def __init__(self, request_path: str):
        super().__init__(f"Path escapes root: {request_path!r}")
        self.request_path = request_path


class DirectoryOpenFailure(DirstreamError):
    """The target is missing, not a directory, or not readable."""

    def __init__(self, path: str, cause: OSError):
        super().__init__(f"Cannot open directory {path}: {cause}")
        self.path = path
        self.cause = cause


class ConsumerDisconnect(DirstreamError):
    """The client went away or the sink refused further writes."""
