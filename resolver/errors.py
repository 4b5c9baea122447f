"""Exceptions raised by the source resolver."""


class ResolverError(Exception):
    """Base class for resolver failures."""


class SourceNotFoundError(ResolverError):
    """Neither the requested image nor any placeholder could be resolved."""

    def __init__(self, message: str = "Image file was not found.", path: str | None = None):
        super().__init__(message)
        self.path = path
