"""Error types raised by the extraction, validation and ingestion tools."""


class GlideCompatError(Exception):
    """Base class for errors surfaced to callers."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class FetchError(GlideCompatError):
    """A remote source could not be retrieved."""

    def __init__(self, message: str, url: str, status: int | None = None):
        super().__init__(message)
        self.url = url
        self.status = status


class InvalidSliceError(GlideCompatError):
    """The requested ingestion slice is out of bounds."""


class UnknownClientError(GlideCompatError):
    """No mapping dataset exists for the requested client."""


class UnknownToolError(GlideCompatError):
    """No tool is registered under the requested name."""


class CatalogError(GlideCompatError):
    """A persisted command catalog exists but cannot be read."""
