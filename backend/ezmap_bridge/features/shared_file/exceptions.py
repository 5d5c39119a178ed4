"""
Shared file errors.

Everything except MethodNotImplemented degrades to "no path produced"
inside the pipeline and never reaches the application layer.
"""


class SharedFileError(Exception):
    """Base class for shared file errors."""


class NotRelevantEvent(SharedFileError):
    """Event is not an incoming GPX/XML file."""


class MissingResourceLocator(SharedFileError):
    """Event carries no locator to resolve."""


class ResourceMetadataUnavailable(SharedFileError):
    """Content provider returned no display name for a locator."""


class IOFailureDuringCopy(SharedFileError):
    """Reading from the provider or writing the cache copy failed."""


class MethodNotImplemented(SharedFileError):
    """Method call for a method the channel does not know."""

    def __init__(self, method: str):
        self.method = method
        super().__init__(f"Method not implemented: {method}")
