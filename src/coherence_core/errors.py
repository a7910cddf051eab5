"""
Exceptions raised by the Coherence core library.
"""


class CoherenceError(Exception):
    """Base class for all core errors."""


class DataLoadError(CoherenceError):
    """Raised when a standards file is missing or malformed."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"Could not load standards from {source}: {reason}")
        self.source = source
        self.reason = reason


class RemoteServiceError(CoherenceError):
    """Raised when the generative-text provider fails or is unavailable."""

    def __init__(self, message: str, provider: str = "unknown"):
        super().__init__(message)
        self.provider = provider
