"""
Exception hierarchy for Stripworks.

Structural edits that are refused (deleting the last frame, moving past either
end) and fills that would not change anything are not errors: they return
False/0 from the operation instead of raising.
"""


class StripworksError(Exception):
    """Base class for all errors raised by Stripworks."""


class DecodeFailure(StripworksError):
    """A source bitmap could not be decoded. Terminal for the session."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to decode bitmap from {source}: {reason}")


class SessionClosed(StripworksError):
    """An editing session was used after it was saved or closed."""


class ManifestError(StripworksError):
    """A project manifest could not be read or did not validate."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid manifest {path}: {reason}")
