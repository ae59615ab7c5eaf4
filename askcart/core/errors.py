"""
Error taxonomy shared by the chat pipeline.
"""


class AskCartError(Exception):
    """Base class for expected pipeline failures."""


class NotFound(AskCartError):
    """Referenced conversation or product does not exist."""


class InvalidArgument(AskCartError):
    """Malformed or insufficient input."""


class ReasoningUnavailable(AskCartError):
    """The language model call failed, timed out or returned unusable content."""


class ProtocolError(AskCartError):
    """Malformed client frame or a frame not allowed in the current state."""
