"""
Exceptions raised by the caption timeline engine and its adapters.
"""


class CaptionSyncError(RuntimeError):
    """Base class for all caption sync errors."""


class InvalidDurationError(CaptionSyncError, ValueError):
    """A duration cannot be used to rescale a timeline."""


class InvalidEntryError(CaptionSyncError, ValueError):
    """A new subtitle entry violates its timing or position constraints."""


class CollaboratorError(CaptionSyncError):
    """An external tool or service call failed."""
