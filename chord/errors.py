"""
Exceptions raised by the Chord routing engine.
"""


class ChordError(Exception):
    """Base class for Chord errors."""


class NotInitializedError(ChordError):
    """
    Raised when an operation is invoked before its inputs exist.

    For example building finger tables before the ring, or looking up a
    key before the finger tables are built.
    """
