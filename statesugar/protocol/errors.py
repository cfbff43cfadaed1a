"""
Error Types (Protocol)
"""


class StateSugarError(Exception):
    """Base class for all update errors."""


class InvalidOperationError(StateSugarError, ValueError):
    """
    Raised when an operation tag has no command builder.
    """

    def __init__(self, operation: object):
        self.operation = operation
        super().__init__(f"Unknown update operation: {operation!r}")


class InvalidPathError(StateSugarError, ValueError):
    """
    Raised for paths that cannot address a position (mappings, empty destructure).
    """


class PatchApplyError(StateSugarError, TypeError):
    """
    Raised when a command tree does not fit the shape of the value it is applied to.
    """
