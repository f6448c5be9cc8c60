"""Errors raised when the maze engine is called with bad arguments.

Each error also derives from the builtin a caller would expect, so
``except ValueError`` keeps working for code that does not know this module.
"""


class MazeError(Exception):
    """Base class for every precondition violation in maze_search."""


class InvalidDimensionsError(MazeError, ValueError):
    """Raised when a maze is too small to hold its border, start and goal."""


class InvalidLayoutError(MazeError, ValueError):
    """Raised when an injected text layout is not a walled rectangle."""


class UnknownGeneratorError(MazeError, ValueError):
    """Raised for a generation method name that does not exist."""


class OutOfBoundsError(MazeError, IndexError):
    """Raised when a (row, column) lies outside the maze."""


class UnknownSolverError(MazeError, ValueError):
    """Raised for a solver kind that is not registered."""


class UnboundMazeError(MazeError, TypeError):
    """Raised when a solver is created without a maze to search."""
