"""Registry of the available maze search algorithms."""

import enum

from maze_search.bfs import BFS
from maze_search.dfs import DFS
from maze_search.exceptions import UnknownSolverError
from maze_search.greedy import Greedy
from maze_search.magic import Magic
from maze_search.random_walk import RandomWalk


class SolverKind(str, enum.Enum):
    BFS = "bfs"
    DFS = "dfs"
    GREEDY = "greedy"
    MAGIC = "magic"
    RANDOM_WALK = "random_walk"


SOLVERS = {
    SolverKind.BFS: BFS,
    SolverKind.DFS: DFS,
    SolverKind.GREEDY: Greedy,
    SolverKind.MAGIC: Magic,
    SolverKind.RANDOM_WALK: RandomWalk,
}

# solvers that draw from a random source
RANDOMIZED = {SolverKind.MAGIC, SolverKind.RANDOM_WALK}


def solver_kind(kind):
    """
    Resolves a SolverKind from the enum itself, its value ("random_walk"),
    or a solver title ("Random Walk"), ignoring case.
    """
    if isinstance(kind, SolverKind):
        return kind
    if isinstance(kind, str):
        key = kind.strip().lower()
        for member, cls in SOLVERS.items():
            if key in (member.value, member.name.lower(), cls.TITLE.lower()):
                return member
    raise UnknownSolverError(
        f"unknown solver {kind!r}, expected one of {[k.value for k in SolverKind]}")


def create_solver(kind, maze, rng=None):
    """
    Builds a solver bound to the maze's current cell states.

    The caller is expected to reset() the maze first if another solver has
    already painted it.
    """
    kind = solver_kind(kind)
    cls = SOLVERS[kind]
    if kind in RANDOMIZED:
        return cls(maze, rng=rng)
    return cls(maze)
