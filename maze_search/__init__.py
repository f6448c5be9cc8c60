from maze_search.bfs import BFS
from maze_search.dfs import DFS
from maze_search.exceptions import (
    InvalidDimensionsError,
    InvalidLayoutError,
    MazeError,
    OutOfBoundsError,
    UnboundMazeError,
    UnknownGeneratorError,
    UnknownSolverError,
)
from maze_search.greedy import Greedy
from maze_search.magic import Magic
from maze_search.maze import Cell, CellState, Maze
from maze_search.random_walk import RandomWalk
from maze_search.randomness import Randomness
from maze_search.search import SearchAlgorithm, SearchStatus, reconstruct_path
from maze_search.solvers import SolverKind, create_solver

__version__ = "0.1.0"
