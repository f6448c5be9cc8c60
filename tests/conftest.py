import collections

import pytest

from maze_search.maze import CellState, Maze
from maze_search.randomness import Randomness

# single L-shaped corridor from (1, 1) to (3, 3)
CORRIDOR = [
    "#####",
    "#...#",
    "###.#",
    "###.#",
    "#####",
]

# goal walled off from the start
SEALED = [
    "#####",
    "#..##",
    "#####",
    "###.#",
    "#####",
]


def open_cells(maze):
    return [cell for cell in maze.cells() if not cell.is_wall]


def shortest_path_length(maze, source, target):
    """Reference BFS over non-wall cells; returns hop count or None."""
    dist = {source: 0}
    queue = collections.deque([source])
    while queue:
        cell = queue.popleft()
        if cell == target:
            return dist[cell]
        for nxt in maze.get_neighbors(cell):
            if not nxt.is_wall and nxt not in dist:
                dist[nxt] = dist[cell] + 1
                queue.append(nxt)
    return None


def run_to_end(solver, max_ticks=100000):
    for _ in range(max_ticks):
        if solver.step():
            return True
    return False


@pytest.fixture
def rng():
    return Randomness(1234)


@pytest.fixture
def maze(rng):
    return Maze(15, 21, rng=rng)


@pytest.fixture
def corridor():
    return Maze.from_layout(CORRIDOR)


@pytest.fixture
def sealed():
    return Maze.from_layout(SEALED)


@pytest.fixture
def wall_states():
    def _walls(maze):
        return [(cell.position, cell.state) for cell in maze.cells() if cell.state is CellState.WALL]
    return _walls
