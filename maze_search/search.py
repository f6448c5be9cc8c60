import enum
import logging

from maze_search.exceptions import UnboundMazeError
from maze_search.maze import CellState, Maze

logger = logging.getLogger(__name__)


class SearchStatus(enum.Enum):
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    EXHAUSTED = "exhausted"


def reconstruct_path(trail, goal):
    """
    Walks the trail map backward from goal and returns the route start -> goal.

    The trail maps each reached cell to the cell it was reached from; the
    start cell has no entry, which ends the walk. A repeated cell would mean
    the trail is not a tree, so the walk stops there rather than looping.
    """
    path = []
    seen = set()
    step = goal
    while step is not None and step not in seen:
        path.append(step)
        seen.add(step)
        step = trail.get(step)
    path.reverse()
    return path


class SearchAlgorithm:
    """
    Shared bookkeeping for a maze search that advances one tick at a time.

    Every tick runs the same sequence (see step()): check for termination,
    count the step, scan the current cell's neighbors, let the concrete
    algorithm pick the next cell, grow or shrink the frontier, move to the
    frontier's head, then update the dead-end and frontier-size metrics.

    Subclasses choose the frontier container and the selection rule by
    overriding the hooks below; the step sequence itself lives only here.

    Metrics:
      - step_count: ticks that did work (terminal ticks are not counted)
      - max_frontier_size: largest the frontier has been
      - dead_end_count: ticks where the scanned neighbors held at most one
        non-wall cell, i.e. backtracking is imminent or just happened
    """
    TITLE = "Search"

    def __init__(self, maze):
        if not isinstance(maze, Maze):
            raise UnboundMazeError(f"{type(self).__name__} needs a Maze to search, got {maze!r}")
        self.maze = maze
        self.current = maze.start
        self.current.mark_as_path()
        # trail of reached cells, used to recreate the chosen path
        self.trail = {}
        self.neighbors = []
        self.frontier = self._make_frontier()
        if self.frontier is not None:
            self._push(self.current)

        self._steps = 0
        self._max_size = 0
        self._dead_ends = 0
        self._finished = False

    def __str__(self):
        return self.TITLE

    # --- Public API ---
    def step(self):
        """
        Takes one step searching for the goal.

        Returns:
          bool: True if the goal has been found or no more cells can be explored
        """
        if self.is_search_over():
            self._finish()
            return True

        self._steps += 1

        # find possible next steps
        self.neighbors = self.maze.get_neighbors(self.current)

        # choose next spot to explore
        next_cell = self._next_spot()
        self._choose_next_spot(next_cell)

        # update current spot
        self.current = self._frontier_head()

        self._update_backtrack()
        self._update_max_size()

        if self.is_search_over():
            self._finish()
            return True
        return False

    def run(self, max_ticks=None):
        """Steps until the search ends or max_ticks is reached; returns ticks used."""
        ticks = 0
        while max_ticks is None or ticks < max_ticks:
            ticks += 1
            if self.step():
                break
        return ticks

    @property
    def status(self):
        if self.current is not None and self.current == self.maze.goal:
            return SearchStatus.SUCCEEDED
        if self._is_exhausted():
            return SearchStatus.EXHAUSTED
        return SearchStatus.RUNNING

    def is_search_over(self):
        return self.status is not SearchStatus.RUNNING

    def has_reached_goal(self):
        return self.status is SearchStatus.SUCCEEDED

    @property
    def step_count(self):
        return self._steps

    @property
    def max_frontier_size(self):
        return self._max_size

    @property
    def dead_end_count(self):
        return self._dead_ends

    @property
    def frontier_size(self):
        return len(self.frontier) if self.frontier is not None else 0

    def path(self):
        """Returns the route from start to goal once the goal is reached, else []."""
        if not self.has_reached_goal():
            return []
        return reconstruct_path(self.trail, self.maze.goal)

    # --- Hooks for concrete algorithms ---
    def _make_frontier(self):
        raise NotImplementedError

    def _push(self, cell):
        raise NotImplementedError

    def _discard_head(self):
        raise NotImplementedError

    def _frontier_head(self):
        raise NotImplementedError

    def _next_spot(self):
        """Returns the first unexplored neighbor, or None when there is none."""
        for cell in self.neighbors:
            if cell.state is CellState.EMPTY:
                return cell
        return None

    def _is_exhausted(self):
        return not self.frontier

    def _choose_next_spot(self, next_cell):
        if next_cell is not None:
            next_cell.mark_as_path()
            self._push(next_cell)
            self._record_trail(next_cell)
        else:
            # dead end: give up on this cell and fall back to the frontier
            self.current.mark_as_visited()
            self._discard_head()

    def _record_trail(self, next_cell):
        # first arrival wins, so the trail stays a tree rooted at start
        if next_cell not in self.trail and next_cell != self.maze.start:
            self.trail[next_cell] = self.current

    # --- Metrics ---
    def _update_backtrack(self):
        open_cells = sum(1 for cell in self.neighbors if cell.state is not CellState.WALL)
        if open_cells <= 1:
            self._dead_ends += 1

    def _update_max_size(self):
        size = self.frontier_size
        if size > self._max_size:
            self._max_size = size

    # --- Termination ---
    def _finish(self):
        if self._finished:
            return
        self._finished = True
        status = self.status
        if status is SearchStatus.SUCCEEDED:
            self._mark_path()
            logger.debug("%s reached the goal after %d steps (frontier max %d, dead ends %d)",
                         self, self._steps, self.max_frontier_size, self.dead_end_count)
        else:
            logger.debug("%s exhausted its frontier after %d steps without reaching the goal",
                         self, self._steps)

    def _mark_path(self):
        # color the chosen path using the trail of successful spots
        for cell in reconstruct_path(self.trail, self.maze.goal):
            cell.mark_as_path()
