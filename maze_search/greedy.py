import heapq
import itertools

from maze_search.maze import CellState
from maze_search.search import SearchAlgorithm


class Greedy(SearchAlgorithm):
    """
    Greedy best-first maze search.

    Greedy Semantics:
      - Frontier: priority queue ordered by each cell's Manhattan distance to
        the goal; the cell being explored is the one closest to the goal.
      - Each tick steps onto the unexplored neighbor closest to the goal.
        Ties keep neighbor scan order (N, S, W, E), and equal-distance cells
        in the queue come out in the order they went in.
      - Rushes toward the goal; not optimal, since the heuristic can lead it
        down long detours.
    """
    TITLE = "Greedy"

    def _make_frontier(self):
        self._counter = itertools.count()
        return []

    def _push(self, cell):
        heapq.heappush(self.frontier, (cell.distance, next(self._counter), cell))

    def _discard_head(self):
        heapq.heappop(self.frontier)

    def _frontier_head(self):
        return self.frontier[0][2] if self.frontier else None

    def _next_spot(self):
        # sort in order of closest to goal; sorted() is stable
        empties = sorted(cell for cell in self.neighbors if cell.state is CellState.EMPTY)
        return empties[0] if empties else None
