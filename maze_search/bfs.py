import collections

from maze_search.search import SearchAlgorithm


class BFS(SearchAlgorithm):
    """
    Breadth-First maze search.

    BFS Semantics:
      - Frontier: FIFO queue; the cell being expanded is the head of the queue.
      - Each tick discovers one unexplored neighbor of the head and enqueues
        it, or, when the head has none left, marks it visited and dequeues it.
      - Cells are expanded in order of trail distance from the start, so the
        route found is a shortest one.
    """
    TITLE = "Breadth-First"

    def _make_frontier(self):
        return collections.deque()

    def _push(self, cell):
        self.frontier.append(cell)

    def _discard_head(self):
        self.frontier.popleft()

    def _frontier_head(self):
        return self.frontier[0] if self.frontier else None
