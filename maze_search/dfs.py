from maze_search.search import SearchAlgorithm


class DFS(SearchAlgorithm):
    """
    Depth-First maze search.

    DFS Semantics:
      - Frontier: LIFO stack; the cell being explored is the top of the stack.
      - Each tick steps onto the first unexplored neighbor, going as deep as
        possible along one branch.
      - When the top has no unexplored neighbor it is marked visited and
        popped, backtracking to the previous choice point.
    """
    TITLE = "Depth-First"

    def _make_frontier(self):
        return []

    def _push(self, cell):
        self.frontier.append(cell)

    def _discard_head(self):
        self.frontier.pop()

    def _frontier_head(self):
        return self.frontier[-1] if self.frontier else None
