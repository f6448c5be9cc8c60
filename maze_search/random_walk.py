from maze_search import randomness
from maze_search.maze import CellState
from maze_search.search import SearchAlgorithm

# chance of preferring an unexplored neighbor over an already visited one
EXPLORE_BIAS = 0.999


class RandomWalk(SearchAlgorithm):
    """
    Random maze search that keeps no frontier at all, only its position.

    Each tick splits the neighbors into "empties" (never explored) and
    "possibles" (anything that is not a wall). With probability
    explore_bias it moves to a random empty neighbor; otherwise, or when no
    empty neighbor exists, it moves to a random possible one. The cell just
    left is always a possible choice, so the walk never gets stuck in a
    generated maze. It reaches the goal with probability 1 but has no step
    bound.

    The trail keeps the cell each position was first entered from, so the
    route marked on success never contains the walk's loops.
    """
    TITLE = "Random Walk"

    def __init__(self, maze, rng=None, explore_bias=EXPLORE_BIAS):
        self.rng = randomness.resolve(rng)
        self.explore_bias = explore_bias
        self._stuck = False
        super().__init__(maze)
        self._next = self.current

    @property
    def max_frontier_size(self):
        # only the current position is ever held
        return 1

    def _make_frontier(self):
        return None

    def _is_exhausted(self):
        return self._stuck

    def _frontier_head(self):
        return self._next

    def _next_spot(self):
        empties = []
        possibles = []
        for cell in self.neighbors:
            if cell.state is CellState.EMPTY:
                empties.append(cell)
            if cell.state is not CellState.WALL:
                possibles.append(cell)

        # prefer exploring empty paths over visited ones
        if empties and self.rng.is_random_enough(self.explore_bias):
            return self.rng.random_element(empties)
        if possibles:
            return self.rng.random_element(possibles)
        return None

    def _choose_next_spot(self, next_cell):
        if next_cell is None:
            # walled in on every side, only possible in an injected layout
            self._stuck = True
            return
        self.current.mark_as_visited()
        next_cell.mark_as_path()
        self._record_trail(next_cell)
        self._next = next_cell
