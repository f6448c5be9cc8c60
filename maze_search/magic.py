from maze_search import randomness
from maze_search.greedy import Greedy


class Magic(Greedy):
    """
    "Magic" maze search: walks through walls.

    Each tick picks a uniformly random neighbor whatever its state, so the
    next cell may be a wall; it is still marked as path and joins the
    frontier. The frontier is Greedy's priority queue, so the cell explored
    next is always the frontier cell closest to the goal. A random pick that
    moves away from the goal only grows the frontier.

    Dead ends are meaningless when walls can be crossed, so none are counted.
    """
    TITLE = "Magic"

    def __init__(self, maze, rng=None):
        self.rng = randomness.resolve(rng)
        super().__init__(maze)

    def _next_spot(self):
        # magic means next spot could be a wall!
        if not self.neighbors:
            return None
        return self.rng.random_element(self.neighbors)

    def _update_backtrack(self):
        pass
