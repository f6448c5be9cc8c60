import random


class Randomness(random.Random):
    """
    Random source shared by maze generation and the randomized solvers.

    Passing the same seed to a Maze and to a Magic or Random Walk solver
    makes the whole run reproducible.
    """
    def __init__(self, seed=None):
        super().__init__(seed)
        self.initial_seed = seed

    def random_element(self, items):
        """Returns a uniformly chosen element of a non-empty sequence."""
        return items[self.randrange(len(items))]

    def is_random_enough(self, threshold):
        """Returns True only if a random value falls below the threshold."""
        return self.random() < threshold


# one process-wide source, so unseeded runs draw from a single sequence
_default = Randomness()


def get_default():
    return _default


def resolve(rng):
    """Returns rng itself, the default source for None, or a new source for an int seed."""
    if rng is None:
        return _default
    if isinstance(rng, random.Random):
        return rng
    return Randomness(rng)
