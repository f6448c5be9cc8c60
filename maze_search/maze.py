import enum
import logging

from maze_search import randomness
from maze_search.exceptions import (
    InvalidDimensionsError,
    InvalidLayoutError,
    OutOfBoundsError,
    UnknownGeneratorError,
)

logger = logging.getLogger(__name__)

# --- Configuration ---
# size of maze in visitable spaces, including the wall around the edges
DEFAULT_ROWS = 31
DEFAULT_COLUMNS = 41
MIN_SIZE = 3

GEN_METHODS = ("flood-fill", "union-find")

# characters used by from_layout() and __str__
WALL_CHAR = "#"
EMPTY_CHAR = "."


class CellState(enum.Enum):
    WALL = "wall"
    EMPTY = "empty"
    VISITED = "visited"
    PATH = "path"


STATE_CHARS = {
    CellState.WALL: "#",
    CellState.EMPTY: " ",
    CellState.VISITED: ".",
    CellState.PATH: "*",
}

# generation codes; rooms are tagged with negative ids while the maze is built
_WALL = 1
_EMPTY = 0


class Cell:
    """
    One position of the maze grid.

    row, column and distance (Manhattan distance to the goal) never change
    once the maze is built. state is repainted by whichever solver is
    exploring the maze. is_wall records how the generator carved the cell so
    reset() can restore it even if a solver painted over a wall.
    """
    __slots__ = ("row", "column", "distance", "is_wall", "state")

    def __init__(self, row, column, is_wall, distance):
        self.row = row
        self.column = column
        self.distance = distance
        self.is_wall = is_wall
        self.state = CellState.WALL if is_wall else CellState.EMPTY

    @property
    def position(self):
        return (self.row, self.column)

    def mark_as_path(self):
        self.state = CellState.PATH

    def mark_as_visited(self):
        self.state = CellState.VISITED

    def reset(self):
        self.state = CellState.WALL if self.is_wall else CellState.EMPTY

    def __eq__(self, other):
        if not isinstance(other, Cell):
            return NotImplemented
        return self.row == other.row and self.column == other.column

    def __hash__(self):
        return hash((self.row, self.column))

    def __lt__(self, other):
        # closer to the goal sorts first
        return self.distance < other.distance

    def __repr__(self):
        return f"Cell({self.row}, {self.column}, {self.state.value})"


class Maze:
    """
    A rectangular maze with its start in the top-left corner and its goal in
    the bottom-right corner, surrounded by an outer wall.

    Maze Representation:
      - Cells live in one flat list (self._cells) addressed by
        row * num_columns + column, so every lookup is an index computation.
      - Rows 0 and num_rows-1, and columns 0 and num_columns-1, are always
        walls. The start is (1, 1) and the goal is (num_rows-2, num_columns-2).
      - A generated maze is "perfect": its non-wall cells form a spanning
        tree, so exactly one route joins any two open cells and a search can
        never loop forever.

    Coordinates: (row, column), origin (0, 0) is top-left.
    """
    def __init__(self, rows=DEFAULT_ROWS, columns=DEFAULT_COLUMNS, gen_method="flood-fill", rng=None):
        """
        Creates a maze of the given size and carves it immediately.

        Parameters:
          rows (int): Number of rows including the outer wall (>= 3)
          columns (int): Number of columns including the outer wall (>= 3)
          gen_method (str): 'flood-fill' (room ids merged by flood fill) or
                            'union-find' (disjoint-set forest). Both consume
                            the random source identically and produce the
                            same maze for the same seed.
          rng: Randomness instance, int seed, or None for the process-wide source

        Odd sizes are expected. With an even size the last interior row or
        column is a solid wall line, which also walls in the goal.
        """
        _check_dimensions(rows, columns)
        if rows % 2 == 0 or columns % 2 == 0:
            logger.warning("Even maze size %dx%d leaves the goal inside a wall", rows, columns)
        if gen_method not in GEN_METHODS:
            raise UnknownGeneratorError(
                f"unknown generation method {gen_method!r}, expected one of {GEN_METHODS}")
        self.num_rows = rows
        self.num_columns = columns
        self.gen_method = gen_method
        self._cells = []
        self.generate(rng)

    @classmethod
    def from_layout(cls, lines):
        """
        Builds a maze from text rows instead of generating one.

        '#' is a wall and '.' is open floor. The outer border must be all
        walls. Injected layouts may contain cycles or unreachable cells; the
        solvers handle both.
        """
        lines = [line.rstrip("\n") for line in lines]
        if len(lines) < MIN_SIZE:
            raise InvalidLayoutError(f"layout needs at least {MIN_SIZE} rows, got {len(lines)}")
        width = len(lines[0])
        if width < MIN_SIZE:
            raise InvalidLayoutError(f"layout needs at least {MIN_SIZE} columns, got {width}")
        states = []
        for r, line in enumerate(lines):
            if len(line) != width:
                raise InvalidLayoutError(f"row {r} has {len(line)} columns, expected {width}")
            row = []
            for c, ch in enumerate(line):
                if ch == WALL_CHAR:
                    row.append(_WALL)
                elif ch == EMPTY_CHAR:
                    row.append(_EMPTY)
                else:
                    raise InvalidLayoutError(f"unexpected character {ch!r} at ({r}, {c})")
            states.append(row)
        maze = cls.__new__(cls)
        maze.num_rows = len(states)
        maze.num_columns = width
        maze.gen_method = None
        for r in range(maze.num_rows):
            for c in range(maze.num_columns):
                if not maze.is_in_bounds(r, c) and states[r][c] != _WALL:
                    raise InvalidLayoutError(f"border cell ({r}, {c}) must be a wall")
        maze._set_cells(states)
        return maze

    # --- Queries ---
    @property
    def start(self):
        return self.get_cell(1, 1)

    @property
    def goal(self):
        return self.get_cell(self.num_rows - 2, self.num_columns - 2)

    def is_in_bounds(self, row, column):
        """Returns True only if the point is inside the maze's outer walls."""
        return 0 < row < self.num_rows - 1 and 0 < column < self.num_columns - 1

    def is_valid(self, row, column):
        """Returns True only if the point is anywhere on the grid, border included."""
        return 0 <= row < self.num_rows and 0 <= column < self.num_columns

    def get_cell(self, row, column):
        if not self.is_valid(row, column):
            raise OutOfBoundsError(
                f"({row}, {column}) is outside a {self.num_rows}x{self.num_columns} maze")
        return self._cells[row * self.num_columns + column]

    def cell_state(self, row, column):
        return self.get_cell(row, column).state

    def cells(self):
        """Iterates over every cell in row-major order."""
        return iter(self._cells)

    def get_neighbors(self, cell):
        """
        Returns the cells immediately north, south, west and east of the
        given one, in that order, skipping any that lie on the outer wall.

        A neighbor's state is NOT checked: walls and visited cells are
        included, and each solver decides what it may step onto.
        """
        neighbors = []
        for dr, dc in ((-1, 0), (1, 0), (0, -1), (0, 1)):
            r, c = cell.row + dr, cell.column + dc
            if self.is_in_bounds(r, c):
                neighbors.append(self._cells[r * self.num_columns + c])
        return neighbors

    def layout(self):
        """Snapshot of every cell state as a tuple of row tuples."""
        cols = self.num_columns
        return tuple(
            tuple(cell.state for cell in self._cells[r * cols:(r + 1) * cols])
            for r in range(self.num_rows)
        )

    def __str__(self):
        cols = self.num_columns
        return "\n".join(
            "".join(STATE_CHARS[cell.state] for cell in self._cells[r * cols:(r + 1) * cols])
            for r in range(self.num_rows)
        )

    # --- Mutation ---
    def reset(self):
        """Erases 'path' and 'visited' marks, leaving only walls and empty halls."""
        for cell in self._cells:
            cell.reset()

    def generate(self, rng=None):
        """
        Replaces the current layout with a new random maze of the same size.

        Generation Pipeline:
          1. Every cell starts as a wall.
          2. Each (odd, odd) interior point becomes a "room" with its own
             negative id, and every wall segment between two adjacent rooms
             is catalogued.
          3. The catalogued walls are visited once each in random order; a
             wall is torn down only if the rooms on its two sides are still
             separate (Kruskal's algorithm with random edge order).
          4. Room ids are replaced by plain empty floor.
        """
        rng = randomness.resolve(rng)
        if self.gen_method == "union-find":
            states, removed = self._generate_union_find(rng)
        else:
            states, removed = self._generate_flood_fill(rng)
        self._set_cells(states)
        logger.debug("Generated %dx%d maze with %s: %d walls torn down",
                     self.num_rows, self.num_columns, self.gen_method, removed)

    def _set_cells(self, states):
        goal_r, goal_c = self.num_rows - 2, self.num_columns - 2
        self._cells = [
            Cell(r, c, states[r][c] == _WALL, abs(goal_r - r) + abs(goal_c - c))
            for r in range(self.num_rows)
            for c in range(self.num_columns)
        ]

    # --- Generation ---
    def _lay_out_rooms(self):
        """
        Builds the starting grid of disconnected rooms.

        Returns:
          states (list of lists): _WALL everywhere except rooms, which hold -1, -2, ...
          walls (list of tuples): (row, col) of every wall below or right of a room
        """
        rows, cols = self.num_rows, self.num_columns
        states = [[_WALL] * cols for _ in range(rows)]
        walls = []
        room_ct = 0
        for r in range(1, rows - 1, 2):
            for c in range(1, cols - 1, 2):
                room_ct += 1
                states[r][c] = -room_ct
                if r + 2 < rows - 1:
                    walls.append((r + 1, c))
                if c + 2 < cols - 1:
                    walls.append((r, c + 1))
        return states, walls

    @staticmethod
    def _shuffled(walls, rng):
        """
        Yields every wall exactly once in uniformly random order.

        Each pick is swapped with the last unvisited slot so that no wall
        repeats and none is skipped.
        """
        walls = list(walls)
        for w in range(len(walls) - 1, -1, -1):
            r = rng.randint(0, w)
            yield walls[r]
            walls[r] = walls[w]

    @staticmethod
    def _rooms_split_by(row, col):
        # odd row: the wall separates rooms to its left and right
        if row % 2 == 1:
            return (row, col - 1), (row, col + 1)
        return (row - 1, col), (row + 1, col)

    def _generate_flood_fill(self, rng):
        """
        Kruskal's maze using connected-component ids instead of a forest.

        Tearing down a wall joins two rooms into one; the room on one side is
        relabeled to match the other by flood fill, so every cell of a room
        shares a code. If both sides already share a code, removing the wall
        would close a loop, so it stays.

        The smaller room is always the one relabeled, which keeps the total
        fill work near n log n instead of n squared on large mazes.
        """
        states, walls = self._lay_out_rooms()
        sizes = {value: 1 for row in states for value in row if value < 0}
        removed = 0
        for row, col in self._shuffled(walls, rng):
            (r1, c1), (r2, c2) = self._rooms_split_by(row, col)
            loser, winner = states[r1][c1], states[r2][c2]
            if loser == winner:
                continue
            if sizes[loser] > sizes[winner]:
                (r1, c1), loser, winner = (r2, c2), winner, loser
            self._fill(states, r1, c1, loser, winner)
            states[row][col] = winner
            sizes[winner] += sizes.pop(loser) + 1
            removed += 1
        _clear_room_ids(states)
        return states, removed

    @staticmethod
    def _fill(states, row, col, replace, replace_with):
        """
        Relabels the 4-connected region holding `replace` to `replace_with`.

        Uses an explicit stack of coordinates so large mazes cannot exhaust
        the interpreter's recursion limit.
        """
        stack = [(row, col)]
        while stack:
            r, c = stack.pop()
            if states[r][c] != replace:
                continue
            states[r][c] = replace_with
            stack.append((r + 1, c))
            stack.append((r - 1, c))
            stack.append((r, c + 1))
            stack.append((r, c - 1))

    def _find_set(self, parent, u):
        """
        Find operation for the disjoint-set forest over rooms.

        Follows parent pointers to the root that represents u's component,
        pointing every node on the way straight at the root (path compression).
        """
        root = u
        while parent[root] != root:
            root = parent[root]
        while parent[u] != root:
            parent[u], u = root, parent[u]
        return root

    def _union_sets(self, parent, rank, u, v):
        """
        Merges the components holding rooms u and v, attaching the shallower
        tree under the deeper one (union by rank).

        Returns:
          bool: True if the rooms were separate and are now joined, False if
                they already shared a component (joining would make a cycle)
        """
        u_root, v_root = self._find_set(parent, u), self._find_set(parent, v)
        if u_root == v_root:
            return False
        if rank[u_root] < rank[v_root]:
            parent[u_root] = v_root
        elif rank[v_root] < rank[u_root]:
            parent[v_root] = u_root
        else:
            parent[v_root] = u_root
            rank[u_root] += 1
        return True

    def _generate_union_find(self, rng):
        """
        Kruskal's maze with a disjoint-set forest deciding connectivity.

        Draws walls from the random source in the same order as the flood
        fill method, and makes the same keep/remove decision for each, so a
        given seed produces the same maze either way.
        """
        states, walls = self._lay_out_rooms()
        parent = {}
        rank = {}
        for r in range(1, self.num_rows - 1, 2):
            for c in range(1, self.num_columns - 1, 2):
                parent[(r, c)] = (r, c)
                rank[(r, c)] = 0
        removed = 0
        for row, col in self._shuffled(walls, rng):
            u, v = self._rooms_split_by(row, col)
            if self._union_sets(parent, rank, u, v):
                states[row][col] = _EMPTY
                removed += 1
        _clear_room_ids(states)
        return states, removed


def _check_dimensions(rows, columns):
    if not isinstance(rows, int) or not isinstance(columns, int):
        raise InvalidDimensionsError(f"maze size must be integers, got {rows!r}x{columns!r}")
    if rows < MIN_SIZE or columns < MIN_SIZE:
        raise InvalidDimensionsError(
            f"maze must be at least {MIN_SIZE}x{MIN_SIZE} to hold a start and goal, "
            f"got {rows}x{columns}")


def _clear_room_ids(states):
    for row in states:
        for c, value in enumerate(row):
            if value < 0:
                row[c] = _EMPTY
