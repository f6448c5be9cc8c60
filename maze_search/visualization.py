from graphviz import Digraph


def _add_cell(dot, cell, on_path):
    if cell in on_path:
        dot.node(str(cell.position), style="filled")
    else:
        dot.node(str(cell.position))


def trail_graph(solver, name="trail"):
    """
    Builds a Digraph of the solver's search tree, one edge from each cell to
    every cell first reached from it. Cells on the winning route are filled.
    """
    dot = Digraph(name=name, comment=f"{solver} search tree")
    on_path = set(solver.path())
    _add_cell(dot, solver.maze.start, on_path)
    for child, parent in solver.trail.items():
        _add_cell(dot, child, on_path)
        dot.edge(str(parent.position), str(child.position))
    return dot


def save_trail_graph(solver, filename):
    """Writes the DOT source of trail_graph(solver) and returns the file path."""
    return trail_graph(solver).save(filename)
