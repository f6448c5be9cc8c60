import argparse
import csv
import logging
import os
import statistics
import time

import matplotlib.pyplot as plt

from maze_search.exceptions import MazeError
from maze_search.maze import DEFAULT_COLUMNS, DEFAULT_ROWS, GEN_METHODS, CellState, Maze
from maze_search.randomness import Randomness
from maze_search.solvers import SolverKind, create_solver, solver_kind
from maze_search.visualization import save_trail_graph

logger = logging.getLogger(__name__)

DEFAULT_ALGOS = [kind.value for kind in SolverKind]
DEFAULT_MAX_TICKS = 200000

METRICS = [
    "elapsed_sec",
    "ticks",
    "steps",
    "max_frontier",
    "dead_ends",
    "visited",
    "path_length",
]
CHART_METRICS = [f"{m}_avg" for m in METRICS if m not in ("elapsed_sec", "ticks")]


def solve(rows, columns, algorithm, gen_method="flood-fill", max_ticks=DEFAULT_MAX_TICKS, seed=None):
    """
    Generates one maze and runs one solver on it until it finishes or runs
    out of ticks. The same seeded source drives both, so a seed pins down
    the whole run.

    Returns:
      (maze, solver, ticks, elapsed_sec)
    """
    rng = Randomness(seed)
    maze = Maze(rows, columns, gen_method=gen_method, rng=rng)
    solver = create_solver(algorithm, maze, rng=rng)

    t0 = time.perf_counter()
    ticks = 0
    done = False
    while not done and ticks < max_ticks:
        done = solver.step()
        ticks += 1
    elapsed = time.perf_counter() - t0
    if not done:
        logger.warning("%s gave up after %d ticks on a %dx%d maze (seed %s)",
                       solver, ticks, rows, columns, seed)
    return maze, solver, ticks, elapsed


def run_single(rows, columns, algorithm, gen_method="flood-fill", max_ticks=DEFAULT_MAX_TICKS, seed=None):
    maze, solver, ticks, elapsed = solve(rows, columns, algorithm, gen_method, max_ticks, seed)
    path = solver.path()
    return {
        "gen_method": gen_method,
        "algorithm": solver_kind(algorithm).value,
        "rows": rows,
        "columns": columns,
        "seed": seed,
        "ticks": ticks,
        "elapsed_sec": elapsed,
        "steps": solver.step_count,
        "max_frontier": solver.max_frontier_size,
        "dead_ends": solver.dead_end_count,
        "visited": sum(1 for cell in maze.cells()
                       if cell.state in (CellState.VISITED, CellState.PATH)),
        "path_length": max(0, len(path) - 1),
        "finished": solver.is_search_over(),
        "reached_goal": solver.has_reached_goal(),
    }


def _stats(values):
    return {
        "avg": statistics.mean(values),
        "min": min(values),
        "max": max(values),
        "stdev": statistics.pstdev(values),
    }


def aggregate_results(rows, group_by=("gen_method", "algorithm")):
    """
    Summarizes raw run rows, one summary row per distinct group_by value.

    Each summary row carries the group_by columns, the run count, avg/min/max/stdev
    of every metric in METRICS (as "<metric>_<stat>") and the finished and
    success rates.
    """
    grouped = {}
    for row in rows:
        grouped.setdefault(tuple(row[k] for k in group_by), []).append(row)

    summary = []
    for key, items in grouped.items():
        entry = dict(zip(group_by, key))
        entry["count"] = len(items)
        for metric in METRICS:
            for stat, value in _stats([it[metric] for it in items]).items():
                entry[f"{metric}_{stat}"] = value
        entry["finished_rate"] = sum(it["finished"] for it in items) / len(items)
        entry["success_rate"] = sum(it["reached_goal"] for it in items) / len(items)
        summary.append(entry)
    return summary


def write_csv(path, rows):
    if not rows:
        return
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=list(rows[0]))
        writer.writeheader()
        writer.writerows(rows)


def plot_metric(summary, metric_key, out_path):
    """Saves a bar chart of one summary column, one bar per algorithm and generator."""
    labels = [f"{row['algorithm']}\n({row['gen_method']})" for row in summary]
    values = [row[metric_key] for row in summary]
    fig, ax = plt.subplots(figsize=(max(8, len(labels) * 0.6), 5))
    ax.bar(range(len(values)), values)
    ax.set_xticks(range(len(values)))
    ax.set_xticklabels(labels, rotation=45, ha="right")
    ax.set_ylabel(metric_key)
    fig.tight_layout()
    directory = os.path.dirname(out_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    fig.savefig(out_path)
    plt.close(fig)


def _show_runs(args, seed):
    """Runs each algorithm once on the same seed and prints the explored maze."""
    if args.trail_dot:
        os.makedirs(args.out_dir, exist_ok=True)
    for algo in args.algorithms:
        maze, solver, ticks, _ = solve(args.rows, args.columns, algo, args.generator, args.max_ticks, seed)
        if args.show:
            print(f"{solver}: {solver.status.value} in {ticks} ticks")
            print(f"Steps: {solver.step_count}")
            print(f"Data Structure Size: {solver.max_frontier_size}")
            print(f"Number of Backtracking: {solver.dead_end_count}")
            print(maze)
            print()
        if args.trail_dot:
            path = save_trail_graph(solver, os.path.join(args.out_dir, f"trail_{solver_kind(algo).value}.gv"))
            logger.info("Wrote %s search tree to %s", solver, path)


def build_parser():
    parser = argparse.ArgumentParser(description="Run repeated maze searches and record their metrics.")
    parser.add_argument("--runs", type=int, default=10, help="Runs per algorithm")
    parser.add_argument("--rows", type=int, default=DEFAULT_ROWS)
    parser.add_argument("--columns", type=int, default=DEFAULT_COLUMNS)
    parser.add_argument("--generator", choices=GEN_METHODS, default="flood-fill")
    parser.add_argument("--algorithms", nargs="*", default=DEFAULT_ALGOS)
    parser.add_argument("--seed", type=int, default=None, help="Base seed; run i uses seed + i")
    parser.add_argument("--max-ticks", type=int, default=DEFAULT_MAX_TICKS)
    parser.add_argument("--out-dir", default="metrics_output")
    parser.add_argument("--no-charts", action="store_true", help="Skip matplotlib charts")
    parser.add_argument("--show", action="store_true", help="Print one explored maze per algorithm")
    parser.add_argument("--trail-dot", action="store_true", help="Save each algorithm's search tree as DOT")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    seed_base = args.seed if args.seed is not None else int(time.time())
    all_rows = []
    try:
        args.algorithms = [solver_kind(algo).value for algo in args.algorithms]
        for algo in args.algorithms:
            for i in range(args.runs):
                all_rows.append(run_single(
                    rows=args.rows,
                    columns=args.columns,
                    algorithm=algo,
                    gen_method=args.generator,
                    max_ticks=args.max_ticks,
                    seed=seed_base + i,
                ))
        if args.show or args.trail_dot:
            _show_runs(args, seed_base)
    except MazeError as e:
        parser.error(str(e))

    os.makedirs(args.out_dir, exist_ok=True)
    write_csv(os.path.join(args.out_dir, "raw_results.csv"), all_rows)

    summary = aggregate_results(all_rows)
    write_csv(os.path.join(args.out_dir, "summary.csv"), summary)

    if not args.no_charts:
        for metric in CHART_METRICS:
            plot_metric(summary, metric, os.path.join(args.out_dir, f"{metric}.png"))

    for row in summary:
        print(f"{row['algorithm']:<12} steps {row['steps_avg']:>10.1f}  "
              f"frontier {row['max_frontier_avg']:>8.1f}  "
              f"dead ends {row['dead_ends_avg']:>8.1f}  "
              f"solved {row['success_rate']:.0%}")
    print(f"Wrote results to {args.out_dir}")
    return 0


if __name__ == "__main__":
    main()
