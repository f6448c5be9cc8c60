"""
Tests for the metrics simulator, its CLI and the search tree export.
"""

import csv
import os

import pytest

from maze_search import randomness
from maze_search.bfs import BFS
from maze_search.maze import Maze
from maze_search.randomness import Randomness
from maze_search.simulator import aggregate_results, main, run_single, solve, write_csv
from maze_search.solvers import SolverKind
from maze_search.visualization import save_trail_graph, trail_graph


class TestRunSingle:
    """Test one headless run."""

    @pytest.mark.parametrize("kind", list(SolverKind))
    def test_result_fields(self, kind):
        result = run_single(11, 11, kind.value, seed=5)

        assert result["algorithm"] == kind.value
        assert result["finished"] is True
        assert result["reached_goal"] is True
        assert result["steps"] >= 1
        assert result["path_length"] >= 16
        assert result["visited"] >= result["path_length"] + 1

    def test_seed_reproduces_run(self):
        a = run_single(15, 15, "magic", seed=3)
        b = run_single(15, 15, "magic", seed=3)
        for key in ("steps", "max_frontier", "dead_ends", "visited", "path_length"):
            assert a[key] == b[key]

    def test_max_ticks_caps_run(self):
        result = run_single(31, 31, "bfs", max_ticks=5, seed=1)
        assert result["ticks"] == 5
        assert result["finished"] is False
        assert result["path_length"] == 0

    def test_solve_returns_explored_maze(self):
        maze, solver, ticks, elapsed = solve(9, 9, "dfs", seed=2)
        assert solver.maze is maze
        assert solver.has_reached_goal()
        assert ticks == solver.step_count
        assert elapsed >= 0


class TestAggregate:
    """Test summary statistics."""

    def test_groups_by_algorithm(self):
        rows = [run_single(11, 11, algo, seed=s) for algo in ("bfs", "dfs") for s in range(3)]
        summary = aggregate_results(rows)

        assert len(summary) == 2
        groups = {(entry["gen_method"], entry["algorithm"]) for entry in summary}
        assert groups == {("flood-fill", "bfs"), ("flood-fill", "dfs")}
        for entry in summary:
            assert entry["count"] == 3
            assert entry["success_rate"] == 1
            assert entry["steps_min"] <= entry["steps_avg"] <= entry["steps_max"]

    def test_single_run_has_zero_stdev(self):
        summary = aggregate_results([run_single(9, 9, "greedy", seed=1)])
        assert summary[0]["steps_stdev"] == 0
        assert summary[0]["steps_avg"] == summary[0]["steps_min"]

    def test_custom_grouping(self):
        rows = [run_single(9, 9, algo, seed=2) for algo in ("bfs", "dfs")]
        summary = aggregate_results(rows, group_by=("gen_method",))
        assert len(summary) == 1
        assert summary[0]["gen_method"] == "flood-fill"
        assert "algorithm" not in summary[0]
        assert summary[0]["count"] == 2

    def test_write_csv(self, tmp_path):
        path = tmp_path / "out" / "raw.csv"
        write_csv(str(path), [{"a": 1, "b": 2}, {"a": 3, "b": 4}])
        with open(path, newline="", encoding="utf-8") as f:
            assert list(csv.DictReader(f)) == [{"a": "1", "b": "2"}, {"a": "3", "b": "4"}]

    def test_write_csv_ignores_empty(self, tmp_path):
        path = tmp_path / "empty.csv"
        write_csv(str(path), [])
        assert not path.exists()


class TestMain:
    """Test the command line entry point."""

    def test_writes_results(self, tmp_path, capsys):
        out_dir = tmp_path / "metrics"
        code = main([
            "--runs", "2", "--rows", "9", "--columns", "11", "--seed", "4",
            "--algorithms", "bfs", "Greedy", "--out-dir", str(out_dir), "--no-charts",
        ])

        assert code == 0
        assert (out_dir / "raw_results.csv").exists()
        assert (out_dir / "summary.csv").exists()
        assert not (out_dir / "steps_avg.png").exists()
        with open(out_dir / "raw_results.csv", newline="", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))
        assert [row["algorithm"] for row in rows] == ["bfs", "bfs", "greedy", "greedy"]
        with open(out_dir / "summary.csv", newline="", encoding="utf-8") as f:
            summary = list(csv.DictReader(f))
        assert [(row["gen_method"], row["algorithm"], row["count"]) for row in summary] == [
            ("flood-fill", "bfs", "2"), ("flood-fill", "greedy", "2")]
        assert "Wrote results to" in capsys.readouterr().out

    def test_charts_and_trail(self, tmp_path, capsys):
        out_dir = tmp_path / "metrics"
        main([
            "--runs", "1", "--rows", "7", "--columns", "7", "--seed", "1",
            "--algorithms", "dfs", "--out-dir", str(out_dir), "--show", "--trail-dot",
        ])

        assert (out_dir / "steps_avg.png").exists()
        assert (out_dir / "trail_dfs.gv").exists()
        out = capsys.readouterr().out
        assert "Depth-First: succeeded" in out
        assert "Number of Backtracking" in out

    def test_unknown_algorithm_is_usage_error(self, tmp_path):
        with pytest.raises(SystemExit) as excinfo:
            main(["--algorithms", "a-star", "--out-dir", str(tmp_path)])
        assert excinfo.value.code == 2


class TestTrailGraph:
    """Test exporting the search tree with graphviz."""

    def test_edges_follow_trail(self, corridor):
        solver = BFS(corridor)
        solver.run()
        source = trail_graph(solver).source

        assert '"(1, 1)" -> "(1, 2)"' in source
        assert '"(2, 3)" -> "(3, 3)"' in source
        assert source.count("->") == len(solver.trail)
        assert "filled" in source

    def test_save(self, tmp_path):
        solver = BFS(Maze(9, 9, rng=1))
        solver.run()
        path = save_trail_graph(solver, os.path.join(str(tmp_path), "trail.gv"))
        with open(path, encoding="utf-8") as f:
            assert f.read().startswith("//")


class TestRandomness:
    """Test the injectable random source."""

    def test_seeded_sequences_match(self):
        a, b = Randomness(7), Randomness(7)
        items = list(range(10))
        assert [a.random_element(items) for _ in range(20)] == [b.random_element(items) for _ in range(20)]

    def test_is_random_enough_extremes(self):
        rng = Randomness(1)
        assert not any(rng.is_random_enough(0.0) for _ in range(100))
        assert all(rng.is_random_enough(1.0) for _ in range(100))

    def test_resolve(self):
        rng = Randomness(3)
        assert randomness.resolve(rng) is rng
        assert randomness.resolve(None) is randomness.get_default()
        assert randomness.resolve(3).random() == Randomness(3).random()
