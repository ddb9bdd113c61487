#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import os, sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import csv
import glob
import pytest
from cli import run_batch, solve_maze
from tests.maze_fixtures import MAZE_WALLED

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))

def test_solve_maze_prints_both_parts(capsys):
    rc = solve_maze.main([os.path.join(ROOT, "mazes", "example2.txt")])
    out = capsys.readouterr().out
    assert rc == 0
    assert "P1: 11048" in out
    assert "P2: 64" in out
    assert "Parsing took" in out

def test_solve_maze_render_marks_cells(capsys):
    rc = solve_maze.main([os.path.join(ROOT, "mazes", "example1.txt"), "--render"])
    out = capsys.readouterr().out
    assert rc == 0
    # 45 optimal cells, two of them drawn as S and E
    assert out.count("O") == 43

def test_solve_maze_unreachable(tmp_path, capsys):
    p = tmp_path / "walled.txt"
    p.write_text(MAZE_WALLED)
    assert solve_maze.main([str(p)]) == 1
    assert "no path" in capsys.readouterr().out

def test_solve_maze_malformed(tmp_path, capsys):
    p = tmp_path / "bad.txt"
    p.write_text("#####\n#S.S#\n#..E#\n#####\n")
    assert solve_maze.main([str(p)]) == 2
    assert "Malformed" in capsys.readouterr().err

def test_solve_maze_rejects_bad_costs():
    with pytest.raises(SystemExit):
        solve_maze.main([os.path.join(ROOT, "mazes", "example1.txt"), "--turn-cost", "0"])

def test_run_batch_writes_csv(tmp_path, capsys):
    outdir = tmp_path / "csv"
    run_batch.main(["--sizes", "6x6,9x9", "--densities", "0.1,20%", "--num-envs", "2",
                    "--seed", "1", "--exact-max-cells", "20", "--outdir", str(outdir)])
    files = glob.glob(str(outdir / "batch_s1_*.csv"))
    assert len(files) == 1
    with open(files[0], newline="") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 8
    checked = [r for r in rows if r["exact_match"] != ""]
    assert checked and all(r["exact_match"] == "1" for r in checked)
    assert all(float(r["exact_jaccard"]) == 1.0 for r in checked)
    out = capsys.readouterr().out
    assert "Oracle mismatches: 0" in out
    assert "Planner time total=" in out

def test_run_batch_bad_size():
    with pytest.raises(ValueError):
        run_batch._parse_sizes("15by15")
