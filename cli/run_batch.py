#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
run_batch.py
------------
Benchmark sweep over random mazes:
- Generates walled mazes across (sizes x densities x seeds)
- Runs the directional planner on each
- Optionally cross-checks small mazes against the exhaustive oracle
  (cost equality plus Jaccard overlap of the optimal-cell sets)
- Writes one CSV row per maze to <outdir>/batch_<tag>_<stamp>.csv

Example:
    python -m cli.run_batch \
        --sizes 15x15,31x31 \
        --densities 0.10,0.20 \
        --num-envs 20 \
        --seed 0 \
        --exact-max-cells 30

Grid convention: grid[r,c] == True means wall (blocked), False means free.
"""

from __future__ import annotations
import argparse
import csv
import os
import time
from typing import List, Tuple

import numpy as np
from tqdm import tqdm

from envs.generator import generate_maze
from eval.exact_small import exact_optimal
from eval.metrics import optimal_set_agreement, route_metrics, runtime_statistics, sum_time_sec
from planners import get_planner


def _parse_sizes(s: str) -> List[Tuple[int, int]]:
    sizes: List[Tuple[int, int]] = []
    for token in s.split(","):
        token = token.strip().lower()
        if "x" not in token:
            raise ValueError(f"Bad size '{token}', expected like 15x15")
        h, w = token.split("x")
        sizes.append((int(h), int(w)))
    return sizes


def _parse_densities(s: str) -> List[float]:
    vals = []
    for token in s.split(","):
        token = token.strip()
        if token.endswith("%"):
            vals.append(float(token[:-1]) / 100.0)
        else:
            vals.append(float(token))
    return vals


def _env_seed(seed: int, env_id: int, H: int, W: int, dens: float) -> int:
    return (int(seed) * 1_000_003 + int(env_id) * 97 + int(H) * 11 + int(W) * 13
            + int(round(dens * 1000)) * 17) % 2**32


def main(argv=None):
    ap = argparse.ArgumentParser(description="Benchmark the directional planner on random mazes.")
    ap.add_argument("--sizes", type=str, default="15x15,31x31",
                    help="Comma-separated maze sizes like 15x15,31x31")
    ap.add_argument("--densities", type=str, default="0.10,0.20,0.30",
                    help="Comma-separated wall densities (0-1 or %%, e.g., 10%%)")
    ap.add_argument("--num-envs", type=int, default=20, help="Mazes per (size,density)")
    ap.add_argument("--ensure", type=str, default="any", choices=["any", "success", "failure"],
                    help="Reachability requirement passed to the generator")
    ap.add_argument("--move-cost", type=int, default=1, help="Cost of one step forward")
    ap.add_argument("--turn-cost", type=int, default=1000, help="Cost of one 90 degree turn")
    ap.add_argument("--exact-max-cells", type=int, default=0,
                    help="If >0, compare against the exhaustive oracle on mazes with at most this many free cells")
    ap.add_argument("--seed", type=int, default=0, help="Base RNG seed")
    ap.add_argument("--outdir", type=str, default="results/csv", help="Output directory for CSV")
    args = ap.parse_args(argv)

    sizes = _parse_sizes(args.sizes)
    densities = _parse_densities(args.densities)
    planner = get_planner("directional_dijkstra", move_cost=args.move_cost, turn_cost=args.turn_cost)

    os.makedirs(args.outdir, exist_ok=True)
    stamp = time.strftime("%Y%m%d_%H%M%S")
    out_csv = os.path.join(args.outdir, f"batch_s{args.seed}_{stamp}.csv")
    tmp_csv = out_csv + f".tmp_{os.getpid()}"
    fieldnames = [
        "env_id", "H", "W", "density", "actual_density", "success",
        "cost", "optimal_cells", "route_len", "route_turns",
        "settled", "pushes", "time_s",
        "exact_cost", "exact_cells", "exact_jaccard", "exact_match",
    ]

    jobs = [(H, W, dens, i) for (H, W) in sizes for dens in densities for i in range(args.num_envs)]
    runs: List[dict] = []
    mismatches = 0

    with open(tmp_csv, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()

        for env_id, (H, W, dens, _) in enumerate(tqdm(jobs, desc="mazes"), start=1):
            rng = np.random.default_rng(_env_seed(args.seed, env_id, H, W, dens))
            env = generate_maze(H=H, W=W, density=dens, ensure_status=args.ensure, rng=rng)
            res = planner.plan(env.grid, env.start, env.goal)
            stats = res["stats"]
            runs.append(res)

            row = {
                "env_id": env_id, "H": H, "W": W, "density": dens,
                "actual_density": round(env.settings.get("actual_density", float("nan")), 4),
                "success": int(res["success"]),
                "cost": res["cost"] if res["success"] else "",
                "optimal_cells": len(res["optimal_cells"]),
                "route_len": len(res["path"]) if res["success"] else 0,
                "route_turns": "",
                "settled": stats["settled"], "pushes": stats["pushes"],
                "time_s": stats["time_sec"],
                "exact_cost": "", "exact_cells": "", "exact_jaccard": "", "exact_match": "",
            }
            if res["success"]:
                m = route_metrics(res["path"], planner.start_dir, args.move_cost, args.turn_cost)
                row["route_turns"] = m["turns"]

            if args.exact_max_cells > 0 and len(env.grid.passable_cells()) <= args.exact_max_cells:
                ex = exact_optimal(env.grid, env.start, env.goal, start_dir=planner.start_dir,
                                   move_cost=args.move_cost, turn_cost=args.turn_cost,
                                   max_cells=args.exact_max_cells)
                overlap = optimal_set_agreement(ex["cells"], res["optimal_cells"])
                match = ex["cost"] == res["cost"] and overlap["jaccard"] == 1.0
                mismatches += int(not match)
                row.update({
                    "exact_cost": "" if ex["cost"] is None else ex["cost"],
                    "exact_cells": len(ex["cells"]),
                    "exact_jaccard": round(overlap["jaccard"], 4),
                    "exact_match": int(match),
                })

            writer.writerow(row)

    os.replace(tmp_csv, out_csv)
    summary = runtime_statistics([r["stats"]["time_sec"] for r in runs])
    print(f"[OK] Wrote: {out_csv}")
    if summary:
        print(f"Runtime mean={summary['mean_runtime']:.6f}s max={summary['max_runtime']:.6f}s over {len(runs)} mazes")
        print(f"Planner time total={sum_time_sec(runs):.4f}s")
    if args.exact_max_cells > 0:
        print(f"Oracle mismatches: {mismatches}")


if __name__ == "__main__":
    main()
