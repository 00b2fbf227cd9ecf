#!/usr/bin/env python3
from __future__ import annotations

import json
import math
import statistics as stats
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple

import numpy as np

from tictactoe_search.board import X, new_board
from tictactoe_search.config import EngineConfig
from tictactoe_search.engine import select_move
from tictactoe_search.paths import get_git_commit, reports_dir
from tictactoe_search.search import SearchSession
from tictactoe_search.tracking import log_metrics, log_params, maybe_mlflow_run


def ci95(values: List[float]) -> Tuple[float, float]:
    if not values:
        return (float("nan"), float("nan"))
    m = stats.fmean(values)
    s = stats.pstdev(values) if len(values) > 1 else 0.0
    z = 1.96
    half = z * (s / math.sqrt(len(values)))
    return m, half


@dataclass
class Config:
    repeats: int = 3
    presets: List[str] = field(
        default_factory=lambda: ["exhaustive", "alpha-beta", "lookahead-ordering", "two-ply"]
    )
    tracking: str = "none"  # or "mlflow"
    log_dir: Path = Path("runs")


def bench_preset(name: str, repeats: int) -> dict:
    cfg = EngineConfig.from_preset(name)
    times: List[float] = []
    nodes: List[int] = []
    move = None
    for _ in range(repeats):
        session = SearchSession()
        t0 = time.perf_counter()
        res = select_move(new_board(), X, cfg, session)
        times.append(time.perf_counter() - t0)
        nodes.append(session.nodes)
        move = res.move
    m, h = ci95(times)
    return {
        "preset": name,
        "first_move": list(move),
        "mean_s": m,
        "ci95_half_s": h,
        "nodes": int(np.median(nodes)),
        "cutoffs": session.cutoffs,
    }


def main() -> int:
    cfg = Config()
    with maybe_mlflow_run(cfg.tracking == "mlflow", run_name="benchmarks", log_dir=cfg.log_dir):
        log_params({"repeats": cfg.repeats, "presets": ",".join(cfg.presets)})
        results = [bench_preset(name, cfg.repeats) for name in cfg.presets]
        metrics = {}
        for r in results:
            key = r["preset"].replace("-", "_")
            metrics[f"{key}_mean_s"] = r["mean_s"]
            metrics[f"{key}_nodes"] = float(r["nodes"])
            print(
                f"{r['preset']:>20}: move={tuple(r['first_move'])} nodes={r['nodes']} "
                f"mean={r['mean_s']:.4f}s ± {r['ci95_half_s']:.4f}s (95% CI)"
            )
        log_metrics(metrics)
        out = reports_dir()
        out.mkdir(parents=True, exist_ok=True)
        (out / "benchmarks.json").write_text(json.dumps({
            "git_commit": get_git_commit(),
            "repeats": cfg.repeats,
            "results": results,
        }, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
