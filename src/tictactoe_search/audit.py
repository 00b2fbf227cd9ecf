"""
Cross-check of the search modes over every reachable position.

For each non-terminal state reachable from the empty board, the move selector
is run under exhaustive minimax, alpha-beta, alpha-beta with look-ahead
ordering and depth-limited search. Values, chosen moves and node counts are
written to ``search_audit.csv`` (optionally Parquet) with a ``manifest.json``
describing the run.
"""
from __future__ import annotations

import csv
import hashlib
import importlib.util
import json
import logging
import sys
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List

import numpy as np

from .board import SYMBOLS, current_player, serialize_board
from .config import PRESETS
from .engine import select_move
from .evaluation import BINARY_SCALE, REFERENCE_WEIGHTS
from .paths import get_git_commit, get_git_is_dirty
from .rules import is_terminal
from .solver import reachable_states, solve_value
from .tracking import log_artifact, log_metrics, log_params

AUDIT_VERSION = "1.0.0"

FORMATS = {"csv", "parquet", "both"}


@dataclass
class AuditArgs:
    out: Path
    min_marks: int = 0
    max_depth: int = 2
    format: str = "csv"  # one of: "csv", "parquet", "both"
    verbose: bool = False
    cli_argv: List[str] | None = None


def _audit_configs(max_depth: int):
    exhaustive = replace(PRESETS["exhaustive"], scale=BINARY_SCALE)
    alpha_beta = replace(PRESETS["alpha-beta"], scale=BINARY_SCALE)
    ordered = replace(PRESETS["lookahead-ordering"], scale=BINARY_SCALE)
    limited = replace(
        PRESETS["two-ply"],
        weights=REFERENCE_WEIGHTS,
        max_depth=max_depth,
    ).validate()
    return {
        "minimax": exhaustive,
        "alphabeta": alpha_beta,
        "ordered": ordered,
        "depth_limited": limited,
    }


def audit_position(board: List[int], configs: Dict[str, Any]) -> Dict[str, Any]:
    player = current_player(board)
    row: Dict[str, Any] = {
        "board_state": serialize_board(board),
        "to_move": SYMBOLS[player],
        "marks": sum(1 for c in board if c != 0),
        "reference_value": solve_value(tuple(board)),
    }
    for label, cfg in configs.items():
        res = select_move(board, player, cfg)
        row[f"{label}_value"] = res.score
        row[f"{label}_move"] = f"{res.move[0]},{res.move[1]}"
        row[f"{label}_nodes"] = res.nodes
    row["ab_matches_minimax"] = row["alphabeta_value"] == row["minimax_value"]
    row["ordered_matches_minimax"] = row["ordered_value"] == row["minimax_value"]
    row["minimax_matches_reference"] = row["minimax_value"] == row["reference_value"]
    return row


def _sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open('rb') as f:
        for chunk in iter(lambda: f.read(8192), b''):
            h.update(chunk)
    return h.hexdigest()


def _node_stats(rows: List[Dict[str, Any]], label: str) -> Dict[str, float]:
    nodes = np.array([r[f"{label}_nodes"] for r in rows], dtype=np.int64)
    if nodes.size == 0:
        return {"total": 0, "mean": 0.0, "p50": 0.0, "max": 0}
    return {
        "total": int(nodes.sum()),
        "mean": float(nodes.mean()),
        "p50": float(np.percentile(nodes, 50)),
        "max": int(nodes.max()),
    }


def _package_versions() -> Dict[str, str]:
    versions: Dict[str, str] = {}
    for pkg in ["numpy", "pandas", "pyarrow"]:
        if importlib.util.find_spec(pkg) is None:
            continue
        mod = __import__(pkg)
        ver = getattr(mod, "__version__", None)
        if ver:
            versions[pkg] = ver
    return versions


def run_audit(args: AuditArgs) -> Path:
    fmt = (args.format or "csv").lower()
    if fmt not in FORMATS:
        raise ValueError(f"Unknown export format: {args.format}")
    have_parquet = (
        importlib.util.find_spec('pandas') is not None
        and importlib.util.find_spec('pyarrow') is not None
    )
    parquet_msg = (
        "Parquet dependencies not available (install pandas and pyarrow). "
        "Use pip install .[parquet] to enable parquet support."
    )
    if fmt == "parquet" and not have_parquet:
        # Strict: user asked only for parquet; fail before writing any files
        raise RuntimeError(parquet_msg)

    args.out.mkdir(parents=True, exist_ok=True)
    configs = _audit_configs(args.max_depth)

    logging.info("Enumerating reachable states…")
    states = [list(s) for s in reachable_states()]
    targets = [
        b for b in states
        if not is_terminal(b) and sum(1 for c in b if c != 0) >= args.min_marks
    ]
    logging.info("Auditing %d of %d reachable states", len(targets), len(states))

    rows: List[Dict[str, Any]] = []
    for n, board in enumerate(targets, start=1):
        rows.append(audit_position(board, configs))
        if args.verbose and n % 500 == 0:
            logging.debug("audited %d/%d", n, len(targets))
    rows.sort(key=lambda r: r["board_state"])

    audit_csv = args.out / "search_audit.csv"
    audit_parquet = args.out / "search_audit.parquet"
    wrote_csv = False
    wrote_parquet = False

    if fmt in {"csv", "both"}:
        fieldnames = list(rows[0].keys()) if rows else ["board_state"]
        with audit_csv.open('w', newline='') as f:
            w = csv.DictWriter(f, fieldnames=fieldnames)
            w.writeheader()
            for r in rows:
                w.writerow(r)
        wrote_csv = True
        logging.info("Wrote CSV: %s (%d rows)", audit_csv, len(rows))

    if fmt in {"parquet", "both"}:
        if have_parquet:
            import pandas as pd  # type: ignore

            pd.DataFrame(rows).to_parquet(audit_parquet)
            wrote_parquet = True
            logging.info("Wrote Parquet file to %s", audit_parquet)
        else:
            logging.warning(
                "%s Proceeding with CSV only; manifest will record parquet_written=false.",
                parquet_msg,
            )

    mismatches = {
        "alphabeta_vs_minimax": sum(1 for r in rows if not r["ab_matches_minimax"]),
        "ordered_vs_minimax": sum(1 for r in rows if not r["ordered_matches_minimax"]),
        "minimax_vs_reference": sum(1 for r in rows if not r["minimax_matches_reference"]),
    }
    node_stats = {label: _node_stats(rows, label) for label in configs}
    files: Dict[str, Any] = {
        "audit_csv": str(audit_csv) if wrote_csv else None,
        "audit_parquet": str(audit_parquet) if wrote_parquet else None,
    }
    checksums = {label: _sha256_file(Path(p)) for label, p in files.items() if p is not None}

    manifest = {
        "audit_version": AUDIT_VERSION,
        "created_at": datetime.now(timezone.utc).isoformat(),
        "args": {
            "min_marks": args.min_marks,
            "max_depth": args.max_depth,
            "format": fmt,
        },
        "git_commit": get_git_commit(),
        "git_is_dirty": get_git_is_dirty(),
        "python": {
            "python_version": sys.version.split(" ")[0],
            "packages": _package_versions(),
        },
        "cli_argv": args.cli_argv,
        "row_count": len(rows),
        "reachable_states": len(states),
        "mismatches": mismatches,
        "node_stats": node_stats,
        "files": files,
        "checksums": checksums,
        "parquet_written": wrote_parquet,
    }
    manifest_path = args.out / "manifest.json"
    manifest_path.write_text(json.dumps(manifest, indent=2))
    logging.info("Wrote manifest.json (mismatches=%s)", mismatches)
    if any(mismatches.values()):
        logging.warning("Search modes disagree on some positions: %s", mismatches)

    log_params({
        "min_marks": args.min_marks,
        "max_depth": args.max_depth,
        "format": fmt,
        "rows": len(rows),
    })
    log_metrics({f"{label}_nodes_total": float(s["total"]) for label, s in node_stats.items()})
    log_artifact(manifest_path)
    if wrote_csv:
        log_artifact(audit_csv)
    if wrote_parquet:
        log_artifact(audit_parquet)

    return args.out
