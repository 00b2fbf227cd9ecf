from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .audit import AuditArgs, run_audit
from .board import SYMBOLS, current_player, is_valid_state, parse_board
from .config import PRESETS, SearchMode, EngineConfig, config_from_env
from .engine import select_move
from .errors import ConfigError, IllegalMove, InvalidBoard
from .evaluation import WEIGHT_SETS, line_counts, weighted_score
from .game import play_console
from .paths import reports_dir
from .rules import is_terminal
from .tracking import maybe_mlflow_run


def _add_engine_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--preset",
        choices=sorted(PRESETS),
        default="alpha-beta",
        help="Engine preset (default: alpha-beta)",
    )
    p.add_argument(
        "--mode",
        choices=[m.value for m in SearchMode],
        default=None,
        help="Override the preset's search mode",
    )
    p.add_argument("--max-depth", type=int, default=None, help="Depth limit for depth-limited search")
    p.add_argument(
        "--weights",
        choices=sorted(WEIGHT_SETS),
        default=None,
        help="Line-count weight set (depth-limited mode only)",
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ttt-search", description="Tic-tac-toe game-tree search")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")

    p_play = sub.add_parser("play", help="Play against the engine on the console")
    _add_engine_args(p_play)
    p_play.add_argument(
        "--first",
        choices=["computer", "human"],
        default=None,
        help="Who moves first as X (default: from preset)",
    )

    p_choose = sub.add_parser("choose", help="Pick the engine's move for a board (9 digits, 0=empty,1=X,2=O)")
    p_choose.add_argument("--board", required=True, help="Board string, e.g., 100020000")
    _add_engine_args(p_choose)

    p_eval = sub.add_parser("evaluate", help="Show line counts and the weighted score of a board")
    p_eval.add_argument("--board", required=True, help="Board string, e.g., 100010002")
    p_eval.add_argument("--weights", choices=sorted(WEIGHT_SETS), default="reference")

    p_audit = sub.add_parser("audit", help="Cross-check all search modes over reachable positions")
    p_audit.add_argument("--out", type=Path, default=None, help="Output directory (default: reports/)")
    p_audit.add_argument(
        "--min-marks", type=int, default=0, help="Only audit positions with at least this many marks"
    )
    p_audit.add_argument("--max-depth", type=int, default=2, help="Depth limit for depth-limited search")
    p_audit.add_argument(
        "--format",
        choices=["csv", "parquet", "both"],
        default="csv",
        help="Export format: csv (default), parquet, both",
    )
    p_audit.add_argument(
        "--tracking",
        choices=["none", "mlflow"],
        default="none",
        help="Experiment tracking backend",
    )
    p_audit.add_argument(
        "--log-dir",
        type=Path,
        default=Path("runs"),
        help="Directory for tracking logs/artifacts (for mlflow local backend)",
    )

    return p


def _engine_config(ns: argparse.Namespace) -> EngineConfig:
    # environment first, then explicit flags on top
    weights = WEIGHT_SETS[ns.weights] if getattr(ns, "weights", None) else None
    cfg = config_from_env(PRESETS[ns.preset]).with_overrides(
        mode=ns.mode,
        max_depth=ns.max_depth,
        weights=weights,
        first_mover=getattr(ns, "first", None),
    )
    if weights is not None and cfg.mode is not SearchMode.DEPTH_LIMITED:
        raise ConfigError("--weights only applies to depth-limited search")
    return cfg


def _load_board(raw: str):
    b = parse_board(raw)
    if not is_valid_state(b):
        raise InvalidBoard("Board is not a valid reachable state.")
    return b


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    if getattr(ns, "version", False):
        try:
            from importlib.metadata import PackageNotFoundError, version as _ver
            print(_ver("tictactoe-search"))
        except PackageNotFoundError:
            print("unknown")
        return 0

    try:
        if ns.cmd == "play":
            cfg = _engine_config(ns)
            logging.info("preset=%s mode=%s first=%s", ns.preset, cfg.mode.value, cfg.first_mover)
            try:
                play_console(cfg)
            except (EOFError, KeyboardInterrupt):
                logging.error("Input closed; game abandoned.")
                return 1
            return 0

        if ns.cmd == "choose":
            b = _load_board(ns.board)
            if is_terminal(b):
                logging.error("Board is already terminal; no move to choose.")
                return 2
            cfg = _engine_config(ns)
            player = current_player(b)
            res = select_move(b, player, cfg)
            logging.info(
                "to_move=%s move=(%d,%d) score=%d nodes=%d cutoffs=%d",
                SYMBOLS[player],
                res.move[0] + 1,
                res.move[1] + 1,
                res.score,
                res.nodes,
                res.cutoffs,
            )
            return 0

        if ns.cmd == "evaluate":
            b = parse_board(ns.board)
            counts = line_counts(b)
            logging.info(
                "c3=%d n2=%d c2=%d n1=%d c1=%d score=%d",
                counts.c3, counts.n2, counts.c2, counts.n1, counts.c1,
                weighted_score(b, WEIGHT_SETS[ns.weights]),
            )
            return 0

        if ns.cmd == "audit":
            if ns.min_marks < 0 or ns.max_depth < 0:
                logging.error("--min-marks and --max-depth must be non-negative")
                return 2
            out = ns.out if ns.out is not None else reports_dir()
            with maybe_mlflow_run(ns.tracking == "mlflow", run_name="search_audit", log_dir=ns.log_dir):
                out = run_audit(AuditArgs(
                    out=out,
                    min_marks=ns.min_marks,
                    max_depth=ns.max_depth,
                    format=ns.format,
                    verbose=ns.verbose,
                    cli_argv=list(argv) if argv is not None else None,
                ))
            logging.info("Wrote audit to: %s", out)
            return 0
    except (InvalidBoard, ConfigError, IllegalMove) as e:
        logging.error("%s", e)
        return 2

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
