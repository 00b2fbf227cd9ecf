"""Engine configuration: search mode, first mover, score scale and presets.

The four preset names correspond to the classic programs this engine unifies:

- ``exhaustive``: full minimax, the human moves first as X, +10/0/-10 scores;
- ``alpha-beta``: pruned minimax, the computer moves first, +1/0/-1 scores;
- ``two-ply``: depth-limited search with the simplified line weights. Its
  ``max_depth=2`` counts plies below the candidate move, so it looks three
  plies ahead of the mover; the classic program evaluated one ply deeper;
- ``lookahead-ordering``: alpha-beta with short look-ahead move ordering.

Environment overrides (``TTT_SEARCH_MODE``, ``TTT_SEARCH_MAX_DEPTH``,
``TTT_SEARCH_FIRST_MOVER``) are applied by :func:`config_from_env`. The CLI
applies them to the preset first, so explicit flags win.
"""
from __future__ import annotations

import enum
import os
from dataclasses import dataclass, replace
from typing import Dict, Optional

from .board import O, X
from .errors import ConfigError
from .evaluation import (
    BINARY_SCALE,
    DECIMAL_SCALE,
    HEURISTIC_SCALE,
    REFERENCE_WEIGHTS,
    SIMPLIFIED_WEIGHTS,
    ScoreScale,
    Weights,
)

ARBITRARILY_LOW = -10000
ARBITRARILY_HIGH = 10000

FIRST_MOVERS = ("computer", "human")


class SearchMode(str, enum.Enum):
    EXHAUSTIVE = "exhaustive"
    ALPHA_BETA = "alpha-beta"
    DEPTH_LIMITED = "depth-limited"


@dataclass(frozen=True)
class EngineConfig:
    mode: SearchMode = SearchMode.ALPHA_BETA
    first_mover: str = "computer"
    scale: ScoreScale = BINARY_SCALE
    max_depth: int = 2
    weights: Weights = REFERENCE_WEIGHTS
    order_moves: bool = False

    @property
    def computer_player(self) -> int:
        return X if self.first_mover == "computer" else O

    @property
    def human_player(self) -> int:
        return O if self.first_mover == "computer" else X

    def validate(self) -> "EngineConfig":
        if not isinstance(self.mode, SearchMode):
            raise ConfigError(f"Unknown search mode: {self.mode!r}")
        if self.first_mover not in FIRST_MOVERS:
            raise ConfigError(f"first_mover must be one of {FIRST_MOVERS}, got {self.first_mover!r}")
        if self.max_depth < 0:
            raise ConfigError(f"max_depth must be >= 0, got {self.max_depth}")
        if self.order_moves and self.mode is not SearchMode.ALPHA_BETA:
            raise ConfigError("Move ordering is only supported with alpha-beta search")
        if not (ARBITRARILY_LOW < -self.scale.win and self.scale.win < ARBITRARILY_HIGH):
            raise ConfigError(
                f"Win score {self.scale.win} must lie strictly inside "
                f"({ARBITRARILY_LOW}, {ARBITRARILY_HIGH})"
            )
        if self.scale.win <= abs(self.scale.draw):
            raise ConfigError("Win score must exceed the draw score")
        if self.mode is SearchMode.DEPTH_LIMITED and self.scale.win <= self.weights.horizon_bound():
            raise ConfigError(
                f"Win score {self.scale.win} does not dominate heuristic bound "
                f"{self.weights.horizon_bound()}"
            )
        return self

    @classmethod
    def from_preset(cls, name: str, **overrides) -> "EngineConfig":
        try:
            base = PRESETS[name]
        except KeyError:
            raise ConfigError(f"Unknown preset {name!r}; choose from {sorted(PRESETS)}") from None
        return base.with_overrides(**overrides)

    def with_overrides(self, **overrides) -> "EngineConfig":
        """Copy with the non-None ``overrides`` applied; a new mode brings its default scale."""
        overrides = {k: v for k, v in overrides.items() if v is not None}
        if "mode" in overrides:
            overrides["mode"] = parse_mode(overrides["mode"])
            if overrides["mode"] is not self.mode and "scale" not in overrides:
                overrides["scale"] = DEFAULT_SCALES[overrides["mode"]]
            if overrides["mode"] is not SearchMode.ALPHA_BETA:
                overrides.setdefault("order_moves", False)
        return replace(self, **overrides).validate()


DEFAULT_SCALES: Dict[SearchMode, ScoreScale] = {
    SearchMode.EXHAUSTIVE: DECIMAL_SCALE,
    SearchMode.ALPHA_BETA: BINARY_SCALE,
    SearchMode.DEPTH_LIMITED: HEURISTIC_SCALE,
}

PRESETS: Dict[str, EngineConfig] = {
    "exhaustive": EngineConfig(
        mode=SearchMode.EXHAUSTIVE,
        first_mover="human",
        scale=DECIMAL_SCALE,
    ),
    "alpha-beta": EngineConfig(
        mode=SearchMode.ALPHA_BETA,
        first_mover="computer",
        scale=BINARY_SCALE,
    ),
    "two-ply": EngineConfig(
        mode=SearchMode.DEPTH_LIMITED,
        first_mover="computer",
        scale=HEURISTIC_SCALE,
        max_depth=2,
        weights=SIMPLIFIED_WEIGHTS,
    ),
    "lookahead-ordering": EngineConfig(
        mode=SearchMode.ALPHA_BETA,
        first_mover="computer",
        scale=BINARY_SCALE,
        order_moves=True,
    ),
}


def parse_mode(value) -> SearchMode:
    if isinstance(value, SearchMode):
        return value
    try:
        return SearchMode(str(value).strip().lower())
    except ValueError:
        raise ConfigError(
            f"Unknown search mode {value!r}; choose from {[m.value for m in SearchMode]}"
        ) from None


def config_from_env(base: Optional[EngineConfig] = None) -> EngineConfig:
    """Apply ``TTT_SEARCH_*`` environment overrides on top of ``base``."""
    cfg = base if base is not None else PRESETS["alpha-beta"]
    changes: Dict[str, object] = {}
    mode = os.getenv("TTT_SEARCH_MODE")
    if mode:
        changes["mode"] = mode
    depth = os.getenv("TTT_SEARCH_MAX_DEPTH")
    if depth:
        try:
            changes["max_depth"] = int(depth)
        except ValueError:
            raise ConfigError(f"TTT_SEARCH_MAX_DEPTH must be an integer, got {depth!r}") from None
    first = os.getenv("TTT_SEARCH_FIRST_MOVER")
    if first:
        changes["first_mover"] = first.strip().lower()
    return cfg.with_overrides(**changes)
