import pytest

from tictactoe_search.board import O, X
from tictactoe_search.config import (
    PRESETS,
    EngineConfig,
    SearchMode,
    config_from_env,
    parse_mode,
)
from tictactoe_search.errors import ConfigError
from tictactoe_search.evaluation import (
    BINARY_SCALE,
    DECIMAL_SCALE,
    HEURISTIC_SCALE,
    SIMPLIFIED_WEIGHTS,
    ScoreScale,
)


@pytest.mark.parametrize("name", sorted(PRESETS))
def test_presets_validate(name):
    assert PRESETS[name].validate() is PRESETS[name]


def test_preset_players():
    assert PRESETS["exhaustive"].computer_player == O
    assert PRESETS["exhaustive"].human_player == X
    assert PRESETS["alpha-beta"].computer_player == X
    assert PRESETS["exhaustive"].scale == DECIMAL_SCALE
    assert PRESETS["two-ply"].weights == SIMPLIFIED_WEIGHTS
    assert PRESETS["lookahead-ordering"].order_moves


def test_from_preset_overrides():
    cfg = EngineConfig.from_preset("alpha-beta", max_depth=None, first_mover="human")
    assert cfg.first_mover == "human"
    assert cfg.mode is SearchMode.ALPHA_BETA

    cfg = EngineConfig.from_preset("alpha-beta", mode="depth-limited", max_depth=4)
    assert cfg.mode is SearchMode.DEPTH_LIMITED
    assert cfg.scale == HEURISTIC_SCALE
    assert cfg.max_depth == 4

    cfg = EngineConfig.from_preset("lookahead-ordering", mode="exhaustive")
    assert cfg.scale == DECIMAL_SCALE
    assert not cfg.order_moves


def test_unknown_preset_and_mode():
    with pytest.raises(ConfigError):
        EngineConfig.from_preset("negamax")
    with pytest.raises(ConfigError):
        parse_mode("mcts")
    assert parse_mode(" Alpha-Beta ") is SearchMode.ALPHA_BETA


@pytest.mark.parametrize("cfg", [
    EngineConfig(max_depth=-1),
    EngineConfig(first_mover="nobody"),
    EngineConfig(mode=SearchMode.EXHAUSTIVE, order_moves=True),
    EngineConfig(scale=ScoreScale(win=10000)),
    EngineConfig(scale=ScoreScale(win=0)),
    EngineConfig(mode=SearchMode.DEPTH_LIMITED, scale=ScoreScale(win=100)),
])
def test_invalid_configs(cfg):
    with pytest.raises(ConfigError):
        cfg.validate()


def test_config_error_is_a_value_error():
    with pytest.raises(ValueError):
        EngineConfig(max_depth=-1).validate()


def test_env_overrides(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("TTT_SEARCH_MODE", "exhaustive")
    monkeypatch.setenv("TTT_SEARCH_FIRST_MOVER", "Human")
    cfg = config_from_env(PRESETS["lookahead-ordering"])
    assert cfg.mode is SearchMode.EXHAUSTIVE
    assert cfg.scale == DECIMAL_SCALE
    assert not cfg.order_moves
    assert cfg.first_mover == "human"


def test_env_without_overrides_keeps_base(monkeypatch: pytest.MonkeyPatch):
    for var in ["TTT_SEARCH_MODE", "TTT_SEARCH_MAX_DEPTH", "TTT_SEARCH_FIRST_MOVER"]:
        monkeypatch.delenv(var, raising=False)
    assert config_from_env() == PRESETS["alpha-beta"]
    assert config_from_env().scale == BINARY_SCALE


def test_env_bad_depth(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("TTT_SEARCH_MAX_DEPTH", "deep")
    with pytest.raises(ConfigError):
        config_from_env()
    monkeypatch.setenv("TTT_SEARCH_MAX_DEPTH", "-3")
    with pytest.raises(ConfigError):
        config_from_env()


def test_with_overrides_ignores_none_and_swaps_scale():
    base = PRESETS["exhaustive"]
    assert base.with_overrides(mode=None, max_depth=None) == base
    cfg = base.with_overrides(mode="depth-limited", max_depth=0)
    assert cfg.scale == HEURISTIC_SCALE
    assert cfg.first_mover == "human"
    with pytest.raises(ConfigError):
        base.with_overrides(max_depth=-2)
