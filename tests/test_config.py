import logging

import pytest

from rogulator.config import RUN_CONFIGS, GameConfig, get_run_config
from rogulator.log import setup_logging
from rogulator.main import build_parser


@pytest.mark.parametrize(
    "size, floors, rooms",
    [("quick", 1, 5), ("short", 3, 5), ("medium", 6, 6), ("long", 12, 5), ("epic", 20, 5)],
)
def test_run_configs(size, floors, rooms):
    rc = get_run_config(size)
    assert rc.size == size
    assert rc.floors == floors
    assert rc.rooms_per_floor == rooms


def test_unknown_size_lists_valid_ones():
    with pytest.raises(ValueError) as exc:
        get_run_config("marathon")
    for size in RUN_CONFIGS:
        assert size in str(exc.value)


def test_balance_defaults():
    cfg = GameConfig()
    assert (cfg.player_starting_hp, cfg.player_base_damage) == (30, 2)
    assert (cfg.heal_interval_moving, cfg.heal_interval_resting) == (10, 3)
    assert (cfg.floor_width, cfg.floor_height) == (50, 40)
    assert cfg.view_radius == 8 and cfg.monster_detection_range == 8
    assert cfg.pathfinding_max_depth == 20
    assert cfg.max_messages == 50


def test_cli_arguments():
    args = build_parser().parse_args(["--size", "medium", "--seed", "12", "--log-level", "DEBUG"])
    assert args.size == "medium"
    assert args.seed == 12
    assert args.log_level == "DEBUG"
    assert build_parser().parse_args([]).size == "quick"


def test_cli_rejects_unknown_size():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--size", "marathon"])


def test_cli_log_level_is_validated():
    assert build_parser().parse_args(["--log-level", "warning"]).log_level == "WARNING"
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--log-level", "LOUD"])


def test_debug_log_file(tmp_path):
    path = tmp_path / "debug.log"
    root = logging.getLogger()
    saved, level = root.handlers[:], root.level
    root.handlers = []
    try:
        setup_logging("DEBUG", path)
        logging.getLogger("rogulator.test").debug("hello log")
        for handler in root.handlers:
            handler.flush()
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers = saved
        root.setLevel(level)
    assert "[DEBUG] [rogulator.test] hello log" in path.read_text(encoding="utf-8")
