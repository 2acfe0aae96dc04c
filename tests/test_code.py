#!/usr/bin/env python3
"""Tests for configuration loading and game bootstrap wiring."""

import asyncio
import json
import random

import pytest

from vault.code import DEFAULT_CONFIG, build_game, load_config, run_game
from vault.modes.vault_cracker import VaultCracker
from vault.utilities.vault_types import RoundPhase


def test_missing_config_uses_defaults(tmp_path):
    config = load_config(str(tmp_path / "config.json"))
    assert config == DEFAULT_CONFIG
    assert config is not DEFAULT_CONFIG


def test_config_overrides_and_unknown_keys(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"unlock_dwell": 2.5, "increase_key": "KeyD", "debug_mode": True}))

    config = load_config(str(path))
    assert config["unlock_dwell"] == 2.5
    assert config["increase_key"] == "KeyD"
    assert config["decrease_key"] == DEFAULT_CONFIG["decrease_key"]
    assert "debug_mode" not in config


@pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]"])
def test_bad_config_falls_back_to_defaults(tmp_path, content):
    path = tmp_path / "config.json"
    path.write_text(content)
    assert load_config(str(path)) == DEFAULT_CONFIG


def test_build_game_wires_components():
    config = dict(DEFAULT_CONFIG, screen_width=1920, screen_height=1080, combination_length=4)
    core, mode = build_game(config, rng=random.Random(1))

    assert isinstance(mode, VaultCracker)
    assert mode.core is core
    assert core.scene.screen_width == 1920
    assert core.render.target_frame_rate == config["frame_rate"]
    assert mode.combination_length == 4
    assert mode.hid.increase_key == "ArrowRight"


def test_build_game_rejects_bad_settings():
    with pytest.raises(ValueError):
        build_game(dict(DEFAULT_CONFIG, frame_rate=1))
    with pytest.raises(ValueError):
        build_game(dict(DEFAULT_CONFIG, increase_key="KeyA", decrease_key="KeyA"))


@pytest.mark.asyncio
async def test_run_game_until_stopped():
    core, mode = build_game(dict(DEFAULT_CONFIG), rng=random.Random(2))
    loop = asyncio.get_running_loop()
    loop.call_later(0.15, mode.stop)

    result = await asyncio.wait_for(run_game(core, mode), timeout=2.0)
    assert result == "STOPPED"
    assert mode.phase is RoundPhase.ACTIVE
    assert core.render.frame_counter > 0
    assert core.events.listener_count() == 0
