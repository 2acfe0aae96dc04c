# File: src/vault/code.py
"""
PROJECT: Vault Cracker - combination lock mini-game
"""

import asyncio
import json
import os

from vault.managers import RenderManager, SceneManager, TweenManager
from vault.modes import VaultCracker
from vault.utilities import EventSource, GameContext
from vault.utilities.logger import VaultLogger

DEFAULT_CONFIG = {
    "log_level": "INFO",  # DEBUG, INFO, NOTE, WARNING, ERROR
    "log_to_file": False,
    "log_file": "vault_syslog.txt",
    "frame_rate": 60,  # Render loop target (Hz)
    "increase_key": "ArrowRight",  # Clockwise key
    "decrease_key": "ArrowLeft",  # Counterclockwise key
    "drag_button": 2,  # Secondary pointer button starts a drag
    "tick_angle_deg": 60,
    "combination_length": 3,
    "min_ticks": 1,
    "max_ticks": 9,
    "unlock_dwell": 5.0,  # Seconds the vault stays open
    "fail_dwell": 0.3,
    "turn_duration": 0.25,
    "spin_duration": 1.2,
    "door_shift_ratio": 0.2,  # Open door slide, fraction of screen width
    "screen_width": 1280,
    "screen_height": 720,
    "handle_width": 260,
}


def file_exists(filename):
    """Check if a file exists on the filesystem."""
    try:
        os.stat(filename)
        return True
    except OSError:
        return False


def load_config(path="config.json"):
    """Load configuration from a JSON file if it exists, otherwise return defaults."""
    config = DEFAULT_CONFIG.copy()
    if not file_exists(path):
        VaultLogger.warning("CODE", f"No {path} found. Using default configuration.")
        return config
    try:
        with open(path, "r", encoding="utf-8") as f:
            config_data = json.load(f)
    except (OSError, ValueError) as e:
        VaultLogger.error("CODE", f"Error loading {path}: {e}")
        VaultLogger.warning("CODE", "Using default configuration.")
        return config
    if not isinstance(config_data, dict):
        VaultLogger.error("CODE", f"{path} must hold a JSON object, got {type(config_data).__name__}")
        return config

    unknown = sorted(set(config_data) - set(DEFAULT_CONFIG))
    if unknown:
        VaultLogger.warning("CODE", f"Ignoring unknown config keys: {', '.join(unknown)}")
    config.update({k: v for k, v in config_data.items() if k in DEFAULT_CONFIG})
    VaultLogger.info("CODE", f"Configuration loaded from {path}")
    return config


def build_game(config, rng=None):
    """Wire the scene, tweens, frame scheduler and input source into a VaultCracker mode."""
    scene = SceneManager(
        screen_width=config["screen_width"],
        screen_height=config["screen_height"],
        handle_width=config["handle_width"],
    )
    tweens = TweenManager()
    render = RenderManager(frame_rate=config["frame_rate"])
    render.add_animator(tweens)
    core = GameContext(scene=scene, tweens=tweens, render=render, events=EventSource())
    return core, VaultCracker(core, rng=rng, settings=config)


async def run_game(core, mode):
    """Run the frame loop alongside the mode until the mode finishes."""
    render_task = asyncio.create_task(core.render.run())
    try:
        return await mode.execute()
    finally:
        core.render.stop()
        render_task.cancel()
        try:
            await render_task
        except asyncio.CancelledError:
            pass


def main(config_path="config.json"):
    """Console entry point. The host feeds raw input through core.events."""
    config = load_config(config_path)
    VaultLogger.set_level(config["log_level"])
    VaultLogger.enable_file_logging(config["log_to_file"], config["log_file"])
    VaultLogger.info("CODE", "*** STARTING VAULT CRACKER ***")

    core, mode = build_game(config)
    try:
        asyncio.run(run_game(core, mode))
    except KeyboardInterrupt:
        VaultLogger.info("CODE", "Interrupted, shutting down")


if __name__ == "__main__":
    main()
