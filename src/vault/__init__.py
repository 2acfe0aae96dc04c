"""Vault Cracker: a combination-lock mini-game core."""

__version__ = "1.0.0"
