# File: src/vault/modes/__init__.py
"""Top-level package for mode classes."""

from .base import BaseMode
from .vault_cracker import VaultCracker

__all__ = [
    "BaseMode",
    "VaultCracker",
]
