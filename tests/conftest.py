# tests/conftest.py
import os
import sys

src_path = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src'))
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from vault.utilities.logger import VaultLogger

# Keep test output readable; individual tests opt back in where they check logging
VaultLogger.PRINT_TO_CONSOLE = False
