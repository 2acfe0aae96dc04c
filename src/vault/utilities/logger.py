"""
Logging utilities for the Vault Cracker project.
"""

import time

class LogLevel:
    """
    Log levels for categorizing log messages.
    """
    DEBUG = 0
    INFO = 1
    NOTE = 2
    WARNING = 3
    ERROR = 4

    NAMES = {
        "DEBUG": DEBUG,
        "INFO": INFO,
        "NOTE": NOTE,
        "WARNING": WARNING,
        "ERROR": ERROR,
    }

    @classmethod
    def from_name(cls, name):
        """Resolve a level name from config ("debug", "INFO", ...) to its value."""
        try:
            return cls.NAMES[str(name).upper()]
        except KeyError:
            raise ValueError(f"Unknown log level: {name!r}") from None

class VaultLogger:
    """Tag-based logger shared by every vault component."""

    LEVEL = LogLevel.INFO
    PRINT_TO_CONSOLE = True
    WRITE_TO_FILE = False
    LOG_FILE_PATH = "vault_syslog.txt"

    # level -> (tag, terminal colour)
    STYLES = {
        LogLevel.DEBUG: ("DBUG", "\033[90m"),
        LogLevel.INFO: ("INFO", "\033[94m"),
        LogLevel.NOTE: ("NOTE", "\033[96m"),
        LogLevel.WARNING: ("WARN", "\033[93m"),
        LogLevel.ERROR: ("!ERR", "\033[91m"),
    }
    RESET = "\033[0m"

    _start = time.monotonic()

    @classmethod
    def set_level(cls, level):
        """Accepts a LogLevel value or a level name."""
        if isinstance(level, str):
            level = LogLevel.from_name(level)
        cls.LEVEL = level

    @classmethod
    def enable_file_logging(cls, enable=True, path=None):
        cls.WRITE_TO_FILE = enable
        if path:
            cls.LOG_FILE_PATH = path

    @classmethod
    def _log(cls, level, module_tag, message):
        if level < cls.LEVEL:
            return

        lvl_tag, color = cls.STYLES[level]
        uptime = time.monotonic() - cls._start

        # Format: [   1.234][INFO][HIDM] Drag session started
        line = f"[{uptime:>8.3f}][{lvl_tag}][{module_tag:<4}] {message}"

        if cls.PRINT_TO_CONSOLE:
            print(f"{color}{line}{cls.RESET}")

        if cls.WRITE_TO_FILE:
            try:
                with open(cls.LOG_FILE_PATH, "a", encoding="utf-8") as f:
                    f.write(line + "\n")
            except OSError as e:
                # A read-only or missing log location must not stop the game
                if cls.PRINT_TO_CONSOLE:
                    print(f"{cls.STYLES[LogLevel.ERROR][1]}Logger OS Error: {e}{cls.RESET}")

    @classmethod
    def debug(cls, tag, msg):
        cls._log(LogLevel.DEBUG, tag, msg)

    @classmethod
    def info(cls, tag, msg):
        cls._log(LogLevel.INFO, tag, msg)

    @classmethod
    def note(cls, tag, msg):
        cls._log(LogLevel.NOTE, tag, msg)

    @classmethod
    def warning(cls, tag, msg):
        cls._log(LogLevel.WARNING, tag, msg)

    @classmethod
    def error(cls, tag, msg):
        cls._log(LogLevel.ERROR, tag, msg)
