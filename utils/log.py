"""
Color-coded logging utilities for the quote server.

Provides consistent, color-coded console output for the server process.
Uses colorama for cross-platform terminal color support.
"""

import logging
import sys

from colorama import Fore, Style, init

# Initialize colorama (auto-reset after each print)
init(autoreset=True)


# ---------------------------------------------------------------------------
# Color constants
# ---------------------------------------------------------------------------

class C:
    """Color shortcuts for server output."""
    HEADER = Fore.CYAN + Style.BRIGHT
    OK = Fore.GREEN + Style.BRIGHT
    WARN = Fore.YELLOW + Style.BRIGHT
    ERR = Fore.RED + Style.BRIGHT
    INFO = Fore.WHITE
    DIM = Style.DIM
    RESET = Style.RESET_ALL


LEVEL_COLORS = {
    logging.DEBUG: C.DIM,
    logging.INFO: C.INFO,
    logging.WARNING: C.WARN,
    logging.ERROR: C.ERR,
    logging.CRITICAL: C.ERR,
}

LOG_FORMAT = "[%(asctime)s] %(levelname)-8s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ColorFormatter(logging.Formatter):
    """Formatter that colors the whole line by level."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        color = LEVEL_COLORS.get(record.levelno, C.INFO)
        return f"{color}{line}{C.RESET}"


# ---------------------------------------------------------------------------
# Console output
# ---------------------------------------------------------------------------

def banner(msg: str) -> None:
    """Print a bold section header."""
    print(f"\n{C.HEADER}{'='*60}")
    print(f"  {msg}")
    print(f"{'='*60}{C.RESET}\n")


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

def setup_logging(level: str = "INFO", name: str = None) -> logging.Logger:
    """
    Attach a colored console handler to the named logger (root by default).
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Prevent duplicate handlers on re-import
    if any(isinstance(h.formatter, ColorFormatter) for h in logger.handlers):
        return logger

    ch = logging.StreamHandler(sys.stdout)
    ch.setFormatter(ColorFormatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(ch)

    return logger
