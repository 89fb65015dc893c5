"""Logging utilities with color support.

Wraps the standard logging module and colors messages when stdout is a
terminal, so local runs of the pitch workflow are easy to follow.
"""

import logging
import sys

logger = logging.getLogger("pitches.generators")


class Colors:
    """ANSI Color Codes for terminal output."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    CYAN = "\033[36m"
    WHITE = "\033[37m"
    BRIGHT_RED = "\033[91m"
    BRIGHT_GREEN = "\033[92m"
    BRIGHT_YELLOW = "\033[93m"
    BRIGHT_MAGENTA = "\033[95m"
    BRIGHT_CYAN = "\033[96m"


LEVELS = {
    "INFO": logging.INFO,
    "SUCCESS": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "DEBUG": logging.DEBUG,
}

LEVEL_COLORS = {
    "INFO": Colors.CYAN,
    "SUCCESS": Colors.BRIGHT_GREEN,
    "WARNING": Colors.BRIGHT_YELLOW,
    "ERROR": Colors.BRIGHT_RED,
    "DEBUG": Colors.DIM,
}


def _is_tty() -> bool:
    """Check if stdout is a terminal (supports colors)."""
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def log(message: str, level: str = "INFO") -> None:
    """Log message using Python logging with optional color for terminals.

    Args:
        message: The message to log
        level: Log level (INFO, SUCCESS, WARNING, ERROR, DEBUG)
    """
    if _is_tty():
        color = LEVEL_COLORS.get(level, Colors.WHITE)
        message = f"{color}{message}{Colors.RESET}"

    logger.log(LEVELS.get(level, logging.INFO), message)


def log_separator(title: str = "") -> None:
    """Log separator line with optional title."""
    line = "=" * 60
    if not title:
        logger.debug("-" * 60)
        return
    if _is_tty():
        logger.info(
            f"\n{Colors.BRIGHT_MAGENTA}{line}\n  {Colors.BOLD}{title}{Colors.RESET}"
            f"\n{Colors.BRIGHT_MAGENTA}{line}{Colors.RESET}"
        )
    else:
        logger.info(f"\n{line}\n  {title}\n{line}")


def log_prompt(prompt: str, title: str = "") -> None:
    """Log prompt text at DEBUG level."""
    separator = "-" * 40
    header = f"[{title}]\n" if title else ""
    if title and _is_tty():
        header = f"{Colors.BRIGHT_CYAN}[{title}]{Colors.RESET}\n"
    logger.debug(f"{header}{separator}\n{prompt}\n{separator}")
