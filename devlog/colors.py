"""ANSI color constants used around level names and attribute keys."""

from colorama import Fore, Style

from .attrs import Level

RESET = Style.RESET_ALL
RED = Fore.RED
YELLOW = Fore.YELLOW
WHITE = Fore.WHITE
GRAY = Fore.LIGHTBLACK_EX

ALL = (RESET, RED, YELLOW, WHITE, GRAY)


def text(color: str, s: str) -> str:
    return f"{color}{s}{RESET}"


def gray(s: str) -> str:
    return text(GRAY, s)


def level_color(level: int) -> str:
    if level < Level.INFO:
        return GRAY
    if level < Level.WARN:
        return WHITE
    if level < Level.ERROR:
        return YELLOW
    return RED


def strip(s: str) -> str:
    """Remove every color code this module emits."""
    for code in ALL:
        s = s.replace(code, "")
    return s
