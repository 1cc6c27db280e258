"""
Coloured diagnostics for the chettu command line.

Everything here goes to stderr so that a document printed to stdout can be
piped without interleaved status lines.
"""

from __future__ import annotations

import sys

from colorama import Fore, Style, init as colorama_init

colorama_init()

PREFIX = "[chettu]"


def _emit(color: str, msg: str) -> None:
    print(color + msg + Style.RESET_ALL, file=sys.stderr)


def info(msg: str) -> None:
    print(f"{PREFIX} {msg}", file=sys.stderr)


def success(msg: str) -> None:
    _emit(Fore.GREEN, f"{PREFIX} {msg}")


def warn(msg: str) -> None:
    _emit(Fore.YELLOW, f"{PREFIX} ! {msg}")


def error(msg: str) -> None:
    _emit(Fore.RED, f"Error: {msg}")
