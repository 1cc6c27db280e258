"""
Output sinks: stdout, a file on disk, and the system clipboard.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, List, Optional, TextIO

import pyperclip

from . import console
from .config import Config
from .errors import ClipboardSizeError, OutputError


def _encode(document: str) -> bytes:
    return document.encode("utf-8", errors="surrogateescape")


def write_stdout(document: str, stream: Optional[TextIO] = None) -> None:
    stream = stream or sys.stdout
    buffer = getattr(stream, "buffer", None)
    if buffer is None:
        stream.write(document)
        return
    stream.flush()
    buffer.write(_encode(document))
    buffer.flush()


def prompt_replace(path: Path, ask: Callable[[str], str] = input) -> bool:
    try:
        response = ask(f"File {path} already exists. Replace? (y/N): ")
    except EOFError:
        return False
    return response.strip().lower() in ("y", "yes")


def write_file(
    document: str,
    path: Path,
    force: bool = False,
    confirm: Callable[[Path], bool] = prompt_replace,
) -> bool:
    """Write *document* to *path*.

    Returns ``False`` when the file exists and the user declined to replace
    it. Raises :class:`OutputError` if the write fails.
    """
    path = Path(path)
    if path.exists() and not force and not confirm(path):
        return False
    try:
        path.write_bytes(_encode(document))
    except OSError as e:
        raise OutputError(f"Could not write to output file '{path}': {e}")
    return True


def copy_to_clipboard(
    document: str,
    max_size: int,
    copy: Callable[[str], None] = pyperclip.copy,
) -> int:
    """Copy *document* to the clipboard and return its size in characters.

    The clipboard is left untouched when the document is larger than
    *max_size*.
    """
    size = len(document)
    if size > max_size:
        raise ClipboardSizeError(size, max_size)
    text = _encode(document).decode("utf-8", errors="replace")
    try:
        copy(text)
    except pyperclip.PyperclipException as e:
        raise OutputError(f"Failed to copy to clipboard: {e}")
    return size


def handle_output(
    document: str,
    config: Config,
    confirm: Callable[[Path], bool] = prompt_replace,
    copy: Callable[[str], None] = pyperclip.copy,
) -> List[OutputError]:
    """Send *document* to every sink *config* asks for.

    Stdout is used when neither a file nor the clipboard was requested. Each
    sink fails independently; the failures are reported and returned.
    """
    failures: List[OutputError] = []

    if config.output_file is not None:
        try:
            if write_file(document, config.output_file, config.force_output_replace, confirm):
                console.success(f"Output written to {config.output_file}")
            else:
                console.info("Operation cancelled.")
        except OutputError as e:
            console.error(str(e))
            failures.append(e)
    elif not config.copy_to_clipboard:
        write_stdout(document)

    if config.copy_to_clipboard:
        try:
            size = copy_to_clipboard(document, config.max_clipboard_size, copy)
            console.success(f"Output ({size} characters) has been copied to clipboard.")
        except OutputError as e:
            console.error(str(e))
            failures.append(e)

    return failures
