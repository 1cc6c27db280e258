"""
Render walked entries as a single ``<documents>`` block.

The document starts with a manifest (one path per line, in walk order)
followed by one ``<document>`` element per file holding its path and its
contents, every non-empty content line indented by two tabs::

    <documents>
    src/a.py
    src/b

    	<document>
    		<source>src/a.py</source>
    		<document_content>
    		print("hi")
    		</document_content>
    	</document>
    </documents>

File contents are embedded verbatim. The framing tags are not escaped, so a
file that itself contains ``</document_content>`` produces an ambiguous
document; such files are reported with a warning.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, Iterator, List

from . import console
from .walker import TreeEntry

INDENT = "\t\t"
CLOSE_CONTENT = "</document_content>"

Reader = Callable[[Path], bytes]


def read_bytes(path: Path) -> bytes:
    return Path(path).read_bytes()


def _decode(raw: bytes) -> str:
    # surrogateescape keeps undecodable bytes intact for the file sink
    return raw.decode("utf-8", errors="surrogateescape")


def _indent(text: str) -> str:
    # only \n ends a line; form feeds and other separators stay inside it
    return "\n".join(INDENT + ln if ln.strip("\r") else ln for ln in text.split("\n"))


def _content_block(path: str, text: str) -> str:
    return (
        "\t<document>\n"
        f"\t\t<source>{path}</source>\n"
        "\t\t<document_content>\n"
        f"{_indent(text)}\n"
        f"\t\t{CLOSE_CONTENT}\n"
        "\t</document>\n"
    )


def iter_render(entries: Iterable[TreeEntry], read: Reader = read_bytes) -> Iterator[str]:
    """Yield the document in chunks; see :func:`render`."""
    entries = list(entries)

    yield "<documents>\n"
    for entry in entries:
        yield entry.path + "\n"
    yield "\n"

    for entry in entries:
        if entry.is_dir:
            continue
        try:
            raw = read(entry.source)
        except OSError as e:
            console.warn(f"Could not read {entry.path}: {e}")
            continue
        text = _decode(raw)
        if CLOSE_CONTENT in text:
            console.warn(f"{entry.path} contains '{CLOSE_CONTENT}'; the document will be ambiguous")
        yield _content_block(entry.path, text)

    yield "</documents>\n"


def render(entries: Iterable[TreeEntry], read: Reader = read_bytes) -> str:
    """Render *entries* as one document string.

    ``read`` is called with each file entry's ``source`` path. A file that
    cannot be read is reported and left out of the content section; its
    manifest line stays.
    """
    parts: List[str] = list(iter_render(entries, read))
    return "".join(parts)
