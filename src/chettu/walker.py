"""
Filtered depth-first directory traversal.

:func:`walk` yields a :class:`TreeEntry` for every entry below a root that is
not matched by a :class:`~chettu.patterns.PatternSet`. Matched directories are
pruned: their children are never listed, so no negation pattern can bring a
descendant back.
"""

from __future__ import annotations

import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Set, Union

from . import console
from .errors import InvalidRootError
from .patterns import PatternSet


@dataclass(frozen=True)
class TreeEntry:
    """A visited, non-ignored filesystem node.

    ``path`` is what the document shows: the root as it was given joined with
    the root-relative path (no prefix when the root is ``.``). ``rel_path`` is the
    root-relative path the patterns were tested against, and ``source`` is
    where the contents are read from.
    """

    path: str
    rel_path: str
    source: Path
    is_dir: bool


def _display_prefix(root: Path) -> str:
    """Return *root* as given, in POSIX form; ``.`` gives no prefix."""
    prefix = root.as_posix()
    return "" if prefix == "." else prefix


def _join(prefix: str, rel: str) -> str:
    if not prefix:
        return rel
    return prefix + rel if prefix.endswith("/") else f"{prefix}/{rel}"


def _list_dir(d: Path) -> List[Path]:
    return sorted(d.iterdir(), key=lambda p: p.name)


def _open_root(root: Path) -> Path:
    try:
        resolved = root.resolve()
    except (OSError, RuntimeError) as e:
        raise InvalidRootError(f"Could not resolve root path '{root}': {e}")
    if not resolved.exists():
        raise InvalidRootError(f"Root directory '{root}' does not exist")
    if not resolved.is_dir():
        raise InvalidRootError(f"Root path '{root}' is not a directory")
    return resolved


def walk(root: Union[str, Path], patterns: PatternSet) -> Iterator[TreeEntry]:
    """Yield the non-ignored entries under *root* in depth-first pre-order.

    The root itself is neither tested nor yielded. Children are visited in
    name order. Raises :class:`InvalidRootError` straight away if the root
    cannot be opened; unreadable subdirectories and entries that cannot be
    statted are reported and skipped.
    """
    root = Path(root)
    resolved = _open_root(root)
    try:
        top = _list_dir(resolved)
    except OSError as e:
        raise InvalidRootError(f"Could not scan directory '{root}': {e}")
    return _walk(top, resolved, _display_prefix(root), patterns)


def _walk(
    children: List[Path],
    root: Path,
    prefix: str,
    patterns: PatternSet,
) -> Iterator[TreeEntry]:
    for child in children:
        rel = child.relative_to(root).as_posix()
        try:
            # lstat: symlinked directories are listed, never descended into
            is_dir = stat.S_ISDIR(child.lstat().st_mode)
        except OSError as e:
            console.warn(f"Could not stat {rel}: {e}")
            continue

        if patterns.matches(rel, is_dir):
            continue

        yield TreeEntry(
            path=_join(prefix, rel),
            rel_path=rel,
            source=child,
            is_dir=is_dir,
        )

        if is_dir:
            try:
                grandchildren = _list_dir(child)
            except OSError as e:
                console.warn(f"Could not read directory {rel}: {e}")
                continue
            yield from _walk(grandchildren, root, prefix, patterns)


def walk_roots(
    roots: Iterable[Union[str, Path]],
    pattern_factory: Callable[[Path], PatternSet],
) -> List[TreeEntry]:
    """Walk *roots* one after another into one cumulative entry list.

    ``pattern_factory`` builds the pattern set for each root. An entry that
    resolves to a file already produced by an earlier root (overlapping or
    repeated roots) is dropped.
    """
    entries: List[TreeEntry] = []
    seen: Set[Path] = set()
    for root in roots:
        root = Path(root)
        for entry in walk(root, pattern_factory(root)):
            if entry.source in seen:
                console.warn(f"Skipping duplicate path {entry.path}")
                continue
            seen.add(entry.source)
            entries.append(entry)
    return entries
