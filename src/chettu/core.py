"""
Pipeline glue: patterns per root -> walk -> render.
"""

from __future__ import annotations

from pathlib import Path
from typing import List

from . import console
from .config import Config
from .document import render
from .patterns import PatternSet
from .walker import TreeEntry, walk_roots


def pattern_set_for(config: Config, root: Path) -> PatternSet:
    patterns = PatternSet.build(config.pattern_sources(root))
    if config.verbose:
        console.info(f"{len(patterns)} ignore patterns for {root}")
    return patterns


def collect_entries(config: Config) -> List[TreeEntry]:
    if config.verbose:
        console.info(f"Scanning {', '.join(str(r) for r in config.roots)} …")
    entries = walk_roots(config.roots, lambda root: pattern_set_for(config, root))
    if config.verbose:
        files = sum(1 for e in entries if not e.is_dir)
        console.info(f"{len(entries)} entries kept, {files} files.")
    return entries


def build_document(config: Config) -> str:
    """Walk every configured root and render the combined document.

    Raises :class:`~chettu.errors.PatternSourceError` or
    :class:`~chettu.errors.InvalidRootError` on fatal problems.
    """
    return render(collect_entries(config))
