"""
Run configuration.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from .errors import ConfigError
from .patterns import LiteralPattern, PatternFile, PatternSource

DEFAULT_ROOTS: Tuple[str, ...] = (".",)
DEFAULT_IGNORE_FILES: Tuple[str, ...] = (".gitignore", ".chettuignore")
DEFAULT_PATTERNS: Tuple[str, ...] = (".git/",)
DEFAULT_MAX_CLIPBOARD_SIZE = 500_000


@dataclass(frozen=True)
class Config:
    """Immutable settings for one run.

    ``ignore_files`` are explicitly named files, resolved against the current
    directory. When ``use_default_ignore_files`` is set, the files in
    :data:`DEFAULT_IGNORE_FILES` are looked up inside each root instead.
    """

    roots: Tuple[Path, ...] = tuple(Path(r) for r in DEFAULT_ROOTS)
    ignore_files: Tuple[Path, ...] = ()
    use_default_ignore_files: bool = True
    patterns: Tuple[str, ...] = DEFAULT_PATTERNS
    output_file: Optional[Path] = None
    force_output_replace: bool = False
    copy_to_clipboard: bool = False
    max_clipboard_size: int = DEFAULT_MAX_CLIPBOARD_SIZE
    verbose: bool = False

    def validate(self) -> "Config":
        if self.force_output_replace and self.output_file is None:
            raise ConfigError("--force-replace-output requires --output-file to be specified")
        if self.max_clipboard_size < 0:
            raise ConfigError(f"Invalid clipboard size: {self.max_clipboard_size}")
        if not self.roots:
            raise ConfigError("No directories to process")
        return self

    def pattern_sources(self, root: Path) -> List[PatternSource]:
        """Return the ordered ignore sources for *root*: files first, then literals."""
        if self.use_default_ignore_files:
            files = [Path(root) / name for name in DEFAULT_IGNORE_FILES]
        else:
            files = list(self.ignore_files)
        sources: List[PatternSource] = [PatternFile(f) for f in files]
        sources.extend(LiteralPattern(p) for p in self.patterns)
        return sources
