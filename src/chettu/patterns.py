"""
Gitignore-style pattern compilation and matching.

A :class:`PatternSet` is an ordered list of :class:`IgnoreRule` values built
from ignore files and literal pattern strings. Each rule is compiled with
``pathspec``'s ``gitwildmatch`` flavour; evaluation walks the rules in order
and the last rule that matches a path decides its verdict, so a later
``!pattern`` re-includes a path excluded by an earlier one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, List, Tuple, Union

import pathspec

from .errors import PatternSourceError

PATTERN_STYLE = "gitwildmatch"

# group pathspec sets when a regex matched through a parent directory
DIR_MARK = "ps_d"


@dataclass(frozen=True)
class PatternFile:
    """An ignore file; read when present, skipped when missing."""

    path: Path


@dataclass(frozen=True)
class LiteralPattern:
    """A single pattern string supplied directly by the caller."""

    text: str


PatternSource = Union[PatternFile, LiteralPattern]


def _is_pattern_line(line: str) -> bool:
    stripped = line.strip()
    return bool(stripped) and not stripped.startswith("#")


@dataclass(frozen=True)
class IgnoreRule:
    """One parsed ignore line.

    ``spec`` holds the compiled pattern *without* its ``!`` prefix or trailing
    ``/``, so it reports a syntactic match for negated rules too;
    :meth:`PatternSet.matches` applies ``dir_only`` and turns the match into a
    verdict using ``negated``.
    """

    pattern: str
    negated: bool
    dir_only: bool
    anchored: bool
    has_separator: bool
    spec: pathspec.PathSpec = field(compare=False, repr=False)

    @classmethod
    def parse(cls, line: str) -> "IgnoreRule":
        pattern = line.strip()
        negated = pattern.startswith("!")
        body = pattern[1:] if negated else pattern
        return cls(
            pattern=pattern,
            negated=negated,
            dir_only=body.endswith("/"),
            anchored=body.startswith("/"),
            has_separator="/" in body.rstrip("/"),
            spec=pathspec.PathSpec.from_lines(PATTERN_STYLE, [body.rstrip("/") or body]),
        )

    def hits(self, path: str) -> bool:
        """Return whether the pattern text matches *path* itself, ignoring negation.

        gitwildmatch regexes also accept everything below a matching
        directory; such matches set the ``ps_d`` group and are not counted.
        """
        for pattern in self.spec.patterns:
            if pattern.regex is None:
                continue
            m = pattern.regex.match(path)
            if m is not None and m.groupdict().get(DIR_MARK) is None:
                return True
        return False


def _read_pattern_file(path: Path) -> List[str]:
    try:
        with path.open("r", encoding="utf-8") as fh:
            return [ln.strip() for ln in fh if _is_pattern_line(ln)]
    except FileNotFoundError:
        return []
    except (OSError, UnicodeDecodeError) as e:
        raise PatternSourceError(f"Could not read ignore file '{path}': {e}")


def _normalize(path: str) -> str:
    rel = path.replace("\\", "/")
    while rel.startswith("./"):
        rel = rel[2:]
    return rel.strip("/")


class PatternSet:
    """Ordered, read-only collection of ignore rules."""

    def __init__(self, rules: Iterable[IgnoreRule] = ()) -> None:
        self._rules: Tuple[IgnoreRule, ...] = tuple(rules)

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "PatternSet":
        return cls(IgnoreRule.parse(ln) for ln in lines if _is_pattern_line(ln))

    @classmethod
    def build(cls, sources: Iterable[PatternSource]) -> "PatternSet":
        """Compile *sources* in order into one pattern set.

        Missing ignore files are skipped silently. An ignore file that exists
        but cannot be read raises :class:`PatternSourceError`.
        """
        lines: List[str] = []
        for source in sources:
            if isinstance(source, PatternFile):
                lines.extend(_read_pattern_file(Path(source.path)))
            else:
                lines.append(source.text)
        return cls.from_lines(lines)

    @property
    def rules(self) -> Tuple[IgnoreRule, ...]:
        return self._rules

    def __iter__(self) -> Iterator[IgnoreRule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __bool__(self) -> bool:
        return bool(self._rules)

    def __repr__(self) -> str:
        return f"PatternSet({[r.pattern for r in self._rules]!r})"

    def matches(self, path: str, is_dir: bool = False) -> bool:
        """Return whether *path* (relative to the walk root) is ignored."""
        rel = _normalize(path)
        if not rel:
            return False
        verdict = False
        for rule in self._rules:
            if rule.dir_only and not is_dir:
                continue
            if rule.hits(rel):
                verdict = not rule.negated
        return verdict
