"""
chettu - bundle a project tree and its file contents into one document.

This package walks one or more directory trees, filters entries with
gitignore-style patterns, and renders the surviving paths plus full file
contents as a single ``<documents>`` block for LLM ingestion.
"""

__version__ = "0.1.0"
__author__ = "chettu contributors"

from .document import render
from .patterns import IgnoreRule, LiteralPattern, PatternFile, PatternSet
from .walker import TreeEntry, walk, walk_roots

__all__ = [
    "IgnoreRule",
    "LiteralPattern",
    "PatternFile",
    "PatternSet",
    "TreeEntry",
    "render",
    "walk",
    "walk_roots",
]
