"""
CLI entrypoint for chettu.
"""
import argparse
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__, console
from .config import (
    DEFAULT_IGNORE_FILES,
    DEFAULT_MAX_CLIPBOARD_SIZE,
    DEFAULT_PATTERNS,
    DEFAULT_ROOTS,
    Config,
)
from .core import build_document
from .errors import ConfigError, InvalidRootError, PatternSourceError
from .output import handle_output


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="chettu",
        description="Bundle a directory tree and its file contents into one <documents> block.",
    )
    p.add_argument(
        "-d",
        dest="directories",
        action="append",
        metavar="DIR",
        help="Directory to process (repeatable, default: .)",
    )
    p.add_argument(
        "-i",
        dest="ignore_paths",
        action="append",
        metavar="PATTERN",
        help=(
            "Pattern to ignore (repeatable, added to the defaults: "
            f"{' '.join(DEFAULT_PATTERNS)}). Use -i \"\" to clear the defaults."
        ),
    )
    p.add_argument(
        "--ignore-file",
        dest="ignore_files",
        action="append",
        metavar="FILE",
        help=(
            "File containing ignore patterns (repeatable, default: "
            f"{', '.join(DEFAULT_IGNORE_FILES)} in each directory). "
            "Use --ignore-file \"\" to load no ignore files."
        ),
    )
    p.add_argument(
        "-c",
        dest="clipboard",
        nargs="?",
        type=int,
        const=DEFAULT_MAX_CLIPBOARD_SIZE,
        metavar="MAX",
        help=f"Copy to clipboard, refusing output larger than MAX characters (default {DEFAULT_MAX_CLIPBOARD_SIZE})",
    )
    p.add_argument("--output-file", type=Path, help="Output file path")
    p.add_argument(
        "--force-replace-output",
        action="store_true",
        help="Replace an existing output file without prompting",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def config_from_args(ns: argparse.Namespace) -> Config:
    roots = tuple(Path(d) for d in (ns.directories or DEFAULT_ROOTS))

    if ns.ignore_paths is None:
        patterns = DEFAULT_PATTERNS
    else:
        base = () if "" in ns.ignore_paths else DEFAULT_PATTERNS
        patterns = base + tuple(p for p in ns.ignore_paths if p)

    if ns.ignore_files is None:
        ignore_files = ()
        use_defaults = True
    else:
        ignore_files = tuple(Path(f) for f in ns.ignore_files if f)
        use_defaults = False

    return Config(
        roots=roots,
        ignore_files=ignore_files,
        use_default_ignore_files=use_defaults,
        patterns=patterns,
        output_file=ns.output_file,
        force_output_replace=ns.force_replace_output,
        copy_to_clipboard=ns.clipboard is not None,
        max_clipboard_size=(
            ns.clipboard if ns.clipboard is not None else DEFAULT_MAX_CLIPBOARD_SIZE
        ),
        verbose=ns.verbose,
    ).validate()


def main(argv: Optional[List[str]] = None) -> None:
    parser = _build_parser()
    try:
        ns = parser.parse_args(argv)
        try:
            config = config_from_args(ns)
        except ConfigError as e:
            console.error(str(e))
            parser.print_usage(sys.stderr)
            sys.exit(1)

        try:
            document = build_document(config)
        except (PatternSourceError, InvalidRootError) as e:
            console.error(str(e))
            sys.exit(1)

        failures = handle_output(document, config)
        if config.verbose and failures:
            console.info(f"{len(failures)} output sink(s) failed.")

    except KeyboardInterrupt:
        print("\nCancelled.", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        console.error(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
