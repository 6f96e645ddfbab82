"""Command-line entry point.

Loads a cascade and prints the translation for each key given:

    dictcascade --dir locales menu.quit menu.open
    dictcascade --file ja.json --file en.toml greeting
    dictcascade --settings dictcascade.yaml --dump

Each hit prints ``key<TAB>value``. Exit status is 0 when every key
resolved, 1 when any key was missing and 2 when loading failed.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from dictcascade.loaders.settings_loader import (
    DEFAULT_SETTINGS_PATH,
    CascadeSettings,
    build_cascade,
    load_settings,
)
from dictcascade.util.errors import DictionaryError

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_MISSING = 1
EXIT_LOAD_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dictcascade",
        description="Look up keys in a cascade of translation dictionaries.",
    )
    parser.add_argument("keys", nargs="*", metavar="KEY", help="dotted key to translate")
    parser.add_argument("--settings", default=None,
                        help=f"YAML settings file (default: {DEFAULT_SETTINGS_PATH} if present)")
    parser.add_argument("--delimiter", default=None, help="key path delimiter")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--dir", dest="directory", default=None,
                        help="load every file in this directory")
    source.add_argument("--file", dest="paths", action="append", default=None,
                        help="load this file (repeatable, highest priority first)")
    parser.add_argument("--sort", action="store_true", default=None,
                        help="order directory entries by filename")
    parser.add_argument("--dump", action="store_true",
                        help="print every resolvable key and its value")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="more logging (-v info, -vv debug)")
    return parser


def resolve_settings(args: argparse.Namespace) -> CascadeSettings:
    """Merge settings-file values with command-line overrides."""
    if args.settings is None and not Path(DEFAULT_SETTINGS_PATH).exists():
        settings = CascadeSettings()
    else:
        settings = load_settings(args.settings or DEFAULT_SETTINGS_PATH)
    if args.delimiter is not None:
        settings.delimiter = args.delimiter
    if args.paths:
        settings.paths = list(args.paths)
        settings.directory = ""
    elif args.directory is not None:
        settings.directory = args.directory
        settings.paths = []
    if args.sort is not None:
        settings.sort_directory = args.sort
    if args.verbose:
        settings.log_level = "DEBUG" if args.verbose > 1 else "INFO"
    return settings


def run(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command line and return the exit status."""
    args = build_parser().parse_args(argv)

    try:
        settings = resolve_settings(args)
        logging.basicConfig(
            level=settings.log_level.upper(),
            format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        )
        cascade = build_cascade(settings)
    except DictionaryError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_LOAD_ERROR
    log.info("Cascade ready with %d dictionaries", len(cascade))

    if args.dump:
        for key, value in sorted(cascade.flatten().items()):
            print(f"{key}\t{value}")

    status = EXIT_OK
    for key in args.keys:
        value = cascade.translate(key)
        if value is None:
            print(f"{key}\t")
            print(f"missing: {key}", file=sys.stderr)
            status = EXIT_MISSING
        else:
            print(f"{key}\t{value}")
    return status


def main() -> None:
    """Entry point for the ``dictcascade`` console script."""
    sys.exit(run())


if __name__ == "__main__":
    main()
