"""Command-line SHA-256 hashing built on the streaming `SHA256State` engine.

Usage:
    python sha256_cli.py path/to/file [more/files ...]
    python sha256_cli.py -s "message"
    python sha256_cli.py - < data.bin           # read stdin
    python sha256_cli.py --format yaml *.txt    # YAML list of results

Each file is read in `--chunk-size` byte pieces and fed to one shared engine,
which resets itself after every digest. Text output is one
``<digest> <source>`` line per input. Files that cannot be read are reported
and skipped; the exit status is 1 if any input failed.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Dict, List, Optional

import yaml

from sha256_state import DEFAULT_CHUNK_SIZE, SHA256State, hash_stream


logger = logging.getLogger(__name__)

STDIN_NAME = "-"


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer (got {value})")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sha256-stream",
        description="Compute SHA-256 digests of files, stdin or a string",
    )
    parser.add_argument(
        "files",
        nargs="*",
        help="Files to hash ('-' reads standard input)",
    )
    parser.add_argument(
        "-s",
        "--string",
        dest="strings",
        action="append",
        default=[],
        metavar="TEXT",
        help="Hash the UTF-8 encoding of TEXT (may be repeated)",
    )
    parser.add_argument(
        "--chunk-size",
        type=_positive_int,
        default=DEFAULT_CHUNK_SIZE,
        help=f"Bytes read per update call (default: {DEFAULT_CHUNK_SIZE})",
    )
    parser.add_argument(
        "--format",
        choices=["text", "yaml"],
        default="text",
        help="Output format: text or yaml (default: text)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="-v for progress, -vv for per-block detail, -vvv to trace rounds",
    )
    return parser


def configure_logging(verbosity: int) -> None:
    """Map the `-v` count onto a root logging level."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def hash_file(filename: str, state: SHA256State, chunk_size: int) -> str:
    """Hash one file (or stdin for ``-``) with a shared engine.

    Raises:
        OSError: The file could not be opened or read.
    """
    logger.debug("Hashing file %s", filename)
    if filename == STDIN_NAME:
        return hash_stream(sys.stdin.buffer, chunk_size, state)
    with open(filename, "rb") as f:
        return hash_stream(f, chunk_size, state)


def _emit(results: List[Dict[str, str]], output_format: str) -> None:
    if output_format == "yaml":
        sys.stdout.write(yaml.safe_dump(results, default_flow_style=False, sort_keys=False))
        return
    for entry in results:
        print(f"{entry['digest']} {entry['source']}")


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point; returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if not args.files and not args.strings:
        parser.print_usage(sys.stderr)
        sys.stderr.write("error: give at least one file or --string\n")
        return 2

    state = SHA256State(trace_rounds=args.verbose >= 3)
    results: List[Dict[str, str]] = []
    failed = 0

    for text in args.strings:
        state.update(text.encode("utf-8"))
        results.append({"source": repr(text), "digest": state.digest()})

    for filename in args.files:
        try:
            digest_hex = hash_file(filename, state, args.chunk_size)
        except OSError as e:
            logger.error("Failed to read file %s: %s", filename, e)
            sys.stderr.write(f"Error reading file '{filename}': {e}\n")
            # Drop whatever was buffered before the read failed.
            state.reset()
            failed += 1
            continue
        logger.info("Hashed %s", filename)
        results.append({"source": filename, "digest": digest_hex})

    _emit(results, args.format)
    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
