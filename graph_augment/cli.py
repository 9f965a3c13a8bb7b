"""
Hook entry point: host event on stdin, context record on stdout.

stdout carries the host contract only, so all logging goes to stderr.
Exit 0 always; a failed augmentation must never block the tool call.
"""

import argparse
import json
import logging
import os
import sys
from typing import List, Optional, TextIO

from .gate import AugmentationGate

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger("graph_augment")


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATE, stream=sys.stderr)


def read_event(stream: TextIO) -> Optional[dict]:
    """Decode the host's JSON event; None for empty or malformed input."""
    try:
        data = json.loads(stream.read())
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def run(stdin: TextIO, stdout: TextIO, gate: Optional[AugmentationGate] = None) -> None:
    event = read_event(stdin)
    if event is None:
        logger.debug("No hook event on stdin")
        return

    output = (gate or AugmentationGate()).handle_payload(event)
    if output is not None:
        stdout.write(json.dumps(output) + "\n")
        stdout.flush()


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="PreToolUse hook: add code-graph context to Grep, Glob and rg/grep searches",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log gate decisions to stderr (also enabled by GRAPH_AUGMENT_DEBUG)",
    )
    args = parser.parse_args(argv)

    setup_logging(args.verbose or bool(os.environ.get("GRAPH_AUGMENT_DEBUG")))

    try:
        run(sys.stdin, sys.stdout)
    except Exception as exc:
        # Never crash, never block the tool call
        logger.error("graph-augment hook error: %s", exc)

    return 0


if __name__ == "__main__":
    sys.exit(main())
