"""Utility for grading a local source file by hand.

Runs the full grading pipeline (materialize, build, run, compare) on a file
from disk, bypassing the HTTP layer, and prints the verdict JSON. Useful
for checking toolchain setup on a grader host.

Example::

    python tools/manual_runner.py \
        --lang c++ \
        --source solution.cpp \
        --stdin 0000.in \
        --expected 0000.out \
        --time-limit 2
"""

from __future__ import annotations

import argparse
import base64
import json
import logging
from pathlib import Path

from judge.constant import Language
from judge.pipeline import judge_submission
from judge.schema import SubmissionRequest


def read_optional(path: Path | None) -> str:
    if path is None:
        return ""
    return path.read_text()


def build_request(args: argparse.Namespace) -> SubmissionRequest:
    """Turn CLI arguments into a submission request."""

    return SubmissionRequest(
        problemID=args.problem,
        userID=args.user,
        inputCode=base64.b64encode(args.source.read_bytes()).decode(),
        lang=args.lang,
        input=read_optional(args.stdin),
        output=read_optional(args.expected),
        timelimit=args.time_limit,
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""

    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--lang",
        required=True,
        choices=[lang.value for lang in Language],
        help="target language",
    )
    parser.add_argument(
        "--source",
        required=True,
        type=Path,
        help="path to the source file to grade",
    )
    parser.add_argument(
        "--stdin",
        type=Path,
        help="file fed to the program's stdin (omit for empty stdin)",
    )
    parser.add_argument(
        "--expected",
        type=Path,
        help="file holding the expected output (omit for empty output)",
    )
    parser.add_argument(
        "--time-limit",
        type=int,
        default=2,
        help="time limit in seconds",
    )
    parser.add_argument("--problem", default="manual")
    parser.add_argument("--user", default="manual")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="log every pipeline stage",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""

    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    verdict = judge_submission(build_request(args))
    print(json.dumps(verdict.model_dump(mode="json"), indent=2))


if __name__ == "__main__":
    main()
