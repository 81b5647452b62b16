# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (c) 2024-2025 CiteTrust Contributors
"""
Inspection CLI Commands

Commands:
- status: Classify verification record(s) and print flags + labels
- image: Resolve the full-size evidence image for verification record(s)
- check-src: Validate image source candidates (prints reason codes only)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, NoReturn

from citetrust_core.config import CiteTrustConfig
from citetrust_core.engine import CiteTrustEngine
from citetrust_core.runtime_config import EngineRuntimeConfig
from citetrust_core.verification.source_validator import check_image_source


def _load_records(path_str: str) -> list[dict[str, Any]] | None:
    """Read a JSON file holding one record, a list, or {verifications:[...]}."""
    path = Path(path_str)
    if not path.exists():
        print(f"✗ Verification file not found: {path}", file=sys.stderr)
        return None

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        print(f"✗ Failed to parse JSON: {e}", file=sys.stderr)
        return None

    if isinstance(payload, dict) and "verifications" in payload:
        payload = payload.get("verifications")
    if isinstance(payload, dict):
        payload = [payload]

    if not isinstance(payload, list) or not all(isinstance(r, dict) for r in payload):
        print("✗ Verification JSON must be an object, a list, or {verifications:[...]}.", file=sys.stderr)
        return None

    return payload


def _engine(args: argparse.Namespace) -> CiteTrustEngine:
    runtime = EngineRuntimeConfig.load_from_env()
    if getattr(args, "verbose", False):
        runtime = replace(runtime, debug=replace(runtime.debug, log_rejected_sources=True))
    return CiteTrustEngine(CiteTrustConfig(runtime=runtime))


def _emit(out: Any) -> None:
    print(json.dumps(out, ensure_ascii=False, indent=2))


def cmd_status(args: argparse.Namespace) -> int:
    """Classify each record in the file."""
    records = _load_records(args.file)
    if records is None:
        return 1

    engine = _engine(args)
    results = [engine.describe(r) for r in records]

    _emit(results[0] if len(results) == 1 else results)
    return 0


def cmd_image(args: argparse.Namespace) -> int:
    """Resolve the evidence image for each record in the file."""
    records = _load_records(args.file)
    if records is None:
        return 1

    engine = _engine(args)
    results = []
    for record in records:
        image = engine.resolve_image(record)
        results.append(image.model_dump(mode="json", by_alias=True) if image is not None else None)

    _emit(results[0] if len(results) == 1 else results)
    return 0 if any(r is not None for r in results) else 1


def cmd_check_src(args: argparse.Namespace) -> int:
    """Validate candidates. Rejected candidates are reported by index, never echoed."""
    results = []
    for i, candidate in enumerate(args.candidates):
        check = check_image_source(candidate, log_rejections=True if args.verbose else None)
        results.append({
            "index": i,
            "trusted": check.trusted,
            "reason": check.reason.qualified(),
        })

    _emit(results)
    return 0 if all(r["trusted"] for r in results) else 1


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="citetrust",
        description="Verification trust inspection commands",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging (rejections are logged as fingerprints)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    status_parser = subparsers.add_parser(
        "status",
        help="Classify verification record(s)",
    )
    status_parser.add_argument(
        "file",
        help="Path to JSON file (object, list or {verifications:[...]})",
    )
    status_parser.set_defaults(func=cmd_status)

    image_parser = subparsers.add_parser(
        "image",
        help="Resolve the full-size evidence image",
    )
    image_parser.add_argument(
        "file",
        help="Path to JSON file (object, list or {verifications:[...]})",
    )
    image_parser.set_defaults(func=cmd_image)

    check_parser = subparsers.add_parser(
        "check-src",
        help="Validate image source candidates",
    )
    check_parser.add_argument(
        "candidates",
        nargs="+",
        help="Candidate image references",
    )
    check_parser.set_defaults(func=cmd_check_src)

    return parser


def main(argv: list[str] | None = None) -> NoReturn:
    """Main entry point for the inspection CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        exit_code = args.func(args)
        sys.exit(exit_code)
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        sys.exit(130)


if __name__ == "__main__":
    main()
