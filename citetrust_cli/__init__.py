# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (c) 2024-2025 CiteTrust Contributors
"""
CiteTrust CLI Module

Inspect verification records from the command line.

Commands:
- status <file>: Classify verification record(s)
- image <file>: Resolve the full-size evidence image
- check-src <candidate>...: Validate image source candidates

Usage:
    python -m citetrust_cli status verification.json
    python -m citetrust_cli image verification.json
    python -m citetrust_cli check-src "/demo/page-1.avif" "//evil.com/x.png"
"""

from citetrust_cli.inspect_cmd import main

__all__ = ["main"]
