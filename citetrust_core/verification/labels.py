# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (c) 2024-2025 CiteTrust Contributors
"""
Human-readable messages for verification outcomes.
"""

from __future__ import annotations

from typing import Optional

from citetrust_core.schema.search import MatchedVariation, SearchAttempt, SearchStatus

_STATUS_MESSAGES: dict[SearchStatus, str] = {
    SearchStatus.FOUND: "Exact match found",
    SearchStatus.FOUND_ANCHOR_TEXT_ONLY: "Only the anchor text was found",
    SearchStatus.FOUND_PHRASE_MISSED_ANCHOR_TEXT: "Full phrase found",
    SearchStatus.PARTIAL_TEXT_FOUND: "Partial text match",
    SearchStatus.FOUND_ON_OTHER_PAGE: "Found on a different page",
    SearchStatus.FOUND_ON_OTHER_LINE: "Found on a different line",
    SearchStatus.FIRST_WORD_FOUND: "Only the first word matched",
    SearchStatus.NOT_FOUND: "Not found in source",
    SearchStatus.PENDING: "Searching...",
    SearchStatus.LOADING: "Searching...",
}


def get_contextual_status_message(
    status: SearchStatus | str | None,
    expected_page: Optional[int] = None,
    actual_page: Optional[int] = None,
) -> str:
    """Status message for display; "" for absent or unknown statuses."""
    if not status or not isinstance(status, str):
        return ""

    if status == SearchStatus.FOUND_ON_OTHER_PAGE and expected_page is not None and actual_page is not None:
        return f"Found on page {actual_page} (expected page {expected_page})"

    return _STATUS_MESSAGES.get(status, "")


def derive_outcome_label(
    status: SearchStatus | str | None,
    search_attempts: Optional[list[SearchAttempt]] = None,
) -> str:
    """
    Outcome label from the status and the audit trail.

    miss: "Scan complete · 4 searches"; otherwise keyed on the first
    successful attempt's variation.
    """
    attempts = search_attempts or []
    if status == SearchStatus.NOT_FOUND:
        count = len(attempts)
        return f"Scan complete · {count} {'search' if count == 1 else 'searches'}"

    successful = next((a for a in attempts if a.success), None)
    variation = successful.matched_variation if successful is not None else None
    if variation == MatchedVariation.EXACT_FULL_PHRASE:
        return "Exact match"
    if variation == MatchedVariation.NORMALIZED_FULL_PHRASE:
        return "Normalized match"
    if variation in (MatchedVariation.EXACT_ANCHOR_TEXT, MatchedVariation.NORMALIZED_ANCHOR_TEXT):
        return "Anchor text match"
    return "Match found"
