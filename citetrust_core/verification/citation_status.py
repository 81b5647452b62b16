# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (c) 2024-2025 CiteTrust Contributors
"""
Citation status derivation.

Every caller that needs to know "is this a partial match?" goes through
PARTIAL_STATUSES / is_partial_search_status(); nothing else re-derives it.

Classification is recomputed on every call. Verification records are
replaced or mutated in place by the polling process between renders, so
results must never be cached by object identity.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, FrozenSet, Optional

from citetrust_core.schema.search import SearchAttempt, SearchStatus
from citetrust_core.schema.status import CitationStatus
from citetrust_core.schema.verification import Verification, as_verification
from citetrust_core.verification.trust_level import is_low_trust_match

logger = logging.getLogger(__name__)

# Something was found, but not at full fidelity (amber treatment).
PARTIAL_STATUSES: FrozenSet[SearchStatus] = frozenset({
    SearchStatus.FOUND_ANCHOR_TEXT_ONLY,
    SearchStatus.FOUND_ON_OTHER_PAGE,
    SearchStatus.FOUND_ON_OTHER_LINE,
    SearchStatus.PARTIAL_TEXT_FOUND,
    SearchStatus.FIRST_WORD_FOUND,
})

# Full phrase found at the expected location (green treatment).
FULL_MATCH_STATUSES: FrozenSet[SearchStatus] = frozenset({
    SearchStatus.FOUND,
    SearchStatus.FOUND_PHRASE_MISSED_ANCHOR_TEXT,
})

PENDING_STATUSES: FrozenSet[SearchStatus] = frozenset({
    SearchStatus.PENDING,
    SearchStatus.LOADING,
})

_NO_FLAGS = CitationStatus()


def is_partial_search_status(status: SearchStatus | str | None) -> bool:
    if not status or not isinstance(status, str):
        return False
    return status in PARTIAL_STATUSES


def _known_status(status: Any) -> Optional[SearchStatus]:
    if isinstance(status, SearchStatus):
        return status
    if isinstance(status, str):
        try:
            return SearchStatus(status)
        except ValueError:
            return None
    return None


def has_low_trust_match(attempts: list[SearchAttempt] | None) -> bool:
    """True if any successful attempt matched through a low-trust variation."""
    return any(a.success and is_low_trust_match(a.matched_variation) for a in attempts or ())


def get_status_from_verification(
    verification: Verification | Mapping[str, Any] | None,
) -> CitationStatus:
    """
    Classify a verification into the four CitationStatus flags.

    - no verification / no status -> no flags (not attempted, distinct from pending)
    - not_found -> miss
    - pending, loading -> pending
    - partial statuses, or a full match reached through a low-trust
      variation -> verified + partial
    - found, found_phrase_missed_anchor_text -> verified
    - unknown status -> no flags
    """
    verification = as_verification(verification)
    raw_status = verification.status if verification is not None else None
    if not raw_status:
        return _NO_FLAGS

    status = _known_status(raw_status)
    if status is None:
        logger.debug("[Status] Unrecognized verification status, no flags set")
        return _NO_FLAGS

    if status is SearchStatus.NOT_FOUND:
        return CitationStatus(is_miss=True)
    if status in PENDING_STATUSES:
        return CitationStatus(is_pending=True)

    is_partial_match = is_partial_search_status(status) or has_low_trust_match(verification.search_attempts)
    is_verified = status in FULL_MATCH_STATUSES or is_partial_match

    return CitationStatus(is_verified=is_verified, is_partial_match=is_partial_match)


def get_status_label(status: CitationStatus) -> str:
    """Human-readable label for a CitationStatus."""
    if status.is_verified and not status.is_partial_match:
        return "Verified"
    if status.is_partial_match:
        return "Partial Match"
    if status.is_miss:
        return "Not Found"
    if status.is_pending:
        return "Verifying..."
    return ""
