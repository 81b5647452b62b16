# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (c) 2024-2025 CiteTrust Contributors
"""
Trust level of a successful match, derived from its MatchedVariation.

- high: exact or normalized full phrase
- medium: exact or normalized anchor text (also the neutral default)
- low: partial phrase, partial anchor text, first word only
"""

from __future__ import annotations

from typing import Mapping, Optional, Union

from citetrust_core.schema.search import MatchedVariation
from citetrust_core.schema.status import TrustLevel

_VARIATION_TRUST: Mapping[MatchedVariation, TrustLevel] = {
    MatchedVariation.EXACT_FULL_PHRASE: TrustLevel.HIGH,
    MatchedVariation.NORMALIZED_FULL_PHRASE: TrustLevel.HIGH,
    MatchedVariation.EXACT_ANCHOR_TEXT: TrustLevel.MEDIUM,
    MatchedVariation.NORMALIZED_ANCHOR_TEXT: TrustLevel.MEDIUM,
    MatchedVariation.PARTIAL_FULL_PHRASE: TrustLevel.LOW,
    MatchedVariation.PARTIAL_ANCHOR_TEXT: TrustLevel.LOW,
    MatchedVariation.FIRST_WORD_ONLY: TrustLevel.LOW,
}


def get_trust_level(matched_variation: Optional[Union[MatchedVariation, str]] = None) -> TrustLevel:
    """
    Map a match variation to a trust level. Total: never raises.

    Absent and unrecognized tags resolve to MEDIUM ("needs review"), never HIGH.
    """
    if not matched_variation or not isinstance(matched_variation, str):
        return TrustLevel.MEDIUM
    return _VARIATION_TRUST.get(matched_variation, TrustLevel.MEDIUM)


def is_low_trust_match(matched_variation: Optional[Union[MatchedVariation, str]] = None) -> bool:
    return get_trust_level(matched_variation) is TrustLevel.LOW
