# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (c) 2024-2025 CiteTrust Contributors
"""
Unit tests for match-variation trust levels.
"""

import pytest

from citetrust_core.schema import MatchedVariation, TrustLevel
from citetrust_core.verification.trust_level import get_trust_level, is_low_trust_match


@pytest.mark.parametrize("variation,expected", [
    ("exact_full_phrase", TrustLevel.HIGH),
    ("normalized_full_phrase", TrustLevel.HIGH),
    ("exact_anchor_text", TrustLevel.MEDIUM),
    ("normalized_anchor_text", TrustLevel.MEDIUM),
    ("partial_full_phrase", TrustLevel.LOW),
    ("partial_anchor_text", TrustLevel.LOW),
    ("first_word_only", TrustLevel.LOW),
])
def test_known_variations(variation, expected):
    assert get_trust_level(variation) is expected
    assert get_trust_level(MatchedVariation(variation)) is expected


def test_absent_variation_is_neutral_medium():
    assert get_trust_level(None) is TrustLevel.MEDIUM
    assert get_trust_level() is TrustLevel.MEDIUM
    assert get_trust_level("") is TrustLevel.MEDIUM


@pytest.mark.parametrize("variation", ["fuzzy_match", "EXACT_FULL_PHRASE", 42, ["exact_full_phrase"]])
def test_unrecognized_variation_never_high(variation):
    assert get_trust_level(variation) is TrustLevel.MEDIUM


def test_is_low_trust_match():
    assert is_low_trust_match("first_word_only") is True
    assert is_low_trust_match("exact_anchor_text") is False
    assert is_low_trust_match(None) is False
