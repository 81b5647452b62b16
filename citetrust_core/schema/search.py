# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (c) 2024-2025 CiteTrust Contributors
"""
Search Schema

A verification is produced by an external search process that tries several
strategies in turn. Each strategy leaves one SearchAttempt in an append-only
audit trail; the overall outcome is a single SearchStatus.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Union

from pydantic import Field, ValidatorFunctionWrapHandler, field_validator

from citetrust_core.schema.serialization import SchemaModel, drop_invalid


class SearchStatus(str, Enum):
    """Outcome of a single verification pass."""
    FOUND = "found"
    """Full phrase found at the expected location."""

    FOUND_PHRASE_MISSED_ANCHOR_TEXT = "found_phrase_missed_anchor_text"
    """Full phrase found; anchor-text highlighting failed."""

    FOUND_ANCHOR_TEXT_ONLY = "found_anchor_text_only"
    FOUND_ON_OTHER_PAGE = "found_on_other_page"
    FOUND_ON_OTHER_LINE = "found_on_other_line"
    PARTIAL_TEXT_FOUND = "partial_text_found"
    FIRST_WORD_FOUND = "first_word_found"
    NOT_FOUND = "not_found"
    PENDING = "pending"
    LOADING = "loading"


class MatchedVariation(str, Enum):
    """
    Which variation of the citation text a successful attempt matched.
    Trust decreases from full phrase to anchor text to partial forms.
    """
    EXACT_FULL_PHRASE = "exact_full_phrase"
    NORMALIZED_FULL_PHRASE = "normalized_full_phrase"
    EXACT_ANCHOR_TEXT = "exact_anchor_text"
    NORMALIZED_ANCHOR_TEXT = "normalized_anchor_text"
    PARTIAL_FULL_PHRASE = "partial_full_phrase"
    PARTIAL_ANCHOR_TEXT = "partial_anchor_text"
    FIRST_WORD_ONLY = "first_word_only"


class SearchMethod(str, Enum):
    EXACT_LINE_MATCH = "exact_line_match"
    LINE_WITH_BUFFER = "line_with_buffer"
    CURRENT_PAGE = "current_page"
    ANCHOR_TEXT_FALLBACK = "anchor_text_fallback"
    ADJACENT_PAGES = "adjacent_pages"
    EXPANDED_WINDOW = "expanded_window"
    REGEX_SEARCH = "regex_search"
    FIRST_WORD_FALLBACK = "first_word_fallback"
    FIRST_HALF_FALLBACK = "first_half_fallback"
    LAST_HALF_FALLBACK = "last_half_fallback"
    LONGEST_WORD_FALLBACK = "longest_word_fallback"
    CUSTOM_PHRASE_FALLBACK = "custom_phrase_fallback"
    KEYSPAN_FALLBACK = "keyspan_fallback"


class VariationType(str, Enum):
    """Kind of rewrite applied to the search phrase before matching."""
    EXACT = "exact"
    NORMALIZED = "normalized"
    CURRENCY = "currency"
    DATE = "date"
    NUMERIC = "numeric"
    SYMBOL = "symbol"
    ACCENT = "accent"


def coerce_enum(enum_cls: type[Enum], value: Any) -> Any:
    """
    Map a raw string onto `enum_cls` when it is a known member.

    Unknown strings are kept verbatim so downstream code can apply its
    neutral default instead of failing validation.
    """
    if value is None or isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value)
        except ValueError:
            return value
    return value


class SearchLocation(SchemaModel):
    page: int
    line: Optional[int] = None


class SearchAttempt(SchemaModel):
    """One search strategy tried during verification. Never mutated after append."""

    method: str = ""
    """Strategy name; a SearchMethod when recognized."""

    success: bool = False

    search_phrase: str = ""
    """The primary phrase searched for."""

    search_variations: list[str] = Field(default_factory=list)
    search_phrase_type: Optional[str] = None
    """"full_phrase" or "anchor_text"."""

    page_searched: Optional[int] = None
    line_searched: Optional[Union[int, list[int]]] = None
    search_scope: Optional[str] = None
    """"line", "page" or "document"."""

    expected_location: Optional[SearchLocation] = None
    found_location: Optional[SearchLocation] = None

    matched_variation: Optional[str] = None
    """A MatchedVariation when recognized; only meaningful when success is true."""

    matched_text: Optional[str] = None
    note: Optional[str] = None
    duration_ms: Optional[float] = None
    variation_type: Optional[str] = None
    occurrences_found: Optional[int] = None
    matched_expected_occurrence: Optional[bool] = None

    @field_validator("search_variations", mode="wrap")
    @classmethod
    def _variations(cls, v: Any, handler: ValidatorFunctionWrapHandler) -> list[str]:
        return drop_invalid(v, handler, default=[])

    @field_validator(
        "search_phrase_type",
        "page_searched",
        "line_searched",
        "search_scope",
        "expected_location",
        "found_location",
        "matched_text",
        "note",
        "duration_ms",
        "occurrences_found",
        "matched_expected_occurrence",
        mode="wrap",
    )
    @classmethod
    def _drop_malformed(cls, v: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        return drop_invalid(v, handler)

    @field_validator("matched_variation", "variation_type", mode="before")
    @classmethod
    def _tag_text(cls, v: Any) -> Any:
        return v if isinstance(v, str) else None

    @field_validator("method", mode="after")
    @classmethod
    def _known_method(cls, v: str) -> Any:
        return coerce_enum(SearchMethod, v)

    @field_validator("matched_variation", mode="after")
    @classmethod
    def _known_variation(cls, v: Optional[str]) -> Any:
        return coerce_enum(MatchedVariation, v)

    @field_validator("variation_type", mode="after")
    @classmethod
    def _known_variation_type(cls, v: Optional[str]) -> Any:
        return coerce_enum(VariationType, v)
