# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (c) 2024-2025 CiteTrust Contributors
"""
Verification Record Schema

Records are created by the external search process and may be replaced
wholesale (or mutated in place) on each progress update. The engine only
reads them. Every field is optional: absence is valid input, never an error.

Parsing is lenient. A malformed optional field falls back to its default and
a malformed list entry is dropped, so one bad field never discards the rest
of the record. Image references are kept as-is (any JSON value); deciding
whether they are usable is the source validator's job.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional

from pydantic import Field, ValidatorFunctionWrapHandler, field_validator

from citetrust_core.schema.search import SearchAttempt, SearchStatus, coerce_enum
from citetrust_core.schema.serialization import SchemaModel, drop_invalid, valid_items

logger = logging.getLogger(__name__)


class Dimensions(SchemaModel):
    width: float
    height: float


class ScreenBox(SchemaModel):
    x: float
    y: float
    width: float
    height: float


class TextItem(ScreenBox):
    """A positioned run of text on a rendered page."""
    text: Optional[str] = None


class VerificationPage(SchemaModel):
    """A rendered page image produced during the search."""

    page_number: Optional[int] = None
    is_match_page: bool = False
    """Whether this page contains the verified match."""

    source: Any = None
    """Image reference for the rendered page. Untrusted until validated."""

    dimensions: Optional[Dimensions] = None
    highlight_box: Optional[ScreenBox] = None
    text_items: Optional[list[TextItem]] = None

    @field_validator("page_number", "dimensions", "highlight_box", mode="wrap")
    @classmethod
    def _drop_malformed(cls, v: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        return drop_invalid(v, handler)

    @field_validator("is_match_page", mode="wrap")
    @classmethod
    def _match_flag(cls, v: Any, handler: ValidatorFunctionWrapHandler) -> bool:
        return drop_invalid(v, handler, default=False)

    @field_validator("text_items", mode="before")
    @classmethod
    def _text_items(cls, v: Any) -> Any:
        return None if v is None else valid_items(TextItem, v)


class DocumentVerificationResult(SchemaModel):
    verified_page_number: Optional[int] = None
    verified_line_ids: Optional[list[int]] = None
    verification_image_src: Any = None
    """Legacy keyhole image: data URI, URL or path. Untrusted until validated."""

    verification_image_dimensions: Optional[Dimensions] = None

    @field_validator("verified_page_number", "verified_line_ids", "verification_image_dimensions", mode="wrap")
    @classmethod
    def _drop_malformed(cls, v: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        return drop_invalid(v, handler)


class UrlVerificationResult(SchemaModel):
    verified_url: Optional[str] = None
    resolved_url: Optional[str] = None
    http_status: Optional[int] = None
    url_access_status: Optional[str] = None
    verified_title: Optional[str] = None
    web_page_screenshot_base64: Any = None
    """Raw base64 or a complete data URI."""

    @field_validator(
        "verified_url", "resolved_url", "http_status", "url_access_status", "verified_title", mode="wrap"
    )
    @classmethod
    def _drop_malformed(cls, v: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        return drop_invalid(v, handler)


class ProofHosting(SchemaModel):
    proof_id: Optional[str] = None
    proof_url: Optional[str] = None
    proof_image_url: Any = None

    @field_validator("proof_id", "proof_url", mode="wrap")
    @classmethod
    def _drop_malformed(cls, v: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        return drop_invalid(v, handler)


class Verification(SchemaModel):
    """Raw, multi-field verification result for one citation."""

    status: Optional[str] = None
    """A SearchStatus when recognized; unknown tags are kept verbatim."""

    search_attempts: list[SearchAttempt] = Field(default_factory=list)
    document: Optional[DocumentVerificationResult] = None
    url: Optional[UrlVerificationResult] = None
    proof: Optional[ProofHosting] = None
    pages: Optional[list[VerificationPage]] = None

    verified_full_phrase: Optional[str] = None
    verified_anchor_text: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def _status_text(cls, v: Any) -> Any:
        return v if isinstance(v, str) else None

    @field_validator("status", mode="after")
    @classmethod
    def _known_status(cls, v: Optional[str]) -> Any:
        return coerce_enum(SearchStatus, v)

    @field_validator("search_attempts", mode="before")
    @classmethod
    def _attempts(cls, v: Any) -> Any:
        return valid_items(SearchAttempt, v)

    @field_validator("pages", mode="before")
    @classmethod
    def _pages(cls, v: Any) -> Any:
        return None if v is None else valid_items(VerificationPage, v)

    @field_validator("document", "url", "proof", "verified_full_phrase", "verified_anchor_text", mode="wrap")
    @classmethod
    def _drop_malformed(cls, v: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        return drop_invalid(v, handler)


def as_verification(value: Any) -> Optional[Verification]:
    """Accept a model, a raw mapping (snake or camel keys) or None; anything else reads as absent."""
    if value is None or isinstance(value, Verification):
        return value
    if not isinstance(value, Mapping):
        logger.debug("[Schema] Ignoring non-mapping verification record: %s", type(value).__name__)
        return None
    return Verification.from_dict(value)
