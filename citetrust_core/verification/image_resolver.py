# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (c) 2024-2025 CiteTrust Contributors
"""
Evidence image resolution.

resolve_expanded_image() walks a fixed tier list and returns the first
candidate that passes source validation:

1. match page   (verification.pages[is_match_page].source) + page overlay data
2. proof image  (verification.proof.proof_image_url)
3. legacy image (verification.document.verification_image_src)

A present-but-invalid candidate is skipped, not fatal: resolution moves on
to the next tier. None means "no evidence available"; callers degrade to a
text-only presentation and must not re-validate or retry.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any, Callable, Optional

from citetrust_core.constants import BASE64_VALIDATION_PREFIX_LENGTH
from citetrust_core.schema.status import ExpandedImageResult
from citetrust_core.schema.verification import Verification, VerificationPage, as_verification
from citetrust_core.verification.source_validator import is_trusted_image_source

logger = logging.getLogger(__name__)

_BASE64_RE = re.compile(r"^[A-Za-z0-9+/]+(={0,2})?$")

Validator = Callable[[Any], bool]


def _match_page(verification: Verification) -> Optional[VerificationPage]:
    return next((p for p in verification.pages or () if p.is_match_page), None)


def _from_match_page(verification: Verification, is_valid: Validator) -> Optional[ExpandedImageResult]:
    page = _match_page(verification)
    if page is None or not page.source or not is_valid(page.source):
        return None
    return ExpandedImageResult(
        src=page.source,
        dimensions=page.dimensions,
        highlight_box=page.highlight_box,
        text_items=list(page.text_items or []),
    )


def _from_proof(verification: Verification, is_valid: Validator) -> Optional[ExpandedImageResult]:
    src = verification.proof.proof_image_url if verification.proof else None
    if not src or not is_valid(src):
        return None
    return ExpandedImageResult(src=src)


def _from_legacy_image(verification: Verification, is_valid: Validator) -> Optional[ExpandedImageResult]:
    document = verification.document
    src = document.verification_image_src if document else None
    if not src or not is_valid(src):
        return None
    return ExpandedImageResult(src=src, dimensions=document.verification_image_dimensions)


_TIERS: tuple[tuple[str, Callable[[Verification, Validator], Optional[ExpandedImageResult]]], ...] = (
    ("match_page", _from_match_page),
    ("proof_image", _from_proof),
    ("legacy_image", _from_legacy_image),
)


def resolve_expanded_image(
    verification: Verification | Mapping[str, Any] | None,
    *,
    is_valid: Validator = is_trusted_image_source,
) -> Optional[ExpandedImageResult]:
    """Best available full-size evidence image, or None."""
    verification = as_verification(verification)
    if verification is None:
        return None

    for tier, resolve in _TIERS:
        result = resolve(verification, is_valid)
        if result is not None:
            logger.debug("[ExpandedImage] Resolved from tier=%s", tier)
            return result

    return None


def normalize_screenshot_src(raw: str) -> str:
    """
    Turn a page screenshot field into a data URI.

    The field arrives either as a complete data URI (returned as-is) or as raw
    base64 (wrapped as JPEG). Only a prefix is checked for base64 shape; the
    result still has to pass source validation before use.

    Raises ValueError for empty or obviously non-base64 input.
    """
    if not raw or not isinstance(raw, str):
        raise ValueError("Invalid screenshot data: expected a non-empty string")

    if raw.startswith("data:"):
        return raw

    if not _BASE64_RE.match(raw[:BASE64_VALIDATION_PREFIX_LENGTH]):
        raise ValueError("Invalid screenshot data: not base64")

    return f"data:image/jpeg;base64,{raw}"


def resolve_evidence_src(
    verification: Verification | Mapping[str, Any] | None,
    *,
    is_valid: Validator = is_trusted_image_source,
) -> Optional[str]:
    """
    Evidence crop ("keyhole") image source.

    A present document image decides on its own (invalid -> None); otherwise
    the URL page screenshot is used.
    """
    verification = as_verification(verification)
    if verification is None:
        return None

    if verification.document and verification.document.verification_image_src:
        src = verification.document.verification_image_src
        return src if is_valid(src) else None

    raw = verification.url.web_page_screenshot_base64 if verification.url else None
    if not raw:
        return None
    try:
        src = normalize_screenshot_src(raw)
    except ValueError as e:
        logger.debug("[EvidenceSrc] Screenshot normalization failed: %s", e)
        return None
    return src if is_valid(src) else None
