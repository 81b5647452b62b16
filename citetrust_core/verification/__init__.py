# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (c) 2024-2025 CiteTrust Contributors
"""
Verification trust engine: trust levels, status classification, image
source validation and evidence image resolution.
"""

from citetrust_core.verification.trust_level import get_trust_level, is_low_trust_match
from citetrust_core.verification.citation_status import (
    PARTIAL_STATUSES,
    get_status_from_verification,
    get_status_label,
    is_partial_search_status,
)
from citetrust_core.verification.source_validator import (
    SourceCheck,
    check_image_source,
    is_trusted_image_source,
)
from citetrust_core.verification.image_resolver import (
    normalize_screenshot_src,
    resolve_evidence_src,
    resolve_expanded_image,
)

__all__ = [
    "get_trust_level",
    "is_low_trust_match",
    "PARTIAL_STATUSES",
    "get_status_from_verification",
    "get_status_label",
    "is_partial_search_status",
    "SourceCheck",
    "check_image_source",
    "is_trusted_image_source",
    "normalize_screenshot_src",
    "resolve_evidence_src",
    "resolve_expanded_image",
]
