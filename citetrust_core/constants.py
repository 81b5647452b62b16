# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (c) 2024-2025 CiteTrust Contributors
"""
Compiled-in trust boundaries.

These lists are reviewed at build time. Nothing at runtime (env, config,
caller arguments) can extend them.
"""

from typing import FrozenSet, Tuple

# Hosts whose HTTPS images may be rendered. A candidate host matches when it
# equals an entry or is a subdomain of it (api., cdn., proof., ...).
TRUSTED_IMAGE_HOSTS: Tuple[str, ...] = (
    "deepcitation.com",
)

# Raster subtypes accepted in `data:image/<subtype>` URIs. SVG is never here.
SAFE_DATA_IMAGE_SUBTYPES: FrozenSet[str] = frozenset({
    "png",
    "jpeg",
    "jpg",
    "gif",
    "webp",
    "avif",
})

# Plain-HTTP hosts accepted for local development.
LOCALHOST_HOSTS: FrozenSet[str] = frozenset({"localhost"})

# Domains allowed for proof links (anchor targets, not images).
APPROVED_PROOF_DOMAINS: FrozenSet[str] = frozenset({"deepcitation.com"})

# Schemes that execute code when placed in a URL sink.
DANGEROUS_SCHEMES: FrozenSet[str] = frozenset({"javascript", "vbscript"})

# Multi-part public suffixes used for root-domain extraction.
MULTI_PART_TLDS: FrozenSet[str] = frozenset({
    "co.uk", "co.nz", "co.jp", "co.in", "co.id", "co.th", "co.za",
    "com.au", "com.br", "com.mx", "com.ar", "com.hk",
    "gov.uk", "gov.au", "ac.uk", "ac.nz", "org.uk", "org.au",
})

# Upper bound on repeated percent-decoding of a relative path.
MAX_PERCENT_DECODE_ROUNDS: int = 5

# Prefix of a screenshot payload checked for base64 shape; payloads can be megabytes.
BASE64_VALIDATION_PREFIX_LENGTH: int = 100
