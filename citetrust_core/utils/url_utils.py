# Copyright (C) 2025 CiteTrust Contributors
#
# This file is part of CiteTrust Engine.
#
# CiteTrust Engine is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

import logging
from urllib.parse import urlsplit

from citetrust_core.constants import APPROVED_PROOF_DOMAINS, MULTI_PART_TLDS

logger = logging.getLogger(__name__)


def extract_domain(url: str) -> str:
    """
    Lowercased hostname of an absolute URL with any `www.` prefix removed.
    Returns "" when the URL has no parseable host.
    """
    if not url or not isinstance(url, str):
        return ""
    try:
        host = urlsplit(url.strip()).hostname or ""
    except ValueError:
        return ""
    host = host.lower()
    if host.startswith("www."):
        host = host[4:]
    return host


def get_registrable_domain(host: str) -> str:
    """
    Root domain of a hostname, aware of common multi-part TLDs.

    example.com -> example.com
    mobile.example.co.uk -> example.co.uk
    """
    parts = [p for p in (host or "").lower().split(".") if p]
    if len(parts) < 2:
        return ".".join(parts)
    if len(parts) >= 3 and ".".join(parts[-2:]) in MULTI_PART_TLDS:
        return ".".join(parts[-3:])
    return ".".join(parts[-2:])


def host_matches(host: str, domain: str) -> bool:
    """Exact host or a subdomain of `domain` (label-aligned, no substring tricks)."""
    host = (host or "").lower()
    domain = (domain or "").lower().lstrip(".")
    if not host or not domain:
        return False
    return host == domain or host.endswith("." + domain)


def is_domain_match(url: str, domain: str) -> bool:
    """
    Check if a URL belongs to `domain` (the domain itself or any of its subdomains).

    Does NOT match spoofed hosts such as `twitter.com.evil.com`.
    """
    extracted = extract_domain(url)
    if not extracted:
        return False
    if extracted == domain:
        return True
    return get_registrable_domain(extracted) == domain


def sanitize_url(url: str) -> str | None:
    """Return the URL if it uses http(s), otherwise None."""
    if not url or not isinstance(url, str):
        return None
    try:
        parsed = urlsplit(url.strip())
    except ValueError:
        return None
    if parsed.scheme.lower() not in ("http", "https") or not parsed.netloc:
        return None
    return url


def is_approved_domain(url: str, approved: frozenset[str] | set[str]) -> bool:
    return any(is_domain_match(url, d) for d in approved)


def is_valid_proof_url(url: str) -> str | None:
    """
    Validate a proof link before it is used as a navigation target.

    Blocks dangerous protocols (javascript:, data:, vbscript:, ...) and any
    domain outside the approved proof domains. Returns the URL or None.
    """
    if not url or not isinstance(url, str) or not url.strip():
        logger.debug("[ProofUrl] Empty proof URL")
        return None

    if not sanitize_url(url):
        logger.debug("[ProofUrl] Blocked unsafe proof URL protocol")
        return None

    if not is_approved_domain(url, APPROVED_PROOF_DOMAINS):
        logger.debug("[ProofUrl] Blocked proof URL from untrusted domain: %s", extract_domain(url))
        return None

    return url
