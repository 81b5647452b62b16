# Copyright (C) 2025 CiteTrust Contributors
#
# This file is part of CiteTrust Engine.
#
# CiteTrust Engine is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

import hashlib
import re

_SCHEME_RE = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.\-]*):")


def hash_candidate(text: str) -> str:
    """Hash an untrusted string for logging/storage."""
    if not text:
        return ""
    return hashlib.sha256(text.encode("utf-8", errors="surrogatepass")).hexdigest()


def fingerprint_candidate(candidate: object, *, digest_chars: int = 12) -> dict:
    """
    Describe a rejected candidate without echoing it.

    Only the scheme (if any), the length and a truncated digest are kept, so a
    log reader can correlate repeats but cannot reconstruct the payload.
    """
    if not isinstance(candidate, str):
        return {"type": type(candidate).__name__}

    m = _SCHEME_RE.match(candidate.strip())
    scheme = m.group(1).lower() if m else None
    if scheme and len(scheme) > 16:
        scheme = scheme[:16] + "…"
    return {
        "scheme": scheme,
        "len": len(candidate),
        "sha256": hash_candidate(candidate)[:digest_chars],
    }


def redact_log_data(data: dict) -> dict:
    """
    Redact raw source strings from a dictionary for logging.
    """
    if not isinstance(data, dict):
        return data

    safe_data = data.copy()
    sensitive_keys = {"src", "source", "candidate", "url", "proof_image_url", "verification_image_src"}

    for key in list(safe_data.keys()):
        if str(key).lower() in sensitive_keys:
            safe_data[key] = fingerprint_candidate(safe_data[key])

    return safe_data
