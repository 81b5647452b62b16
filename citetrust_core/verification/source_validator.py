# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (c) 2024-2025 CiteTrust Contributors
"""
Image source validation.

This is the single choke point for every string that will be placed into an
image-rendering sink. Callers must validate each candidate here, whichever
tier produced it.

Decision procedure (first matching rule decides, default is reject):

1. Protocol-relative references (`//host/...`) -> reject.
2. `data:` URIs -> accept only allow-listed raster subtypes (never SVG).
3. `javascript:` / `vbscript:` / any scheme not handled below -> reject.
4. `https:` -> accept only an allow-listed host or one of its subdomains.
5. `http:` -> accept only localhost.
6. Root-relative paths -> accept unless the fully percent-decoded path has
   a `..` segment.
7. Anything else -> reject.

Pure and deterministic. The only side effect is an optional DEBUG
diagnostic on rejection, which never includes the raw candidate.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import unquote, urlsplit

from citetrust_core.constants import (
    DANGEROUS_SCHEMES,
    LOCALHOST_HOSTS,
    MAX_PERCENT_DECODE_ROUNDS,
    SAFE_DATA_IMAGE_SUBTYPES,
    TRUSTED_IMAGE_HOSTS,
)
from citetrust_core.utils.runtime import diagnostics_enabled
from citetrust_core.utils.security import fingerprint_candidate
from citetrust_core.utils.url_utils import host_matches
from citetrust_core.verification.reason_codes import ReasonCodes, ReasonCodeSpec

logger = logging.getLogger(__name__)

_SCHEME_RE = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.\-]*):")
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")
_HOST_RE = re.compile(r"^[a-z0-9.-]+$")
# data:[<mediatype>][;params][;base64],<payload>
_DATA_MEDIATYPE_RE = re.compile(r"^data:([^;,]*)", re.IGNORECASE)


@dataclass(frozen=True)
class SourceCheck:
    trusted: bool
    reason: ReasonCodeSpec

    def __bool__(self) -> bool:
        return self.trusted


def _accept(reason: ReasonCodeSpec) -> SourceCheck:
    return SourceCheck(trusted=True, reason=reason)


def _reject(reason: ReasonCodeSpec) -> SourceCheck:
    return SourceCheck(trusted=False, reason=reason)


def _check_data_uri(candidate: str) -> SourceCheck:
    m = _DATA_MEDIATYPE_RE.match(candidate)
    mediatype = (m.group(1) if m else "").strip().lower()
    kind, _, subtype = mediatype.partition("/")
    if kind == "image" and subtype in SAFE_DATA_IMAGE_SUBTYPES:
        return _accept(ReasonCodes.SAFE_DATA_IMAGE)
    return _reject(ReasonCodes.UNSAFE_DATA_SUBTYPE)


def _check_absolute_url(candidate: str, scheme: str) -> SourceCheck:
    # Split the way a browser does: "\" is a path separator in http(s) URLs.
    try:
        parsed = urlsplit(candidate.replace("\\", "/"))
        host = (parsed.hostname or "").lower()
        # Accessing .port validates it; a bad port raises ValueError.
        _ = parsed.port
    except ValueError:
        return _reject(ReasonCodes.MALFORMED_URL)

    if not host or not _HOST_RE.match(host):
        return _reject(ReasonCodes.MALFORMED_URL)
    if parsed.username is not None or parsed.password is not None:
        return _reject(ReasonCodes.USERINFO)

    if scheme == "https":
        if any(host_matches(host, trusted) for trusted in TRUSTED_IMAGE_HOSTS):
            return _accept(ReasonCodes.TRUSTED_HTTPS_HOST)
        return _reject(ReasonCodes.UNTRUSTED_HOST)

    if host in LOCALHOST_HOSTS:
        return _accept(ReasonCodes.LOCALHOST_HTTP)
    return _reject(ReasonCodes.PLAINTEXT_HOST)


def fully_decode(path: str, *, max_rounds: int = MAX_PERCENT_DECODE_ROUNDS) -> str:
    """
    Percent-decode until a fixed point (bounded), so double and partial
    encodings (`%252e%252e`, `.%2e`) decode to what a server may eventually see.
    """
    current = path
    for _ in range(max_rounds):
        decoded = unquote(current)
        if decoded == current:
            break
        current = decoded
    return current


def has_traversal_segment(path: str) -> bool:
    decoded = fully_decode(path).replace("\\", "/")
    return any(segment == ".." for segment in decoded.split("/"))


def _check_root_relative(candidate: str) -> SourceCheck:
    path = candidate.split("#", 1)[0].split("?", 1)[0]
    if has_traversal_segment(path):
        return _reject(ReasonCodes.PATH_TRAVERSAL)
    if _CONTROL_RE.search(fully_decode(path)):
        return _reject(ReasonCodes.CONTROL_CHARS)
    return _accept(ReasonCodes.SAME_ORIGIN_PATH)


def _classify(candidate: Any) -> SourceCheck:
    if not isinstance(candidate, str):
        return _reject(ReasonCodes.NOT_A_STRING)

    s = candidate.strip()
    if not s:
        return _reject(ReasonCodes.EMPTY)
    # Browsers drop tabs/newlines inside URLs ("java\tscript:"), so refuse them outright.
    if _CONTROL_RE.search(s):
        return _reject(ReasonCodes.CONTROL_CHARS)

    # Browsers read "\" as "/" in special-scheme URLs ("/\evil.com" is protocol-relative).
    normalized = s.replace("\\", "/")
    if normalized.startswith("//"):
        return _reject(ReasonCodes.PROTOCOL_RELATIVE)

    m = _SCHEME_RE.match(s)
    if m:
        scheme = m.group(1).lower()
        if scheme == "data":
            return _check_data_uri(s)
        if scheme in DANGEROUS_SCHEMES:
            return _reject(ReasonCodes.DANGEROUS_SCHEME)
        if scheme in ("https", "http"):
            return _check_absolute_url(s, scheme)
        return _reject(ReasonCodes.UNSUPPORTED_SCHEME)

    if normalized.startswith("/"):
        return _check_root_relative(s)

    return _reject(ReasonCodes.NOT_ROOTED)


def check_image_source(
    candidate: Any,
    *,
    log_rejections: Optional[bool] = None,
    digest_chars: int = 12,
) -> SourceCheck:
    """
    Decide whether `candidate` may be placed into an image sink, with the reason.

    `log_rejections=None` defers to the environment (local runs or
    CITETRUST_LOG_REJECTED_SOURCES=1).
    """
    result = _classify(candidate)
    if not result.trusted:
        enabled = diagnostics_enabled() if log_rejections is None else log_rejections
        if enabled:
            logger.debug(
                "[ImageSrc] Rejected candidate: reason=%s %s",
                result.reason.qualified(),
                fingerprint_candidate(candidate, digest_chars=digest_chars),
            )
    return result


def is_trusted_image_source(candidate: Any, *, log_rejections: Optional[bool] = None) -> bool:
    """Boolean facade over check_image_source()."""
    return check_image_source(candidate, log_rejections=log_rejections).trusted
