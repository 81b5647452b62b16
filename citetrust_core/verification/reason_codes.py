# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (c) 2024-2025 CiteTrust Contributors
"""
Reason code taxonomy for image source decisions.

Codes are versioned so diagnostic logs stay comparable as the rules evolve.
"""

from __future__ import annotations

from dataclasses import dataclass

REASON_CODE_VERSION = "v1"


@dataclass(frozen=True)
class ReasonCodeSpec:
    code: str
    label: str
    action: str

    def qualified(self) -> str:
        return f"{REASON_CODE_VERSION}.{self.code}"


class ReasonCodes:
    """Canonical reason codes emitted by the source validator."""

    # Accepted
    TRUSTED_HTTPS_HOST = ReasonCodeSpec(
        code="src.https_trusted_host",
        label="HTTPS URL on an allow-listed host",
        action="accept",
    )
    LOCALHOST_HTTP = ReasonCodeSpec(
        code="src.http_localhost",
        label="Plain HTTP on localhost (development)",
        action="accept",
    )
    SAFE_DATA_IMAGE = ReasonCodeSpec(
        code="src.data_raster_image",
        label="Data URI with an allow-listed raster subtype",
        action="accept",
    )
    SAME_ORIGIN_PATH = ReasonCodeSpec(
        code="src.root_relative_path",
        label="Root-relative same-origin path",
        action="accept",
    )

    # Rejected
    NOT_A_STRING = ReasonCodeSpec(
        code="src.not_a_string",
        label="Candidate is not a string",
        action="reject",
    )
    EMPTY = ReasonCodeSpec(
        code="src.empty",
        label="Candidate is empty",
        action="reject",
    )
    CONTROL_CHARS = ReasonCodeSpec(
        code="src.control_chars",
        label="Candidate contains control characters",
        action="reject",
    )
    DANGEROUS_SCHEME = ReasonCodeSpec(
        code="src.dangerous_scheme",
        label="Script-capable scheme",
        action="reject",
    )
    UNSUPPORTED_SCHEME = ReasonCodeSpec(
        code="src.unsupported_scheme",
        label="Scheme not on the allow-list",
        action="reject",
    )
    PROTOCOL_RELATIVE = ReasonCodeSpec(
        code="src.protocol_relative",
        label="Protocol-relative reference to an arbitrary host",
        action="reject",
    )
    UNSAFE_DATA_SUBTYPE = ReasonCodeSpec(
        code="src.data_unsafe_subtype",
        label="Data URI is not an allow-listed raster image (SVG, HTML, ...)",
        action="reject",
    )
    UNTRUSTED_HOST = ReasonCodeSpec(
        code="src.https_untrusted_host",
        label="HTTPS host not on the allow-list",
        action="reject",
    )
    PLAINTEXT_HOST = ReasonCodeSpec(
        code="src.http_non_local",
        label="Plain HTTP to a non-local host",
        action="reject",
    )
    USERINFO = ReasonCodeSpec(
        code="src.userinfo",
        label="URL carries embedded credentials",
        action="reject",
    )
    MALFORMED_URL = ReasonCodeSpec(
        code="src.malformed_url",
        label="Absolute URL could not be parsed",
        action="reject",
    )
    PATH_TRAVERSAL = ReasonCodeSpec(
        code="src.path_traversal",
        label="Path contains a '..' segment after decoding",
        action="reject",
    )
    NOT_ROOTED = ReasonCodeSpec(
        code="src.not_root_relative",
        label="Relative reference that is not rooted at '/'",
        action="reject",
    )
