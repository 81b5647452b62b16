# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (c) 2024-2025 CiteTrust Contributors
"""
CiteTrust Core Schema Module
"""

from citetrust_core.schema.serialization import SchemaModel, dump_schema, load_schema

from citetrust_core.schema.search import (
    SearchStatus,
    MatchedVariation,
    SearchMethod,
    VariationType,
    SearchLocation,
    SearchAttempt,
)

from citetrust_core.schema.verification import (
    Dimensions,
    ScreenBox,
    TextItem,
    VerificationPage,
    DocumentVerificationResult,
    UrlVerificationResult,
    ProofHosting,
    Verification,
    as_verification,
)

from citetrust_core.schema.status import (
    TrustLevel,
    CitationStatus,
    ExpandedImageResult,
)

__all__ = [
    "SchemaModel",
    "dump_schema",
    "load_schema",
    "SearchStatus",
    "MatchedVariation",
    "SearchMethod",
    "VariationType",
    "SearchLocation",
    "SearchAttempt",
    "Dimensions",
    "ScreenBox",
    "TextItem",
    "VerificationPage",
    "DocumentVerificationResult",
    "UrlVerificationResult",
    "ProofHosting",
    "Verification",
    "as_verification",
    "TrustLevel",
    "CitationStatus",
    "ExpandedImageResult",
]
