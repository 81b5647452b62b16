# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (c) 2024-2025 CiteTrust Contributors

from typing import Any

import pytest

from citetrust_core.config import CiteTrustConfig
from citetrust_core.engine import CiteTrustEngine
from citetrust_core.runtime_config import EngineRuntimeConfig

from tests.fixtures.image_sources import (
    RELATIVE_PATH_IMG,
    TRUSTED_CDN_IMG,
    TRUSTED_IMG,
    TRUSTED_PROOF_IMG,
)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    """Keep developer env flags from leaking into tests."""
    for name in (
        "CITETRUST_ENV",
        "ENV",
        "CITETRUST_LOG_REJECTED_SOURCES",
        "CITETRUST_ENGINE_DEBUG",
        "CITETRUST_DESCRIBE_LABELS",
        "CITETRUST_EVIDENCE_CROP",
        "CITETRUST_FINGERPRINT_CHARS",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def engine() -> CiteTrustEngine:
    return CiteTrustEngine(CiteTrustConfig(runtime=EngineRuntimeConfig.defaults()))


@pytest.fixture
def make_attempt():
    def _make(success: bool = True, variation: str | None = None, **extra: Any) -> dict[str, Any]:
        attempt: dict[str, Any] = {
            "method": extra.pop("method", "exact_line_match"),
            "success": success,
            "searchPhrase": extra.pop("search_phrase", "revenue grew 12%"),
        }
        if variation is not None:
            attempt["matchedVariation"] = variation
        attempt.update(extra)
        return attempt

    return _make


@pytest.fixture
def full_verification() -> dict[str, Any]:
    """A found verification with all three image tiers present and valid."""
    return {
        "status": "found",
        "searchAttempts": [
            {
                "method": "exact_line_match",
                "success": True,
                "searchPhrase": "revenue grew 12%",
                "matchedVariation": "exact_full_phrase",
                "pageSearched": 2,
            }
        ],
        "pages": [
            {"pageNumber": 1, "isMatchPage": False, "source": TRUSTED_CDN_IMG},
            {
                "pageNumber": 2,
                "isMatchPage": True,
                "source": TRUSTED_IMG,
                "dimensions": {"width": 800, "height": 1200},
                "highlightBox": {"x": 10, "y": 20, "width": 100, "height": 50},
                "textItems": [{"x": 10, "y": 20, "width": 100, "height": 12, "text": "revenue grew 12%"}],
            },
        ],
        "proof": {"proofImageUrl": TRUSTED_PROOF_IMG},
        "document": {
            "verifiedPageNumber": 2,
            "verificationImageSrc": RELATIVE_PATH_IMG,
            "verificationImageDimensions": {"width": 400, "height": 120},
        },
    }
