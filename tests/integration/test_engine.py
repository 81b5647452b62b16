# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (c) 2024-2025 CiteTrust Contributors
"""
End-to-end checks through CiteTrustEngine: classification, image
resolution, labels and rejection diagnostics together.
"""

import logging

import pytest

from citetrust_core import CLASSIFIER_VERSION, SOURCE_POLICY_VERSION, __version__
from citetrust_core.config import CiteTrustConfig
from citetrust_core.engine import CiteTrustEngine
from citetrust_core.runtime_config import EngineDebugFlags, EngineFeatureFlags, EngineRuntimeConfig
from citetrust_core.schema import CitationStatus
from tests.fixtures.image_sources import (
    JAVASCRIPT_URI,
    RELATIVE_PATH_IMG,
    TRUSTED_IMG,
    TRUSTED_PROOF_IMG,
    UNTRUSTED_HTTPS_IMG,
)

VALIDATOR_LOGGER = "citetrust_core.verification.source_validator"


def _engine(features=None, debug=None) -> CiteTrustEngine:
    runtime = EngineRuntimeConfig(features=features or EngineFeatureFlags(), debug=debug or EngineDebugFlags())
    return CiteTrustEngine(CiteTrustConfig(runtime=runtime))


class TestClassifyAndResolve:

    def test_found_record(self, engine, full_verification):
        assert engine.classify(full_verification) == CitationStatus(is_verified=True)
        assert engine.resolve_image(full_verification).src == TRUSTED_IMG

    def test_nothing_yet(self, engine):
        assert engine.classify(None) == CitationStatus()
        assert engine.resolve_image(None) is None
        assert engine.resolve_evidence(None) is None

    def test_record_mutated_between_calls(self, engine, full_verification):
        assert engine.classify(full_verification).is_partial_match is False
        full_verification["status"] = "found_on_other_line"
        assert engine.classify(full_verification).is_partial_match is True
        full_verification["pages"][1]["source"] = UNTRUSTED_HTTPS_IMG
        full_verification["proof"]["proofImageUrl"] = JAVASCRIPT_URI
        assert engine.resolve_image(full_verification).src == RELATIVE_PATH_IMG

    def test_is_trusted_source(self, engine):
        assert engine.is_trusted_source(TRUSTED_IMG) is True
        assert engine.is_trusted_source(JAVASCRIPT_URI) is False
        assert engine.is_trusted_source(None) is False

    def test_evidence_crop(self, engine, full_verification):
        assert engine.resolve_evidence(full_verification) == RELATIVE_PATH_IMG

    def test_evidence_crop_disabled(self, full_verification):
        engine = _engine(features=EngineFeatureFlags(evidence_crop=False))
        assert engine.resolve_evidence(full_verification) is None


class TestDescribe:

    def test_verified(self, engine, full_verification):
        out = engine.describe(full_verification)
        assert out == {
            "status": {"is_verified": True, "is_miss": False, "is_partial_match": False, "is_pending": False},
            "label": "Verified",
            "message": "Exact match found",
            "outcome": "Exact match",
            "trust_level": "high",
            "proof_url": None,
            "checks": {
                "engine_version": __version__,
                "classifier_version": CLASSIFIER_VERSION,
                "source_policy_version": SOURCE_POLICY_VERSION,
            },
        }

    def test_other_page(self, engine, make_attempt):
        attempt = make_attempt(
            variation="exact_full_phrase",
            expectedLocation={"page": 3},
            foundLocation={"page": 5},
        )
        out = engine.describe({"status": "found_on_other_page", "searchAttempts": [attempt]})
        assert out["label"] == "Partial Match"
        assert out["message"] == "Found on page 5 (expected page 3)"

    def test_low_trust_promotes_to_partial(self, engine, make_attempt):
        out = engine.describe({"status": "found", "searchAttempts": [make_attempt(variation="first_word_only")]})
        assert out["status"]["is_partial_match"] is True
        assert out["label"] == "Partial Match"
        assert out["trust_level"] == "low"

    def test_miss(self, engine, make_attempt):
        attempts = [make_attempt(success=False), make_attempt(success=False)]
        out = engine.describe({"status": "not_found", "searchAttempts": attempts})
        assert out["status"]["is_miss"] is True
        assert out["label"] == "Not Found"
        assert out["outcome"] == "Scan complete · 2 searches"
        assert out["trust_level"] is None

    def test_pending(self, engine):
        out = engine.describe({"status": "pending"})
        assert out["label"] == "Verifying..."
        assert out["message"] == "Searching..."
        assert out["outcome"] == ""

    def test_labels_disabled(self, full_verification):
        engine = _engine(features=EngineFeatureFlags(describe_labels=False))
        assert set(engine.describe(full_verification)) == {"status", "checks"}

    def test_approved_proof_link(self, engine, full_verification):
        full_verification["proof"]["proofUrl"] = "https://proof.deepcitation.com/p/abc123"
        assert engine.describe(full_verification)["proof_url"] == "https://proof.deepcitation.com/p/abc123"

    @pytest.mark.parametrize("proof_url", [
        "javascript:alert(1)",
        "https://evil.com/p/abc123",
        "https://deepcitation.com.evil.com/p/abc123",
        42,
    ])
    def test_unapproved_proof_link_is_withheld(self, engine, full_verification, proof_url):
        full_verification["proof"]["proofUrl"] = proof_url
        assert engine.describe(full_verification)["proof_url"] is None

    def test_malformed_record_still_described(self, engine):
        out = engine.describe({"status": 123, "searchAttempts": "nope", "proof": "x"})
        assert out["status"] == CitationStatus().to_dict()
        assert out["label"] == ""
        assert out["proof_url"] is None


class TestRejectionDiagnostics:

    @pytest.fixture
    def rejected_tier_one(self, full_verification):
        full_verification["pages"][1]["source"] = UNTRUSTED_HTTPS_IMG
        return full_verification

    def test_silent_by_default(self, engine, rejected_tier_one, caplog):
        caplog.set_level(logging.DEBUG, logger=VALIDATOR_LOGGER)
        engine.resolve_image(rejected_tier_one)
        assert not [r for r in caplog.records if r.name == VALIDATOR_LOGGER]

    def test_enabled_logs_fingerprint_only(self, rejected_tier_one, caplog):
        caplog.set_level(logging.DEBUG, logger=VALIDATOR_LOGGER)
        engine = _engine(debug=EngineDebugFlags(log_rejected_sources=True, fingerprint_chars=20))
        assert engine.resolve_image(rejected_tier_one).src == TRUSTED_PROOF_IMG

        records = [r for r in caplog.records if r.name == VALIDATOR_LOGGER]
        assert len(records) == 1
        assert "v1.src.https_untrusted_host" in records[0].getMessage()
        assert UNTRUSTED_HTTPS_IMG not in caplog.text
        assert len(records[0].args[1]["sha256"]) == 20

    def test_local_run_enables_logging(self, engine, rejected_tier_one, caplog, monkeypatch):
        monkeypatch.setenv("CITETRUST_ENV", "local")
        caplog.set_level(logging.DEBUG, logger=VALIDATOR_LOGGER)
        engine.resolve_image(rejected_tier_one)
        assert [r for r in caplog.records if r.name == VALIDATOR_LOGGER]
