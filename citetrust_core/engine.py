# CiteTrust Engine - main entry point

import json
import logging
from collections.abc import Mapping
from typing import Any, Dict, Optional

from citetrust_core import CLASSIFIER_VERSION, SOURCE_POLICY_VERSION, __version__ as ENGINE_VERSION
from citetrust_core.config import CiteTrustConfig
from citetrust_core.schema.status import CitationStatus, ExpandedImageResult
from citetrust_core.schema.verification import Verification, as_verification
from citetrust_core.utils.runtime import is_local_run
from citetrust_core.utils.security import redact_log_data
from citetrust_core.utils.url_utils import is_valid_proof_url
from citetrust_core.verification.citation_status import get_status_from_verification, get_status_label
from citetrust_core.verification.image_resolver import resolve_evidence_src, resolve_expanded_image
from citetrust_core.verification.labels import derive_outcome_label, get_contextual_status_message
from citetrust_core.verification.source_validator import check_image_source
from citetrust_core.verification.trust_level import get_trust_level

logger = logging.getLogger(__name__)

VerificationInput = Verification | Mapping[str, Any] | None


class CiteTrustEngine:
    """
    Entry point for the rendering layer.

    Stateless apart from its config: every call reads the verification
    afresh. Nothing is cached per record, because the polling process
    replaces or mutates records between renders.
    """

    def __init__(self, config: Optional[CiteTrustConfig] = None):
        self.config = config or CiteTrustConfig()
        logger.debug("Effective config: %s", json.dumps(self.config.runtime.to_safe_log_dict(), ensure_ascii=False))

    @property
    def _log_rejections(self) -> bool:
        return bool(self.config.runtime.debug.log_rejected_sources) or is_local_run()

    def _is_valid_source(self, candidate: Any) -> bool:
        return check_image_source(
            candidate,
            log_rejections=self._log_rejections,
            digest_chars=self.config.runtime.debug.fingerprint_chars,
        ).trusted

    def classify(self, verification: VerificationInput) -> CitationStatus:
        return get_status_from_verification(verification)

    def resolve_image(self, verification: VerificationInput) -> Optional[ExpandedImageResult]:
        result = resolve_expanded_image(verification, is_valid=self._is_valid_source)
        if self.config.runtime.debug.engine_debug:
            logger.debug(
                "[Engine] resolve_image -> %s",
                redact_log_data({"src": result.src}) if result is not None else None,
            )
        return result

    def resolve_evidence(self, verification: VerificationInput) -> Optional[str]:
        if not self.config.runtime.features.evidence_crop:
            return None
        return resolve_evidence_src(verification, is_valid=self._is_valid_source)

    def is_trusted_source(self, candidate: Any) -> bool:
        return self._is_valid_source(candidate)

    def describe(self, verification: VerificationInput) -> Dict[str, Any]:
        """
        Everything a status indicator needs in one JSON-safe dict.

        Keys: status (four flags), checks (versions); with labels enabled also
        label, message, outcome, trust_level and proof_url (null unless the
        proof link is on an approved domain).
        """
        record = as_verification(verification)
        status = get_status_from_verification(record)
        out: Dict[str, Any] = {
            "status": status.to_dict(),
            "checks": {
                "engine_version": ENGINE_VERSION,
                "classifier_version": CLASSIFIER_VERSION,
                "source_policy_version": SOURCE_POLICY_VERSION,
            },
        }

        if not self.config.runtime.features.describe_labels:
            return out

        raw_status = record.status if record is not None else None
        attempts = record.search_attempts if record is not None else []
        successful = next((a for a in attempts if a.success), None)

        expected_page = actual_page = None
        if record is not None and record.document is not None:
            actual_page = record.document.verified_page_number
        if successful is not None:
            if successful.expected_location is not None:
                expected_page = successful.expected_location.page
            if successful.found_location is not None:
                actual_page = successful.found_location.page

        out["label"] = get_status_label(status)
        out["message"] = get_contextual_status_message(raw_status, expected_page, actual_page)
        out["outcome"] = derive_outcome_label(raw_status, attempts) if status.is_verified or status.is_miss else ""
        out["trust_level"] = (
            get_trust_level(successful.matched_variation).value if successful is not None else None
        )
        proof_url = record.proof.proof_url if record is not None and record.proof is not None else None
        out["proof_url"] = is_valid_proof_url(proof_url) if proof_url else None
        return out
