from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any


def _parse_bool(raw: Any, *, default: bool) -> bool:
    if raw is None:
        return default
    if isinstance(raw, bool):
        return raw
    s = str(raw).strip().lower()
    if not s:
        return default
    if s in ("1", "true", "yes", "y", "on"):
        return True
    if s in ("0", "false", "no", "n", "off"):
        return False
    return default


def _parse_int(raw: Any, *, default: int, min_v: int, max_v: int) -> int:
    try:
        if raw is None:
            v = default
        elif isinstance(raw, int):
            v = raw
        else:
            v = int(str(raw).strip())
    except (TypeError, ValueError):
        v = default
    return max(min_v, min(max_v, v))


@dataclass(frozen=True)
class EngineFeatureFlags:
    # Emit status/outcome labels alongside the four classifier flags.
    describe_labels: bool = True
    # Resolve the evidence crop (keyhole) image in addition to the full-size one.
    evidence_crop: bool = True


@dataclass(frozen=True)
class EngineDebugFlags:
    engine_debug: bool = False
    # Report rejected image sources (fingerprint + reason only) at DEBUG level.
    log_rejected_sources: bool = False
    # Hex chars of the candidate digest included in rejection diagnostics.
    fingerprint_chars: int = 12


@dataclass(frozen=True)
class EngineRuntimeConfig:
    features: EngineFeatureFlags
    debug: EngineDebugFlags

    @staticmethod
    def load_from_env() -> "EngineRuntimeConfig":
        debug = EngineDebugFlags(
            engine_debug=_parse_bool(os.getenv("CITETRUST_ENGINE_DEBUG"), default=False),
            log_rejected_sources=_parse_bool(os.getenv("CITETRUST_LOG_REJECTED_SOURCES"), default=False),
            fingerprint_chars=_parse_int(
                os.getenv("CITETRUST_FINGERPRINT_CHARS"), default=12, min_v=6, max_v=64
            ),
        )

        features = EngineFeatureFlags(
            describe_labels=_parse_bool(os.getenv("CITETRUST_DESCRIBE_LABELS"), default=True),
            evidence_crop=_parse_bool(os.getenv("CITETRUST_EVIDENCE_CROP"), default=True),
        )

        return EngineRuntimeConfig(features=features, debug=debug)

    @staticmethod
    def defaults() -> "EngineRuntimeConfig":
        return EngineRuntimeConfig(features=EngineFeatureFlags(), debug=EngineDebugFlags())

    def to_safe_log_dict(self) -> dict[str, Any]:
        return {
            "features": {
                "describe_labels": bool(self.features.describe_labels),
                "evidence_crop": bool(self.features.evidence_crop),
            },
            "debug": {
                "engine_debug": bool(self.debug.engine_debug),
                "log_rejected_sources": bool(self.debug.log_rejected_sources),
                "fingerprint_chars": int(self.debug.fingerprint_chars),
            },
        }
