# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (c) 2024-2025 CiteTrust Contributors
"""
Engine output models.

CitationStatus is consumed by the rendering layer to pick color/icon
treatment; ExpandedImageResult feeds an image sink. Both are frozen.
"""

from enum import Enum
from typing import Optional

from pydantic import ConfigDict, Field

from citetrust_core.schema.serialization import SchemaModel
from citetrust_core.schema.verification import Dimensions, ScreenBox, TextItem


class TrustLevel(str, Enum):
    """Coarse confidence bucket derived from how a match was found."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class CitationStatus(SchemaModel):
    """
    Four independent flags.

    At most one of is_miss / is_pending is set; is_partial_match implies
    is_verified. All false means "no verification attempted yet".
    """

    model_config = ConfigDict(frozen=True)

    is_verified: bool = False
    is_miss: bool = False
    is_partial_match: bool = False
    is_pending: bool = False


class ExpandedImageResult(SchemaModel):
    """Full-size evidence image; `src` has always passed source validation."""

    model_config = ConfigDict(frozen=True)

    src: str
    dimensions: Optional[Dimensions] = None
    highlight_box: Optional[ScreenBox] = None
    text_items: list[TextItem] = Field(default_factory=list)
