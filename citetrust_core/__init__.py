# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (c) 2024-2025 CiteTrust Contributors
"""
CiteTrust Core Engine
=====================

Verification trust engine for citations: classifies raw verification
results into a small trust taxonomy and resolves which evidence image,
if any, is safe to render.
"""

__version__ = "1.0.0"

# Bump when the status table or trust mapping changes meaning.
CLASSIFIER_VERSION = "status_v2"
# Bump when the allow-lists or validation rules change.
SOURCE_POLICY_VERSION = "img_src_v3"
