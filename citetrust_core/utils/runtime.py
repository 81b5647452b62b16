# Copyright (C) 2025 CiteTrust Contributors
#
# This file is part of CiteTrust Engine.
#
# CiteTrust Engine is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# CiteTrust Engine is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with CiteTrust Engine. If not, see <https://www.gnu.org/licenses/>.

import os

from citetrust_core.runtime_config import _parse_bool


def is_local_run() -> bool:
    """
    Best-effort detection of local/dev runs without requiring extra configuration.
    """
    env = (os.getenv("CITETRUST_ENV") or os.getenv("ENV") or "").strip().lower()
    if env in ("local", "dev", "development"):
        return True

    return False


def diagnostics_enabled() -> bool:
    """Whether rejected image sources may be reported in debug logs."""
    if is_local_run():
        return True
    return _parse_bool(os.getenv("CITETRUST_LOG_REJECTED_SOURCES"), default=False)
