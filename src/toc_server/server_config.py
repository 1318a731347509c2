"""Configuration for the share server."""

from __future__ import annotations

import os
import re

DEFAULT_MAX_PAYLOAD_BYTES = 512 * 1024

MAX_PAYLOAD_BYTES = int(os.getenv("TOC_IDEATOR_MAX_PAYLOAD_BYTES", str(DEFAULT_MAX_PAYLOAD_BYTES)))
SHARE_ID_PATTERN = re.compile(r"^[a-f0-9]{32}$")
# Read-only pages live at ``/share/<id>``; the store returns this relative URL.
SHARE_URL_PREFIX = "/share/"
PAGE_TITLE = "toc-ideator - shared outline"
