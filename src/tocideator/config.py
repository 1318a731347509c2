"""Local configuration for tocideator."""

from __future__ import annotations

import os
from pathlib import Path


DEFAULT_SAVE_PATH = ".toc_ideator/outline.json"
DEFAULT_STORE_DIR = ".toc_ideator_store"
DEFAULT_PUBLISH_URL = "http://127.0.0.1:8000/api/share"
DEFAULT_PUBLISH_TIMEOUT_S = 10.0
DEFAULT_PUBLISH_MAX_RETRIES = 2
DEFAULT_PUBLISH_BACKOFF_S = 0.5
DEFAULT_USER_AGENT = "toc-ideator/0.1"
DEFAULT_LOG_LEVEL = "INFO"

# Local autosave file for the working outline.
TOC_IDEATOR_SAVE_PATH = Path(os.getenv("TOC_IDEATOR_SAVE_PATH", DEFAULT_SAVE_PATH)).expanduser().resolve()
# Directory where the share server keeps published snapshots.
TOC_IDEATOR_STORE_PATH = Path(os.getenv("TOC_IDEATOR_STORE_PATH", DEFAULT_STORE_DIR)).expanduser().resolve()
TOC_IDEATOR_PUBLISH_URL = os.getenv("TOC_IDEATOR_PUBLISH_URL", DEFAULT_PUBLISH_URL)
TOC_IDEATOR_PUBLISH_TIMEOUT_S = float(os.getenv("TOC_IDEATOR_PUBLISH_TIMEOUT_S", str(DEFAULT_PUBLISH_TIMEOUT_S)))
TOC_IDEATOR_PUBLISH_MAX_RETRIES = int(
    os.getenv("TOC_IDEATOR_PUBLISH_MAX_RETRIES", str(DEFAULT_PUBLISH_MAX_RETRIES))
)
TOC_IDEATOR_PUBLISH_BACKOFF_S = float(os.getenv("TOC_IDEATOR_PUBLISH_BACKOFF_S", str(DEFAULT_PUBLISH_BACKOFF_S)))
TOC_IDEATOR_USER_AGENT = os.getenv("TOC_IDEATOR_USER_AGENT", DEFAULT_USER_AGENT)
TOC_IDEATOR_LOG_LEVEL = os.getenv("TOC_IDEATOR_LOG_LEVEL", DEFAULT_LOG_LEVEL)
