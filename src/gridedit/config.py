"""Local configuration for gridedit."""

from __future__ import annotations

import os
from pathlib import Path


DEFAULT_CONTENT_PREFIX = "content"
DEFAULT_INDEX_FILENAME = "_index.md"
DEFAULT_ROW_CELLS = 3
DEFAULT_MISSING_WEIGHT = 999999
DEFAULT_LOG_LEVEL = "INFO"

# Directory that holds the site's content/ tree; request paths are relative to it.
GRIDEDIT_SITE_ROOT = Path(os.getenv("GRIDEDIT_SITE_ROOT", ".")).expanduser().resolve()
GRIDEDIT_CONTENT_PREFIX = os.getenv("GRIDEDIT_CONTENT_PREFIX", DEFAULT_CONTENT_PREFIX).strip("/")
GRIDEDIT_INDEX_FILENAME = os.getenv("GRIDEDIT_INDEX_FILENAME", DEFAULT_INDEX_FILENAME)
GRIDEDIT_DEFAULT_ROW_CELLS = int(os.getenv("GRIDEDIT_DEFAULT_ROW_CELLS", str(DEFAULT_ROW_CELLS)))
# Weight assumed for nodes whose front matter has no usable weight; sorts them last.
GRIDEDIT_MISSING_WEIGHT = int(os.getenv("GRIDEDIT_MISSING_WEIGHT", str(DEFAULT_MISSING_WEIGHT)))
GRIDEDIT_LOG_LEVEL = os.getenv("GRIDEDIT_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
