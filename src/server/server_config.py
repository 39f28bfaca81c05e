"""Server configuration."""

from __future__ import annotations

import os

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3001

HOST = os.getenv("HOST", DEFAULT_HOST)
PORT = int(os.getenv("PORT", str(DEFAULT_PORT)))
RELOAD = os.getenv("RELOAD", "false").lower() == "true"

# The editor runs on the site's dev server, a different origin.
CORS_ALLOW_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",") if origin.strip()]

ENDPOINTS = [
    "POST /api/insert-cell - Insert a cell after the given weight",
    "POST /api/delete-cell - Delete a cell and renumber its row",
    "POST /api/insert-row - Insert a row with default cells after the given weight",
    "POST /api/delete-row - Delete a row and renumber its tab",
    "POST /api/save-cell - Save cell content to markdown files",
]
