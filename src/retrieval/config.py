"""Central configuration constants for the GitHub API access layer."""

from __future__ import annotations

import os

USER_AGENT = "staging-promotion-check/1.0"
ACCEPT_HEADER = "application/vnd.github+json"
BASE_URL = os.getenv("GITHUB_API_URL", "https://api.github.com").rstrip("/")
PER_PAGE = 100
REQUEST_TIMEOUT = 90  # env REQUEST_TIMEOUT, validated in src.pipeline.config
HEAD_BRANCH = "staging"
RECENCY_WINDOW_MONTHS = 3  # env RECENCY_WINDOW_MONTHS, validated in src.pipeline.config

__all__ = [
    "USER_AGENT",
    "ACCEPT_HEADER",
    "BASE_URL",
    "PER_PAGE",
    "REQUEST_TIMEOUT",
    "HEAD_BRANCH",
    "RECENCY_WINDOW_MONTHS",
]
