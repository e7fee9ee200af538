"""Command-line configuration for the staging promotion check."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from typing import List, Optional

from src.retrieval.config import BASE_URL, HEAD_BRANCH, PER_PAGE, RECENCY_WINDOW_MONTHS, REQUEST_TIMEOUT
from src.secrets import local_github_token


@dataclass(frozen=True)
class PromotionSettings:
    """Resolved runtime settings for one promotion check."""

    token: str
    org: str
    window_months: int
    head_branch: str
    api_url: str
    per_page: int
    timeout: int = REQUEST_TIMEOUT


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid integer value: {value}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"Expected a positive integer, got {value}")
    return number


def env_positive_int(name: str, default: int) -> int:
    """Read a positive integer from the environment; ValueError names the variable."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return _positive_int(raw.strip())
    except argparse.ArgumentTypeError as exc:
        raise ValueError(f"{name}: {exc}") from exc


def build_arg_parser() -> argparse.ArgumentParser:
    """Return the CLI parser used by the promotion check entry point."""

    parser = argparse.ArgumentParser(
        prog="staging-promotion-check",
        description="Get a list of repositories that need merging to production.",
    )
    parser.add_argument(
        "-t",
        "--token",
        default=None,
        help="The github token (falls back to GITHUB_TOKEN or local_secrets.json)",
    )
    parser.add_argument("-o", "--org", required=True, help="The org name")
    parser.add_argument(
        "--months",
        type=_positive_int,
        default=None,
        help=f"Only check repositories updated within this many months "
        f"(default: RECENCY_WINDOW_MONTHS or {RECENCY_WINDOW_MONTHS})",
    )
    parser.add_argument("--head", default=HEAD_BRANCH, help="Branch promoted to production (default: %(default)s)")
    parser.add_argument("--api-url", default=BASE_URL, help="GitHub REST API root (default: %(default)s)")
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments; accepts argv overrides for testing."""

    parser = build_arg_parser()
    args = parser.parse_args(argv)
    if not args.token:
        args.token = os.getenv("GITHUB_TOKEN") or local_github_token()
    if not args.token:
        parser.error("the following arguments are required: -t/--token")
    return args


def resolve_settings(args: Optional[argparse.Namespace] = None) -> PromotionSettings:
    """Return immutable settings built from parsed arguments and the environment."""

    args = args or parse_args()
    window_months = args.months
    if window_months is None:
        window_months = env_positive_int("RECENCY_WINDOW_MONTHS", RECENCY_WINDOW_MONTHS)
    return PromotionSettings(
        token=args.token,
        org=args.org,
        window_months=int(window_months),
        head_branch=args.head,
        api_url=args.api_url.rstrip("/"),
        per_page=PER_PAGE,
        timeout=env_positive_int("REQUEST_TIMEOUT", REQUEST_TIMEOUT),
    )


__all__ = [
    "PromotionSettings",
    "build_arg_parser",
    "env_positive_int",
    "parse_args",
    "resolve_settings",
]
