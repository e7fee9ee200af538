"""Entry points for running the staging promotion check."""

from __future__ import annotations

import datetime as dt
import json
import sys
from typing import Any, Dict, List, Optional

from src.promotion.divergence import PromotionBuckets, check_repositories
from src.promotion.recency import filter_recent
from src.promotion.report import format_report
from src.retrieval.collectors import list_org_repositories
from src.retrieval.http_client import GitHubClient

from .config import PromotionSettings, parse_args, resolve_settings


def _build_client(settings: PromotionSettings) -> GitHubClient:
    client = GitHubClient(base_url=settings.api_url, timeout=settings.timeout)
    client.authenticate(settings.token)
    return client


def run(
    settings: PromotionSettings,
    client: Optional[GitHubClient] = None,
    now: Optional[dt.datetime] = None,
) -> PromotionBuckets:
    """List, filter, and compare every repository of the configured org."""
    client = client or _build_client(settings)
    now = now or dt.datetime.now(dt.timezone.utc)

    repos = list_org_repositories(client, settings.org, per_page=settings.per_page)
    recent = filter_recent(repos, now, settings.window_months)
    print(
        f"[info] {len(recent)}/{len(repos)} repositories updated in the last {settings.window_months} months",
        file=sys.stderr,
    )
    return check_repositories(client, recent, head=settings.head_branch)


def error_dump(exc: BaseException) -> Dict[str, Any]:
    """Describe an unhandled failure as a JSON-friendly dict."""
    err: Dict[str, Any] = {"type": type(exc).__name__, "message": str(exc)}
    status_code = getattr(exc, "status_code", None)
    if status_code is not None:
        err["status_code"] = status_code
    url = getattr(exc, "url", None)
    if url:
        err["url"] = url
    return {"err": err}


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point; returns the process exit code."""

    args = parse_args(argv)
    try:
        settings = resolve_settings(args)
        buckets = run(settings)
    except Exception as exc:
        print(json.dumps(error_dump(exc), indent=2), file=sys.stderr)
        return 1

    sys.stdout.write(format_report(buckets))
    return 0


def cli() -> None:
    sys.exit(main(sys.argv[1:]))


__all__ = ["main", "run", "cli", "error_dump"]
