"""REST fetchers for organization repositories and branch comparisons."""

from __future__ import annotations

import sys
from typing import List
from urllib.parse import quote

from .config import PER_PAGE
from .http_client import GitHubClient
from .models import ComparisonResult, Repository
from .pagination import paginate


def list_org_repositories(client: GitHubClient, org: str, per_page: int = PER_PAGE) -> List[Repository]:
    """Fetch every repository of `org`, following Link pagination to the end."""
    first = client.get(f"/orgs/{quote(org, safe='')}/repos", params={"per_page": per_page})
    payloads = paginate(first, client.has_next_page, client.get_next_page)
    repos = [Repository.from_api(entry) for entry in payloads]
    print(f"[info] fetched {len(repos)} repositories for {org}", file=sys.stderr)
    return repos


def compare_branches(client: GitHubClient, owner: str, repo: str, base: str, head: str) -> ComparisonResult:
    """Ask GitHub how far `head` has moved ahead of `base`."""
    basehead = f"{quote(base, safe='')}...{quote(head, safe='')}"
    resp = client.get(f"/repos/{quote(owner, safe='')}/{quote(repo, safe='')}/compare/{basehead}")
    return ComparisonResult.from_api(resp.json())


__all__ = ["list_org_repositories", "compare_branches"]
