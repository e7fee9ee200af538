"""Per-repository staging divergence check and the outcome buckets it fills.

Every repository handed to `check_repositories` lands in exactly one of three
buckets: it needs a promotion pull request, it has nothing to promote, or
its comparison failed. A failed comparison never stops the remaining
repositories from being checked.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Iterable, List

from src.retrieval.collectors import compare_branches
from src.retrieval.config import HEAD_BRANCH
from src.retrieval.http_client import GitHubClient
from src.retrieval.models import Repository

from .branches import resolve_base_branch

NEED_CHANGE = "need_change"
NO_CHANGE = "no_change"
ERRORS = "errors"


def pull_request_url(html_url: str, base: str, head: str) -> str:
    """Build the GitHub page that opens a pull request from `head` into `base`."""
    return f"{html_url.rstrip('/')}/compare/{base}...{head}"


@dataclass(frozen=True)
class ComparisonTarget:
    """Everything needed to compare one repository, bound before any API call."""

    owner: str
    repo: str
    base: str
    head: str
    html_url: str

    @classmethod
    def for_repository(cls, repository: Repository, head: str = HEAD_BRANCH) -> "ComparisonTarget":
        return cls(
            owner=repository.owner,
            repo=repository.name,
            base=resolve_base_branch(repository),
            head=head,
            html_url=repository.html_url,
        )

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    @property
    def pull_request_url(self) -> str:
        return pull_request_url(self.html_url, self.base, self.head)


@dataclass(frozen=True)
class Outcome:
    bucket: str
    message: str
    target: ComparisonTarget


def need_change_message(target: ComparisonTarget) -> str:
    return (
        f"\n{target.full_name}:\n"
        f"  Changes in {target.head} that are not in {target.base}\n"
        f"  Create Pull Request: {target.pull_request_url}"
    )


def no_change_message(target: ComparisonTarget) -> str:
    return f"\n{target.full_name}:\n  No changes in {target.head} that are not in {target.base}"


def errors_message(target: ComparisonTarget) -> str:
    return (
        f"\n{target.full_name}:\n"
        f"  Error comparing {target.head} and {target.base}.\n"
        f"  Maybe the {target.base} or {target.head} branch doesn't exist"
    )


def classify(client: GitHubClient, repository: Repository, head: str = HEAD_BRANCH) -> Outcome:
    """Compare `head` against the production branch of one repository."""
    target = ComparisonTarget.for_repository(repository, head)
    print(f"[info] comparing {target.full_name} {target.base}...{target.head}", file=sys.stderr)
    try:
        result = compare_branches(client, target.owner, target.repo, target.base, target.head)
    except Exception as exc:
        print(f"[warn] {target.full_name}: {exc}", file=sys.stderr)
        return Outcome(ERRORS, errors_message(target), target)

    if result.ahead_by > 0:
        return Outcome(NEED_CHANGE, need_change_message(target), target)
    return Outcome(NO_CHANGE, no_change_message(target), target)


@dataclass
class PromotionBuckets:
    need_change: List[str] = field(default_factory=list)
    no_change: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    def add(self, outcome: Outcome) -> None:
        if outcome.bucket == NEED_CHANGE:
            self.need_change.append(outcome.message)
        elif outcome.bucket == NO_CHANGE:
            self.no_change.append(outcome.message)
        elif outcome.bucket == ERRORS:
            self.errors.append(outcome.message)
        else:
            raise ValueError(f"Unknown outcome bucket: {outcome.bucket!r}")

    def __len__(self) -> int:
        return len(self.need_change) + len(self.no_change) + len(self.errors)


def check_repositories(
    client: GitHubClient,
    repositories: Iterable[Repository],
    head: str = HEAD_BRANCH,
) -> PromotionBuckets:
    """Classify repositories one at a time, in listing order."""
    buckets = PromotionBuckets()
    for repository in repositories:
        buckets.add(classify(client, repository, head))
    return buckets


__all__ = [
    "NEED_CHANGE",
    "NO_CHANGE",
    "ERRORS",
    "ComparisonTarget",
    "Outcome",
    "PromotionBuckets",
    "pull_request_url",
    "classify",
    "check_repositories",
]
