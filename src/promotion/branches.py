"""Production branch selection."""

from __future__ import annotations

from src.retrieval.models import Repository

MASTER = "master"
MAIN = "main"


def resolve_base_branch(repository: Repository) -> str:
    # The reported default branch can be "staging"; only ever compare against master or main.
    return MASTER if repository.default_branch == MASTER else MAIN


__all__ = ["MASTER", "MAIN", "resolve_base_branch"]
