"""Typed views over the GitHub payloads the promotion check reads."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Any, Dict, Optional


def parse_github_timestamp(raw: Optional[str]) -> dt.datetime:
    """Parse GitHub's `2024-01-01T00:00:00Z` form into an aware UTC datetime."""
    if not raw:
        raise ValueError("Missing timestamp.")
    value = dt.datetime.fromisoformat(raw.replace("Z", "+00:00"))
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.timezone.utc)
    return value.astimezone(dt.timezone.utc)


@dataclass(frozen=True)
class Repository:
    owner: str
    name: str
    default_branch: str
    updated_at: dt.datetime
    html_url: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "Repository":
        owner = (payload.get("owner") or {}).get("login") or ""
        return cls(
            owner=owner,
            name=payload["name"],
            default_branch=payload.get("default_branch") or "",
            updated_at=parse_github_timestamp(payload.get("updated_at")),
            html_url=(payload.get("html_url") or "").rstrip("/"),
        )


@dataclass(frozen=True)
class ComparisonResult:
    ahead_by: int

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "ComparisonResult":
        """Raise KeyError or TypeError when the reply carries no usable `ahead_by`."""
        return cls(ahead_by=int(payload["ahead_by"]))


__all__ = ["Repository", "ComparisonResult", "parse_github_timestamp"]
