"""Authenticated GitHub REST client shared by every step of a promotion check."""

from __future__ import annotations

from typing import Any, Dict, Optional

import requests

from .config import ACCEPT_HEADER, BASE_URL, REQUEST_TIMEOUT, USER_AGENT


class GitHubAPIError(RuntimeError):
    """Raised when GitHub answers a request with a non-2xx status."""

    def __init__(self, status_code: int, url: str, message: str) -> None:
        super().__init__(f"HTTP {status_code} for {url}: {message}")
        self.status_code = status_code
        self.url = url
        self.message = message


def error_message(resp: requests.Response) -> str:
    """Pull the human-readable part of a GitHub error body."""
    try:
        body = resp.json()
    except ValueError:
        body = {"text": (resp.text or "")[:300]}
    if not isinstance(body, dict):
        body = {"text": str(body)[:300]}
    return str(body.get("message") or body.get("error") or body.get("text") or "")


class GitHubClient:
    """Thin wrapper around a requests session carrying GitHub headers and auth.

    One instance is built per run and handed to every component that talks
    to the API. Requests are attempted exactly once.
    """

    def __init__(self, base_url: str = BASE_URL, timeout: int = REQUEST_TIMEOUT) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update(
            {
                "Accept": ACCEPT_HEADER,
                "User-Agent": USER_AGENT,
            }
        )

    def authenticate(self, token: str) -> None:
        """Attach the personal access token used for all later calls."""
        if not token or not token.strip():
            raise ValueError("A GitHub token is required to authenticate.")
        self.session.headers["Authorization"] = f"token {token.strip()}"

    @property
    def is_authenticated(self) -> bool:
        return "Authorization" in self.session.headers

    def _url(self, path: str) -> str:
        if path.startswith("http://") or path.startswith("https://"):
            return path
        path = path if path.startswith("/") else f"/{path}"
        return f"{self.base_url}{path}"

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> requests.Response:
        """Perform one REST call; raise GitHubAPIError for non-2xx replies."""
        url = self._url(path)
        resp = self.session.request(method, url, params=params, timeout=self.timeout)
        if 200 <= resp.status_code < 300:
            return resp
        raise GitHubAPIError(resp.status_code, url, error_message(resp))

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        return self.request("GET", path, params=params)

    @staticmethod
    def next_page_url(resp: requests.Response) -> Optional[str]:
        """Return the `rel="next"` target of the Link header, if any."""
        links = getattr(resp, "links", None) or {}
        nxt = links.get("next") or {}
        return nxt.get("url") or None

    def has_next_page(self, resp: requests.Response) -> bool:
        return self.next_page_url(resp) is not None

    def get_next_page(self, resp: requests.Response) -> requests.Response:
        url = self.next_page_url(resp)
        if url is None:
            raise ValueError("Response has no next page.")
        return self.get(url)


__all__ = [
    "GitHubAPIError",
    "GitHubClient",
    "error_message",
]
