"""Thin wrapper around a shared :class:`requests.Session`."""

from __future__ import annotations

from typing import Any

import requests

from config import Settings

GITHUB_ACCEPT = "application/vnd.github+json"


class IconClient:
    """Carries the session plus the endpoints every resolver needs.

    All calls raise ``requests.HTTPError`` for non-success statuses so callers
    can treat transport and status failures the same way.
    """

    def __init__(self, settings: Settings, session: requests.Session | None = None) -> None:
        self.settings = settings
        self.session = session or requests.Session()

    @property
    def github_headers(self) -> dict[str, str]:
        return {
            "User-Agent": self.settings.fetcher_user_agent,
            "Accept": GITHUB_ACCEPT,
        }

    def _get(
        self,
        url: str,
        *,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> requests.Response:
        resp = self.session.get(
            url, params=params, headers=headers, timeout=self.settings.http_timeout
        )
        resp.raise_for_status()
        return resp

    def get_json(self, url: str, **kwargs: Any) -> Any:
        return self._get(url, **kwargs).json()

    def get_text(self, url: str, **kwargs: Any) -> str:
        return self._get(url, **kwargs).text

    def get_bytes(self, url: str, **kwargs: Any) -> bytes:
        return self._get(url, **kwargs).content

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "IconClient":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
