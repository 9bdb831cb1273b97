"""Scrape the Play Store page for its social preview image."""

from __future__ import annotations

import html
import logging
import re

import requests

from ..errors import FailureReason, Found, NotFound, Resolution
from ..http import IconClient
from ..registry import StorefrontScrape

logger = logging.getLogger("iconsync.resolvers.storefront")

_OG_IMAGE_RE = re.compile(
    r"""<meta[^>]+property\s*=\s*["']og:image["'][^>]+content\s*=\s*["']([^"']+)["']""",
    re.IGNORECASE,
)


def extract_og_image(page: str) -> str | None:
    match = _OG_IMAGE_RE.search(page)
    return html.unescape(match.group(1)) if match else None


def resolve_storefront(client: IconClient, descriptor: StorefrontScrape) -> Resolution:
    settings = client.settings
    params = {
        "id": descriptor.package,
        "hl": settings.play_store_lang,
        "gl": settings.play_store_country,
    }
    try:
        page = client.get_text(
            settings.play_store_url,
            params=params,
            headers={"User-Agent": settings.browser_user_agent},
        )
    except requests.RequestException as exc:
        return NotFound(FailureReason.PREVIEW_IMAGE_NOT_FOUND, f"{descriptor.package}: {exc}")
    url = extract_og_image(page)
    if not url:
        logger.debug("og:image missing package=%s", descriptor.package)
        return NotFound(
            FailureReason.PREVIEW_IMAGE_NOT_FOUND,
            f"Play Store og:image not found for {descriptor.package}",
        )
    return Found(url, f"play:{descriptor.package}", extension=".png")
