"""Resolve artwork through the App Store lookup API."""

from __future__ import annotations

import logging

import requests

from ..errors import FailureReason, Found, NotFound, Resolution
from ..http import IconClient
from ..registry import MetadataLookup

logger = logging.getLogger("iconsync.resolvers.metadata")

LOW_RES_TOKEN = "100x100bb"
HIGH_RES_TOKEN = "512x512bb"


def artwork_from_lookup(payload: dict) -> str | None:
    """Return the best artwork URL from a lookup response, if any."""

    results = payload.get("results") if isinstance(payload, dict) else None
    if not isinstance(results, list) or not results:
        return None
    result = results[0]
    if not isinstance(result, dict):
        return None
    if result.get("artworkUrl512"):
        return str(result["artworkUrl512"])
    if result.get("artworkUrl100"):
        return str(result["artworkUrl100"]).replace(LOW_RES_TOKEN, HIGH_RES_TOKEN, 1)
    return None


def resolve_metadata(client: IconClient, descriptor: MetadataLookup) -> Resolution:
    """Try each candidate id in order and return the first artwork found."""

    settings = client.settings
    for candidate in descriptor.candidate_ids:
        params = {"id": candidate, "country": settings.itunes_country}
        try:
            payload = client.get_json(settings.itunes_lookup_url, params=params)
        except (requests.RequestException, ValueError) as exc:
            logger.debug("lookup failed id=%s error=%s", candidate, exc)
            continue
        art = artwork_from_lookup(payload) if isinstance(payload, dict) else None
        if art:
            return Found(art, f"apple:{candidate}", extension=".png")
        logger.debug("no artwork in lookup id=%s", candidate)
    return NotFound(
        FailureReason.NO_ARTWORK_FOUND,
        f"tried apple ids {', '.join(descriptor.candidate_ids)}",
    )
