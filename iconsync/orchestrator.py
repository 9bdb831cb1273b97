"""Pick the first resolver that yields an icon for one application."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Callable, Iterable
from urllib.parse import urlparse

from .errors import Found, NotFound, Resolution, UnresolvedIcon
from .http import IconClient
from .registry import MetadataLookup, RepositoryScan, SourceDescriptor, StorefrontScrape
from .resolvers import resolve_metadata, resolve_repository, resolve_storefront

logger = logging.getLogger("iconsync.orchestrator")

DEFAULT_EXTENSION = ".png"

Resolver = Callable[[IconClient, SourceDescriptor], Resolution]

# Lookup artwork is the most stable, repository scanning is heuristic and
# storefront scraping breaks whenever the page markup changes.
RESOLVER_PRIORITY: tuple[tuple[type, Resolver], ...] = (
    (MetadataLookup, resolve_metadata),
    (RepositoryScan, resolve_repository),
    (StorefrontScrape, resolve_storefront),
)


@dataclass(frozen=True)
class ResolvedIcon:
    source_url: str
    file_name: str
    provenance: str


def infer_extension(url: str) -> str:
    """Return the suffix of ``url``'s path, ``.png`` when it has none."""

    return PurePosixPath(urlparse(url).path).suffix or DEFAULT_EXTENSION


def ordered_attempts(
    descriptors: Iterable[SourceDescriptor],
) -> list[tuple[SourceDescriptor, Resolver]]:
    """Pair descriptors with resolvers in priority order.

    Descriptors of the same kind keep their catalog order.
    """

    descriptors = list(descriptors)
    attempts: list[tuple[SourceDescriptor, Resolver]] = []
    for kind, resolver in RESOLVER_PRIORITY:
        attempts.extend((d, resolver) for d in descriptors if isinstance(d, kind))
    return attempts


def resolve_icon(
    client: IconClient, app_id: str, descriptors: Iterable[SourceDescriptor]
) -> ResolvedIcon:
    """Return the icon for ``app_id`` or raise :class:`UnresolvedIcon`."""

    failures: list[NotFound] = []
    for descriptor, resolver in ordered_attempts(descriptors):
        result = resolver(client, descriptor)
        if isinstance(result, Found):
            return ResolvedIcon(
                source_url=result.url,
                file_name=f"{app_id}{result.extension or infer_extension(result.url)}",
                provenance=result.provenance,
            )
        logger.info("resolver fell through app=%s reason=%s", app_id, result)
        failures.append(result)
    raise UnresolvedIcon(app_id, failures)
