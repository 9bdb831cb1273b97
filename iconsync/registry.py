"""Catalog of client applications and where to look for their icons.

Each application id maps to an ordered tuple of source descriptors. The
orchestrator receives the catalog as an argument, so tests and alternative
catalog files can swap in their own mapping.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Union

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class MetadataLookup:
    """App Store ids to try against the lookup API, in order."""

    candidate_ids: tuple[str, ...]


@dataclass(frozen=True)
class RepositoryScan:
    owner: str
    repo: str


@dataclass(frozen=True)
class StorefrontScrape:
    package: str


SourceDescriptor = Union[MetadataLookup, RepositoryScan, StorefrontScrape]
Catalog = Mapping[str, tuple[SourceDescriptor, ...]]


DEFAULT_CATALOG: dict[str, tuple[SourceDescriptor, ...]] = {
    "happ": (
        MetadataLookup(("6504287215", "6746188973")),
        RepositoryScan("Happ-proxy", "happ-android"),
        StorefrontScrape("com.happproxy"),
    ),
    "stash": (MetadataLookup(("1596063349",)),),
    "streisand": (MetadataLookup(("6450534064",)),),
    "shadowrocket": (MetadataLookup(("932747118",)),),
    "clash-mi": (MetadataLookup(("6744321968",)),),
    # Android / desktop open-source clients
    "v2rayNG": (RepositoryScan("2dust", "v2rayNG"),),
    "clash-meta": (RepositoryScan("MetaCubeX", "ClashMetaForAndroid"),),
    "hiddify": (StorefrontScrape("com.vpn4tv.hiddify"),),
    "exclave": (RepositoryScan("dyhkwong", "Exclave"),),
    "flclashx": (RepositoryScan("pluralplay", "FlClashX"),),
    "koala-clash": (RepositoryScan("coolcoala", "clash-verge-rev-lite"),),
    "prizrak-box": (RepositoryScan("legiz-ru", "Prizrak-Box"),),
    "clash-verge": (RepositoryScan("clash-verge-rev", "clash-verge-rev"),),
}

# Ids the config patcher may touch.
ALLOW_LIST: frozenset[str] = frozenset(DEFAULT_CATALOG)


class GithubSource(BaseModel):
    owner: str
    repo: str


class CatalogEntry(BaseModel):
    """One application as written in a catalog JSON file."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    apple_ids: list[str] = Field(default_factory=list, alias="appleIds")
    github: GithubSource | None = None
    play_package: str | None = Field(default=None, alias="playPackage")

    def descriptors(self) -> tuple[SourceDescriptor, ...]:
        out: list[SourceDescriptor] = []
        if self.apple_ids:
            out.append(MetadataLookup(tuple(self.apple_ids)))
        if self.github is not None:
            out.append(RepositoryScan(self.github.owner, self.github.repo))
        if self.play_package:
            out.append(StorefrontScrape(self.play_package))
        return tuple(out)


def parse_catalog(data: Mapping[str, dict]) -> dict[str, tuple[SourceDescriptor, ...]]:
    """Validate a raw ``{app_id: {...}}`` mapping into a catalog."""

    return {
        app_id: CatalogEntry.model_validate(entry).descriptors()
        for app_id, entry in data.items()
    }


def load_catalog(path: str | Path) -> dict[str, tuple[SourceDescriptor, ...]]:
    """Read a catalog JSON file; keys keep their file order."""

    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Catalog {path} must be a JSON object")
    return parse_catalog(data)
