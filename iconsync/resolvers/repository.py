"""Find an application icon inside a GitHub repository.

Repositories have no fixed layout, so resolution runs in two phases:

1. try a list of conventional icon locations through the contents API and
   return the first one that exists;
2. otherwise list the whole tree of the default branch and rank every
   image-like file with :func:`score_path`.

The scoring weights prefer desktop packaging and launcher icons, then larger
declared sizes, and push screenshots and store banners to the bottom.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable
from urllib.parse import quote

import requests

from ..errors import FailureReason, Found, NotFound, Resolution
from ..http import IconClient
from ..registry import RepositoryScan

logger = logging.getLogger("iconsync.resolvers.repository")

KNOWN_ICON_PATHS: tuple[str, ...] = (
    # root
    "icon.png",
    "logo.png",
    "logo/icon.png",
    "assets/icon.png",
    "assets/logo.png",
    "static/icon.png",
    "static/logo.png",
    # android
    "app/src/main/ic_launcher-playstore.png",
    "app/src/main/ic_launcher.png",
    "app/src/main/res/mipmap-xxxhdpi/ic_launcher.png",
    "app/src/main/res/mipmap-xxhdpi/ic_launcher.png",
    "app/src/main/res/mipmap-xhdpi/ic_launcher.png",
    "app/src/main/res/mipmap-hdpi/ic_launcher.png",
    "app/src/main/res/mipmap-mdpi/ic_launcher.png",
    "app/src/main/res/mipmap-anydpi-v26/ic_launcher.xml",
    # fastlane
    "fastlane/metadata/android/en-US/images/icon.png",
    "fastlane/metadata/android/en-US/images/featureGraphic.png",
    # tauri
    "src-tauri/icons/icon.png",
    "src-tauri/icons/128x128.png",
    "src-tauri/icons/256x256.png",
    "src-tauri/icons/512x512.png",
    "src-tauri/icons/icon@2x.png",
    "src-tauri/icons/Square150x150Logo.png",
    "src-tauri/icons/Square310x310Logo.png",
    # historical top-level names in v2rayNG forks
    "V2rayNG.png",
    "v2rayNG.png",
)

IMAGE_EXTENSIONS = (".png", ".svg", ".icns", ".ico")
DEFAULT_BRANCH = "main"

KEYWORD_WEIGHTS: tuple[tuple[tuple[str, ...], int], ...] = (
    (("src-tauri/icons",), 60),
    (("/icons/",), 40),
    (("appicon", "app_icon"), 40),
    (("ic_launcher",), 45),
    (("logo",), 25),
    (("icon",), 20),
    (("favicon",), 10),
)
EXTENSION_WEIGHTS: tuple[tuple[tuple[str, ...], int], ...] = (
    ((".png",), 30),
    ((".svg",), 18),
    ((".icns", ".ico"), 8),
)
SIZE_HINTS = (1024, 512, 256, 128, 64)
PENALTY_WORDS = ("screenshot", "screenshots", "banner", "featuregraphic")
PENALTY = 50


@dataclass(frozen=True)
class ScoredCandidate:
    path: str
    score: int


def score_path(path: str) -> int:
    """Return the additive heuristic score for a repository file path."""

    s = path.lower()
    score = 0
    for words, weight in KEYWORD_WEIGHTS:
        if any(w in s for w in words):
            score += weight
    for suffixes, weight in EXTENSION_WEIGHTS:
        if s.endswith(suffixes):
            score += weight
            break
    for size in SIZE_HINTS:
        if str(size) in s:
            score += size // 32
            break
    if any(w in s for w in PENALTY_WORDS):
        score -= PENALTY
    return score


def is_image_path(path: str) -> bool:
    return path.lower().endswith(IMAGE_EXTENSIONS)


def rank_candidates(tree: Iterable[dict]) -> list[ScoredCandidate]:
    """Score image blobs from a git tree listing, best first.

    ``sorted`` is stable, so equal scores keep their tree order.
    """

    paths = [
        str(entry.get("path", ""))
        for entry in tree
        if isinstance(entry, dict)
        and entry.get("type") == "blob"
        and is_image_path(str(entry.get("path", "")))
    ]
    scored = [ScoredCandidate(p, score_path(p)) for p in paths]
    return sorted(scored, key=lambda c: c.score, reverse=True)


def lookup_known_paths(client: IconClient, owner: str, repo: str) -> str | None:
    """Return the download URL of the first known icon path that exists."""

    base = f"{client.settings.github_api_url}/repos/{owner}/{repo}/contents/"
    for rel in KNOWN_ICON_PATHS:
        try:
            data = client.get_json(base + rel, headers=client.github_headers)
        except (requests.RequestException, ValueError):
            continue
        if isinstance(data, dict) and data.get("download_url"):
            logger.debug("known path hit %s/%s:%s", owner, repo, rel)
            return str(data["download_url"])
    return None


def scan_tree(client: IconClient, owner: str, repo: str) -> Resolution:
    """Fetch the default branch tree and pick the best-scoring image."""

    settings = client.settings
    api = f"{settings.github_api_url}/repos/{owner}/{repo}"
    try:
        info = client.get_json(api, headers=client.github_headers)
        branch = (info.get("default_branch") if isinstance(info, dict) else None) or DEFAULT_BRANCH
        tree = client.get_json(
            f"{api}/git/trees/{quote(branch, safe='')}",
            params={"recursive": "1"},
            headers=client.github_headers,
        )
    except (requests.RequestException, ValueError) as exc:
        return NotFound(FailureReason.NO_ICON_IN_REPOSITORY, f"{owner}/{repo}: {exc}")

    entries = tree.get("tree") if isinstance(tree, dict) else None
    ranked = rank_candidates(entries if isinstance(entries, list) else [])
    if not ranked:
        return NotFound(
            FailureReason.NO_ICON_IN_REPOSITORY,
            f"{owner}/{repo}: tried {len(KNOWN_ICON_PATHS)} known paths + tree scan",
        )
    best = ranked[0]
    logger.debug("tree scan best %s/%s:%s score=%d", owner, repo, best.path, best.score)
    url = f"{settings.github_raw_url}/{owner}/{repo}/{branch}/{best.path}"
    return Found(url, f"github:{owner}/{repo}")


def resolve_repository(client: IconClient, descriptor: RepositoryScan) -> Resolution:
    owner, repo = descriptor.owner, descriptor.repo
    url = lookup_known_paths(client, owner, repo)
    if url:
        return Found(url, f"github:{owner}/{repo}")
    return scan_tree(client, owner, repo)
