"""Point app-config entries at the icon files written by the fetch stage.

Two config shapes are supported:

* ``{"config": {...}, "platforms": {"ios": [...], ...}}``
* the legacy flat ``{"ios": [...], "android": [...], "pc": [...]}``

Only entries whose ``id`` is in the allow-list and that have an icon file on
disk are changed; everything else is written back as read.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Collection

from .errors import ConfigPatchError

logger = logging.getLogger("iconsync.patcher")

EXTENSION_PRIORITY = (".png", ".svg", ".ico", ".icns")


def resolve_icon_url(icons_dir: Path, app_id: str, prefix: str) -> str | None:
    for ext in EXTENSION_PRIORITY:
        if (icons_dir / f"{app_id}{ext}").exists():
            return f"{prefix.rstrip('/')}/{app_id}{ext}"
    return None


def patch_config(
    data: dict[str, Any],
    icons_dir: Path,
    allow_list: Collection[str],
    prefix: str,
) -> int:
    """Set ``iconUrl`` on matching entries of ``data`` in place.

    Returns the number of entries whose ``iconUrl`` changed.
    """

    platforms = data.get("platforms") if isinstance(data.get("platforms"), dict) else data
    changed = 0
    for key, apps in platforms.items():
        if not isinstance(apps, list):
            continue
        for app in apps:
            if not isinstance(app, dict) or not app.get("id"):
                continue
            if app["id"] not in allow_list:
                continue
            icon_url = resolve_icon_url(icons_dir, app["id"], prefix)
            if icon_url is None:
                continue
            if app.get("iconUrl") != icon_url:
                app["iconUrl"] = icon_url
                changed += 1
                logger.debug("%s/%s -> %s", key, app["id"], icon_url)
    return changed


def dump_config(data: dict[str, Any]) -> str:
    return json.dumps(data, indent=4, ensure_ascii=False) + "\n"


def patch_file(
    path: Path,
    icons_dir: Path,
    allow_list: Collection[str],
    prefix: str,
) -> int:
    """Patch the config at ``path`` and rewrite it in one go."""

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ConfigPatchError(f"Unreadable JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigPatchError(f"{path} must contain a JSON object")
    changed = patch_config(data, icons_dir, allow_list, prefix)
    path.write_text(dump_config(data), encoding="utf-8")
    return changed
