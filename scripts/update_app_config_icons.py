#!/usr/bin/env python3
"""Rewrite ``iconUrl`` in the app-config files from the fetched icon assets."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from config import get_settings  # noqa: E402
from iconsync.errors import ConfigPatchError  # noqa: E402
from iconsync.obs.logging import configure_logging  # noqa: E402
from iconsync.patcher import patch_file  # noqa: E402
from iconsync.registry import ALLOW_LIST  # noqa: E402

logger = logging.getLogger("iconsync.scripts.update_app_config_icons")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Update iconUrl in app-config files")
    parser.add_argument("--root", help="Project root holding the config files")
    args = parser.parse_args(argv)

    settings = get_settings()
    if args.root:
        settings = settings.model_copy(update={"project_root": Path(args.root)})
    configure_logging(settings.log_level, settings.log_json)

    icons_dir = settings.resolve(settings.icons_dir)
    status = 0
    for path in settings.config_files:
        if not path.exists():
            logger.warning("config not found, skipping: %s", path)
            continue
        try:
            changed = patch_file(path, icons_dir, ALLOW_LIST, settings.icon_url_prefix)
        except ConfigPatchError as exc:
            logger.error("%s", exc)
            status = 1
            continue
        print(f"Updated iconUrl in: {path} ({changed} changed)")
    return status


if __name__ == "__main__":
    raise SystemExit(main())
