#!/usr/bin/env python3
"""Fetch real client app icons into the public asset directories.

Sources, in priority order per application:
- App Store lookup API (artworkUrl512, upgraded from artworkUrl100)
- GitHub repository (known icon paths, then a scored tree scan)
- Play Store page (og:image meta tag)

Exits non-zero when any application fails; the summary file is only written
when every icon was fetched.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from config import get_settings  # noqa: E402
from iconsync.batch import run_batch, write_summary  # noqa: E402
from iconsync.downloader import ensure_dirs  # noqa: E402
from iconsync.http import IconClient  # noqa: E402
from iconsync.obs.logging import configure_logging  # noqa: E402
from iconsync.registry import DEFAULT_CATALOG, load_catalog  # noqa: E402


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Fetch client app icons")
    parser.add_argument("--root", help="Project root holding the asset directories")
    parser.add_argument("--catalog", help="Catalog JSON file replacing the built-in one")
    args = parser.parse_args(argv)

    settings = get_settings()
    if args.root:
        settings = settings.model_copy(update={"project_root": Path(args.root)})
    configure_logging(settings.log_level, settings.log_json)

    catalog_path = args.catalog or settings.catalog_path
    catalog = load_catalog(settings.resolve(catalog_path)) if catalog_path else DEFAULT_CATALOG

    dest_dirs = settings.dest_dirs
    ensure_dirs(dest_dirs)
    with IconClient(settings) as client:
        report = run_batch(client, catalog, dest_dirs)
    write_summary(report, settings.resolve(settings.summary_path))
    return report.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
