# config.py

"""Pipeline configuration utilities.

Values are primarily loaded from ``config.json`` and may be overridden by
environment variables. The :func:`get_settings` helper merges the two sources
and caches the result.
"""

from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

BROWSER_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class Settings(BaseSettings):
    """Pipeline settings merged from JSON and environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    project_root: Path = Path(".")
    icon_dest_dirs: list[str] = [
        "frontend/public/assets/apps-icons",
        "public/assets/apps-icons",
    ]
    icons_dir: str = "frontend/public/assets/apps-icons"
    app_config_paths: list[str] = [
        "frontend/public/assets/app-config.json",
        "public/assets/app-config.json",
    ]
    summary_path: str = "scripts/fetch_app_icons.result.json"
    icon_url_prefix: str = "/assets/apps-icons"
    catalog_path: str | None = None

    itunes_lookup_url: str = "https://itunes.apple.com/lookup"
    itunes_country: str = "us"
    github_api_url: str = "https://api.github.com"
    github_raw_url: str = "https://raw.githubusercontent.com"
    play_store_url: str = "https://play.google.com/store/apps/details"
    play_store_lang: str = "en"
    play_store_country: str = "US"
    fetcher_user_agent: str = "subscription-page-icon-fetcher"
    browser_user_agent: str = BROWSER_USER_AGENT
    http_timeout: float | None = None

    log_level: str = "INFO"
    log_json: bool = False

    def resolve(self, rel: str | Path) -> Path:
        """Return ``rel`` anchored at :attr:`project_root` unless absolute."""

        path = Path(rel)
        return path if path.is_absolute() else self.project_root / path

    @property
    def dest_dirs(self) -> list[Path]:
        return [self.resolve(d) for d in self.icon_dest_dirs]

    @property
    def config_files(self) -> list[Path]:
        return [self.resolve(p) for p in self.app_config_paths]


# Cached singleton to avoid repeated file reads
@lru_cache
def get_settings() -> Settings:
    """Return merged settings with environment variable precedence.

    The configuration is read from ``config.json`` located alongside this file
    and fed into :class:`Settings`. Environment variables override any values
    from the JSON file. The result is cached to prevent repeated disk reads.
    """

    config_path = Path(__file__).with_name("config.json")
    data = json.loads(config_path.read_text()) if config_path.exists() else {}
    env_override = {
        k.lower(): v
        for k, v in os.environ.items()
        if k.lower() in Settings.model_fields
    }
    merged = {**data, **env_override}
    # Environment variables override values from the JSON file.
    return Settings(**merged)
