"""Fetch a resolved icon once and mirror it into every asset directory."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable

import requests

from .errors import AssetWriteFailed, DownloadFailed
from .http import IconClient

logger = logging.getLogger("iconsync.downloader")


def ensure_dirs(dirs: Iterable[Path]) -> None:
    for d in dirs:
        Path(d).mkdir(parents=True, exist_ok=True)


def fetch_icon(client: IconClient, url: str) -> bytes:
    """Return the body at ``url``; no retries."""

    try:
        return client.get_bytes(
            url, headers={"User-Agent": client.settings.fetcher_user_agent}
        )
    except requests.HTTPError as exc:
        resp = exc.response
        status = resp.status_code if resp is not None else None
        reason = resp.reason if resp is not None else ""
        raise DownloadFailed(url, status, reason=reason or "") from exc
    except requests.RequestException as exc:
        raise DownloadFailed(url, reason=str(exc)) from exc


def _stage(body: bytes, out: Path) -> Path:
    fd, tmp = tempfile.mkstemp(dir=out.parent, prefix=f".{out.name}.", suffix=".tmp")
    with os.fdopen(fd, "wb") as fh:
        fh.write(body)
    return Path(tmp)


def mirror_bytes(body: bytes, file_name: str, dest_dirs: Iterable[Path]) -> None:
    """Write ``body`` as ``file_name`` into every dir, or into none.

    Every copy is staged next to its target first; targets are only replaced
    once all staged writes succeeded.
    """

    staged: list[tuple[Path, Path]] = []
    try:
        for d in dest_dirs:
            out = Path(d) / file_name
            if out.is_dir():
                raise IsADirectoryError(f"Is a directory: '{out}'")
            staged.append((_stage(body, out), out))
        for tmp, out in staged:
            os.replace(tmp, out)
            logger.debug("wrote %s (%d bytes)", out, len(body))
    except OSError as exc:
        for tmp, _ in staged:
            tmp.unlink(missing_ok=True)
        raise AssetWriteFailed(f"Cannot write {file_name}: {exc}") from exc


def download_to_all(
    client: IconClient, url: str, file_name: str, dest_dirs: Iterable[Path]
) -> int:
    """Write the bytes at ``url`` to ``file_name`` in each of ``dest_dirs``.

    The body is fetched before any file is touched, so a failed download
    leaves every directory as it was. Existing files are overwritten.
    """

    body = fetch_icon(client, url)
    mirror_bytes(body, file_name, dest_dirs)
    return len(body)
