"""Run resolution and download over the whole catalog."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from .downloader import download_to_all
from .errors import IconSyncError
from .http import IconClient
from .obs.logging import app_id_ctx
from .orchestrator import resolve_icon
from .registry import Catalog

logger = logging.getLogger("iconsync.batch")


@dataclass(frozen=True)
class BatchEntry:
    app_id: str
    file_name: str
    provenance: str

    def as_dict(self) -> dict[str, str]:
        return {
            "applicationId": self.app_id,
            "fileName": self.file_name,
            "provenance": self.provenance,
        }


@dataclass
class BatchReport:
    entries: list[BatchEntry] = field(default_factory=list)
    failures: list[tuple[str, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1

    def summary(self) -> list[dict[str, str]]:
        return [e.as_dict() for e in self.entries]


def run_batch(client: IconClient, catalog: Catalog, dest_dirs: Iterable[Path]) -> BatchReport:
    """Resolve and download every application in catalog order.

    A failure for one application is recorded and the batch moves on.
    """

    dest_dirs = list(dest_dirs)
    report = BatchReport()
    for app_id, descriptors in catalog.items():
        token = app_id_ctx.set(app_id)
        try:
            print(f"- {app_id}: fetching... ", end="", flush=True)
            try:
                icon = resolve_icon(client, app_id, descriptors)
                download_to_all(client, icon.source_url, icon.file_name, dest_dirs)
            except IconSyncError as exc:
                print("FAIL")
                logger.error("%s: %s", app_id, exc)
                report.failures.append((app_id, str(exc)))
                continue
            except Exception as exc:
                print("FAIL")
                logger.exception("%s: unexpected error", app_id)
                report.failures.append((app_id, f"{type(exc).__name__}: {exc}"))
                continue
            print(f"OK ({icon.provenance})")
            report.entries.append(BatchEntry(app_id, icon.file_name, icon.provenance))
        finally:
            app_id_ctx.reset(token)

    if report.failures:
        print(f"\n{len(report.failures)} of {len(catalog)} icons failed")
    return report


def write_summary(report: BatchReport, path: Path) -> bool:
    """Persist the successes; skipped when any application failed."""

    if not report.ok:
        logger.warning("summary not written: %d failure(s)", len(report.failures))
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(report.summary(), indent=2) + "\n", encoding="utf-8")
    print(f"\nSaved summary: {path}")
    return True
