"""Resolver results and the pipeline error taxonomy."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Union


class FailureReason(str, Enum):
    """Why a single resolver could not produce an icon URL."""

    NO_ARTWORK_FOUND = "NoArtworkFound"
    NO_ICON_IN_REPOSITORY = "NoIconInRepository"
    PREVIEW_IMAGE_NOT_FOUND = "PreviewImageNotFound"


@dataclass(frozen=True)
class Found:
    """A resolved icon URL.

    ``extension`` fixes the saved file's suffix for sources whose URLs do
    not carry one; otherwise it is taken from the URL path.
    """

    url: str
    provenance: str
    extension: str | None = None


@dataclass(frozen=True)
class NotFound:
    reason: FailureReason
    detail: str = ""

    def __str__(self) -> str:
        return f"{self.reason.value}: {self.detail}" if self.detail else self.reason.value


Resolution = Union[Found, NotFound]


class IconSyncError(RuntimeError):
    """Base class for failures that escape to the batch or CLI layer."""

    code = "icon_sync_error"


class UnresolvedIcon(IconSyncError):
    """Raised when every configured resolver failed for one application."""

    code = "unresolved_icon"

    def __init__(self, app_id: str, failures: Sequence[NotFound] = ()) -> None:
        self.app_id = app_id
        self.failures = list(failures)
        if self.failures:
            detail = "; ".join(str(f) for f in self.failures)
        else:
            detail = "no sources configured"
        super().__init__(f"No icon resolved for {app_id} ({detail})")


class DownloadFailed(IconSyncError):
    """Raised when fetching a resolved icon URL does not succeed."""

    code = "download_failed"

    def __init__(self, url: str, status: int | None = None, *, reason: str = "") -> None:
        self.url = url
        self.status = status
        label = str(status) if status is not None else "error"
        message = f"{label} {reason}".strip()
        super().__init__(f"{message} for {url}")


class ConfigPatchError(IconSyncError):
    """Raised when an app-config file cannot be parsed."""

    code = "config_patch_error"


class AssetWriteFailed(IconSyncError):
    """Raised when a fetched icon cannot be written to a destination dir."""

    code = "asset_write_failed"
