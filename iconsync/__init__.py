"""Resolve, download and wire up client application icons."""

from .batch import BatchReport, run_batch, write_summary
from .orchestrator import ResolvedIcon, resolve_icon
from .registry import ALLOW_LIST, DEFAULT_CATALOG

__all__ = [
    "ALLOW_LIST",
    "BatchReport",
    "DEFAULT_CATALOG",
    "ResolvedIcon",
    "resolve_icon",
    "run_batch",
    "write_summary",
]
