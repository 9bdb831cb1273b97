"""Observability helpers."""

from .logging import JsonFormatter, app_id_ctx, configure_logging  # re-export

__all__ = ["JsonFormatter", "app_id_ctx", "configure_logging"]
