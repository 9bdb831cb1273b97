"""Icon URL resolvers, one per kind of source descriptor."""

from .metadata import resolve_metadata
from .repository import resolve_repository, score_path
from .storefront import resolve_storefront

__all__ = ["resolve_metadata", "resolve_repository", "resolve_storefront", "score_path"]
