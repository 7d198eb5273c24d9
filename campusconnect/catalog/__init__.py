"""Catalog package: the in-memory store and its input parsing."""

from .store import CatalogStore, new_id
from .parsing import parse_datetime
from .seed import sample_catalog

__all__ = [
    'CatalogStore',
    'new_id',
    'parse_datetime',
    'sample_catalog',
]
