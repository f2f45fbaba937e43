"""Business-layer services."""

from .business import EntityBusiness, split_search_terms
from .mapping import copy_fields, map_to

__all__ = ["EntityBusiness", "split_search_terms", "copy_fields", "map_to"]
