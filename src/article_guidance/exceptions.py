"""Exceptions raised across the article guidance layers.

Only failures the caller must see are modelled here. Graph query and
metadata lookups fail open (empty or None results) and never raise.
"""


class ArticleGuidanceError(Exception):
    """Base class for article guidance errors."""


class EntitySearchError(ArticleGuidanceError):
    """The free-text entity search failed (transport, status, or body)."""


class OutlineLoadError(ArticleGuidanceError):
    """The outline definitions could not be loaded."""
