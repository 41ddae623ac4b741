"""Utility modules for article guidance."""

from .commons import commons_thumbnail_url

__all__ = [
    "commons_thumbnail_url",
]
