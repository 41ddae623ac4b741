"""Wikimedia Commons helpers."""

import hashlib
from urllib.parse import quote

COMMONS_THUMB_BASE = "https://upload.wikimedia.org/wikipedia/commons/thumb"


def commons_thumbnail_url(filename: str, width: int = 200) -> str:
    """Convert a Commons file name to its thumbnail URL.

    Commons shards files by the MD5 of the normalized name: the first hex
    digit is the top directory, the first two the second.

    Args:
        filename: File name as stored in a P18 claim (e.g. "Example File.jpg")
        width: Thumbnail width in pixels

    Returns:
        Thumbnail URL, a pure function of the normalized name and width
    """
    normalized = filename.replace(" ", "_")
    digest = hashlib.md5(normalized.encode("utf-8")).hexdigest()
    encoded = quote(normalized, safe="")
    return f"{COMMONS_THUMB_BASE}/{digest[0]}/{digest[:2]}/{encoded}/{width}px-{encoded}"
