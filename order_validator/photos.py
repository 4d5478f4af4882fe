"""
photos.py — Counting Uploaded Photos on a Line Item

The storefront upload widget (UploadKit) stores each uploaded photo as a line
item property whose name contains "photo" and whose value points to the
upload service or its CDN. Some themes store several properties per photo
(a thumbnail and the full resolution file), so by default photos are counted
by a per-photo identifier instead of by property.
"""

import re
from typing import Iterable, Optional, Sequence

from .config import PhotoCountPolicy
from .models import OrderProperty

DEFAULT_UPLOAD_MARKERS = ("uploadkit", "cdn")

_DIGITS_RE = re.compile(r"\d+")
_UUID_RE = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)


def is_photo_property(prop: OrderProperty, markers: Sequence[str] = DEFAULT_UPLOAD_MARKERS) -> bool:
    """True if the property name mentions a photo and its value references an upload."""
    if not prop.name or not prop.value:
        return False
    if "photo" not in prop.name.lower():
        return False
    return any(marker in prop.value for marker in markers)


def photo_identifier(prop: OrderProperty) -> str:
    """
    Returns the identifier of the photo a property refers to.

    A UUID embedded in the value wins. Otherwise the last digit run of the
    property name indexes the photo ("Photo 10x15 #2" -> "2",
    "photo_1_thumb" -> "1"). Properties with neither are identified by
    their full value.
    """
    match = _UUID_RE.search(prop.value or "")
    if match:
        return f"u:{match.group().lower()}"
    runs = _DIGITS_RE.findall(prop.name or "")
    if runs:
        return f"n:{int(runs[-1])}"
    return f"v:{prop.value}"


def count_uploaded_photos(
    properties: Optional[Iterable[OrderProperty]],
    policy: PhotoCountPolicy = PhotoCountPolicy.DEDUPLICATED,
    markers: Sequence[str] = DEFAULT_UPLOAD_MARKERS,
) -> int:
    """
    Counts the uploaded photos referenced by a line item's properties.

    Args:
        properties: The line item properties. None or a non-list yields 0.
        policy: NAIVE counts every matching property, DEDUPLICATED counts
            distinct photo identifiers.
        markers: Substrings that mark a value as an uploaded file.

    Returns:
        int: The number of uploaded photos.
    """
    if not isinstance(properties, (list, tuple)):
        return 0

    matches = [p for p in properties if isinstance(p, OrderProperty) and is_photo_property(p, markers)]

    if policy == PhotoCountPolicy.NAIVE:
        return len(matches)
    return len({photo_identifier(p) for p in matches})
