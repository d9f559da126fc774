"""
Ship image metadata normalization.

Ship metadata carries an ``ship_images`` array written by two generations of
the import pipeline, and older rows were never backfilled:

* normalized shape: ``url``, ``url_hd``, ``url_2k``, ``is_default`` (bool)
* raw provider shape: ``imageurl``, ``imageurlhd``, ``imageurl2k``, ``default`` ("Y"/"N")

Both are resolved here, once, into :class:`ShipImageRecord`. Each field reads
the normalized key first and falls back to the raw key; empty strings count as
missing. ``caption`` is common to both shapes.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

logger = logging.getLogger(__name__)

SHIP_IMAGES_KEY = "ship_images"

# canonical field -> (normalized key, raw key)
_URL_FIELDS = {
    "url":    ("url", "imageurl"),
    "url_hd": ("url_hd", "imageurlhd"),
    "url_2k": ("url_2k", "imageurl2k"),
}


@dataclass(frozen=True)
class ShipImageRecord:
    url: Optional[str]
    url_hd: Optional[str]
    url_2k: Optional[str]
    caption: Optional[str]
    is_default: bool


def _is_default(entry: Mapping[str, Any]) -> bool:
    flag = entry.get("is_default")
    if flag is not None:
        return bool(flag)
    return entry.get("default") == "Y"


def normalize_ship_image(entry: Mapping[str, Any]) -> ShipImageRecord:
    urls = {
        field: entry.get(normalized_key) or entry.get(raw_key) or None
        for field, (normalized_key, raw_key) in _URL_FIELDS.items()
    }
    return ShipImageRecord(
        url=urls["url"],
        url_hd=urls["url_hd"],
        url_2k=urls["url_2k"],
        caption=entry.get("caption") or None,
        is_default=_is_default(entry),
    )


def normalize_ship_images(ship_metadata: Optional[Mapping[str, Any]]) -> Optional[List[ShipImageRecord]]:
    """ None when the ship has no image array at all, otherwise one record per usable entry. """
    raw = (ship_metadata or {}).get(SHIP_IMAGES_KEY)
    if not isinstance(raw, list):
        return None
    out: List[ShipImageRecord] = []
    for entry in raw:
        if not isinstance(entry, Mapping):
            logger.warning("Skipping ship image entry of type %s", type(entry).__name__)
            continue
        out.append(normalize_ship_image(entry))
    return out
