"""Brightness classifier — maps an 8-bit sample to one of three leaf categories."""

from __future__ import annotations

import enum

# Bucket edges at 1/5 and 3/5 of the 8-bit range, truncated: 51 and 153.
_DARK_CEILING = 255 * 1 // 5
_MID_CEILING = 255 * 3 // 5


class LeafCategory(enum.IntEnum):
    DARK = 0
    MID = 1
    LIGHT = 2


# One rendering symbol per category.
SYMBOLS: dict[LeafCategory, str] = {
    LeafCategory.DARK: ".",
    LeafCategory.MID: "/",
    LeafCategory.LIGHT: "#",
}


def classify(sample: int) -> LeafCategory:
    if sample < _DARK_CEILING:
        return LeafCategory.DARK
    if sample < _MID_CEILING:
        return LeafCategory.MID
    return LeafCategory.LIGHT
