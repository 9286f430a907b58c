"""Rectangle and region algebra used by coverage and position checks."""

from __future__ import annotations

from flicker_harness.geometry.rect import Rect
from flicker_harness.geometry.region import Region

__all__ = [
    "Rect",
    "Region",
]
