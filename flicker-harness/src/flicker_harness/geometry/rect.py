from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Rect:
    """Axis-aligned integer rectangle (left/top inclusive, right/bottom exclusive).

    A rect whose right edge is not past its left edge (or bottom not past top)
    covers no pixels and is considered empty.
    """

    left: int = 0
    top: int = 0
    right: int = 0
    bottom: int = 0

    @classmethod
    def from_ltrb(cls, left: int, top: int, right: int, bottom: int) -> "Rect":
        return cls(left=int(left), top=int(top), right=int(right), bottom=int(bottom))

    @property
    def width(self) -> int:
        return max(0, self.right - self.left)

    @property
    def height(self) -> int:
        return max(0, self.bottom - self.top)

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def is_empty(self) -> bool:
        return self.right <= self.left or self.bottom <= self.top

    @property
    def is_not_empty(self) -> bool:
        return not self.is_empty

    def contains(self, other: "Rect") -> bool:
        if other.is_empty:
            return True
        if self.is_empty:
            return False
        return (
            self.left <= other.left
            and self.top <= other.top
            and self.right >= other.right
            and self.bottom >= other.bottom
        )

    def intersection(self, other: "Rect") -> Optional["Rect"]:
        left = max(self.left, other.left)
        top = max(self.top, other.top)
        right = min(self.right, other.right)
        bottom = min(self.bottom, other.bottom)
        out = Rect(left, top, right, bottom)
        if out.is_empty:
            return None
        return out

    def intersects(self, other: "Rect") -> bool:
        return self.intersection(other) is not None

    def __str__(self) -> str:
        return f"({self.left},{self.top},{self.right},{self.bottom})"


Rect.EMPTY = Rect()  # type: ignore[attr-defined]
