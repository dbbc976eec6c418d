"""Page geometry and viewport models."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

# MuPDF rounds transformed page bounds inward by this much before taking
# floor/ceil, so near-integral sizes do not gain an extra pixel.
_ROUNDING_EPSILON = 0.001


@dataclass(frozen=True)
class Viewport:
    """Device-space rectangle a page is rendered into.

    Attributes:
        width: Width in device pixels (>= 1)
        height: Height in device pixels (>= 1)
        scale: Scale factor from PDF points to pixels
    """

    width: int
    height: int
    scale: float

    def __post_init__(self):
        if self.width < 1 or self.height < 1:
            raise ValueError(
                f"Viewport dimensions must be positive, got {self.width}x{self.height}"
            )
        if not self.scale > 0:
            raise ValueError(f"Viewport scale must be > 0, got {self.scale}")


@dataclass(frozen=True)
class PageGeometry:
    """Intrinsic geometry of a single page.

    Attributes:
        page_number: Page number (starts at 1)
        width: Displayed page width in points (rotation applied)
        height: Displayed page height in points (rotation applied)
        rotation: Page rotation in degrees (0, 90, 180, 270)
    """

    page_number: int
    width: float
    height: float
    rotation: int = 0

    def __post_init__(self):
        if self.page_number < 1:
            raise ValueError(f"Page number must be >= 1, got {self.page_number}")
        if not (self.width > 0 and self.height > 0):
            raise ValueError(
                f"Page dimensions must be positive, got {self.width}x{self.height}"
            )

    @classmethod
    def from_fitz_page(cls, page_number: int, page: Any) -> PageGeometry:
        rect = page.rect
        return cls(
            page_number=page_number,
            width=float(rect.width),
            height=float(rect.height),
            rotation=int(page.rotation),
        )

    def viewport(self, scale: float) -> Viewport:
        """Compute the pixel viewport for this page at the given scale.

        Rounding follows MuPDF's own pixmap bounds so the surface matches the
        rendered content exactly.
        """
        width = max(1, math.ceil(self.width * scale - _ROUNDING_EPSILON))
        height = max(1, math.ceil(self.height * scale - _ROUNDING_EPSILON))
        return Viewport(width=width, height=height, scale=scale)
