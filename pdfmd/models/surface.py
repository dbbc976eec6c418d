"""Off-screen drawing surface used as the render target."""

from __future__ import annotations

import io

from PIL import Image

WHITE = (255, 255, 255)
PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


class DrawingSurface:
    """Opaque RGB pixel buffer, painted white when allocated.

    PDF pages have no background of their own; content is composited over
    the white fill so blank regions never come out transparent or black.
    """

    def __init__(self, width: int, height: int):
        if width < 1 or height < 1:
            raise ValueError(f"Surface dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self._image = Image.new("RGB", (width, height), WHITE)

    @property
    def image(self) -> Image.Image:
        if self._image is None:
            raise ValueError("Drawing surface has been released")
        return self._image

    def draw_premultiplied_rgba(self, samples: bytes, width: int, height: int, stride: int) -> None:
        """Composite premultiplied RGBA content onto the surface at the origin.

        MuPDF pixmaps with alpha store premultiplied samples; they are
        unpremultiplied before blending. Content larger than the surface is
        clipped.

        Args:
            samples: Raw pixel bytes (R, G, B, A per pixel, premultiplied)
            width: Content width in pixels
            height: Content height in pixels
            stride: Bytes per row in samples
        """
        # The "RGBa" raw mode unpremultiplies while decoding.
        content = Image.frombytes("RGBA", (width, height), samples, "raw", "RGBa", stride)
        try:
            self.image.paste(content, (0, 0), content)
        finally:
            content.close()

    def to_png(self) -> bytes:
        """Encode the surface as PNG bytes."""
        buf = io.BytesIO()
        self.image.save(buf, format="PNG")
        return buf.getvalue()

    def close(self) -> None:
        if self._image is not None:
            self._image.close()
            self._image = None

    def __enter__(self) -> DrawingSurface:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
