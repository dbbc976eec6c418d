"""Document data model wrapping a parsed PDF."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from .page import PageGeometry

if TYPE_CHECKING:
    import fitz


class DocumentHandle:
    """Page-addressable handle on a parsed in-memory PDF.

    Created by the loader from a byte buffer and released after rendering.
    A handle is used by one request only; it is never cached or shared.

    Attributes:
        source: Label describing where the bytes came from (filename or "<bytes>")
        page_count: Number of pages in the document (>= 0)
    """

    def __init__(self, pdf: fitz.Document, source: str = "<bytes>"):
        page_count = int(pdf.page_count)
        if page_count < 0:
            raise ValueError(f"Page count must be >= 0, got {page_count}")
        self._pdf: Optional[Any] = pdf
        self.source = source
        self.page_count = page_count

    @property
    def closed(self) -> bool:
        return self._pdf is None

    def _require_open(self) -> fitz.Document:
        if self._pdf is None:
            raise ValueError(f"Document {self.source} is closed")
        return self._pdf

    def load_page(self, page_number: int) -> fitz.Page:
        """Return the underlying page object for a 1-indexed page number.

        Args:
            page_number: Page number (starts at 1)

        Raises:
            IndexError: If page_number is outside 1..page_count
        """
        pdf = self._require_open()
        if page_number < 1 or page_number > self.page_count:
            raise IndexError(
                f"Page {page_number} out of range for {self.source} ({self.page_count} pages)"
            )
        # fitz uses 0-indexed pages
        return pdf.load_page(page_number - 1)

    def page_geometry(self, page_number: int) -> PageGeometry:
        """Intrinsic size of a page in PDF points, rotation applied."""
        page = self.load_page(page_number)
        return PageGeometry.from_fitz_page(page_number, page)

    def close(self) -> None:
        """Release the parsed document. Safe to call more than once."""
        if self._pdf is not None:
            self._pdf.close()
            self._pdf = None

    def __enter__(self) -> DocumentHandle:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"DocumentHandle(source={self.source!r}, page_count={self.page_count}, {state})"
