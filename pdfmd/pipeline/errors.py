"""Error taxonomy for loading and rendering PDF pages."""

from typing import Optional


class PDFPipelineError(Exception):
    """Base class for all rasterization pipeline errors."""
    pass


class InvalidArgumentError(PDFPipelineError, ValueError):
    """Raised when a caller passes a malformed argument (page number, path, data).

    Detected before any document access; the caller can recover by fixing input.
    """
    pass


class PDFParseError(PDFPipelineError):
    """Raised when bytes cannot be loaded as a PDF document."""
    pass


class PageOutOfRangeError(PDFPipelineError):
    """Raised when the requested page does not exist in the document.

    Attributes:
        page_number: The requested 1-indexed page
        page_count: Number of pages the document actually has
    """

    def __init__(self, page_number: int, page_count: int, message: Optional[str] = None):
        self.page_number = page_number
        self.page_count = page_count
        super().__init__(message or f"Invalid page number. PDF has {page_count} pages.")


class PDFRenderError(PDFPipelineError):
    """Raised when rendering a page fails. No partial image is produced."""
    pass
