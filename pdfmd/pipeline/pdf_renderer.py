"""PDF page to PNG rasterization with an explicit white drawing surface."""

import asyncio
import logging
import math
from numbers import Real

from ..config import DEFAULT_RENDER_SCALE, MAX_RENDER_SCALE, MIN_RENDER_SCALE
from ..models.document import DocumentHandle
from ..models.page import PageGeometry
from ..models.surface import PNG_SIGNATURE, DrawingSurface
from . import backend
from .errors import InvalidArgumentError, PageOutOfRangeError, PDFRenderError
from .reader import load_document

logger = logging.getLogger(__name__)


def validate_page_number(page_number) -> int:
    """Check that page_number is a positive integer.

    Raises:
        InvalidArgumentError: If page_number is not an int, is a bool, or is < 1
    """
    if isinstance(page_number, bool) or not isinstance(page_number, int):
        raise InvalidArgumentError("page_number must be a positive integer")
    if page_number < 1:
        raise InvalidArgumentError("page_number must be a positive integer")
    return page_number


def validate_scale(scale) -> float:
    """Check that scale is a finite number within the supported range."""
    if isinstance(scale, bool) or not isinstance(scale, Real):
        raise InvalidArgumentError(f"scale must be a number, got {type(scale).__name__}")
    scale = float(scale)
    if not math.isfinite(scale) or not MIN_RENDER_SCALE <= scale <= MAX_RENDER_SCALE:
        raise InvalidArgumentError(
            f"scale must be between {MIN_RENDER_SCALE} and {MAX_RENDER_SCALE}, got {scale}"
        )
    return scale


def render_page(
    document: DocumentHandle,
    page_number: int,
    scale: float = DEFAULT_RENDER_SCALE,
) -> bytes:
    """Render one page of a loaded document to PNG bytes.

    Steps: validate arguments, resolve the page, compute its viewport, allocate
    a white surface of that size, composite the page content (rendered with a
    transparent background) onto it, and encode as PNG. Rendering completes
    fully before returning.

    Args:
        document: Loaded document (see load_document)
        page_number: Page to render (1-indexed)
        scale: Points-to-pixels scale factor (default DEFAULT_RENDER_SCALE)

    Returns:
        PNG-encoded image bytes

    Raises:
        InvalidArgumentError: If page_number or scale is malformed (checked
            before the document is accessed)
        PageOutOfRangeError: If page_number > document.page_count
        PDFRenderError: If resolving, drawing or encoding the page fails
    """
    validate_page_number(page_number)
    scale = validate_scale(scale)

    page_count = document.page_count
    if page_number > page_count:
        raise PageOutOfRangeError(page_number, page_count)

    backend.ensure_backend()
    fitz = backend.fitz

    surface = None
    pix = None
    try:
        page = document.load_page(page_number)
        viewport = PageGeometry.from_fitz_page(page_number, page).viewport(scale)
        logger.debug(
            f"Rendering {document.source} page {page_number} at scale {scale}: "
            f"{viewport.width}x{viewport.height} px"
        )

        surface = DrawingSurface(viewport.width, viewport.height)

        pix = page.get_pixmap(matrix=fitz.Matrix(scale, scale), alpha=True)
        surface.draw_premultiplied_rgba(pix.samples, pix.width, pix.height, pix.stride)

        png = surface.to_png()
    except Exception as e:
        raise PDFRenderError(
            f"Failed to render page {page_number} from {document.source}: {str(e)}"
        ) from e
    finally:
        pix = None
        if surface is not None:
            surface.close()

    if not png.startswith(PNG_SIGNATURE):
        raise PDFRenderError(
            f"Failed to render page {page_number} from {document.source}: "
            "encoder produced invalid PNG data"
        )
    return png


async def render_page_async(
    document: DocumentHandle,
    page_number: int,
    scale: float = DEFAULT_RENDER_SCALE,
) -> bytes:
    """Run render_page in a worker thread.

    Arguments are validated before the thread starts. Once started the
    render is not cancellable; a caller that needs a deadline should wrap
    this in asyncio.wait_for and discard the result.
    """
    validate_page_number(page_number)
    validate_scale(scale)
    return await asyncio.to_thread(render_page, document, page_number, scale)


def render_pdf_page(data: bytes, page_number: int, scale: float = DEFAULT_RENDER_SCALE, source: str = "<bytes>") -> bytes:
    """Load PDF bytes, render one page and release the document.

    page_number and scale are validated before the bytes are parsed.
    """
    validate_page_number(page_number)
    scale = validate_scale(scale)
    with load_document(data, source=source) as document:
        return render_page(document, page_number, scale)
