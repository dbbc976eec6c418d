"""Convert a single PDF page to markdown: rasterize, then transcribe."""

import logging
import time
from pathlib import Path
from typing import Optional, Tuple

from .. import config
from ..ai.providers import VisionProvider, create_provider
from .errors import InvalidArgumentError
from .pdf_renderer import render_page, validate_page_number, validate_scale
from .reader import open_document

logger = logging.getLogger(__name__)


def _validate_request(pdf_path, page_number) -> None:
    if not isinstance(pdf_path, str) or not pdf_path.strip():
        raise InvalidArgumentError("pdf_path must be a non-empty string")
    validate_page_number(page_number)


def convert_pdf_page_to_image(
    pdf_path: str,
    page_number: int,
    scale: Optional[float] = None
) -> bytes:
    """Render one page of a PDF file to PNG bytes.

    Args:
        pdf_path: Path to PDF file
        page_number: Page to render (1-indexed)
        scale: Render scale; defaults to the configured PDFMD_RENDER_SCALE

    Returns:
        PNG bytes

    Raises:
        InvalidArgumentError: If pdf_path, page_number or scale is malformed
        FileNotFoundError: If the PDF does not exist
        PDFParseError: If the file is not a loadable PDF
        PageOutOfRangeError: If page_number exceeds the page count
        PDFRenderError: If rendering fails
    """
    _validate_request(pdf_path, page_number)
    scale = validate_scale(config.get_render_scale() if scale is None else scale)

    with open_document(pdf_path) as document:
        return render_page(document, page_number, scale)


def convert_pdf_page_to_markdown(
    pdf_path: str,
    page_number: int,
    provider: Optional[VisionProvider] = None,
    scale: Optional[float] = None
) -> str:
    """Convert a PDF page to markdown via a vision model.

    The page is rendered to PNG first, then sent to the provider. Without an
    explicit provider one is created from configuration.

    Returns:
        Markdown transcription of the page

    Raises:
        ConfigurationError: If no provider is given and credentials are missing
        AIClientError: If the vision service call fails
        (plus everything convert_pdf_page_to_image raises)
    """
    markdown, _ = convert_pdf_page(pdf_path, page_number, provider=provider, scale=scale)
    return markdown


def convert_pdf_page(
    pdf_path: str,
    page_number: int,
    provider: Optional[VisionProvider] = None,
    scale: Optional[float] = None
) -> Tuple[str, bytes]:
    """Like convert_pdf_page_to_markdown, but also return the rendered PNG."""
    _validate_request(pdf_path, page_number)
    if provider is None:
        provider = create_provider()

    start = time.perf_counter()
    image = convert_pdf_page_to_image(pdf_path, page_number, scale=scale)
    render_ms = (time.perf_counter() - start) * 1000
    logger.info(
        f"Rendered {Path(pdf_path).name} page {page_number} "
        f"({len(image)} bytes, {render_ms:.0f} ms)"
    )

    start = time.perf_counter()
    markdown = provider.image_to_markdown(image)
    api_ms = (time.perf_counter() - start) * 1000
    logger.info(
        f"Transcribed page {page_number} with {provider.name} "
        f"({len(markdown)} characters, {api_ms:.0f} ms)"
    )
    return markdown, image


def save_page_image(image: bytes, output_dir: str, pdf_path: str, page_number: int) -> str:
    """Write a rendered page to {output_dir}/{pdf_stem}_page{N}.png.

    Returns:
        Path to saved image file
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)
    image_path = output_path / f"{Path(pdf_path).stem}_page{page_number}.png"
    image_path.write_bytes(image)
    return str(image_path)
