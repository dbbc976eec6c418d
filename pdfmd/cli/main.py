"""CLI for converting a PDF page to markdown (or just to PNG)."""

import argparse
import logging
import sys
import time
from pathlib import Path

from ..ai.client import AIClientError
from ..config import ConfigurationError, get_render_scale
from ..pipeline.converter import convert_pdf_page, convert_pdf_page_to_image, save_page_image
from ..pipeline.errors import PDFPipelineError

logger = logging.getLogger(__name__)

PREVIEW_CHARS = 800


def run_conversion(
    pdf_path: str,
    page_number: int,
    output_dir: str,
    scale: float,
    image_only: bool = False
) -> int:
    """Convert one page and write the PNG (and markdown) to output_dir.

    Returns:
        Process exit code (0 on success, 1 on error)
    """
    print(f"PDF Path: {pdf_path}")
    print(f"Page Number: {page_number}\n")

    start = time.perf_counter()
    try:
        if image_only:
            image = convert_pdf_page_to_image(pdf_path, page_number, scale=scale)
            markdown = None
        else:
            markdown, image = convert_pdf_page(pdf_path, page_number, scale=scale)
    except (PDFPipelineError, AIClientError, ConfigurationError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        logger.debug("Conversion failed", exc_info=True)
        return 1

    image_path = save_page_image(image, output_dir, pdf_path, page_number)
    print(f"Image saved to: {image_path} ({len(image)} bytes)")

    if markdown is not None:
        md_path = Path(output_dir) / f"{Path(pdf_path).stem}_page{page_number}.md"
        md_path.write_text(markdown, encoding="utf-8")
        print(f"Markdown saved to: {md_path} ({len(markdown)} characters)\n")

        print("=== Markdown Preview ===")
        print(markdown[:PREVIEW_CHARS])
        if len(markdown) > PREVIEW_CHARS:
            print("\n... (truncated, see output file for full content)")
        print("=== End Preview ===\n")

    print(f"Total time: {(time.perf_counter() - start) * 1000:.0f}ms")
    return 0


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Convert a PDF page to markdown using a vision model"
    )

    parser.add_argument(
        "pdf_path",
        nargs="?",
        help="Path to the PDF file"
    )

    parser.add_argument(
        "page_number",
        nargs="?",
        type=int,
        default=1,
        help="Page number to convert, 1-indexed (default: 1)"
    )

    parser.add_argument(
        "--output",
        default=".",
        help="Directory for the rendered PNG and markdown (default: current directory)"
    )

    parser.add_argument(
        "--scale",
        type=float,
        default=None,
        help="Render scale, points to pixels (default: PDFMD_RENDER_SCALE or 2.0)"
    )

    parser.add_argument(
        "--image-only",
        action="store_true",
        help="Only render the page to PNG; skip the vision model"
    )

    parser.add_argument(
        "--check-deps",
        action="store_true",
        help="Check that required libraries are installed and exit"
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose debug output"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
        stream=sys.stderr,
    )

    if args.check_deps:
        from .check_deps import run_check
        sys.exit(0 if run_check(verbose=True) else 1)

    if not args.pdf_path:
        parser.error("pdf_path is required (unless using --check-deps)")

    scale = args.scale if args.scale is not None else get_render_scale()
    sys.exit(run_conversion(args.pdf_path, args.page_number, args.output, scale, args.image_only))


if __name__ == "__main__":
    main()
