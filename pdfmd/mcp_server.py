"""MCP server exposing convert_pdf_page_to_markdown over stdio."""

import asyncio
import logging
import sys

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from pydantic import Field
from typing_extensions import Annotated

from . import __version__
from .ai.client import AIClientError
from .config import ConfigurationError, require_vision_credentials
from .pipeline import converter
from .pipeline.errors import PDFPipelineError

logger = logging.getLogger(__name__)

SERVER_NAME = "pdf-to-markdown-mcp"
TOOL_NAME = "convert_pdf_page_to_markdown"
TOOL_DESCRIPTION = (
    "Convert a specific page from a PDF file to markdown format using a vision model. "
    "The tool first converts the PDF page to an image, then uses an AI vision model "
    "to extract and format the content as markdown."
)

mcp = FastMCP(SERVER_NAME)


@mcp.tool(name=TOOL_NAME, description=TOOL_DESCRIPTION)
async def convert_pdf_page_to_markdown(
    pdf_path: Annotated[str, Field(
        description="Absolute path to the PDF file to convert. The file must exist and be readable."
    )],
    page_number: Annotated[int, Field(
        description="Page number to convert (1-indexed). Must be between 1 and the total number of pages in the PDF."
    )],
) -> str:
    """Render the page and return its markdown transcription.

    Failures are reported to the client as a tool error whose text keeps the
    underlying cause.
    """
    try:
        return await asyncio.to_thread(
            converter.convert_pdf_page_to_markdown, pdf_path, page_number
        )
    except (PDFPipelineError, AIClientError, ConfigurationError, OSError) as e:
        logger.error(f"Conversion failed for {pdf_path} page {page_number}: {e}")
        raise ToolError(f"Error converting PDF page to markdown: {e}") from e


def main():
    """Start the server on stdio. Exits with code 1 if vision credentials are missing."""
    # stdout carries the protocol; logs go to stderr
    logging.basicConfig(level=logging.INFO, format="%(message)s", stream=sys.stderr)

    try:
        require_vision_credentials()
    except ConfigurationError as e:
        logger.error(f"Fatal error: {e}")
        sys.exit(1)

    logger.info(f"PDF to Markdown MCP server {__version__} running on stdio")
    mcp.run()


if __name__ == "__main__":
    main()
