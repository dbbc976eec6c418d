"""Loading PDF bytes into a page-addressable document using PyMuPDF."""

import logging
from pathlib import Path
from typing import Union

from ..models.document import DocumentHandle
from . import backend
from .errors import InvalidArgumentError, PDFParseError

logger = logging.getLogger(__name__)

PDF_HEADER = b"%PDF-"
# PDF readers accept the header anywhere in the first 1024 bytes
HEADER_SEARCH_WINDOW = 1024


def load_document(data: bytes, source: str = "<bytes>") -> DocumentHandle:
    """Parse PDF bytes into a DocumentHandle.

    The loader is pure with respect to its input: it never touches the
    filesystem or network. Document JavaScript is never executed. Fonts that
    are not embedded are substituted from MuPDF's built-in font set.

    MuPDF repairs a missing or damaged cross-reference table by scanning the
    file for objects, so a file cut off after its last page object still
    loads. Only input with no recoverable pages is rejected.

    Args:
        data: Raw PDF bytes
        source: Label used in messages (e.g. the filename)

    Returns:
        DocumentHandle with at least one page. The caller must close it.

    Raises:
        InvalidArgumentError: If data is not bytes-like
        PDFParseError: If data is not a loadable PDF (bad header, corrupt
            structure, password protected, or no pages)
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise InvalidArgumentError(
            f"PDF data must be bytes, got {type(data).__name__}"
        )
    data = bytes(data)
    if not data:
        raise PDFParseError(f"Failed to read PDF {source}: file is empty")
    if PDF_HEADER not in data[:HEADER_SEARCH_WINDOW]:
        raise PDFParseError(f"Failed to read PDF {source}: missing %PDF- header")

    backend.ensure_backend()
    fitz = backend.fitz

    try:
        pdf = fitz.open(stream=data, filetype="pdf")
    except Exception as e:
        raise PDFParseError(f"Failed to read PDF {source}: {str(e)}") from e

    try:
        needs_pass = pdf.needs_pass
        page_count = 0 if needs_pass else pdf.page_count
    except Exception as e:
        pdf.close()
        raise PDFParseError(f"Failed to read PDF {source}: {str(e)}") from e

    if needs_pass:
        pdf.close()
        raise PDFParseError(f"Failed to read PDF {source}: document is encrypted")
    if page_count == 0:
        pdf.close()
        raise PDFParseError(f"Failed to read PDF {source}: document has no pages")

    logger.debug(f"Loaded {source}: {pdf.page_count} pages, {len(data)} bytes")
    return DocumentHandle(pdf, source=source)


def open_document(filepath: Union[str, Path]) -> DocumentHandle:
    """Read a PDF file from disk and load it.

    Args:
        filepath: Path to PDF file

    Raises:
        InvalidArgumentError: If filepath is not a non-empty string or Path
        FileNotFoundError: If filepath does not exist
        PDFParseError: If the file is not a loadable PDF
    """
    if isinstance(filepath, str):
        if not filepath.strip():
            raise InvalidArgumentError("pdf_path must be a non-empty string")
        path = Path(filepath)
    elif isinstance(filepath, Path):
        path = filepath
    else:
        raise InvalidArgumentError("pdf_path must be a non-empty string")

    if not path.is_file():
        raise FileNotFoundError(f"PDF file not found: {filepath}")

    data = path.read_bytes()
    return load_document(data, source=path.name)
