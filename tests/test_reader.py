"""Unit tests for loading PDF bytes into a DocumentHandle."""

from pathlib import Path

import pytest

from pdfmd.models.document import DocumentHandle
from pdfmd.pipeline.errors import InvalidArgumentError, PDFParseError
from pdfmd.pipeline.reader import load_document, open_document


def _make_pdf(path: Path, page_count: int = 2) -> None:
    import fitz
    doc = fitz.open()
    for _ in range(page_count):
        doc.new_page(width=595, height=842)
    doc.save(str(path))
    doc.close()


@pytest.fixture
def pdf_path(tmp_path):
    p = tmp_path / "two_pages.pdf"
    _make_pdf(p, page_count=2)
    return p


def test_load_document_page_count(pdf_path):
    with load_document(pdf_path.read_bytes()) as doc:
        assert isinstance(doc, DocumentHandle)
        assert doc.page_count == 2
        assert not doc.closed


def test_load_document_accepts_bytearray(pdf_path):
    with load_document(bytearray(pdf_path.read_bytes())) as doc:
        assert doc.page_count == 2


def test_text_bytes_are_not_a_pdf():
    """Arbitrary text never loads as an empty document."""
    with pytest.raises(PDFParseError, match="missing %PDF- header"):
        load_document(b"This is just a plain text file.\nNothing to see here.\n")


def test_empty_bytes_rejected():
    with pytest.raises(PDFParseError, match="empty"):
        load_document(b"")


def test_garbage_after_header_rejected():
    with pytest.raises(PDFParseError):
        load_document(b"%PDF-1.7\n" + b"\x00\x01garbage" * 50)


def test_truncated_pdf_rejected(pdf_path):
    data = pdf_path.read_bytes()
    with pytest.raises(PDFParseError):
        load_document(data[:20])


def test_missing_xref_pointer_is_repaired(pdf_path):
    data = pdf_path.read_bytes()
    cut = data.rfind(b"startxref")
    assert cut > 0
    with load_document(data[:cut]) as doc:
        assert doc.page_count == 2


def test_encrypted_pdf_rejected(tmp_path):
    import fitz
    doc = fitz.open()
    doc.new_page()
    p = tmp_path / "locked.pdf"
    doc.save(str(p), encryption=fitz.PDF_ENCRYPT_AES_256, owner_pw="owner", user_pw="secret")
    doc.close()

    with pytest.raises(PDFParseError, match="encrypted"):
        load_document(p.read_bytes())


@pytest.mark.parametrize("data", ["%PDF-1.4", None, 42])
def test_non_bytes_input_is_invalid_argument(data):
    with pytest.raises(InvalidArgumentError):
        load_document(data)


def test_parse_error_message_includes_source():
    with pytest.raises(PDFParseError, match="notes.txt"):
        load_document(b"hello", source="notes.txt")


def test_open_document_reads_file(pdf_path):
    with open_document(str(pdf_path)) as doc:
        assert doc.page_count == 2
        assert doc.source == "two_pages.pdf"


def test_open_document_accepts_path_object(pdf_path):
    with open_document(pdf_path) as doc:
        assert doc.page_count == 2


def test_open_document_missing_file(tmp_path):
    missing = tmp_path / "missing.pdf"
    with pytest.raises(FileNotFoundError, match="PDF file not found"):
        open_document(str(missing))


@pytest.mark.parametrize("path", ["", "   ", None, 123])
def test_open_document_invalid_path(path):
    with pytest.raises(InvalidArgumentError, match="pdf_path"):
        open_document(path)


def test_open_document_non_pdf_file(tmp_path):
    p = tmp_path / "notes.txt"
    p.write_text("not a pdf", encoding="utf-8")
    with pytest.raises(PDFParseError):
        open_document(str(p))
