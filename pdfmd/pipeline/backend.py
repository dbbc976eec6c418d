"""One-time initialization of the MuPDF rendering backend.

Every loader and renderer call goes through ensure_backend(); the first call
configures PyMuPDF, later calls return immediately.
"""

import logging
import threading

try:
    import fitz  # pymupdf
except ImportError:
    fitz = None

logger = logging.getLogger(__name__)

# Full anti-aliasing for text and vector graphics (MuPDF range 0-8)
ANTI_ALIAS_LEVEL = 8

_init_lock = threading.Lock()
_initialized = False


def ensure_backend() -> None:
    """Initialize PyMuPDF for off-screen rendering, once per process.

    MuPDF resolves fonts from its bundled set and never fetches resources over
    the network. Its error messages are kept off stderr; failures surface as
    exceptions instead.

    Raises:
        ImportError: If pymupdf (fitz) is not installed
    """
    global _initialized
    if _initialized:
        return
    with _init_lock:
        if _initialized:
            return
        if fitz is None:
            raise ImportError(
                "pymupdf (fitz) is required for PDF rendering. "
                "Install with: pip install pymupdf"
            )
        fitz.TOOLS.mupdf_display_errors(False)
        fitz.TOOLS.set_aa_level(ANTI_ALIAS_LEVEL)
        _initialized = True
        logger.debug(f"MuPDF backend initialized (PyMuPDF {fitz.VersionBind})")


def is_initialized() -> bool:
    return _initialized
