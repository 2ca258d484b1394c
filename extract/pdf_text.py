# extract/pdf_text.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Union

import fitz

from classes import GlyphRun
from errors import EmptyDocumentError

logger = logging.getLogger(__name__)

_backend_ready = False


def ensure_pdf_backend():
    """
    Initialise the PDF backend once per process and return the module handle.
    MuPDF's own stderr chatter is silenced; problems surface as exceptions instead.
    """
    global _backend_ready
    if not _backend_ready:
        fitz.TOOLS.mupdf_display_errors(False)
        _backend_ready = True
        logger.debug("PDF backend ready (PyMuPDF %s)", fitz.VersionBind)
    return fitz


def page_glyph_runs(page) -> List[GlyphRun]:
    """
    One GlyphRun per text span. PyMuPDF measures y downwards from the top;
    runs are flipped so that y grows towards the top of the page.
    """
    height = float(page.rect.height)
    runs: List[GlyphRun] = []
    for block in page.get_text("dict").get("blocks", []):
        if block.get("type") != 0:
            continue
        for line in block.get("lines", []):
            for span in line.get("spans", []):
                text = span.get("text") or ""
                if not text.strip():
                    continue
                x, y = span.get("origin") or span["bbox"][:2]
                runs.append(GlyphRun(text=text, x=float(x), y=height - float(y)))
    return runs


def pdf_to_glyph_runs(source: Union[str, Path, bytes], password: Optional[str] = None) -> List[List[GlyphRun]]:
    """Per-page glyph runs, in page order. Encrypted files without a valid password yield no runs."""
    backend = ensure_pdf_backend()
    try:
        if isinstance(source, (bytes, bytearray)):
            doc = backend.open(stream=bytes(source), filetype="pdf")
        else:
            doc = backend.open(str(source))
    except (RuntimeError, ValueError) as exc:
        # FileDataError / EmptyFileError derive from RuntimeError
        raise EmptyDocumentError(f"Could not open PDF: {exc}") from exc

    with doc:
        if doc.needs_pass and not (password and doc.authenticate(password)):
            logger.warning("PDF is password-protected; no text extracted")
            return []

        pages = [page_glyph_runs(doc.load_page(i)) for i in range(doc.page_count)]

    logger.debug("Extracted glyph runs from %d page(s)", len(pages))
    return pages
