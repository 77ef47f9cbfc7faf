import io
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, NamedTuple, Tuple, Union

from doc_extract.core.config import MAX_PAGES
from doc_extract.core.handles import LazyHandle, PDFPLUMBER

logger = logging.getLogger(__name__)

Document = Union[bytes, str, Path, io.IOBase]


class TextFragment(NamedTuple):
    page: int
    text: str


class PdfDocument:
    """Text-layer view over an opened pdfplumber document."""

    def __init__(self, pdf):
        self._pdf = pdf

    @property
    def page_count(self) -> int:
        return len(self._pdf.pages)

    def page_fragments(self, page_number: int) -> List[TextFragment]:
        """Lines of text on a 1-based page, in reading order."""
        page = self._pdf.pages[page_number - 1]
        text = page.extract_text() or ""
        return [TextFragment(page_number, line) for line in text.split("\n")]


class PdfTextSource:
    """Embedded text layer only; scanned pages yield no fragments."""

    def __init__(self, handle: LazyHandle = PDFPLUMBER):
        self._handle = handle

    @contextmanager
    def open(self, document: Document) -> Iterator[PdfDocument]:
        pdfplumber = self._handle.get()
        if isinstance(document, (bytes, bytearray)):
            document = io.BytesIO(document)
        with pdfplumber.open(document) as pdf:
            yield PdfDocument(pdf)


# -------------------------------------------------
# Page selection
# -------------------------------------------------

def page_window(total_pages: int, page_range: str) -> Tuple[int, int]:
    """
    1-based inclusive (start, end) pages for a page range setting.

    first-5 stops at page min(5, total); last-5 starts at max(1, total - 4).
    An empty document gives end < start.
    """
    start, end = 1, total_pages
    if page_range == "first-5":
        end = min(5, total_pages)
    elif page_range == "last-5":
        start = max(1, total_pages - 4)
    return start, end


def cap_window(start: int, end: int, max_pages: int = MAX_PAGES) -> Tuple[int, int]:
    if end - start + 1 > max_pages:
        logger.warning("Page window %d-%d exceeds MAX_PAGES=%d; truncating", start, end, max_pages)
        end = start + max_pages - 1
    return start, end


def read_page_text(doc: PdfDocument, start: int, end: int) -> str:
    """Concatenate the fragments of pages start..end, one line per fragment."""
    fragments: List[TextFragment] = []
    for page_number in range(start, end + 1):
        fragments.extend(doc.page_fragments(page_number))

    for frag in fragments:
        if not isinstance(frag.text, str):
            raise ValueError(f"Malformed text fragment on page {frag.page}: {frag.text!r}")

    return "\n".join(frag.text for frag in fragments)
