import logging
import uuid
from typing import Optional

from fastapi import HTTPException, UploadFile

from doc_extract.detector import detect_bank, match_template_key
from doc_extract.exporters import ExportError, export_filename, export_transactions_xlsx
from doc_extract.extractors import (
    Document,
    PdfTextSource,
    cap_window,
    page_window,
    read_page_text,
)
from doc_extract.normalize import normalize_transactions
from doc_extract.parser import build_diagnostics, parse_transactions
from doc_extract.schemas.extract import ExportRequest, ParsingSettings
from doc_extract.templates import AUTO_DETECT, lookup

logger = logging.getLogger(__name__)

PDF_MIME_TYPES = ("application/pdf", "application/x-pdf", "application/octet-stream")


class ExtractionError(RuntimeError):
    """The PDF text layer could not be read."""


_default_source: Optional[PdfTextSource] = None


def default_text_source() -> PdfTextSource:
    global _default_source
    if _default_source is None:
        _default_source = PdfTextSource()
    return _default_source


# -------------------------------------------------
# Orchestration
# -------------------------------------------------

def resolve_template_key(settings: ParsingSettings, text: str) -> Optional[str]:
    if settings.bank_template != AUTO_DETECT:
        return settings.bank_template
    return match_template_key(text)


def load_text(document: Document, page_range: str, source: PdfTextSource):
    """Returns (text, total_pages, processed_pages)."""
    try:
        with source.open(document) as doc:
            total = doc.page_count
            start, end = cap_window(*page_window(total, page_range))
            text = read_page_text(doc, start, end)
    except Exception as e:
        logger.exception("Text extraction failed")
        raise ExtractionError(str(e) or e.__class__.__name__) from e

    return text, total, max(0, end - start + 1)


def extract_statement(
    document: Document,
    settings: Optional[ParsingSettings] = None,
    text_source: Optional[PdfTextSource] = None,
) -> dict:
    """
    Run one extraction: page text -> bank -> template -> parse -> normalize.

    Zero transactions is a valid result; the diagnostics say why. Only a
    failure to read the document raises (ExtractionError).
    """
    settings = settings or ParsingSettings()
    source = text_source or default_text_source()

    text, total_pages, processed_pages = load_text(document, settings.page_range, source)

    detected_bank = detect_bank(text)
    template_key = resolve_template_key(settings, text)
    template = lookup(template_key)

    run_id = uuid.uuid4().hex[:12]
    candidates = parse_transactions(text, template, template_key, run_id=run_id)
    transactions = normalize_transactions(candidates, settings.date_format)

    diagnostics = build_diagnostics(
        transactions,
        detected_bank,
        text,
        template,
        template_key,
        total_pages,
        processed_pages,
    )

    logger.info(
        "Extracted %d transactions (bank=%s, template=%s, pages=%d/%d, confidence=%.2f)",
        len(transactions), detected_bank, template_key,
        processed_pages, total_pages, diagnostics["confidence"],
    )

    return {
        "transactions": transactions,
        "detected_bank": detected_bank,
        "template_key": template_key,
        "diagnostics": diagnostics,
    }


# -------------------------------------------------
# HTTP glue
# -------------------------------------------------

def handle_extract(file: UploadFile, settings: ParsingSettings):
    mime = file.content_type or "application/octet-stream"
    is_pdf = mime in PDF_MIME_TYPES or (file.filename or "").lower().endswith(".pdf")
    if not is_pdf:
        raise HTTPException(status_code=415, detail=f"Unsupported file type: {mime}")

    content = file.file.read()
    try:
        return extract_statement(content, settings)
    except ExtractionError as e:
        raise HTTPException(status_code=500, detail=str(e))


def handle_export(payload: ExportRequest):
    if not payload.transactions:
        raise HTTPException(status_code=400, detail="No transactions to export")

    rows = [t.model_dump() for t in payload.transactions]
    try:
        content = export_transactions_xlsx(rows, payload.bank_name)
    except ExportError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return content, export_filename(payload.bank_name)
