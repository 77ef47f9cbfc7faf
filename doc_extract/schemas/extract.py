from pydantic import BaseModel, Field
from typing import List, Literal, Optional

from doc_extract.core.config import (
    DEFAULT_BANK_TEMPLATE,
    DEFAULT_DATE_FORMAT,
    DEFAULT_PAGE_RANGE,
)

PageRange = Literal["all", "first-5", "last-5"]


class ParsingSettings(BaseModel):
    bank_template: str = DEFAULT_BANK_TEMPLATE   # registry key or "auto-detect"
    page_range: PageRange = DEFAULT_PAGE_RANGE
    date_format: str = DEFAULT_DATE_FORMAT       # not consulted by the normalizer
    header_detection: bool = True                # reserved


class Transaction(BaseModel):
    id: str
    date: str
    description: str
    reference: str = ""
    debit: str = ""
    credit: str = ""
    balance: str = ""


class ExtractionDiagnostics(BaseModel):
    confidence: float = Field(..., ge=0.0, le=1.0)
    warnings: List[str] = []
    detected_columns: List[str] = []
    total_pages: int = Field(..., ge=0)
    processed_pages: int = Field(..., ge=0)


class ExtractResponse(BaseModel):
    transactions: List[Transaction]
    detected_bank: str
    template_key: Optional[str] = None
    diagnostics: ExtractionDiagnostics


class TemplateInfo(BaseModel):
    key: str
    name: str
    date_formats: List[str]


class ExportRequest(BaseModel):
    bank_name: str = "Unknown"
    transactions: List[Transaction]
