from typing import List

from fastapi import APIRouter, Depends, File, Query, Response, UploadFile

from doc_extract.core.config import (
    DEFAULT_BANK_TEMPLATE,
    DEFAULT_DATE_FORMAT,
    DEFAULT_PAGE_RANGE,
)
from doc_extract.exporters import XLSX_MIME
from doc_extract.schemas.extract import (
    ExportRequest,
    ExtractResponse,
    PageRange,
    ParsingSettings,
    TemplateInfo,
)
from doc_extract.services.extraction_service import handle_export, handle_extract
from doc_extract.templates import all_templates


router = APIRouter()


def parsing_settings(
    bank_template: str = Query(DEFAULT_BANK_TEMPLATE),
    page_range: PageRange = Query(DEFAULT_PAGE_RANGE),
    date_format: str = Query(DEFAULT_DATE_FORMAT),
    header_detection: bool = Query(True),
) -> ParsingSettings:
    return ParsingSettings(
        bank_template=bank_template,
        page_range=page_range,
        date_format=date_format,
        header_detection=header_detection,
    )


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/templates", response_model=List[TemplateInfo])
def templates():
    return [
        TemplateInfo(key=key, name=t.name, date_formats=list(t.accepted_date_formats))
        for key, t in all_templates()
    ]


@router.post("/extract", response_model=ExtractResponse)
def extract(
    file: UploadFile = File(...),
    settings: ParsingSettings = Depends(parsing_settings),
):
    return handle_extract(file=file, settings=settings)


@router.post("/export")
def export(payload: ExportRequest):
    content, filename = handle_export(payload)
    return Response(
        content=content,
        media_type=XLSX_MIME,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
