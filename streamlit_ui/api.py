import logging

import requests

from streamlit_ui.config import DOC_EXTRACT_URL, REQUEST_TIMEOUT

logger = logging.getLogger(__name__)


class ServiceError(RuntimeError):
    pass


def _raise_for_status(r: requests.Response):
    try:
        r.raise_for_status()
    except requests.HTTPError as e:
        try:
            detail = r.json().get("detail")
        except ValueError:
            detail = None
        logger.warning("doc-extract %s failed: %s %s", r.url, r.status_code, detail)
        raise ServiceError(str(detail or e)) from e


def list_templates():
    r = requests.get(f"{DOC_EXTRACT_URL}/templates", timeout=REQUEST_TIMEOUT)
    _raise_for_status(r)
    return r.json()


def extract_statement(file, settings: dict):
    files = {"file": (file.name, file.getvalue(), "application/pdf")}
    r = requests.post(
        f"{DOC_EXTRACT_URL}/extract",
        files=files,
        params=settings,
        timeout=REQUEST_TIMEOUT,
    )
    _raise_for_status(r)
    return r.json()


def export_statement(transactions: list, bank_name: str):
    """Returns (xlsx bytes, filename suggested by the service)."""
    r = requests.post(
        f"{DOC_EXTRACT_URL}/export",
        json={"bank_name": bank_name, "transactions": transactions},
        timeout=REQUEST_TIMEOUT,
    )
    _raise_for_status(r)

    filename = f"{bank_name}_Statement.xlsx"
    disposition = r.headers.get("Content-Disposition", "")
    if "filename=" in disposition:
        filename = disposition.split("filename=", 1)[1].strip('"')
    return r.content, filename
