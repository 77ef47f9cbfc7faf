import io

import pytest
from fastapi.testclient import TestClient
from openpyxl import load_workbook

from doc_extract.main import app
from doc_extract.services import extraction_service


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def use_source(monkeypatch, fake_source):
    def _use(pages, error=None):
        source = fake_source(pages, error=error)
        monkeypatch.setattr(extraction_service, "default_text_source", lambda: source)
        return source
    return _use


def pdf_upload(name="statement.pdf", mime="application/pdf"):
    return {"file": (name, b"%PDF-1.4 fake", mime)}


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_templates_listed_in_registry_order(client):
    body = client.get("/templates").json()
    assert [t["key"] for t in body] == ["sbi", "hdfc", "icici", "axis", "kotak"]
    assert body[1]["name"] == "HDFC Bank"
    assert body[1]["date_formats"] == ["DD/MM/YY", "DD/MM/YYYY", "DD-MM-YYYY"]


def test_extract(client, use_source, hdfc_statement):
    use_source([hdfc_statement])
    r = client.post("/extract", files=pdf_upload())
    assert r.status_code == 200

    body = r.json()
    assert body["detected_bank"] == "HDFC Bank"
    assert body["template_key"] == "hdfc"
    assert len(body["transactions"]) == 3
    assert body["transactions"][0]["date"] == "2024-02-01"
    assert body["transactions"][0]["reference"] == "REF1234567890"
    assert body["diagnostics"]["detected_columns"][-1] == "reference"


def test_extract_passes_settings(client, use_source):
    source = use_source([f"0{n}/01/2024 ITEM {n} 1.00 2.00" for n in range(1, 8)])
    r = client.post(
        "/extract",
        files=pdf_upload(),
        params={"page_range": "first-5", "bank_template": "axis", "header_detection": "false"},
    )
    assert r.status_code == 200
    body = r.json()
    assert body["template_key"] == "axis"
    assert body["diagnostics"]["processed_pages"] == 5
    assert source.document.requested == [1, 2, 3, 4, 5]


def test_extract_zero_transactions_is_not_an_error(client, use_source):
    use_source(["Nothing but prose"])
    r = client.post("/extract", files=pdf_upload())
    assert r.status_code == 200
    assert r.json()["transactions"] == []
    assert r.json()["diagnostics"]["confidence"] == 0.3


def test_extract_rejects_bad_page_range(client, use_source):
    use_source(["x"])
    r = client.post("/extract", files=pdf_upload(), params={"page_range": "middle"})
    assert r.status_code == 422


def test_extract_rejects_non_pdf(client, use_source):
    use_source(["x"])
    r = client.post("/extract", files=pdf_upload(name="photo.png", mime="image/png"))
    assert r.status_code == 415


def test_extract_hard_failure_passes_message_through(client, use_source):
    use_source([], error=RuntimeError("Unexpected EOF"))
    r = client.post("/extract", files=pdf_upload())
    assert r.status_code == 500
    assert r.json()["detail"] == "Unexpected EOF"


def test_export_returns_workbook(client):
    payload = {
        "bank_name": "HDFC Bank",
        "transactions": [
            {"id": "t1", "date": "2024-02-01", "description": "UPI PAYMENT",
             "reference": "REF1234567890", "debit": "500.00", "credit": "", "balance": "9500.00"},
        ],
    }
    r = client.post("/export", json=payload)
    assert r.status_code == 200
    assert "HDFC_Bank_Statement_" in r.headers["content-disposition"]

    ws = load_workbook(io.BytesIO(r.content))["Transactions"]
    assert [c.value for c in ws[1]] == ["Date", "Description", "Reference", "Debit", "Credit", "Balance"]
    assert ws["A2"].value == "2024-02-01"
    assert ws["C2"].value == "REF1234567890"


def test_export_requires_transactions(client):
    r = client.post("/export", json={"bank_name": "Unknown", "transactions": []})
    assert r.status_code == 400
