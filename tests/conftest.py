from contextlib import contextmanager

import pytest

from doc_extract.extractors import TextFragment


class FakeDocument:
    def __init__(self, pages):
        self.pages = pages
        self.requested = []

    @property
    def page_count(self):
        return len(self.pages)

    def page_fragments(self, page_number):
        self.requested.append(page_number)
        text = self.pages[page_number - 1]
        return [TextFragment(page_number, line) for line in text.split("\n")]


class FakeTextSource:
    """Stands in for the pdfplumber-backed source; pages are plain strings."""

    def __init__(self, pages, error=None):
        self.document = FakeDocument(pages)
        self.error = error

    @contextmanager
    def open(self, document):
        if self.error is not None:
            raise self.error
        yield self.document


@pytest.fixture
def fake_source():
    return FakeTextSource


HDFC_STATEMENT = "\n".join([
    "HDFC BANK LIMITED",
    "Statement of account",
    "Date Narration Chq/Ref No Withdrawal Amt Deposit Amt Closing Balance",
    "Opening Balance 10,000.00",
    "01/02/2024 UPI PAYMENT REF1234567890 500.00 0.00 9,500.00",
    "03/02/2024 NEFT CR UTR: AXIS45678901 0.00 2,000.00 11,500.00",
    "05/02/2024 POS PURCHASE 123456789012 250.00 0.00 11,250.00",
])


@pytest.fixture
def hdfc_statement():
    return HDFC_STATEMENT
