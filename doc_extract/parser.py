import re
import logging
import uuid
from typing import List, Optional, Sequence, Tuple

from doc_extract.detector import UNKNOWN_BANK
from doc_extract.templates import BankTemplate, HDFC_KEY, MANDATORY_COLUMNS

logger = logging.getLogger(__name__)

# -------------------------------------------------
# Patterns (ordered; first match wins)
# -------------------------------------------------

DATE_PATTERNS: List[Tuple[str, re.Pattern]] = [
    ("DD-MM-YYYY", re.compile(r"(\d{2}[-/]\d{2}[-/]\d{4})", re.ASCII)),
    ("DD MMM YYYY", re.compile(r"(\d{2}\s+[A-Za-z]{3}\s+\d{4})", re.ASCII)),
    ("DD-MMM-YYYY", re.compile(r"(\d{2}[-/][A-Za-z]{3}[-/]\d{4})", re.ASCII)),
]

REFERENCE_PATTERNS: List[Tuple[str, re.Pattern]] = [
    ("labelled", re.compile(r"(?:ref|reference|utr|chq)[:\s#]+([A-Z0-9]{6,})", re.IGNORECASE | re.ASCII)),
    ("prefixed", re.compile(r"([A-Z]{3}\d{10,})", re.ASCII)),
    ("digits", re.compile(r"(\d{12,})", re.ASCII)),
]

AMOUNT = re.compile(r"[\d,]+\.\d{2}", re.ASCII)

# Header / summary rows also carry dates; drop them outright
NOISE_TOKENS = ("date", "balance", "opening")

DESCRIPTION_MAX_LENGTH = 100
DESCRIPTION_MIN_LENGTH = 3
DESCRIPTION_PLACEHOLDER = "Transaction"

NO_TRANSACTIONS_WARNING = "No transactions found. Try adjusting the bank template or page range."
UNKNOWN_BANK_WARNING = "Could not auto-detect bank. Please select manually."


# -------------------------------------------------
# Helpers
# -------------------------------------------------

def normalize_spaces(s: str) -> str:
    return re.sub(r"\s+", " ", s).strip()


def split_lines(text: str) -> List[str]:
    lines = [x.strip() for x in (text or "").split("\n")]
    return [x for x in lines if x]


def first_match(patterns: Sequence[Tuple[str, re.Pattern]], line: str) -> Optional[Tuple[str, str]]:
    """Run an ordered pattern cascade; returns (pattern name, captured text)."""
    for name, pattern in patterns:
        m = pattern.search(line)
        if m and m.group(1):
            return name, m.group(1)
    return None


def is_noise_line(line: str) -> bool:
    lower = line.lower()
    return any(token in lower for token in NOISE_TOKENS)


def derive_description(line: str, date_text: str) -> str:
    desc = line.replace(date_text, "", 1)
    desc = AMOUNT.sub("", desc)
    desc = normalize_spaces(desc)[:DESCRIPTION_MAX_LENGTH]
    if len(desc) < DESCRIPTION_MIN_LENGTH:
        return DESCRIPTION_PLACEHOLDER
    return desc


def assign_amounts(amounts: List[str]) -> Tuple[str, str, str]:
    """
    Positional debit/credit/balance assignment, returned as (debit, credit, balance).

    Two amounts are read as (credit, balance); three or more as
    (..., debit, credit, balance). Column headers are not consulted.
    """
    debit = credit = balance = ""
    if len(amounts) == 2:
        credit, balance = amounts[0], amounts[1]
    elif len(amounts) >= 3:
        debit, credit, balance = amounts[-3], amounts[-2], amounts[-1]
    return debit, credit, balance


def extracts_reference(template: Optional[BankTemplate], template_key: Optional[str]) -> bool:
    return template is not None and template.has_reference and template_key == HDFC_KEY


def extract_reference(line: str) -> Optional[str]:
    found = first_match(REFERENCE_PATTERNS, line)
    if not found:
        return None
    name, value = found
    logger.debug("Reference %s matched by %s pattern", value, name)
    return value.strip()


# -------------------------------------------------
# Line-based transaction parsing
# -------------------------------------------------

def parse_line(line: str, with_reference: bool = False) -> Optional[dict]:
    """
    Parse one statement line into a candidate transaction.

    Returns None for lines without a date and for header/summary noise.
    Amount fields stay raw (as printed); normalization happens later.
    """
    found = first_match(DATE_PATTERNS, line)
    if not found:
        return None
    if is_noise_line(line):
        return None

    _, date_text = found
    amounts = AMOUNT.findall(line)
    debit, credit, balance = assign_amounts(amounts)

    row = {
        "date": date_text,
        "description": derive_description(line, date_text),
        "debit": debit,
        "credit": credit,
        "balance": balance,
    }

    if with_reference:
        reference = extract_reference(line)
        if reference is not None:
            row["reference"] = reference

    return row


def parse_transactions(
    text: str,
    template: Optional[BankTemplate] = None,
    template_key: Optional[str] = None,
    run_id: Optional[str] = None,
) -> List[dict]:
    run_id = run_id or uuid.uuid4().hex[:12]
    with_reference = extracts_reference(template, template_key)

    transactions = []
    for idx, line in enumerate(split_lines(text)):
        row = parse_line(line, with_reference=with_reference)
        if row is None:
            continue
        transactions.append({"id": f"txn-{run_id}-{idx}", **row})

    logger.info("Parsed %d candidate transactions (template=%s)", len(transactions), template_key)
    return transactions


# -------------------------------------------------
# Diagnostics
# -------------------------------------------------

def score_confidence(has_transactions: bool, bank_detected: bool) -> float:
    confidence = 0.8 if has_transactions else 0.3
    if not bank_detected:
        # penalty bottoms out at 0.5 and never lifts a lower score
        confidence = max(min(confidence, 0.5), confidence - 0.2)
    return round(confidence, 2)


def detect_columns(text: str, template: Optional[BankTemplate], template_key: Optional[str]) -> List[str]:
    columns = list(MANDATORY_COLUMNS)
    if extracts_reference(template, template_key):
        lower_text = (text or "").lower()
        if any(syn.lower() in lower_text for syn in template.synonyms("reference")):
            columns.append("reference")
    return columns


def build_diagnostics(
    transactions: List[dict],
    detected_bank: str,
    text: str,
    template: Optional[BankTemplate],
    template_key: Optional[str],
    total_pages: int,
    processed_pages: int,
) -> dict:
    bank_detected = detected_bank != UNKNOWN_BANK

    warnings = []
    if not transactions:
        warnings.append(NO_TRANSACTIONS_WARNING)
    if not bank_detected:
        warnings.append(UNKNOWN_BANK_WARNING)

    return {
        "confidence": score_confidence(bool(transactions), bank_detected),
        "warnings": warnings,
        "detected_columns": detect_columns(text, template, template_key),
        "total_pages": total_pages,
        "processed_pages": processed_pages,
    }
