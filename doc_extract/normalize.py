import math
import re
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Callable, List, Optional, Tuple

MONTHS = {
    "jan": "01", "feb": "02", "mar": "03", "apr": "04",
    "may": "05", "jun": "06", "jul": "07", "aug": "08",
    "sep": "09", "oct": "10", "nov": "11", "dec": "12",
}

LEADING_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)

AMOUNT_FIELDS = ("debit", "credit", "balance")

CENTS = Decimal("0.01")
# wide enough to quantize any finite float
_AMOUNT_CONTEXT = Context(prec=400)


def month_number(name: str) -> str:
    # unknown month names fall back to January
    return MONTHS.get(name[:3].lower(), "01")


def _iso(year: str, month: str, day: str) -> str:
    return f"{year}-{month.zfill(2)}-{day.zfill(2)}"


def _numeric_date(m: re.Match) -> str:
    day, month, year = m.groups()
    return _iso(year, month, day)


def _month_name_date(m: re.Match) -> str:
    day, month, year = m.groups()
    return _iso(year, month_number(month), day)


DATE_SHAPES: List[Tuple[re.Pattern, Callable[[re.Match], str]]] = [
    (re.compile(r"(\d{2})[-/](\d{2})[-/](\d{4})", re.ASCII), _numeric_date),
    (re.compile(r"(\d{2})\s+([A-Za-z]{3})\s+(\d{4})", re.ASCII), _month_name_date),
    (re.compile(r"(\d{2})[-/]([A-Za-z]{3})[-/](\d{4})", re.ASCII), _month_name_date),
]


def normalize_date(value: Optional[str], date_format: str = "auto") -> str:
    """
    Rewrite a statement date as YYYY-MM-DD.

    date_format is accepted but not consulted; the shape cascade always
    decides. Strings matching no shape come back unchanged.
    """
    if not value:
        return ""

    for pattern, build in DATE_SHAPES:
        m = pattern.search(value)
        if m:
            return build(m)
    return value


def normalize_amount(value) -> str:
    """
    Leading number of value (commas and whitespace removed) to two decimals.

    Ties round half up on the exact binary value, so "0.125" gives "0.13"
    while "1.005" (stored just below 1.005) gives "1.00". Non-numeric and
    non-finite input gives "".
    """
    if value is None:
        return ""
    s = re.sub(r"[,\s]", "", str(value))
    if s == "":
        return ""
    m = LEADING_NUMBER.match(s)
    if not m:
        return ""
    x = float(m.group(0))
    if not math.isfinite(x):
        return ""
    return str(Decimal(x).quantize(CENTS, rounding=ROUND_HALF_UP, context=_AMOUNT_CONTEXT))


def normalize_transaction(tx: dict, date_format: str = "auto") -> dict:
    out = dict(tx)
    out["date"] = normalize_date(tx.get("date"), date_format)
    for field in AMOUNT_FIELDS:
        out[field] = normalize_amount(tx.get(field))
    # the editable table always carries a reference cell
    out["reference"] = tx.get("reference") or ""
    return out


def normalize_transactions(transactions: List[dict], date_format: str = "auto") -> List[dict]:
    return [normalize_transaction(t, date_format) for t in transactions]
