"""
Bank template registry.

Each entry describes one known statement layout: how to recognise it in the
extracted text, which header wordings map to which logical column, and the
date formats the bank prints. Registry order is the detection priority.

To add a bank, add one entry to BANK_TEMPLATES. No parser changes needed.
"""

from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator

MANDATORY_COLUMNS = ("date", "description", "debit", "credit", "balance")
OPTIONAL_COLUMNS = ("reference",)

AUTO_DETECT = "auto-detect"
HDFC_KEY = "hdfc"


class BankTemplate(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    detection_patterns: Tuple[str, ...]
    column_synonyms: Mapping[str, Tuple[str, ...]]
    accepted_date_formats: Tuple[str, ...]

    @field_validator("detection_patterns")
    @classmethod
    def _patterns_present(cls, v):
        if not v:
            raise ValueError("detection_patterns must not be empty")
        return tuple(p.lower() for p in v)

    @field_validator("column_synonyms")
    @classmethod
    def _mandatory_columns(cls, v):
        missing = [c for c in MANDATORY_COLUMNS if not v.get(c)]
        if missing:
            raise ValueError(f"column_synonyms missing: {', '.join(missing)}")
        unknown = set(v) - set(MANDATORY_COLUMNS) - set(OPTIONAL_COLUMNS)
        if unknown:
            raise ValueError(f"unknown logical columns: {', '.join(sorted(unknown))}")
        return MappingProxyType(dict(v))

    def synonyms(self, column: str) -> Tuple[str, ...]:
        return self.column_synonyms.get(column, ())

    @property
    def has_reference(self) -> bool:
        return bool(self.synonyms("reference"))


BANK_TEMPLATES: Dict[str, BankTemplate] = {
    "sbi": BankTemplate(
        name="State Bank of India (SBI)",
        detection_patterns=("state bank", "sbi", "sbiin"),
        column_synonyms={
            "date": ("txn date", "date", "value date", "txn dt"),
            "description": ("description", "narration", "particulars", "remarks"),
            "debit": ("debit", "withdrawal", "dr", "debit amt"),
            "credit": ("credit", "deposit", "cr", "credit amt"),
            "balance": ("balance", "closing balance", "bal"),
        },
        accepted_date_formats=("DD MMM YYYY", "DD-MM-YYYY", "DD/MM/YYYY"),
    ),
    HDFC_KEY: BankTemplate(
        name="HDFC Bank",
        detection_patterns=("hdfc", "housing development"),
        column_synonyms={
            "date": ("date", "transaction date", "value date"),
            "description": ("narration", "description", "particulars"),
            "debit": ("withdrawal amt", "debit", "withdrawal"),
            "credit": ("deposit amt", "credit", "deposit"),
            "balance": ("closing balance", "balance"),
            "reference": (
                "reference", "ref no", "reference no", "utr",
                "chq/ref no", "ref", "cheque no", "transaction id",
            ),
        },
        accepted_date_formats=("DD/MM/YY", "DD/MM/YYYY", "DD-MM-YYYY"),
    ),
    "icici": BankTemplate(
        name="ICICI Bank",
        detection_patterns=("icici", "industrial credit"),
        column_synonyms={
            "date": ("transaction date", "date", "value date"),
            "description": ("transaction remarks", "description", "particulars"),
            "debit": ("withdrawal amount", "debit", "dr"),
            "credit": ("deposit amount", "credit", "cr"),
            "balance": ("balance", "closing balance"),
        },
        accepted_date_formats=("DD-MM-YYYY", "DD/MM/YYYY", "DD MMM YYYY"),
    ),
    "axis": BankTemplate(
        name="Axis Bank",
        detection_patterns=("axis", "axis bank"),
        column_synonyms={
            "date": ("tran date", "date", "transaction date"),
            "description": ("particulars", "description", "narration"),
            "debit": ("debit", "dr", "withdrawal"),
            "credit": ("credit", "cr", "deposit"),
            "balance": ("balance", "closing bal"),
        },
        accepted_date_formats=("DD-MM-YYYY", "DD/MM/YYYY"),
    ),
    "kotak": BankTemplate(
        name="Kotak Mahindra Bank",
        detection_patterns=("kotak", "mahindra"),
        column_synonyms={
            "date": ("transaction date", "date"),
            "description": ("description", "particulars", "narration"),
            "debit": ("debit", "withdrawal"),
            "credit": ("credit", "deposit"),
            "balance": ("balance",),
        },
        accepted_date_formats=("DD/MM/YYYY", "DD-MM-YYYY"),
    ),
}


def lookup(key: Optional[str]) -> Optional[BankTemplate]:
    if not key:
        return None
    return BANK_TEMPLATES.get(key)


def all_templates() -> List[Tuple[str, BankTemplate]]:
    return list(BANK_TEMPLATES.items())
