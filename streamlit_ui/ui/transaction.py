import uuid

import pandas as pd
import streamlit as st

COLUMNS = ["id", "date", "description", "reference", "debit", "credit", "balance"]


def _cell(value) -> str:
    if value is None:
        return ""
    try:
        if pd.isna(value):
            return ""
    except (TypeError, ValueError):
        pass
    return str(value).strip()


def rows_from_editor(df: pd.DataFrame) -> list:
    """
    Turn the edited table back into transaction dicts.

    Rows added in the editor get a fresh id; blank rows are dropped.
    """
    rows = []
    for record in df.to_dict(orient="records"):
        row = {c: _cell(record.get(c)) for c in COLUMNS}
        if not any(row[c] for c in COLUMNS if c != "id"):
            continue
        if not row["id"]:
            row["id"] = f"manual-{uuid.uuid4().hex[:12]}"
        rows.append(row)
    return rows


def transactions_editor(transactions: list) -> list:
    if not transactions:
        st.info("No transactions")
        return []

    df = pd.DataFrame(transactions)
    df = df.reindex(columns=COLUMNS, fill_value="")

    edited = st.data_editor(
        df,
        key="transactions_editor",
        num_rows="dynamic",
        hide_index=True,
        use_container_width=True,
        disabled=["id"],
        column_config={
            "id": None,
            "date": st.column_config.TextColumn("Date", width="small"),
            "description": st.column_config.TextColumn("Description", width="large"),
            "reference": st.column_config.TextColumn("Reference", help="Optional"),
            "debit": st.column_config.TextColumn("Debit"),
            "credit": st.column_config.TextColumn("Credit"),
            "balance": st.column_config.TextColumn("Balance"),
        },
    )
    return rows_from_editor(edited)
