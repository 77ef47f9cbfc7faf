import streamlit as st


def guidance_panel():
    st.subheader("How it works")
    st.markdown(
        "1. **Upload** your bank statement PDF (text-based, not scanned).\n"
        "2. **Review** the extracted transactions, fix any errors and delete unwanted rows.\n"
        "3. **Export** the table as an Excel (.xlsx) file for analysis, budgeting or record-keeping."
    )


def upload_section():
    st.header("📄 Upload Bank Statement")

    uploaded = st.file_uploader(
        "Upload PDF statement",
        type=["pdf"],
        key="uploaded_pdf",
    )
    return uploaded
