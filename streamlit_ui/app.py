import streamlit as st

from streamlit_ui.api import ServiceError, export_statement, extract_statement, list_templates
from streamlit_ui.ui.settings import DEFAULT_SETTINGS, as_query_params, settings_panel
from streamlit_ui.ui.transaction import transactions_editor
from streamlit_ui.ui.upload import guidance_panel, upload_section

STEPS = ["upload", "review", "export"]
NO_TRANSACTIONS_ERROR = "No transactions found. Please adjust parsing settings and try again."


st.set_page_config(
    page_title="Statement Extract – PDF to Excel",
    layout="wide",
)


def init_state():
    st.session_state.setdefault("step", "upload")
    st.session_state.setdefault("settings", dict(DEFAULT_SETTINGS))
    st.session_state.setdefault("result", None)
    st.session_state.setdefault("transactions", [])
    st.session_state.setdefault("pdf_file", None)
    st.session_state.setdefault("pdf_file_id", None)
    st.session_state.setdefault("error", None)
    st.session_state.setdefault("export", None)


def reset():
    for key in ("result", "pdf_file", "pdf_file_id", "error", "export"):
        st.session_state[key] = None
    st.session_state.pop("uploaded_pdf", None)
    st.session_state.pop("transactions_editor", None)
    st.session_state.transactions = []
    st.session_state.step = "upload"


def process(file, settings: dict):
    """Extraction replaces any previous result wholesale."""
    st.session_state.error = None
    st.session_state.pop("transactions_editor", None)
    with st.spinner("Extracting..."):
        try:
            result = extract_statement(file, as_query_params(settings))
        except ServiceError as e:
            st.session_state.error = str(e)
            st.session_state.step = "upload"
            return

    st.session_state.result = result
    if not result["transactions"]:
        st.session_state.error = NO_TRANSACTIONS_ERROR
        st.session_state.step = "upload"
    else:
        st.session_state.transactions = result["transactions"]
        st.session_state.step = "review"


def progress_header():
    current = STEPS.index(st.session_state.step)
    cols = st.columns(len(STEPS))
    for idx, (col, label) in enumerate(zip(cols, ["Upload", "Review", "Export"])):
        marker = "🔵" if idx == current else ("✅" if idx < current else "⚪")
        col.markdown(f"### {marker} {label}")


# ---------------- Page ----------------

init_state()
progress_header()

if st.session_state.error:
    st.error(st.session_state.error)

# ---------------- Upload ----------------
if st.session_state.step == "upload":
    left, right = st.columns([2, 1])

    with left:
        uploaded = upload_section()
        if uploaded is not None and uploaded.file_id != st.session_state.pdf_file_id:
            st.session_state.pdf_file = uploaded
            st.session_state.pdf_file_id = uploaded.file_id
            process(uploaded, st.session_state.settings)
            st.rerun()

        result = st.session_state.result
        if st.session_state.pdf_file is not None and result:
            st.subheader("Parsing Settings")
            st.caption("Adjust settings to improve extraction accuracy")
            try:
                templates = list_templates()
            except ServiceError as e:
                st.error(f"Could not load bank templates: {e}")
                templates = []

            new_settings, rerun = settings_panel(
                st.session_state.settings,
                templates,
                result["detected_bank"],
                result["diagnostics"],
            )
            st.session_state.settings = new_settings
            if rerun:
                process(st.session_state.pdf_file, new_settings)
                st.rerun()

    with right:
        guidance_panel()

# ---------------- Review ----------------
elif st.session_state.step == "review":
    result = st.session_state.result
    bank = result["detected_bank"]

    st.header("Review Transactions")
    caption = f"{len(st.session_state.transactions)} transactions extracted"
    if bank != "Unknown":
        caption += f" · {bank}"
    st.caption(caption)

    for warning in result["diagnostics"]["warnings"]:
        st.warning(warning)

    edited = transactions_editor(st.session_state.transactions)

    c1, c2 = st.columns(2)
    if c1.button("Start Over"):
        reset()
        st.rerun()
    if c2.button("⬇️ Export to Excel", type="primary", disabled=not edited):
        st.session_state.transactions = edited
        try:
            st.session_state.export = export_statement(edited, bank)
            st.session_state.step = "export"
        except ServiceError as e:
            st.session_state.error = str(e)
        st.rerun()

# ---------------- Export ----------------
elif st.session_state.step == "export":
    content, filename = st.session_state.export

    st.success("Export ready!")
    st.download_button(
        "Download Excel file",
        data=content,
        file_name=filename,
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )
    if st.button("Convert Another File"):
        reset()
        st.rerun()
