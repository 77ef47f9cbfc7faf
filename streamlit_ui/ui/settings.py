import streamlit as st

from streamlit_ui.config import LOW_CONFIDENCE

AUTO_DETECT = "auto-detect"

PAGE_RANGES = {
    "all": "All Pages",
    "first-5": "First 5 Pages",
    "last-5": "Last 5 Pages",
}

DATE_FORMATS = {
    "auto": "Auto-detect",
    "DD/MM/YYYY": "DD/MM/YYYY",
    "DD-MM-YYYY": "DD-MM-YYYY",
    "DD MMM YYYY": "DD MMM YYYY",
    "DD-MMM-YYYY": "DD-MMM-YYYY",
}

DEFAULT_SETTINGS = {
    "bank_template": AUTO_DETECT,
    "page_range": "all",
    "date_format": "auto",
    "header_detection": True,
}


def as_query_params(settings: dict) -> dict:
    params = dict(settings)
    params["header_detection"] = "true" if settings.get("header_detection") else "false"
    return params


def settings_panel(settings: dict, templates: list, detected_bank: str, diagnostics: dict) -> tuple:
    """
    Render parsing settings. Returns (new settings, re-run clicked).
    """
    confidence = diagnostics.get("confidence", 0.0)
    if confidence < LOW_CONFIDENCE:
        st.warning(
            f"Low extraction confidence ({round(confidence * 100)}%). "
            "Try adjusting the settings below."
        )

    template_labels = {AUTO_DETECT: "Auto-detect"}
    if detected_bank and detected_bank != "Unknown":
        template_labels[AUTO_DETECT] = f"Auto-detect ({detected_bank})"
    template_labels.update({t["key"]: t["name"] for t in templates})

    keys = list(template_labels)
    pages = list(PAGE_RANGES)
    formats = list(DATE_FORMATS)

    col1, col2 = st.columns(2)
    with col1:
        bank_template = st.selectbox(
            "Bank Template",
            keys,
            index=keys.index(settings["bank_template"]) if settings["bank_template"] in keys else 0,
            format_func=template_labels.get,
        )
        page_range = st.selectbox(
            "Page Range",
            pages,
            index=pages.index(settings["page_range"]),
            format_func=PAGE_RANGES.get,
        )
    with col2:
        date_format = st.selectbox(
            "Date Format",
            formats,
            index=formats.index(settings["date_format"]) if settings["date_format"] in formats else 0,
            format_func=DATE_FORMATS.get,
        )
        header_detection = st.toggle("Smart Header Detection", value=settings["header_detection"])

    new_settings = {
        "bank_template": bank_template,
        "page_range": page_range,
        "date_format": date_format,
        "header_detection": header_detection,
    }
    rerun = st.button("🔄 Re-run Extraction", use_container_width=True)
    return new_settings, rerun
