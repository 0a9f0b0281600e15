from typing import cast

import streamlit as st

import src.xarm_lib.constants as C
from src.exporters import (
    generate_components_csv,
    generate_pick_list_csv,
    pick_list_rows,
)
from src.feedback import save_feedback
from src.pdf_generator import generate_master_zip
from src.xarm_lib import (
    Session,
    XarmError,
    compute_bolt_sizing_preview,
    compute_live_build_identifier,
    compute_pick_list_preview,
    create_empty_session,
    serialize_pick_list,
)

KIND_LABELS = {"Crossarm": C.CROSSARM, "Pole": C.POLE}

OPTION_LABELS = {
    C.CROSSARM: {
        "Dimension": C.DIMENSION_MAP,
        "Material": C.MATERIAL_MAP,
    },
    C.POLE: {
        "Number": C.POLE_NUMBER_MAP,
        "Manufacturer": C.POLE_MANUFACTURER_MAP,
        "Material": C.POLE_MATERIAL_MAP,
    },
}

st.set_page_config(page_title="XARM Pick List Builder", page_icon="⚡")

st.title("⚡ XARM Pick List Builder")
st.markdown("""
**Configure crossarms and poles, get one pick list.**

Pick each attribute in turn. Every saved level is sized for its pole and
merged into a single store pick list with matching parts added together.
""")

# Each browser session gets its own Session and selection dict
if "xarm_session" not in st.session_state:
    st.session_state.xarm_session = create_empty_session()
if "kind" not in st.session_state:
    st.session_state.kind = C.CROSSARM
if "selections" not in st.session_state:
    st.session_state.selections = {}
if "active_step" not in st.session_state:
    st.session_state.active_step = 0
if "phase" not in st.session_state:
    st.session_state.phase = "select"
if "pole_width" not in st.session_state:
    st.session_state.pole_width = C.DEFAULT_POLE_WIDTH_MM
if "last_error" not in st.session_state:
    st.session_state.last_error = None


def current_attributes() -> list[str]:
    return list(C.CATALOG[st.session_state.kind])


def finalize_current(pole_width_mm: int | None = None):
    """Freezes the current selections into the session."""
    session = cast(Session, st.session_state.xarm_session)
    try:
        session.finalize(
            st.session_state.kind, dict(st.session_state.selections), pole_width_mm
        )
    except XarmError as e:
        st.session_state.last_error = str(e)
        return

    st.session_state.last_error = None
    st.session_state.phase = "summary"


def handle_select(attribute: str, code: str):
    # New dict per step; saved components never share it
    st.session_state.selections = {**st.session_state.selections, attribute: code}

    if st.session_state.active_step < len(current_attributes()) - 1:
        st.session_state.active_step += 1
    elif st.session_state.kind == C.CROSSARM:
        st.session_state.phase = "pole_width"
    else:
        finalize_current()


def go_back():
    if st.session_state.phase == "pole_width":
        st.session_state.phase = "select"
    elif st.session_state.active_step > 0:
        st.session_state.active_step -= 1


def save_crossarm():
    width = int(st.session_state.get("pole_width_input", st.session_state.pole_width))
    st.session_state.pole_width = width
    finalize_current(width)


def start_next_component():
    st.session_state.selections = {}
    st.session_state.active_step = 0
    st.session_state.pole_width = C.DEFAULT_POLE_WIDTH_MM
    st.session_state.phase = "select"


def finalize_all():
    st.session_state.phase = "finalized"


def reset_all():
    st.session_state.xarm_session = create_empty_session()
    st.session_state.kind = C.CROSSARM
    st.session_state.last_error = None
    start_next_component()


session = cast(Session, st.session_state.xarm_session)

st.button("🔄 Reset", key="reset", on_click=reset_all)
st.divider()

if st.session_state.last_error:
    st.error(f"⚠️ {st.session_state.last_error}")

phase = st.session_state.phase

# 1. Attribute Steps
if phase == "select":
    attributes = current_attributes()
    step = st.session_state.active_step

    if step == 0 and not st.session_state.selections:
        choice = st.radio(
            "Component Type",
            list(KIND_LABELS),
            index=list(KIND_LABELS.values()).index(st.session_state.kind),
            key="kind_choice",
            horizontal=True,
        )
        st.session_state.kind = KIND_LABELS[choice]
        attributes = current_attributes()

    attribute = attributes[step]
    st.subheader(f"Component {session.next_sequence_number}: {attribute}")
    st.caption(f"Step {step + 1} of {len(attributes)}")
    st.code(compute_live_build_identifier(st.session_state.selections, st.session_state.kind))

    labels = OPTION_LABELS[st.session_state.kind].get(attribute, {})
    options = C.CATALOG[st.session_state.kind][attribute]
    cols = st.columns(3)
    for i, code in enumerate(options):
        label = f"{code} ({labels[code]})" if code in labels else code
        cols[i % 3].button(
            label,
            key=f"opt_{attribute}_{code}",
            on_click=handle_select,
            args=(attribute, code),
        )

    if step > 0:
        st.button("⬅️ Back", key="back", on_click=go_back)

# 2. Pole Width (Crossarms only)
elif phase == "pole_width":
    st.subheader(f"Component {session.next_sequence_number}: Pole Width")
    st.code(compute_live_build_identifier(st.session_state.selections))

    lo, hi = C.POLE_WIDTH_LIMITS_MM
    width = st.number_input(
        "Pole width at the arm (mm)",
        min_value=lo,
        max_value=hi,
        value=int(st.session_state.pole_width),
        step=5,
        key="pole_width_input",
    )

    sizing = compute_bolt_sizing_preview(st.session_state.selections, int(width))
    if sizing:
        c1, c2, c3 = st.columns(3)
        c1.metric("King Bolt", f"{sizing['king_bolt_size']}mm")
        if st.session_state.selections.get("Number") == "2":
            c2.metric("Spacer Bolt", f"{sizing['spacer_bolt_size']}mm")
        c3.metric("Long Brace Bolt", f"{sizing['long_brace_bolt_size']}mm")
        if st.session_state.selections.get("Voltage") == C.LVTX:
            st.caption(f"T Bracket through-pole bolt: {sizing['t_bracket_bolt_size']}mm")

    with st.expander("Preview this level's parts"):
        preview = compute_pick_list_preview(
            C.CROSSARM, st.session_state.selections, int(width)
        )
        st.dataframe(pick_list_rows(preview))

    st.button("⬅️ Back", key="back", on_click=go_back)
    st.button(
        f"Save Level {session.next_sequence_number}",
        key="save_component",
        type="primary",
        on_click=save_crossarm,
    )

# 3. Saved Summary
elif phase == "summary":
    saved = session.components[-1]
    st.success(f"✅ {saved.label} saved")
    st.code(saved.build_identifier)

    st.subheader("Configured Components")
    for component in session:
        st.markdown(f"**{component.label}:** `{component.build_identifier}`")

    c1, c2 = st.columns(2)
    c1.button("➕ Add Another", key="add_another", on_click=start_next_component)
    count = len(session)
    c2.button(
        f"Finalize Pick List ({count} {'Component' if count == 1 else 'Components'})",
        key="finalize_all",
        type="primary",
        on_click=finalize_all,
    )

# 4. Aggregated Pick List
elif phase == "finalized":
    try:
        items = session.aggregate()
    except XarmError as e:
        st.error(f"⚠️ Could not merge the pick list: {e}")
        items = []

    with st.container():
        c1, c2, c3 = st.columns(3)
        c1.metric("Components", len(session))
        c2.metric("Unique Parts", len(items))
        c3.metric("Total Pieces", sum(item["qty"] for item in items))

    for component in session:
        width = (
            f" · Pole {component.pole_width_mm}mm"
            if component.pole_width_mm is not None
            else ""
        )
        st.markdown(f"**{component.label}:** `{component.build_identifier}`{width}")

    st.subheader("📋 Aggregated Pick List")
    rows = pick_list_rows(items)
    st.dataframe(
        rows,
        column_order=["Category", "Reference", "Description", "Qty"],
    )

    st.subheader("💾 Export")
    pick_list_csv = generate_pick_list_csv(rows)
    st.download_button(
        "Download CSV",
        data=pick_list_csv,
        file_name="pick_list.csv",
        mime="text/csv",
        type="primary",
    )

    components_csv = generate_components_csv(session)
    st.download_button(
        "Download Everything (ZIP)",
        data=generate_master_zip(session.components, items, pick_list_csv, components_csv),
        file_name="pick_list.zip",
        mime="application/zip",
    )

    with st.expander("Plain text"):
        st.code(serialize_pick_list(items))

st.divider()

if "feedback_submitted" not in st.session_state:
    st.session_state.feedback_submitted = False

with st.expander("🐞 Found a bug? / 📢 Feedback"):
    # Check if they have already submitted
    if st.session_state.feedback_submitted:
        st.success("Thanks for your feedback! Message received.")
    else:
        st.caption("Let me know if a pick list came out wrong.")

        with st.form("feedback_form"):
            col1, col2 = st.columns([1, 4])
            with col1:
                rating = st.select_slider(
                    "Rating", options=["😡", "😕", "😐", "🙂", "🤩"], value="🤩"
                )
            with col2:
                comment = st.text_area("Details", height=80, placeholder="Details...")

            submitted = st.form_submit_button("Send Feedback")

            if submitted:
                if not comment:
                    st.warning("Please enter a comment.")
                else:
                    try:
                        save_feedback(
                            rating, comment, [c.build_identifier for c in session]
                        )
                        st.session_state.feedback_submitted = True
                        st.rerun()
                    except Exception as e:
                        st.error(f"Error: {e}")
