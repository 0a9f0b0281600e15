from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

APP_PATH = str(Path(__file__).resolve().parent.parent / "app.py")


# --- Helpers ---
def pick(at, selections):
    """Clicks through the option buttons in attribute order."""
    for attribute, code in selections.items():
        at.button(key=f"opt_{attribute}_{code}").click().run()
        assert not at.exception
    return at


# --- Fixtures ---
@pytest.fixture
def app():
    at = AppTest.from_file(APP_PATH, default_timeout=30)
    at.run()
    return at


# --- Tests ---
def test_smoke_check(app):
    assert not app.exception
    assert app.title[0].value == "⚡ XARM Pick List Builder"
    assert app.session_state["phase"] == "select"
    assert app.code[0].value == "XARM-—-—-—-—-—-—-—"


def test_build_code_updates_live(app):
    app.button(key="opt_Voltage_11").click().run()
    app.button(key="opt_Dimension_A").click().run()

    assert app.code[0].value == "XARM-11-A-—-—-—-—-—"
    assert app.session_state["active_step"] == 2


def test_back_keeps_earlier_choices(app):
    pick(app, {"Voltage": "11", "Dimension": "A"})
    app.button(key="back").click().run()

    assert app.session_state["active_step"] == 1
    assert app.session_state["selections"]["Voltage"] == "11"


def test_crossarm_happy_path(app, hv_term_post_arm):
    pick(app, hv_term_post_arm)
    assert app.session_state["phase"] == "pole_width"

    # King bolt preview for the default 150mm pole
    assert app.metric[0].value == "325mm"

    app.button(key="save_component").click().run()
    assert not app.exception
    assert app.session_state["phase"] == "summary"
    assert len(app.session_state["xarm_session"]) == 1

    app.button(key="finalize_all").click().run()
    assert not app.exception

    df = app.dataframe[0].value
    assert "THV-TPS3T-A-30-1" in df["Reference"].values
    assert "BOLT-M16-325-KB" in df["Reference"].values
    assert app.metric[0].value == "1"
    assert len(app.get("download_button")) == 2


def test_pole_width_drives_bolt_sizes(app, steel_double_post_arm):
    pick(app, steel_double_post_arm)
    app.number_input(key="pole_width_input").set_value(200).run()
    app.button(key="save_component").click().run()

    component = app.session_state["xarm_session"].components[0]
    assert component.pole_width_mm == 200
    ids = [item["id"] for item in component.line_items]
    assert "BOLT-M16-450-KB" in ids
    assert "PIPE-SPACER-195" in ids


def test_pole_flow_finalizes_without_width(app, busck_single_pole):
    app.radio(key="kind_choice").set_value("Pole").run()
    assert app.code[0].value == "POLE-—-—-—-—"

    pick(app, busck_single_pole)
    assert app.session_state["phase"] == "summary"

    component = app.session_state["xarm_session"].components[0]
    assert component.build_identifier == "POLE-12.5-Single-BUSCK-C"
    assert component.pole_width_mm is None


def test_two_components_merge(app, hv_term_post_arm, busck_single_pole):
    app.radio(key="kind_choice").set_value("Pole").run()
    pick(app, busck_single_pole)

    app.button(key="add_another").click().run()
    app.radio(key="kind_choice").set_value("Crossarm").run()
    pick(app, hv_term_post_arm)
    app.button(key="save_component").click().run()
    app.button(key="finalize_all").click().run()

    assert not app.exception
    df = app.dataframe[0].value
    assert df["Reference"].values[0] == "POLE-C-12.5-BUSCK"
    assert "THV-TPS3T-A-30-1" in df["Reference"].values
    assert app.metric[0].value == "2"


def test_reset_clears_everything(app, hv_term_post_arm):
    pick(app, hv_term_post_arm)
    app.button(key="save_component").click().run()
    app.button(key="reset").click().run()

    assert not app.exception
    assert len(app.session_state["xarm_session"]) == 0
    assert app.session_state["selections"] == {}
    assert app.session_state["phase"] == "select"
