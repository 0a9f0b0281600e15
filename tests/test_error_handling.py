from unittest.mock import patch

import pytest

from src.pdf_generator import generate_master_zip
from src.xarm_lib import (
    InvalidSelectionError,
    XarmError,
    create_empty_session,
    finalize_component,
    validate_selections,
)


def test_missing_attribute_is_rejected(hv_term_post_arm):
    del hv_term_post_arm["Wires"]

    with pytest.raises(InvalidSelectionError) as excinfo:
        finalize_component("crossarm", hv_term_post_arm, 150)

    assert excinfo.value.kind == "crossarm"
    assert excinfo.value.problems == ["Wires is not selected"]


def test_every_problem_is_reported_at_once(hv_term_post_arm):
    hv_term_post_arm["Voltage"] = "415"
    hv_term_post_arm["Material"] = ""

    with pytest.raises(InvalidSelectionError) as excinfo:
        finalize_component("crossarm", hv_term_post_arm, 150)

    assert "'415' is not a valid Voltage code" in excinfo.value.problems
    assert "Material is not selected" in excinfo.value.problems
    assert isinstance(excinfo.value, XarmError)


@pytest.mark.parametrize("width", [0, -150, None, True, "150", 150.0])
def test_pole_width_must_be_positive_int(hv_term_post_arm, width):
    with pytest.raises(InvalidSelectionError, match="Pole width"):
        finalize_component("crossarm", hv_term_post_arm, width)


@pytest.mark.parametrize("width", [3, 5, 49, 601])
def test_pole_width_outside_limits_is_rejected(steel_double_post_arm, width):
    # A 3mm pole would otherwise need a negative spacer pipe
    with pytest.raises(InvalidSelectionError, match="from 50 to 600"):
        finalize_component("crossarm", steel_double_post_arm, width)


@pytest.mark.parametrize("width, pipe", [(50, "PIPE-SPACER-45"), (600, "PIPE-SPACER-595")])
def test_pole_width_limits_are_inclusive(steel_double_post_arm, width, pipe):
    component = finalize_component("crossarm", steel_double_post_arm, width)
    assert pipe in [item["id"] for item in component.line_items]


def test_pole_width_is_ignored_for_poles(busck_single_pole):
    component = finalize_component("pole", busck_single_pole, 0)
    assert component.pole_width_mm is None


def test_unknown_kind_and_attribute(hv_term_post_arm):
    assert validate_selections("bracket", {}) == ["Unknown component class 'bracket'"]

    problems = validate_selections("crossarm", {**hv_term_post_arm, "Colour": "Red"}, 150)
    assert problems == ["Unknown attribute 'Colour'"]


def test_pole_codes_are_not_crossarm_codes(busck_single_pole):
    with pytest.raises(InvalidSelectionError):
        finalize_component("crossarm", busck_single_pole, 150)


def test_failed_finalize_leaves_session_untouched(hv_term_post_arm):
    session = create_empty_session()
    session.finalize("crossarm", hv_term_post_arm, 150)

    with pytest.raises(InvalidSelectionError):
        session.finalize("crossarm", {"Voltage": "11"}, 150)

    assert len(session) == 1
    assert session.next_sequence_number == 2


def test_master_zip_survives_pdf_failure(hv_term_post_arm):
    """
    If PDF rendering blows up, the bundle should still ship the CSVs
    rather than failing the whole download.
    """
    import io
    import zipfile

    component = finalize_component("crossarm", hv_term_post_arm, 150)

    with patch(
        "src.pdf_generator.generate_pick_list_pdf",
        side_effect=Exception("Simulated PDF failure"),
    ):
        data = generate_master_zip(
            [component], list(component.line_items), b"csv", b"components"
        )

    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        names = zf.namelist()

    assert "Pick List.csv" in names
    assert "Components.csv" in names
    assert "Pick List.pdf" not in names
