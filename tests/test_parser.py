import pytest
from hypothesis import given, strategies as st

from src.xarm_lib import (
    ConfigBreakdown,
    decode_wire_quantity,
    extract_part_size,
    find_catalog_index,
    format_build_identifier,
    parse_config,
)
from src.xarm_lib.constants import BOLT_SIZES

# Standard Unit Tests


def test_single_term():
    assert parse_config("T", 5, 1) == ConfigBreakdown(
        term_count=1, post_qty=0, has_edo=False, has_delta=False
    )


def test_double_term():
    assert parse_config("TT", 5, 1).term_count == 2


def test_post_defaults_to_wires_times_arms():
    assert parse_config("PS", 6, 2).post_qty == 12


def test_delta_prefix():
    result = parse_config("DPS", 6, 2)
    assert result.has_delta is True
    assert result.post_qty == 12


def test_fixed_post_count_with_terms():
    result = parse_config("TPS3T", 5, 1)
    assert result.term_count == 2
    assert result.post_qty == 3


def test_edo_with_term_and_post():
    result = parse_config("EDOTPS1", 5, 1)
    assert result == ConfigBreakdown(
        term_count=1, post_qty=1, has_edo=True, has_delta=False
    )


def test_delta_term_post():
    result = parse_config("DTPS3T", 3, 1)
    assert result == ConfigBreakdown(
        term_count=2, post_qty=3, has_edo=False, has_delta=True
    )


def test_fly_arms_are_single_term():
    assert parse_config("TFLYW", 3, 1).term_count == 1
    assert parse_config("TFLYS", 3, 1).term_count == 1


@pytest.mark.parametrize("code", [None, "", 123, ["T"]])
def test_unset_or_malformed_codes_give_defaults(code):
    assert parse_config(code, 5, 2) == ConfigBreakdown()


# 2. Stress Testing


@given(st.text(), st.integers(0, 20), st.integers(1, 2))
def test_parser_never_crashes(garbage, wires, arms):
    """
    STRESS TEST: Feed the parser arbitrary text and ensure it NEVER raises
    and always counts terminations literally.
    """
    try:
        result = parse_config(garbage, wires, arms)
    except Exception as e:
        pytest.fail(f"Parser crashed on input: {garbage!r} with error: {e}")

    assert result.term_count == garbage.count("T")
    assert result.post_qty >= 0


# Helpers


@pytest.mark.parametrize(
    "wires, expected",
    [("1", 1), ("3", 3), ("6", 6), ("32", 5), ("54", 9), ("65", 11), ("", 0), (None, 0)],
)
def test_wire_quantity_decoding(wires, expected):
    assert decode_wire_quantity(wires) == expected


def test_catalog_search_rounds_up():
    assert BOLT_SIZES[find_catalog_index(100)] == 100
    assert BOLT_SIZES[find_catalog_index(101)] == 110
    assert BOLT_SIZES[find_catalog_index(310)] == 325
    assert BOLT_SIZES[find_catalog_index(0)] == 100


def test_catalog_search_clamps_to_maximum():
    assert find_catalog_index(601) == len(BOLT_SIZES) - 1
    assert BOLT_SIZES[find_catalog_index(5000)] == 600


def test_part_size_extraction():
    assert extract_part_size("BOLT-M16-300-KB") == 300
    assert extract_part_size("M16-150") == 150
    assert extract_part_size("BOLT-M12-ADJ-BRACE") == 0
    assert extract_part_size("WASH-CONICAL") == 0


def test_build_identifier_order(hv_term_post_arm):
    assert (
        format_build_identifier(hv_term_post_arm, "crossarm")
        == "XARM-11-A-30-1-TPS3T-T-3"
    )


def test_build_identifier_ignores_dict_order(hv_term_post_arm):
    reversed_selections = dict(reversed(list(hv_term_post_arm.items())))
    assert format_build_identifier(
        reversed_selections, "crossarm"
    ) == format_build_identifier(hv_term_post_arm, "crossarm")


def test_build_identifier_placeholders():
    assert format_build_identifier({"Voltage": "11"}, "crossarm") == (
        "XARM-11-—-—-—-—-—-—"
    )
    assert format_build_identifier({}, "pole") == "POLE-—-—-—-—"


def test_pole_build_identifier(busck_single_pole):
    assert format_build_identifier(busck_single_pole, "pole") == (
        "POLE-12.5-Single-BUSCK-C"
    )
