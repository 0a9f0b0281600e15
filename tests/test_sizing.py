from hypothesis import given, strategies as st

from src.xarm_lib import compute_bolt_sizing_preview, resolve_bolt_sizing
from src.xarm_lib.constants import BOLT_SIZES, CROSSARM_OPTIONS
from src.xarm_lib.sizing import is_pin_arm

selections_strategy = st.fixed_dictionaries(
    {attr: st.sampled_from(codes) for attr, codes in CROSSARM_OPTIONS.items()}
)


def test_unset_dimension_is_unresolvable():
    assert resolve_bolt_sizing({"Voltage": "11"}, 150) is None
    assert compute_bolt_sizing_preview({}, 150) is None


def test_hv_timber_sizing(hv_term_post_arm):
    sizing = resolve_bolt_sizing(hv_term_post_arm, 150)
    assert sizing is not None

    # 150 + 100 + 60 = 310 -> 325
    assert sizing["king_bolt_size"] == 325
    assert sizing["spacer_bolt_size"] == 300
    # 150 + 50 = 200
    assert sizing["long_brace_bolt_size"] == 200
    # 150 + 40 = 190 -> 200
    assert sizing["t_bracket_bolt_size"] == 200
    assert sizing["is_pin_arm"] is False
    assert sizing["is_steel"] is False
    assert sizing["arm_width"] == 100


def test_lvtx_is_steel_and_steps_down(lvtx_neutral_arm):
    sizing = resolve_bolt_sizing(lvtx_neutral_arm, 150)
    assert sizing is not None
    assert sizing["is_pin_arm"] is True
    assert sizing["is_steel"] is True
    # Pin arm on A section: 75mm. 150 + 75 + 60 = 285 -> 300, stepped down to 280
    assert sizing["arm_width"] == 75
    assert sizing["king_bolt_size"] == 280

    timber = resolve_bolt_sizing({**lvtx_neutral_arm, "Voltage": "LV"}, 150)
    assert timber is not None
    assert timber["is_steel"] is False
    assert timber["king_bolt_size"] == 300


def test_double_steel_arm(steel_double_post_arm):
    sizing = resolve_bolt_sizing(steel_double_post_arm, 200)
    assert sizing is not None
    # 200 + 2 * 100 + 60 = 460 -> 475, steel -> 450
    assert sizing["arm_width"] == 200
    assert sizing["king_bolt_size"] == 450
    assert sizing["spacer_bolt_size"] == 450
    assert sizing["long_brace_bolt_size"] == 260


def test_king_bolt_clamps_to_catalog_maximum():
    selections = {"Dimension": "E", "Number": "2", "Material": "T", "Voltage": "11"}
    sizing = resolve_bolt_sizing(selections, 600)
    assert sizing is not None
    assert sizing["king_bolt_size"] == BOLT_SIZES[-1]
    assert sizing["long_brace_bolt_size"] == BOLT_SIZES[-1]

    steel = resolve_bolt_sizing({**selections, "Material": "S"}, 600)
    assert steel is not None
    assert steel["king_bolt_size"] == BOLT_SIZES[-2]


def test_smallest_steel_king_bolt():
    # 1 + 75 + 60 = 136 -> 140, steel -> 130
    sizing = resolve_bolt_sizing({"Dimension": "Z", "Material": "S"}, 1)
    assert sizing is not None
    assert sizing["king_bolt_size"] == 130
    assert sizing["spacer_bolt_size"] == 130
    assert sizing["long_brace_bolt_size"] == BOLT_SIZES[0]


def test_single_arm_widths():
    def width(dimension, config="T"):
        sizing = resolve_bolt_sizing(
            {"Dimension": dimension, "Configuration": config, "Voltage": "11"}, 150
        )
        assert sizing is not None
        return sizing["arm_width"]

    assert width("A") == 100
    assert width("A", "SUP") == 75
    assert width("B") == 100
    assert width("D") == 100
    assert width("E") == 125
    assert width("Z") == 75


def test_invalid_arm_count_defaults_to_one():
    sizing = resolve_bolt_sizing({"Dimension": "B", "Number": "7"}, 150)
    assert sizing is not None
    assert sizing["arm_width"] == 100


def test_pin_arm_predicate():
    assert is_pin_arm({"Configuration": "SUP", "Voltage": "11"})
    assert is_pin_arm({"Configuration": "OPS", "Voltage": "LV"})
    assert is_pin_arm({"Configuration": "PN", "Voltage": "LV"})
    assert is_pin_arm({"Configuration": "PS", "Voltage": "33"})
    # PN only counts on LV, PS only on HV
    assert not is_pin_arm({"Configuration": "PN", "Voltage": "11"})
    assert not is_pin_arm({"Configuration": "PS", "Voltage": "LVTX"})
    assert not is_pin_arm({"Configuration": "TPS3T", "Voltage": "11"})


# Property Testing


@given(selections_strategy, st.integers(1, 800), st.integers(0, 400))
def test_wider_poles_never_shorten_bolts(selections, width, extra):
    narrow = resolve_bolt_sizing(selections, width)
    wide = resolve_bolt_sizing(selections, width + extra)
    assert narrow is not None and wide is not None

    for key in (
        "king_bolt_size",
        "spacer_bolt_size",
        "long_brace_bolt_size",
        "t_bracket_bolt_size",
    ):
        assert wide[key] >= narrow[key]


@given(selections_strategy, st.integers(1, 800))
def test_steel_king_bolt_is_one_step_down(selections, width):
    selections = {**selections, "Voltage": "11"}
    timber = resolve_bolt_sizing({**selections, "Material": "T"}, width)
    steel = resolve_bolt_sizing({**selections, "Material": "S"}, width)
    assert timber is not None and steel is not None

    timber_idx = BOLT_SIZES.index(timber["king_bolt_size"])
    steel_idx = BOLT_SIZES.index(steel["king_bolt_size"])
    assert steel_idx == max(timber_idx - 1, 0)
