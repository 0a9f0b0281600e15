"""
Bolt sizing resolution.

Works out which stocked bolt lengths a crossarm needs on a pole of a given
width. Every lookup uses the same catalog search: round the required length
up to the next stocked size, clamp to the largest size if nothing fits.
"""

import logging
from collections.abc import Mapping

import src.xarm_lib.constants as C
from src.xarm_lib.types import BoltSizing
from src.xarm_lib.utils import find_catalog_index, parse_code_int

logger = logging.getLogger(__name__)


def is_pin_arm(selections: Mapping[str, str]) -> bool:
    """
    Decides whether the arm carries pin insulators.

    True for the explicit pin arm codes, for an LV neutral ('PN') arm and
    for an HV post ('PS') arm.
    """
    voltage = selections.get("Voltage")
    config = selections.get("Configuration")

    return (
        config in C.EXPLICIT_PIN_ARMS
        or (voltage in C.LV_VOLTAGES and config == "PN")
        or (voltage in C.HV_VOLTAGES and config == "PS")
    )


def is_steel_arm(selections: Mapping[str, str]) -> bool:
    """Steel arms and every LVTX arm mount without the timber washer stack."""
    return selections.get("Material") == "S" or selections.get("Voltage") == C.LVTX


def get_arm_count(selections: Mapping[str, str]) -> int:
    """Number of arms on the king bolt (1 or 2, default 1)."""
    count = parse_code_int(selections.get("Number"), default=1)
    return count if count in (1, 2) else 1


def get_single_arm_width(dimension: str, pin_arm: bool) -> int:
    """
    Physical width of one arm in mm.

    'A' section is turned on its side (75mm) when used as a pin arm.
    """
    if dimension == "A":
        return 75 if pin_arm else 100
    if dimension == "E":
        return 125
    if dimension == "Z":
        return 75
    return 100


def resolve_bolt_sizing(
    selections: Mapping[str, str], pole_width_mm: int
) -> BoltSizing | None:
    """
    Resolves every bolt length for a crossarm on a pole.

    Args:
        selections: Crossarm attribute selections (may be partial).
        pole_width_mm: Pole width at the arm in mm.

    Returns:
        A BoltSizing record, or None while the Dimension is still unset.
    """
    dimension = selections.get("Dimension")
    if not dimension:
        return None

    pole_width = parse_code_int(pole_width_mm)
    pin_arm = is_pin_arm(selections)
    steel = is_steel_arm(selections)
    arm_width = get_single_arm_width(dimension, pin_arm) * get_arm_count(selections)

    # 1. King Bolt
    king_required = pole_width + arm_width + C.KING_BOLT_CLEARANCE
    king_idx = find_catalog_index(king_required)

    # Steel arms skip the conical + M20 washer stack, so one size shorter
    if steel:
        king_bolt_size = C.BOLT_SIZES[max(king_idx - 1, 0)]
    else:
        king_bolt_size = C.BOLT_SIZES[king_idx]

    # 2. Spacer Bolt (one below the unadjusted king bolt)
    spacer_bolt_size = C.BOLT_SIZES[max(king_idx - 1, 0)]

    # 3. Long Brace Bolt
    brace_idx = find_catalog_index(pole_width + C.LONG_BRACE_BOLT_CLEARANCE)

    # 4. LVTX T Bracket Bolt
    t_bracket_idx = find_catalog_index(pole_width + C.T_BRACKET_BOLT_CLEARANCE)

    sizing: BoltSizing = {
        "king_bolt_size": king_bolt_size,
        "spacer_bolt_size": spacer_bolt_size,
        "long_brace_bolt_size": C.BOLT_SIZES[brace_idx],
        "t_bracket_bolt_size": C.BOLT_SIZES[t_bracket_idx],
        "is_pin_arm": pin_arm,
        "is_steel": steel,
        "arm_width": arm_width,
    }
    logger.debug(
        f"Sizing for pole {pole_width}mm, arms {arm_width}mm "
        f"(king required {king_required}mm): {sizing}"
    )
    return sizing
