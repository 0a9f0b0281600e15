"""
Crossarm hardware rules.

The crossarm pick list is driven by a declarative rule table. Each rule
pairs a predicate over the arm (voltage class, configuration, material...)
with an emitter that returns the rule's line items. The generator walks the
table in order, so the table order is the pick list order.

Adding a new hardware kit means adding a rule here; the traversal in
`generator.py` never changes.
"""

import logging
from collections.abc import Callable, Mapping
from typing import NamedTuple

import src.xarm_lib.constants as C
from src.xarm_lib.parser import parse_config
from src.xarm_lib.sizing import get_arm_count
from src.xarm_lib.types import BoltSizing, LineItem
from src.xarm_lib.utils import decode_wire_quantity, parse_code_int

logger = logging.getLogger(__name__)


class ArmContext(NamedTuple):
    """Everything a rule needs, derived once per crossarm."""

    voltage: str
    config: str
    material: str
    dimension: str
    length_raw: str
    arm_count: int
    wires_set: bool
    wire_qty: int
    pole_width: int
    sizing: BoltSizing

    @property
    def is_hv(self) -> bool:
        return self.voltage in C.HV_VOLTAGES

    @property
    def is_lv(self) -> bool:
        return self.voltage in C.LV_VOLTAGES

    @property
    def is_lvtx(self) -> bool:
        return self.voltage == C.LVTX

    @property
    def is_fly_arm(self) -> bool:
        return self.config in C.FLY_ARMS

    @property
    def is_pin_arm(self) -> bool:
        return self.sizing["is_pin_arm"]


class Rule(NamedTuple):
    name: str
    applies: Callable[[ArmContext], bool]
    emit: Callable[[ArmContext], list[LineItem]]


def build_context(
    selections: Mapping[str, str], pole_width_mm: int, sizing: BoltSizing
) -> ArmContext:
    """Snapshots the selections into the fields the rules read."""
    wires = selections.get("Wires")
    return ArmContext(
        voltage=selections.get("Voltage", ""),
        config=selections.get("Configuration", ""),
        material=selections.get("Material", ""),
        dimension=selections.get("Dimension", ""),
        length_raw=selections.get("Length", ""),
        arm_count=get_arm_count(selections),
        wires_set=bool(wires),
        wire_qty=decode_wire_quantity(wires),
        pole_width=parse_code_int(pole_width_mm),
        sizing=sizing,
    )


def _item(part_id: str, name: str, qty: int, category: str) -> LineItem:
    return {"id": part_id, "name": name, "qty": qty, "category": category}


def _m16_bolt(length: int, suffix: str, role: str, qty: int) -> LineItem:
    return _item(
        f"BOLT-M16-{length}-{suffix}",
        f"M16x{length}mm {role}",
        qty,
        C.CATEGORY_M16_BOLTS,
    )


def _m12_bolt(length: int, suffix: str, role: str, qty: int) -> LineItem:
    return _item(
        f"BOLT-M12-{length}-{suffix}",
        f"M12x{length}mm {role}",
        qty,
        C.CATEGORY_M12_BOLTS,
    )


# --- Main Arm ---


def _main_arm(ctx: ArmContext) -> list[LineItem]:
    voltage_class = "HV" if ctx.is_hv else "LV"
    material_label = (
        "" if ctx.material == "T" else f"{C.MATERIAL_MAP.get(ctx.material, ctx.material)} "
    )
    arm_word = "Double" if ctx.arm_count == 2 else "Single"

    if ctx.config == "EDO":
        arm_type = "DDO Arm"
    elif ctx.is_pin_arm:
        arm_type = "Pin Arm"
    else:
        arm_type = "Crossarm"

    length_m = parse_code_int(ctx.length_raw) / 10
    name = (
        f"{material_label}{voltage_class} {arm_word} {arm_type} - "
        f"{C.DIMENSION_MAP.get(ctx.dimension, ctx.dimension)} x {length_m:.1f}m"
    )
    # Arm count keeps Single and Double ids apart
    part_id = (
        f"{ctx.material}{voltage_class}-{ctx.config}-{ctx.dimension}-"
        f"{ctx.length_raw}-{ctx.arm_count}"
    )
    return [_item(part_id, name, ctx.arm_count, C.CATEGORY_MAIN_ARM)]


# --- King Bolt Kit ---


def _king_bolt_kit(ctx: ArmContext) -> list[LineItem]:
    items = [
        _m16_bolt(ctx.sizing["king_bolt_size"], "KB", "King Bolt", 1),
        _item("WASH-M16-50-KB", "M16x50x50 Square Washer", 2, C.CATEGORY_HARDWARE),
        _item("NUT-M16-KB", "M16 Nut", 1, C.CATEGORY_HARDWARE),
    ]
    # Timber only: conical washer seats the king bolt against the grain
    if ctx.material == "T":
        items.append(
            _item("WASH-M20-80", "M20x80x80 Large Washer", 1, C.CATEGORY_HARDWARE)
        )
        items.append(_item("WASH-CONICAL", "Conical Washer", 1, C.CATEGORY_HARDWARE))
    return items


# --- LV Insulators ---


def _is_lv_term_config(config: str) -> bool:
    return config in ("T", "TT") or config.startswith("TPS") or config in C.FLY_ARMS


def _lv_insulators(ctx: ArmContext) -> list[LineItem]:
    if ctx.is_pin_arm:
        return [
            _item(
                "INS-LV-PIN",
                "LV Pin Insulator",
                ctx.wire_qty * ctx.arm_count,
                C.CATEGORY_INSULATORS,
            )
        ]

    if not _is_lv_term_config(ctx.config):
        return []

    term_qty = ctx.wire_qty * (2 if ctx.config == "TT" else 1)
    arm_bolt = 110 if ctx.dimension == "A" else 130
    return [
        _item("INS-LV-BOB", "LV Bobbin", term_qty, C.CATEGORY_INSULATORS),
        _item("STRAP-SH-7", '7" Shackle Strap', term_qty * 2, C.CATEGORY_HARDWARE),
        _m12_bolt(110, "TS", "Bolt (Term Set)", term_qty),
        _m12_bolt(arm_bolt, "ARM", "Bolt (Arm Side)", term_qty),
        _item("NUT-M12-TS", "M12 Nut (Term Set)", term_qty * 2, C.CATEGORY_HARDWARE),
    ]


# --- HV Insulators ---


def _hv_insulators(ctx: ArmContext) -> list[LineItem]:
    breakdown = parse_config(ctx.config, ctx.wire_qty, ctx.arm_count)
    kv = f"{ctx.voltage}kV"
    items: list[LineItem] = []

    # 1 cutout per wire
    if breakdown.has_edo:
        items.append(
            _item(
                f"EDO-{ctx.voltage}KV",
                f"{kv} Expulsion Drop Out (EDO) Cutout",
                ctx.wire_qty,
                C.CATEGORY_INSULATORS,
            )
        )

    if breakdown.post_qty > 0:
        items.append(
            _item(
                f"INS-POST-{ctx.voltage}KV",
                f"{kv} Post Insulator",
                breakdown.post_qty,
                C.CATEGORY_INSULATORS,
            )
        )

    # 1 full term set per wire per term
    if breakdown.term_count > 0:
        term_qty = ctx.wire_qty * breakdown.term_count
        items.extend(
            [
                _item("EYEBOLT-M16-250", "M16x250mm Eye Bolt", term_qty, C.CATEGORY_HARDWARE),
                _item(
                    f"INS-TERM-{ctx.voltage}KV",
                    f"{kv} Polymeric Term Insulator",
                    term_qty,
                    C.CATEGORY_INSULATORS,
                ),
                _item("CLIP-RFI", "R.F.I. Clip", term_qty, C.CATEGORY_HARDWARE),
                _item("CLEVIS", "Clevis", term_qty, C.CATEGORY_HARDWARE),
            ]
        )

    if breakdown.has_delta:
        items.append(_item("BRACKET-DELTA", "Delta Bracket", 1, C.CATEGORY_HARDWARE))

    return items


# --- Braces ---


def _long_brace_bolt(ctx: ArmContext) -> LineItem:
    return _m12_bolt(ctx.sizing["long_brace_bolt_size"], "LB", "Long Brace Bolt", 1)


def _short_brace_bolt_size(ctx: ArmContext) -> int:
    if ctx.dimension == "A":
        return 110 if ctx.is_pin_arm else 140
    if ctx.dimension == "E":
        return 180
    return 140


def _timber_braces(ctx: ArmContext) -> list[LineItem]:
    brace = 900 if parse_code_int(ctx.length_raw) >= 30 else 763
    is_edo = "EDO" in ctx.config

    return [
        _item(f"BRACE-{brace}", f"{brace}mm Arm Brace", 1 if is_edo else 2, C.CATEGORY_HARDWARE),
        _item(
            "WASH-M12-50",
            "M12x50x50 Square Washer",
            2 if is_edo else 3,
            C.CATEGORY_HARDWARE,
        ),
        _item("NUT-M12", "M12 Nut", 2 if is_edo else 3, C.CATEGORY_HARDWARE),
        _m12_bolt(_short_brace_bolt_size(ctx), "SB", "Short Brace Bolt", 1 if is_edo else 2),
        _long_brace_bolt(ctx),
    ]


def _steel_braces(ctx: ArmContext) -> list[LineItem]:
    return [
        _item("BRACE-STEEL-ADJ", "Adjustable Steel Arm Brace", 2, C.CATEGORY_HARDWARE),
        _item(
            "BOLT-M12-ADJ-BRACE",
            "M12 Adjustable Steel Arm Brace Bolt",
            2,
            C.CATEGORY_M12_BOLTS,
        ),
        _long_brace_bolt(ctx),
    ]


# --- Fly Arms ---


def _fly_bolt_size(ctx: ArmContext) -> int:
    return 240 if ctx.dimension == "A" else 280


def _fly_arm_wood(ctx: ArmContext) -> list[LineItem]:
    return [
        _item("WASH-M20-80-FLY", "M20x80x80 Large Washer (Fly Arm)", 2, C.CATEGORY_HARDWARE),
        _item("WASH-CONICAL-FLY", "Conical Washer (Fly Arm)", 2, C.CATEGORY_HARDWARE),
        _m16_bolt(_fly_bolt_size(ctx), "FLY", "Bolt (Fly Arm)", 2),
        _item("NUT-M16-FLY", "M16 Nut (Fly Arm)", 2, C.CATEGORY_HARDWARE),
    ]


def _fly_arm_steel(ctx: ArmContext) -> list[LineItem]:
    return [
        _item("BRACKET-STEEL-FLY", "Steel Fly Arm Bracket", 1, C.CATEGORY_HARDWARE),
        _item("WASH-M20-80-FLYS", "M20x80x80 Large Washer (Fly Arm)", 1, C.CATEGORY_HARDWARE),
        _item("WASH-CONICAL-FLYS", "Conical Washer (Fly Arm)", 1, C.CATEGORY_HARDWARE),
        _m16_bolt(_fly_bolt_size(ctx), "FLYS", "Bolt (Fly Arm)", 1),
        _item(
            "WASH-M16-50-FLYS",
            "M16x50x50 Square Washer (Fly Arm)",
            2,
            C.CATEGORY_HARDWARE,
        ),
    ]


# --- LVTX T Bracket ---


def _lvtx_t_bracket(ctx: ArmContext) -> list[LineItem]:
    return [
        _item("BRACKET-T-STEEL", "Steel T Bracket", 1, C.CATEGORY_HARDWARE),
        _m12_bolt(140, "TB", "Bolt (T Bracket)", 2),
        _item(
            "WASH-M12-50-TB",
            "M12x50x50 Square Washer (T Bracket)",
            4,
            C.CATEGORY_HARDWARE,
        ),
        _m16_bolt(
            ctx.sizing["t_bracket_bolt_size"],
            "TB",
            "Bolt (T Bracket Through-Pole)",
            1,
        ),
        _item(
            "WASH-M16-50-TB",
            "M16x50x50 Square Washer (T Bracket)",
            2,
            C.CATEGORY_HARDWARE,
        ),
    ]


# --- Double Arm Spacer ---


def _double_arm_spacer(ctx: ArmContext) -> list[LineItem]:
    pipe_length = ctx.pole_width - C.SPACER_PIPE_DEDUCTION
    return [
        _m16_bolt(ctx.sizing["spacer_bolt_size"], "SP", "Spacer Bolt", 1),
        _item(
            "WASH-M16-50-SP",
            "M16x50x50 Square Washer (Spacer)",
            4,
            C.CATEGORY_HARDWARE,
        ),
        _item(
            f"PIPE-SPACER-{pipe_length}",
            f"Spacer Pipe ({pipe_length}mm)",
            1,
            C.CATEGORY_HARDWARE,
        ),
    ]


CROSSARM_RULES: list[Rule] = [
    Rule("main_arm", lambda ctx: True, _main_arm),
    Rule("king_bolt_kit", lambda ctx: not ctx.is_fly_arm, _king_bolt_kit),
    Rule(
        "lv_insulators",
        lambda ctx: ctx.is_lv and ctx.wires_set and ctx.config != C.BLANK_ARM,
        _lv_insulators,
    ),
    Rule(
        "hv_insulators",
        lambda ctx: ctx.is_hv and ctx.config != C.BLANK_ARM,
        _hv_insulators,
    ),
    # Blank arms still get braces; fly arms never do
    Rule(
        "timber_braces",
        lambda ctx: ctx.material == "T" and not ctx.is_fly_arm,
        _timber_braces,
    ),
    Rule(
        "steel_braces",
        lambda ctx: ctx.material == "S" and not ctx.is_lvtx and not ctx.is_fly_arm,
        _steel_braces,
    ),
    Rule("fly_arm_wood", lambda ctx: ctx.config == C.FLY_ARM_WOOD, _fly_arm_wood),
    Rule("fly_arm_steel", lambda ctx: ctx.config == C.FLY_ARM_STEEL, _fly_arm_steel),
    # Replaces braces on LVTX arms
    Rule("lvtx_t_bracket", lambda ctx: ctx.is_lvtx, _lvtx_t_bracket),
    Rule("double_arm_spacer", lambda ctx: ctx.arm_count == 2, _double_arm_spacer),
]
