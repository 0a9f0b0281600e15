"""
Pick list generation for a single component.

Crossarms are generated by walking the rule table in `rules.py`. Poles have
a short, fixed kit and are generated directly here.
"""

import logging
from collections.abc import Mapping

import src.xarm_lib.constants as C
from src.xarm_lib.rules import CROSSARM_RULES, build_context
from src.xarm_lib.types import BoltSizing, LineItem

logger = logging.getLogger(__name__)


def generate_crossarm_items(
    selections: Mapping[str, str],
    pole_width_mm: int,
    sizing: BoltSizing | None,
) -> list[LineItem]:
    """
    Builds the ordered pick list for one crossarm level.

    Args:
        selections: Crossarm attribute selections.
        pole_width_mm: Pole width at the arm in mm.
        sizing: The resolved bolt sizing for these selections.

    Returns:
        Line items in rule table order. Empty if the sizing could not be
        resolved or the Configuration is still unset.
    """
    if sizing is None or not selections.get("Configuration"):
        return []

    ctx = build_context(selections, pole_width_mm, sizing)
    items: list[LineItem] = []

    for rule in CROSSARM_RULES:
        if not rule.applies(ctx):
            continue

        emitted = rule.emit(ctx)
        logger.debug(f"Rule '{rule.name}' emitted {len(emitted)} item(s)")

        for item in emitted:
            # Partial previews (e.g. no Wires yet) can compute zero quantities
            if item["qty"] > 0:
                items.append(item)

    return items


def generate_pole_items(selections: Mapping[str, str]) -> list[LineItem]:
    """
    Builds the pick list for one pole (or pole pair / H structure).

    Args:
        selections: Pole attribute selections.

    Returns:
        The pole, its breast blocks and (for Busck poles) the base donut.
        Empty until Length, Number, Manufacturer and Material are all set.
    """
    length = selections.get("Length")
    number = selections.get("Number")
    manufacturer = selections.get("Manufacturer")
    material = selections.get("Material")

    if not (length and number and manufacturer and material):
        return []

    material_label = C.POLE_MATERIAL_MAP.get(material, material)
    maker_label = C.POLE_MANUFACTURER_MAP.get(manufacturer, manufacturer)

    items: list[LineItem] = [
        {
            "id": f"POLE-{material}-{length}-{manufacturer}",
            "name": f"{length}m {material_label} Pole ({maker_label})",
            "qty": 1 if number == "Single" else 2,
            "category": C.CATEGORY_POLES,
        }
    ]

    # Breast Blocks
    if number == "Double":
        items.append(
            {
                "id": "BLOCK-BREAST-CON",
                "name": "Concrete Breast Block",
                "qty": 2,
                "category": C.CATEGORY_POLE_HARDWARE,
            }
        )
    else:
        items.append(
            {
                "id": "BLOCK-BREAST-PL",
                "name": "Plastic Breast Block",
                "qty": 4 if number == "H" else 2,
                "category": C.CATEGORY_POLE_HARDWARE,
            }
        )

    # Donut (Busck only; H structures take none)
    if manufacturer == C.DONUT_MANUFACTURER:
        if number == "Single":
            items.append(
                {
                    "id": "DONUT-SINGLE",
                    "name": "Pole Donut (Single)",
                    "qty": 1,
                    "category": C.CATEGORY_POLE_HARDWARE,
                }
            )
        elif number == "Double":
            items.append(
                {
                    "id": "DONUT-DOUBLE",
                    "name": "Pole Donut (Double)",
                    "qty": 1,
                    "category": C.CATEGORY_POLE_HARDWARE,
                }
            )

    return items
