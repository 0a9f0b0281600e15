"""
Utility functions for code formatting and numeric parsing.

This module handles the low-level helpers shared by the engine, including:
- Build identifier formatting (XARM-11-A-30-...).
- Lenient integer parsing of already validated codes.
- Wire count decoding (32 -> 5).
- The catalog search used by every bolt size lookup.
- Size extraction from part ids (BOLT-M16-300-KB -> 300).
"""

import logging
import re
from collections.abc import Mapping, Sequence

from src.xarm_lib import constants as C

logger = logging.getLogger(__name__)


def format_build_identifier(selections: Mapping[str, str], kind: str) -> str:
    """
    Joins the ordered selections of a component class into its build code.

    Args:
        selections: Attribute name -> chosen code. May be partial.
        kind: The component class (e.g., "crossarm").

    Returns:
        The dash-joined code (e.g., "XARM-11-A-30-1-TPS3T-T-3"), with a
        placeholder for every attribute not chosen yet.
    """
    parts = [C.CLASS_PREFIXES[kind]]
    for attribute in C.CATALOG[kind]:
        parts.append(selections.get(attribute) or C.PLACEHOLDER)
    return "-".join(parts)


def parse_code_int(code: object, default: int = 0) -> int:
    """
    Reads the leading integer of a catalog code ("30" -> 30).

    Codes reaching this helper have already been validated, so the fallback
    only covers mid-wizard previews with missing attributes.
    """
    if isinstance(code, bool):
        return default
    if isinstance(code, int):
        return code
    if not isinstance(code, str):
        return default

    match = re.match(r"^\s*(\d+)", code)
    if not match:
        return default
    return int(match.group(1))


def decode_wire_quantity(wires: str | None) -> int:
    """
    Converts a Wires code into the number of conductors per arm.

    Single digit codes are literal. Two digit codes describe a mixed build
    (e.g., "32" is three phases plus two LV) and add up their digits.

    Args:
        wires: The raw Wires code (e.g., "3", "54").

    Returns:
        The conductor count, or 0 if the code is unset.
    """
    if not wires:
        return 0

    value = parse_code_int(wires)
    if value < 10:
        return value
    return sum(int(digit) for digit in str(value))


def find_catalog_index(required: int, catalog: Sequence[int] = C.BOLT_SIZES) -> int:
    """
    Finds the smallest stocked size that is at least `required`.

    Args:
        required: Minimum usable length in mm.
        catalog: Ascending, duplicate-free size list.

    Returns:
        The index of the first fitting size. When nothing fits, the index of
        the largest size (the catalog is clamped, not exceeded).
    """
    for idx, size in enumerate(catalog):
        if size >= required:
            return idx

    logger.warning(
        f"Required length {required}mm exceeds catalog maximum "
        f"{catalog[-1]}mm; clamping."
    )
    return len(catalog) - 1


def extract_part_size(part_id: str) -> int:
    """
    Pulls the length out of a sized part id.

    'BOLT-M16-300-KB' -> 300, 'M16-150' -> 150. Ids without a size
    (e.g., 'BOLT-M12-ADJ-BRACE') return 0 so they sort last.
    """
    match = re.search(r"M\d+-(\d+)", part_id)
    if not match:
        return 0
    return int(match.group(1))
