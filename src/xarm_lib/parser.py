"""
Configuration code decoding.

Crossarm configuration codes follow the manufacturer's part numbering
convention, so their meaning can be read straight off the characters:

    T        -> 1 term set per wire
    TT       -> 2 term sets per wire
    PS       -> post insulators, one per wire per arm
    TPS3T    -> 2 term sets per wire, 3 posts
    DTPS3T   -> as above, plus a delta bracket
    EDOTPS1  -> EDO cutouts, 1 term set per wire, 1 post
"""

import logging
import re

from src.xarm_lib.types import ConfigBreakdown

logger = logging.getLogger(__name__)


def parse_config(code: str | None, base_wire_qty: int, arm_count: int) -> ConfigBreakdown:
    """
    Decodes a configuration code into insulator quantities.

    Rules:
    - term_count: number of 'T' characters.
    - post_qty: the first digit run, if any. Otherwise wires x arms when the
      code contains 'PS', else 0.
    - has_edo: the code contains 'EDO'.
    - has_delta: the code starts with 'D'.

    Args:
        code: The Configuration code (e.g., "TPS3T").
        base_wire_qty: Conductors per arm (already decoded from Wires).
        arm_count: Number of arms (1 or 2).

    Returns:
        A ConfigBreakdown. Unset or malformed codes give all-zero defaults;
        this function never raises.
    """
    if not code or not isinstance(code, str):
        return ConfigBreakdown()

    term_count = code.count("T")

    post_match = re.search(r"\d+", code)
    if post_match:
        post_qty = int(post_match.group(0))
    elif "PS" in code:
        post_qty = base_wire_qty * arm_count
    else:
        post_qty = 0

    breakdown = ConfigBreakdown(
        term_count=term_count,
        post_qty=post_qty,
        has_edo="EDO" in code,
        has_delta=code.startswith("D"),
    )
    logger.debug(f"Parsed config {code!r}: {breakdown}")
    return breakdown
