"""
XARM Pick List Library (Package Entry Point).

Exposes the core logic and data structures for crossarm and pole
configuration, bolt sizing, and pick list aggregation.
"""

from .exceptions import AggregationConflictError, InvalidSelectionError, XarmError
from .generator import generate_crossarm_items, generate_pole_items
from .manager import (
    aggregate,
    compute_bolt_sizing_preview,
    compute_live_build_identifier,
    compute_pick_list_preview,
    finalize_component,
    group_by_category,
    merge_line_items,
    serialize_pick_list,
    validate_selections,
)
from .parser import parse_config
from .rules import CROSSARM_RULES
from .sizing import resolve_bolt_sizing
from .types import (
    BoltSizing,
    ConfigBreakdown,
    ConfiguredComponent,
    LineItem,
    Session,
    create_empty_session,
)
from .utils import (
    decode_wire_quantity,
    extract_part_size,
    find_catalog_index,
    format_build_identifier,
)

__all__ = [
    # types
    "BoltSizing",
    "ConfigBreakdown",
    "ConfiguredComponent",
    "LineItem",
    "Session",
    "create_empty_session",
    # exceptions
    "XarmError",
    "InvalidSelectionError",
    "AggregationConflictError",
    # parser
    "parse_config",
    # sizing
    "resolve_bolt_sizing",
    # generator
    "CROSSARM_RULES",
    "generate_crossarm_items",
    "generate_pole_items",
    # manager
    "aggregate",
    "compute_bolt_sizing_preview",
    "compute_live_build_identifier",
    "compute_pick_list_preview",
    "finalize_component",
    "group_by_category",
    "merge_line_items",
    "serialize_pick_list",
    "validate_selections",
    # utils
    "decode_wire_quantity",
    "extract_part_size",
    "find_catalog_index",
    "format_build_identifier",
]
