"""
High-level component management and pick list aggregation.

This module acts as the "Controller" for the XARM library. It handles:
- Live previews for the wizard (build code, bolt sizing, pick list).
- Validating and freezing completed selections into components.
- Merging every component's line items into one pick list.
- Grouping and ordering the merged list for display and export.
"""

import logging
from collections.abc import Iterable, Mapping

import src.xarm_lib.constants as C
from src.xarm_lib.exceptions import AggregationConflictError, InvalidSelectionError
from src.xarm_lib.generator import generate_crossarm_items, generate_pole_items
from src.xarm_lib.sizing import resolve_bolt_sizing
from src.xarm_lib.types import BoltSizing, ConfiguredComponent, LineItem, Session
from src.xarm_lib.utils import extract_part_size, format_build_identifier

logger = logging.getLogger(__name__)


# --- Live Previews ---


def compute_live_build_identifier(
    selections: Mapping[str, str], kind: str = C.CROSSARM
) -> str:
    """Build code for a (possibly partial) selection."""
    return format_build_identifier(selections, kind)


def compute_bolt_sizing_preview(
    selections: Mapping[str, str], pole_width_mm: int
) -> BoltSizing | None:
    """Bolt sizing for the pole width step. None until Dimension is chosen."""
    return resolve_bolt_sizing(selections, pole_width_mm)


def compute_pick_list_preview(
    kind: str, selections: Mapping[str, str], pole_width_mm: int | None = None
) -> list[LineItem]:
    """
    Line items for the component being configured, without validation.

    Args:
        kind: "crossarm" or "pole".
        selections: The current (possibly partial) selections.
        pole_width_mm: Pole width, crossarms only.

    Returns:
        The component's line items, or an empty list while the selections
        are too incomplete to generate anything.
    """
    if kind == C.POLE:
        return generate_pole_items(selections)

    width = pole_width_mm if pole_width_mm is not None else C.DEFAULT_POLE_WIDTH_MM
    sizing = resolve_bolt_sizing(selections, width)
    return generate_crossarm_items(selections, width, sizing)


# --- Finalization ---


def validate_selections(
    kind: str, selections: Mapping[str, str], pole_width_mm: int | None = None
) -> list[str]:
    """
    Checks a selection against the catalog.

    Args:
        kind: "crossarm" or "pole".
        selections: The completed attribute selections.
        pole_width_mm: Pole width, required for crossarms.

    Returns:
        A list of human readable problems. Empty when the selection is valid.
    """
    if kind not in C.CATALOG:
        return [f"Unknown component class '{kind}'"]

    options = C.CATALOG[kind]
    problems = []

    for attribute in selections:
        if attribute not in options:
            problems.append(f"Unknown attribute '{attribute}'")

    for attribute, valid_codes in options.items():
        code = selections.get(attribute)
        if not code:
            problems.append(f"{attribute} is not selected")
        elif code not in valid_codes:
            problems.append(f"'{code}' is not a valid {attribute} code")

    if kind == C.CROSSARM:
        lo, hi = C.POLE_WIDTH_LIMITS_MM
        if (
            not isinstance(pole_width_mm, int)
            or isinstance(pole_width_mm, bool)
            or not lo <= pole_width_mm <= hi
        ):
            problems.append(
                f"Pole width must be a whole number of mm from {lo} to {hi} "
                f"(got {pole_width_mm!r})"
            )

    return problems


def finalize_component(
    kind: str,
    selections: Mapping[str, str],
    pole_width_mm: int | None = None,
    sequence_number: int = 1,
) -> ConfiguredComponent:
    """
    Validates a completed selection and freezes it into a component.

    Args:
        kind: "crossarm" or "pole".
        selections: The completed attribute selections.
        pole_width_mm: Pole width in mm, required for crossarms and ignored
            for poles.
        sequence_number: Position of the component in its session.

    Returns:
        An immutable ConfiguredComponent carrying its own copy of the
        selections and its generated line items.

    Raises:
        InvalidSelectionError: If any attribute is missing or invalid. No
            defaults are substituted.
    """
    problems = validate_selections(kind, selections, pole_width_mm)
    if problems:
        logger.info(f"Rejected {kind} finalization: {problems}")
        raise InvalidSelectionError(kind, problems)

    # Copy first so nothing below can see later wizard edits
    frozen = dict(selections)

    if kind == C.CROSSARM:
        sizing = resolve_bolt_sizing(frozen, pole_width_mm)
        items = generate_crossarm_items(frozen, pole_width_mm, sizing)
        width = pole_width_mm
    else:
        items = generate_pole_items(frozen)
        width = None

    component = ConfiguredComponent(
        sequence_number=sequence_number,
        kind=kind,
        selections=frozen,
        build_identifier=format_build_identifier(frozen, kind),
        line_items=tuple(items),
        pole_width_mm=width,
    )
    logger.info(
        f"Finalized {component.label}: {component.build_identifier} "
        f"({len(component.line_items)} line items)"
    )
    return component


# --- Aggregation ---


def _category_rank(category: str) -> int:
    if category in C.CATEGORY_ORDER:
        return C.CATEGORY_ORDER.index(category)
    return len(C.CATEGORY_ORDER)


def group_by_category(items: Iterable[LineItem]) -> list[tuple[str, list[LineItem]]]:
    """
    Groups line items into pick list sections.

    Sorting hierarchy:
    1. Category (fixed rank from constants.CATEGORY_ORDER).
    2. Bolt categories: embedded length, longest first.
    3. Everything else: first-seen order.

    Args:
        items: Line items (usually already merged).

    Returns:
        A list of (category, items) tuples. Categories with no items are
        omitted.
    """
    groups: dict[str, list[LineItem]] = {}
    for item in items:
        groups.setdefault(item["category"], []).append(item)

    for category in groups:
        if category not in C.CATEGORY_ORDER:
            logger.warning(f"Category '{category}' has no rank; listing it last.")

    ordered = []
    # sorted() is stable, so unranked categories keep first-seen order
    for category in sorted(groups, key=_category_rank):
        section = groups[category]
        if category in C.BOLT_CATEGORIES:
            section = sorted(
                section, key=lambda item: extract_part_size(item["id"]), reverse=True
            )
        ordered.append((category, section))

    return ordered


def merge_line_items(components: Iterable[ConfiguredComponent]) -> list[LineItem]:
    """
    Sums quantities for identical part ids across components.

    The first occurrence of an id fixes its name and category. The input
    components are never mutated.

    Raises:
        AggregationConflictError: If two producers disagree on the name or
            category of one id.
    """
    merged: dict[str, LineItem] = {}

    for component in components:
        for item in component.line_items:
            existing = merged.get(item["id"])
            if existing is None:
                merged[item["id"]] = {
                    "id": item["id"],
                    "name": item["name"],
                    "qty": item["qty"],
                    "category": item["category"],
                }
                continue

            if (existing["name"], existing["category"]) != (
                item["name"],
                item["category"],
            ):
                logger.error(
                    f"Conflicting metadata for '{item['id']}' in "
                    f"{component.build_identifier}"
                )
                raise AggregationConflictError(
                    item["id"],
                    (existing["name"], existing["category"]),
                    (item["name"], item["category"]),
                )

            existing["qty"] += item["qty"]

    return list(merged.values())


def aggregate(components: Session | Iterable[ConfiguredComponent]) -> list[LineItem]:
    """
    Builds the final pick list for a whole session.

    Args:
        components: A Session or any iterable of ConfiguredComponents.

    Returns:
        Merged line items, flattened in grouped display order.
    """
    merged = merge_line_items(components)
    return [item for _, section in group_by_category(merged) for item in section]


def serialize_pick_list(items: Iterable[LineItem]) -> str:
    """
    Converts a pick list into plain text, one section per category.
    e.g. "[M16 Bolts]\\n  2 x BOLT-M16-300-KB  M16x300mm King Bolt"

    Args:
        items: Line items (usually the output of `aggregate`).

    Returns:
        A newline-separated string suitable for pasting into an email.
    """
    lines = []
    for category, section in group_by_category(items):
        lines.append(f"[{category}]")
        for item in section:
            lines.append(f"  {item['qty']} x {item['id']}  {item['name']}")
    return "\n".join(lines)
