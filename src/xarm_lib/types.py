"""
Type definitions and shared data structures for the XARM library.

This module contains the TypedDicts, the frozen component snapshot and the
session container passed between the sizing, generation and aggregation
stages.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, NamedTuple, TypedDict


class BoltSizing(TypedDict):
    """
    Resolved bolt lengths for one crossarm on one pole.

    Attributes:
        king_bolt_size: King bolt length in mm (steel already stepped down).
        spacer_bolt_size: Double arm spacer bolt length in mm.
        long_brace_bolt_size: Through-pole brace bolt length in mm.
        t_bracket_bolt_size: LVTX T bracket through-pole bolt length in mm.
        is_pin_arm: True when the arm carries pin insulators.
        is_steel: True for steel arms and every LVTX arm.
        arm_width: Combined width of all arms on the bolt in mm.
    """

    king_bolt_size: int
    spacer_bolt_size: int
    long_brace_bolt_size: int
    t_bracket_bolt_size: int
    is_pin_arm: bool
    is_steel: bool
    arm_width: int


class LineItem(TypedDict):
    """
    A single pick list row.

    Attributes:
        id: Stable part id. Sized parts embed their length (e.g. 'BOLT-M16-300-KB').
        name: Description shown to the storeman.
        qty: Quantity required (always positive).
        category: Pick list section (see constants.CATEGORY_ORDER).
    """

    id: str
    name: str
    qty: int
    category: str


class ConfigBreakdown(NamedTuple):
    """Engineering quantities decoded from a crossarm configuration code."""

    term_count: int = 0
    post_qty: int = 0
    has_edo: bool = False
    has_delta: bool = False


@dataclass(frozen=True)
class ConfiguredComponent:
    """
    Immutable snapshot of one completed crossarm level or pole.

    Created only by `finalize_component` once every attribute is chosen.
    The selections and every line item row are copied into read-only
    mappings so neither later wizard steps nor callers can change a saved
    component.
    """

    sequence_number: int
    kind: str
    selections: Mapping[str, str]
    build_identifier: str
    line_items: tuple[Mapping[str, Any], ...]
    pole_width_mm: int | None = None

    def __post_init__(self):
        object.__setattr__(
            self, "selections", MappingProxyType(dict(self.selections))
        )
        object.__setattr__(
            self,
            "line_items",
            tuple(MappingProxyType(dict(item)) for item in self.line_items),
        )

    @property
    def label(self) -> str:
        """Short display label (e.g., 'Level 2' or 'Pole 1')."""
        prefix = "Pole" if self.kind == "pole" else "Level"
        return f"{prefix} {self.sequence_number}"


@dataclass
class Session:
    """
    Ordered, append-only collection of configured components.

    Each wizard session owns exactly one instance. Components are frozen
    on entry; the only way to change a saved component is `reset()`.
    """

    components: list[ConfiguredComponent] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.components)

    def __iter__(self):
        return iter(self.components)

    @property
    def next_sequence_number(self) -> int:
        return len(self.components) + 1

    def finalize(
        self,
        kind: str,
        selections: Mapping[str, str],
        pole_width_mm: int | None = None,
    ) -> ConfiguredComponent:
        """
        Validates and freezes the current selections, then appends them.

        Args:
            kind: "crossarm" or "pole".
            selections: The completed attribute selections.
            pole_width_mm: Pole width, required for crossarms.

        Returns:
            The new ConfiguredComponent.

        Raises:
            InvalidSelectionError: If the selections are incomplete or invalid.
        """
        # Local import: manager depends on this module
        from src.xarm_lib.manager import finalize_component

        component = finalize_component(
            kind,
            selections,
            pole_width_mm,
            sequence_number=self.next_sequence_number,
        )
        self.components.append(component)
        return component

    def aggregate(self) -> list[LineItem]:
        """Merged, grouped pick list for every component in the session."""
        from src.xarm_lib.manager import aggregate

        return aggregate(self.components)

    def reset(self) -> None:
        """Discards every saved component."""
        self.components.clear()


def create_empty_session() -> Session:
    """Factory function to return a new, isolated Session instance."""
    return Session()
