"""Custom exceptions for the XARM engine."""


class XarmError(Exception):
    """Base class for every error the engine surfaces to its callers."""

    pass


class InvalidSelectionError(XarmError):
    """
    Raised when a component cannot be finalized.

    Collects every problem found in one pass so the wizard can show them
    together instead of one per retry.
    """

    def __init__(self, kind: str, problems: list[str]):
        self.kind = kind
        self.problems = problems
        super().__init__(f"Invalid {kind} selection: " + "; ".join(problems))


class AggregationConflictError(XarmError):
    """Raised when two producers emit the same part id with different metadata."""

    def __init__(self, part_id: str, first: tuple[str, str], second: tuple[str, str]):
        self.part_id = part_id
        self.first = first
        self.second = second
        super().__init__(
            f"Part '{part_id}' emitted as {first[0]!r} ({first[1]}) "
            f"and as {second[0]!r} ({second[1]})."
        )
