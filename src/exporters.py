import csv
import io
from collections.abc import Iterable
from typing import Any

from src.xarm_lib import ConfiguredComponent, LineItem, group_by_category

PICK_LIST_FIELDS = ["Category", "Reference", "Description", "Qty"]


def pick_list_rows(items: Iterable[LineItem]) -> list[dict[str, Any]]:
    """
    Flattens a pick list into display rows, grouped by category.

    Args:
        items (Iterable[LineItem]): Merged line items (output of `aggregate`).

    Returns:
        list[dict]: One row per item with the PICK_LIST_FIELDS columns.
    """
    rows = []
    for category, section in group_by_category(items):
        for item in section:
            rows.append(
                {
                    "Category": category,
                    "Reference": item["id"],
                    "Description": item["name"],
                    "Qty": item["qty"],
                }
            )
    return rows


def generate_pick_list_csv(rows: list[dict[str, Any]]) -> bytes:
    """
    Generates a CSV file for the pick list.

    Constructs a UTF-8 encoded CSV string (with BOM signature) suitable for
    download.

    Args:
        rows (list[dict]): The list of row dictionaries to write.

    Returns:
        bytes: The CSV content encoded as utf-8-sig.
    """
    csv_buf = io.StringIO()
    writer = csv.DictWriter(csv_buf, fieldnames=PICK_LIST_FIELDS, extrasaction="ignore")
    writer.writeheader()
    writer.writerows(rows)

    # encode "utf-8-sig" to ensure Excel opens it correctly with special characters
    return csv_buf.getvalue().encode("utf-8-sig")


def generate_components_csv(components: Iterable[ConfiguredComponent]) -> bytes:
    """
    Generates a CSV listing every saved component and its build code.

    Args:
        components (Iterable[ConfiguredComponent]): The session's components.

    Returns:
        bytes: The CSV content encoded as utf-8-sig.
    """
    csv_buf = io.StringIO()
    writer = csv.writer(csv_buf)
    writer.writerow(["Component", "Build Code", "Pole Width (mm)", "Line Items"])

    for component in components:
        writer.writerow(
            [
                component.label,
                component.build_identifier,
                component.pole_width_mm if component.pole_width_mm is not None else "",
                len(component.line_items),
            ]
        )

    return csv_buf.getvalue().encode("utf-8-sig")


def generate_pick_list_markdown(
    rows: list[dict[str, Any]], components: Iterable[ConfiguredComponent]
) -> str:
    """
    Renders the pick list as a Markdown checklist.

    Args:
        rows (list[dict]): Pick list rows from `pick_list_rows`.
        components (Iterable[ConfiguredComponent]): The session's components.

    Returns:
        str: The Markdown document.
    """
    lines = ["# Pick List", "", "## Components", ""]
    for component in components:
        width = (
            f" (pole {component.pole_width_mm}mm)"
            if component.pole_width_mm is not None
            else ""
        )
        lines.append(f"- **{component.label}:** `{component.build_identifier}`{width}")

    lines.extend(["", "## Parts", ""])
    lines.append("| Category | Reference | Description | Qty |")
    lines.append("| --- | --- | --- | :---: |")
    for row in rows:
        lines.append(
            f"| {row['Category']} | `{row['Reference']}` | {row['Description']} | **{row['Qty']}** |"
        )

    return "\n".join(lines) + "\n"
