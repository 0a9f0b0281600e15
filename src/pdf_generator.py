"""
PDF Generation Engine.

This module handles the creation of printable assets for the store:
1. Pick Lists: Category-grouped checklists with tick boxes for picking.
2. Master ZIP: The pick list PDF bundled with the CSV exports.

It uses the `fpdf2` library to generate PDFs in memory and bundles them into
ZIP archives for user download.
"""

import datetime
import io
import logging
import zipfile
from collections.abc import Iterable, Sequence

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from src.xarm_lib import ConfiguredComponent, LineItem, group_by_category
from src.xarm_lib.constants import APP_VERSION

logger = logging.getLogger(__name__)


def clean_text_for_pdf(text: str) -> str:
    """Core PDF fonts are Latin-1 only; swap anything else for '?'."""
    return text.replace("—", "-").encode("latin-1", "replace").decode("latin-1")


class PickListDocument(FPDF):
    """
    FPDF Subclass for generating the printable pick list.

    Features:
        - Automatic pagination.
        - Custom header/footer.
        - Category headings that never end up orphaned at a page bottom.
    """

    def __init__(self):
        super().__init__()
        self.set_auto_page_break(auto=True, margin=15)
        self.set_title("XARM Pick List")

    def header(self):
        """Renders the header on every page."""
        self.set_font("Courier", "B", 10)
        self.cell(
            0,
            10,
            "XARM Pick List",
            align="R",
            new_x=XPos.LMARGIN,
            new_y=YPos.NEXT,
        )
        self.line(10, 20, 200, 20)
        self.ln(10)

    def footer(self):
        """Renders the footer on every page."""
        self.set_y(-15)
        self.set_font("Courier", "I", 8)
        self.cell(0, 10, f"Page {self.page_no()}", align="C")

    def draw_checkbox(self, x: float, y: float):
        """Draws a square checkbox at the specified coordinates."""
        self.rect(x, y, 4, 4)

    def add_components(self, components: Sequence[ConfiguredComponent]):
        """
        Adds the title block and the list of configured components.

        Args:
            components (Sequence[ConfiguredComponent]): The session's components.
        """
        self.add_page()

        self.set_font("Courier", "B", 16)
        self.cell(0, 10, "Pick List", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        self.set_font("Courier", "", 10)
        date_str = datetime.datetime.now().strftime("%Y-%m-%d")
        self.cell(0, 6, f"Date: {date_str}", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        self.ln(2)

        self.set_font("Courier", "B", 10)
        self.cell(30, 8, "Component", 1)
        self.cell(0, 8, "Build Code", 1, new_x=XPos.LMARGIN, new_y=YPos.NEXT)

        self.set_font("Courier", "", 9)
        for component in components:
            code = component.build_identifier
            if component.pole_width_mm is not None:
                code = f"{code} @ {component.pole_width_mm}mm"
            self.cell(30, 7, component.label, 1)
            self.cell(
                0, 7, clean_text_for_pdf(code), 1, new_x=XPos.LMARGIN, new_y=YPos.NEXT
            )

        self.ln(4)

    def add_pick_list(self, items: Iterable[LineItem]):
        """
        Adds the grouped checklist table.

        Args:
            items (Iterable[LineItem]): Merged line items.
        """
        for category, section in group_by_category(items):
            # Keep the heading with at least one row
            if self.get_y() + 16 > self.page_break_trigger:
                self.add_page()

            self.set_font("Courier", "B", 11)
            self.cell(0, 8, category.upper(), new_x=XPos.LMARGIN, new_y=YPos.NEXT)

            self.set_font("Courier", "B", 9)
            self.cell(10, 7, "Chk", 1)
            self.cell(15, 7, "Qty", 1, align="C")
            self.cell(55, 7, "Reference", 1)
            self.cell(0, 7, "Description", 1, new_x=XPos.LMARGIN, new_y=YPos.NEXT)

            self.set_font("Courier", "", 9)
            for item in section:
                if self.get_y() + 7 > self.page_break_trigger:
                    self.add_page()

                x = self.get_x()
                y = self.get_y()
                self.draw_checkbox(x + 3, y + 1.5)
                self.cell(10, 7, "", 1)
                self.cell(15, 7, str(item["qty"]), 1, align="C")
                self.cell(55, 7, clean_text_for_pdf(item["id"])[:28], 1)

                name = clean_text_for_pdf(item["name"])
                if len(name) > 50:
                    name = name[:47] + "..."
                self.cell(0, 7, name, 1, new_x=XPos.LMARGIN, new_y=YPos.NEXT)

            self.ln(3)


def generate_pick_list_pdf(
    components: Sequence[ConfiguredComponent], items: Iterable[LineItem]
) -> bytes:
    """
    Generates the printable pick list.

    Args:
        components (Sequence[ConfiguredComponent]): The session's components.
        items (Iterable[LineItem]): The aggregated pick list.

    Returns:
        bytes: The binary content of the PDF.
    """
    pdf = PickListDocument()
    pdf.add_components(components)
    pdf.add_pick_list(items)
    return bytes(pdf.output())


def generate_master_zip(
    components: Sequence[ConfiguredComponent],
    items: Iterable[LineItem],
    pick_list_csv: bytes,
    components_csv: bytes,
) -> bytes:
    """
    Generates the "Master ZIP" containing all pick list artifacts.

    Contents:
    1. CSVs (Pick List, Components)
    2. Pick List PDF
    3. Info.txt (Metadata)

    Args:
        components (Sequence[ConfiguredComponent]): The session's components.
        items (Iterable[LineItem]): The aggregated pick list.
        pick_list_csv (bytes): The CSV bytes for the pick list.
        components_csv (bytes): The CSV bytes for the component summary.

    Returns:
        bytes: The binary content of the Master ZIP.
    """
    zip_buffer = io.BytesIO()

    with zipfile.ZipFile(zip_buffer, "w", zipfile.ZIP_DEFLATED) as zf:
        zf.writestr("Pick List.csv", pick_list_csv)
        zf.writestr("Components.csv", components_csv)

        try:
            zf.writestr("Pick List.pdf", generate_pick_list_pdf(components, items))
        except Exception as e:
            # The CSVs are still usable without the printable copy
            logger.error(f"Pick list PDF generation failed: {e}")

        info_text = (
            f"XARM Pick List Builder v{APP_VERSION}\n"
            "Generated on: "
            + datetime.datetime.now().strftime("%Y-%m-%d %H:%M")
            + "\n\n"
            "CONTENTS:\n"
            "- Pick List.csv: Aggregated parts, grouped by category.\n"
            "- Components.csv: Every configured level / pole and its build code.\n"
            "- Pick List.pdf: Printable checklist for the store.\n\n"
            "COMPONENTS:\n"
            + "\n".join(f"- {c.label}: {c.build_identifier}" for c in components)
            + "\n"
        )
        zf.writestr("info.txt", info_text)

    return zip_buffer.getvalue()
