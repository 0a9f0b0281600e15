"""
Static Knowledge Base for the XARM Engine.

This module serves as the central repository for:
1.  **Option Catalog:** The ordered wizard attributes for each component class
    and the codes that are valid for each attribute.
2.  **Label Tables:** Human readable names for dimension, material, pole and
    manufacturer codes.
3.  **Bolt Catalog:** The ascending list of stocked bolt lengths used by the
    sizing search.
4.  **Presentation Rules:** Category priority for the aggregated pick list.
5.  **Wizard Defaults:** Pole width defaults and limits.
"""

APP_VERSION = "1.3.0"

# --- Component Classes ---

CROSSARM = "crossarm"
POLE = "pole"

# Build identifier prefix for each class
CLASS_PREFIXES = {
    CROSSARM: "XARM",
    POLE: "POLE",
}

# Rendered in place of any attribute that has not been chosen yet
PLACEHOLDER = "—"

# --- Option Catalog ---

# Attribute order matters: it is both the wizard step order and the
# build identifier order.
CROSSARM_OPTIONS: dict[str, list[str]] = {
    "Voltage": ["11", "LV", "LVTX", "33", "66"],
    "Dimension": ["A", "B", "D", "E", "Z"],
    "Length": ["12", "16", "20", "23", "30", "33", "40", "50", "60"],
    "Number": ["1", "2"],
    "Configuration": [
        "PN",
        "T",
        "TT",
        "PS",
        "TPS1",
        "TPS2",
        "TPS3",
        "TPS1T",
        "TPS2T",
        "TPS3T",
        "TPS4T",
        "TPS6T",
        "DPS",
        "DTPS3T",
        "DTPS5T",
        "EDO",
        "EDOTPS1",
        "EDOTPS3",
        "ABIL",
        "B",
        "SUP",
        "TFLYW",
        "TFLYS",
        "OPS",
        "SP1",
        "SP2",
    ],
    "Material": ["T", "S", "C"],
    "Wires": ["1", "2", "3", "4", "5", "6", "32", "42", "43", "54", "64", "65"],
}

POLE_OPTIONS: dict[str, list[str]] = {
    "Length": ["8", "9.5", "11", "12.5", "14", "15.5", "17"],
    "Number": ["Single", "Double", "H"],
    "Manufacturer": ["BUSCK", "SC", "KOP", "GEN"],
    "Material": ["T", "C", "S"],
}

CATALOG: dict[str, dict[str, list[str]]] = {
    CROSSARM: CROSSARM_OPTIONS,
    POLE: POLE_OPTIONS,
}

# --- Voltage Classes ---

HV_VOLTAGES = ("11", "33", "66")
LV_VOLTAGES = ("LV", "LVTX")
LVTX = "LVTX"

# --- Configuration Code Sets ---

# Always mounted as pin arms regardless of voltage
EXPLICIT_PIN_ARMS = ("SUP", "OPS")

# Termination fly arms carry their own mounting hardware
FLY_ARM_WOOD = "TFLYW"
FLY_ARM_STEEL = "TFLYS"
FLY_ARMS = (FLY_ARM_WOOD, FLY_ARM_STEEL)

# Blank arm: braces and bolts only, never insulators
BLANK_ARM = "B"

# --- Label Tables ---

DIMENSION_MAP = {
    "A": "75x100mm",
    "B": "100x100mm",
    "D": "100x150mm",
    "E": "125x150mm",
    "Z": "75x75mm Angle Iron",
}

MATERIAL_MAP = {"T": "Timber", "S": "Steel", "C": "Composite"}

POLE_NUMBER_MAP = {"Single": "Single", "Double": "Double", "H": "H-Structure"}

POLE_MANUFACTURER_MAP = {
    "BUSCK": "Busck",
    "SC": "Stresscrete",
    "KOP": "Koppers",
    "GEN": "Generic",
}

POLE_MATERIAL_MAP = {"T": "Timber", "C": "Concrete", "S": "Steel"}

# Only this manufacturer ships poles that take a base donut
DONUT_MANUFACTURER = "BUSCK"

# --- Bolt Catalog ---

# Stocked bolt lengths in mm. Ascending, no duplicates.
BOLT_SIZES = (
    100, 110, 130, 140, 150, 160, 180, 200, 220, 240, 260, 280, 300,
    325, 350, 375, 400, 425, 450, 475, 500, 525, 550, 575, 600,
)  # fmt: skip

# Clearance added on top of the pole width for each bolt type (mm)
KING_BOLT_CLEARANCE = 60
LONG_BRACE_BOLT_CLEARANCE = 50
T_BRACKET_BOLT_CLEARANCE = 40

# Spacer pipe sits inside the pole width
SPACER_PIPE_DEDUCTION = 5

# --- Pick List Presentation ---

CATEGORY_POLES = "Poles"
CATEGORY_POLE_HARDWARE = "Pole Hardware"
CATEGORY_MAIN_ARM = "Main Arm"
CATEGORY_INSULATORS = "Insulators"
CATEGORY_M16_BOLTS = "M16 Bolts"
CATEGORY_M12_BOLTS = "M12 Bolts"
CATEGORY_HARDWARE = "Hardware"

CATEGORY_ORDER = [
    CATEGORY_POLES,
    CATEGORY_POLE_HARDWARE,
    CATEGORY_MAIN_ARM,
    CATEGORY_INSULATORS,
    CATEGORY_M16_BOLTS,
    CATEGORY_M12_BOLTS,
    CATEGORY_HARDWARE,
]

# Sorted longest first by the length embedded in the part id
BOLT_CATEGORIES = (CATEGORY_M16_BOLTS, CATEGORY_M12_BOLTS)

# --- Wizard Defaults ---

DEFAULT_POLE_WIDTH_MM = 150
POLE_WIDTH_LIMITS_MM = (50, 600)
