import logging

import pytest

# Silence the noisy debug logs from the PDF stack
logging.getLogger("fpdf").setLevel(logging.WARNING)
logging.getLogger("fontTools").setLevel(logging.WARNING)
logging.getLogger("PIL").setLevel(logging.WARNING)


@pytest.fixture
def hv_term_post_arm():
    """11kV timber arm with 2 term sets and 3 posts (TPS3T), 3 wires."""
    return {
        "Voltage": "11",
        "Dimension": "A",
        "Length": "30",
        "Number": "1",
        "Configuration": "TPS3T",
        "Material": "T",
        "Wires": "3",
    }


@pytest.fixture
def lvtx_neutral_arm():
    """LVTX neutral (PN) pin arm with 2 wires."""
    return {
        "Voltage": "LVTX",
        "Dimension": "A",
        "Length": "20",
        "Number": "1",
        "Configuration": "PN",
        "Material": "T",
        "Wires": "2",
    }


@pytest.fixture
def steel_double_post_arm():
    """11kV steel double pin arm (PS), 3 wires."""
    return {
        "Voltage": "11",
        "Dimension": "B",
        "Length": "23",
        "Number": "2",
        "Configuration": "PS",
        "Material": "S",
        "Wires": "3",
    }


@pytest.fixture
def busck_single_pole():
    return {
        "Length": "12.5",
        "Number": "Single",
        "Manufacturer": "BUSCK",
        "Material": "C",
    }
