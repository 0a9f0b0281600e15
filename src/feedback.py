import datetime
from typing import TYPE_CHECKING

import streamlit as st

if TYPE_CHECKING:
    import gspread

FEEDBACK_SHEET = "XARM Pick List Feedback"


@st.cache_resource(ttl="1h")
def get_gsheet_client() -> "gspread.Client":
    """
    Returns the Google Sheets client the pick list feedback form writes with.

    One client is shared by every wizard session and rebuilt hourly so an
    expired service account token never reaches `save_feedback`. The
    service account lives under `gcp_service_account` in `st.secrets`.
    """
    import gspread
    from google.oauth2.service_account import Credentials

    # Drive scope is needed to find the feedback sheet by its title
    scopes = [
        "https://www.googleapis.com/auth/spreadsheets",
        "https://www.googleapis.com/auth/drive",
    ]
    account_info = st.secrets["gcp_service_account"]
    credentials = Credentials.from_service_account_info(account_info, scopes=scopes)
    return gspread.authorize(credentials)


def save_feedback(rating: str, text: str, build_codes: list[str] | None = None) -> None:
    """
    Appends a new feedback entry to the feedback Google Sheet.

    Args:
        rating (str): The user's rating (e.g., "🤩", "😕").
        text (str): The user's comment or bug report.
        build_codes (list[str] | None): Build codes in the session when the
            feedback was sent, so wrong pick lists can be reproduced.

    Raises:
        Exception: If connection fails or sheet is not found.
    """
    client = get_gsheet_client()
    sheet = client.open(FEEDBACK_SHEET).sheet1

    # Append timestamp, rating, comment and context as a new row
    row = [
        str(datetime.datetime.now()),
        rating,
        text,
        ", ".join(build_codes or []),
    ]
    sheet.append_row(row)
