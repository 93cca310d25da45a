from __future__ import annotations
from datetime import datetime, timezone
from typing import Optional
import re

SUCCESS = "SUCCESS"
API_DATE_LAYOUT = "%Y-%m-%d %H:%M:%S"
API_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}", re.ASCII)
INT_STR_RE = re.compile(r"[+-]?\d+", re.ASCII)
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

def parse_api_datetime(s: str) -> Optional[datetime]:
    """
    Parse 'YYYY-MM-DD HH:MM:SS' (24h, no zone) into an aware UTC datetime.
    Returns None when the string does not match the layout or names an impossible date.
    """
    # strptime alone accepts single-digit fields and non-ASCII digits
    if not API_DATE_RE.fullmatch(s):
        return None
    try:
        return datetime.strptime(s, API_DATE_LAYOUT).replace(tzinfo=timezone.utc)
    except ValueError:
        return None

def parse_int_str(s: str) -> Optional[int]:
    """Strict ASCII decimal integer parse; no surrounding whitespace, newlines or underscores."""
    if not INT_STR_RE.fullmatch(s):
        return None
    try:
        return int(s)
    except ValueError:
        # past the interpreter's int digit limit
        return None
