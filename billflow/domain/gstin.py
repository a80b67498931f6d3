"""GSTIN structural validation"""

import re
from typing import Optional

# 2-digit state code, PAN (5 letters, 4 digits, 1 letter), entity code,
# literal Z, checksum character (not verified)
GSTIN_PATTERN = re.compile(r"[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z][1-9A-Z]Z[0-9A-Z]")


def is_valid_gstin(value: Optional[str]) -> bool:
    """
    Check that value looks like a 15-character GSTIN

    Only the shape is checked, the checksum character is accepted as-is.

    Args:
        value: Candidate GSTIN

    Returns:
        True if the value matches the GSTIN pattern, False otherwise
    """
    if not value:
        return False
    return GSTIN_PATTERN.fullmatch(value) is not None
