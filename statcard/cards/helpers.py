from __future__ import annotations
import textwrap
from typing import List

MAX_TITLE_USERNAME = 13
DEFAULT_TITLE = "GitHub Stats"


def format_value(value: int) -> str:
    """999 -> '999', 1500 -> '1.5k', 15234 -> '15k'. Never rounds up."""
    if value < 1000:
        return str(value)
    if value < 10000:
        tenths = value // 100
        whole, frac = divmod(tenths, 10)
        return f"{whole}k" if frac == 0 else f"{whole}.{frac}k"
    return f"{value // 1000}k"


def username_title(username: str) -> str:
    if not username or len(username) > MAX_TITLE_USERNAME:
        return DEFAULT_TITLE
    return f"@{username}: {DEFAULT_TITLE}"


def wrap_text(text: str, width: int) -> List[str]:
    lines = textwrap.wrap(text, width=width, break_long_words=True, break_on_hyphens=False)
    return lines or [""]
