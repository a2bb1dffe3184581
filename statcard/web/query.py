"""Decoding of card query-string options."""

from __future__ import annotations
import math
from typing import List, Mapping, Optional

from ..cards import CardSettings, LayoutType
from ..cards.langs_card import MAX_LANGUAGES
from ..errors import QueryError
from ..themes import DEFAULT_THEME, get_theme_css

DEFAULT_OFFSET = 12
# Exponent bound for size_weight and count_weight.
MAX_WEIGHT = 10.0


def parse_offset(raw: Optional[str]) -> int:
    try:
        value = int((raw or "").strip())
    except ValueError:
        return DEFAULT_OFFSET
    return value if value >= 0 else DEFAULT_OFFSET


def parse_bool(raw: Optional[str]) -> bool:
    return raw == "true"


def parse_theme(raw: Optional[str]) -> str:
    name = (raw or "").strip() or DEFAULT_THEME
    get_theme_css(name)
    return name


def parse_csv(raw: Optional[str]) -> List[str]:
    return [part.strip() for part in (raw or "").split(",") if part.strip()]


def parse_layout(raw: Optional[str]) -> LayoutType:
    if raw is None or raw == "":
        return LayoutType.VERTICAL
    try:
        return LayoutType(raw)
    except ValueError:
        raise QueryError(f"invalid layout: {raw}; expected 'vertical' or 'horizontal'") from None


def parse_weight(name: str, raw: Optional[str]) -> Optional[float]:
    if raw is None or raw == "":
        return None
    try:
        value = float(raw)
    except ValueError:
        raise QueryError(f"invalid {name}: {raw}") from None
    if not math.isfinite(value) or not 0 <= value <= MAX_WEIGHT:
        raise QueryError(f"invalid {name}: {raw}; must be a number between 0 and {MAX_WEIGHT:g}")
    return value


def parse_max_languages(raw: Optional[str]) -> Optional[int]:
    if raw is None or raw == "":
        return None
    try:
        value = int(raw)
    except ValueError:
        raise QueryError(f"invalid max_languages: {raw}") from None
    if not 1 <= value <= MAX_LANGUAGES:
        raise QueryError(f"max_languages must be between 1 and {MAX_LANGUAGES}")
    return value


def card_settings(args: Mapping[str, str]) -> CardSettings:
    return CardSettings(
        offset_x=parse_offset(args.get("offset_x")),
        offset_y=parse_offset(args.get("offset_y")),
        theme=parse_theme(args.get("theme")),
        hide_title=parse_bool(args.get("hide_title")),
        hide_background=parse_bool(args.get("hide_background")),
        hide_background_stroke=parse_bool(args.get("hide_background_stroke")),
    )
