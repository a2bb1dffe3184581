from .card import Card, CardSettings, fallback_svg
from .error_card import ErrorCard
from .helpers import format_value, username_title
from .langs_card import LangsCard, LayoutType, bar_segments
from .stats_card import HIDE_TOKENS, StatsCard, parse_hidden

__all__ = [
    "Card",
    "CardSettings",
    "ErrorCard",
    "HIDE_TOKENS",
    "LangsCard",
    "LayoutType",
    "StatsCard",
    "bar_segments",
    "fallback_svg",
    "format_value",
    "parse_hidden",
    "username_title",
]
