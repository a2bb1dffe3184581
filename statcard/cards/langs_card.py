"""
Language card.

Vertical layout: one row per language with a label, a percentage and a
progress bar. Horizontal layout: one segmented bar followed by a
two-column legend.
"""

from __future__ import annotations
import enum
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from lxml import etree

from ..colors import language_color
from ..languages import DEFAULT_COUNT_WEIGHT, DEFAULT_SIZE_WEIGHT, LanguageStat, top_percentages
from .card import Card, CardSettings
from .svg import element, round_half_up, sub

MAX_LANGUAGES = 20
CONTENT_WIDTH = 280
TITLE_BODY_OFFSET = 10

# vertical
ROW_Y_STEP = 36
VALUE_SIZE = 46
VALUE_X_OFFSET = 10
PROGRESS_BAR_WIDTH = CONTENT_WIDTH - VALUE_SIZE - VALUE_X_OFFSET
PROGRESS_BAR_HEIGHT = 8

# horizontal
BAR_HEIGHT = 8
BAR_RADIUS = 4
LEGEND_COLUMNS = 2
LEGEND_COLUMN_WIDTH = CONTENT_WIDTH // LEGEND_COLUMNS
LEGEND_ROW_STEP = 22
LEGEND_TOP = 28
LEGEND_BOTTOM = 4
DOT_RADIUS = 5
MASK_ID = "langs-bar-mask"

EMPTY_MESSAGE = "No languages found"


class LayoutType(enum.Enum):
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


def format_percent(percent: float) -> str:
    return f"{percent:.2f}%"


def bar_segments(percentages: Sequence[float], track: int) -> List[Tuple[int, int]]:
    """
    (x, width) of each bar segment on a track of ``track`` pixels.

    The running total is rounded rather than each segment, so segments
    tile without gaps or overlaps. Each segment is at least 1 px wide
    while there is room left on the track.
    """
    segments = []
    left = 0
    cumulative = 0.0
    for percent in percentages:
        if left >= track:
            break
        cumulative += percent
        right = max(round_half_up(cumulative * track / 100), left + 1)
        right = min(right, track)
        segments.append((left, right - left))
        left = right
    return segments


@dataclass
class LangsCard:
    settings: CardSettings
    stats: List[LanguageStat] = field(default_factory=list)
    layout: LayoutType = LayoutType.VERTICAL
    size_weight: Optional[float] = None
    count_weight: Optional[float] = None
    max_languages: Optional[int] = None

    @property
    def header(self) -> int:
        if self.settings.hide_title:
            return 0
        return Card.TITLE_FONT_SIZE + TITLE_BODY_OFFSET

    @property
    def width(self) -> int:
        return CONTENT_WIDTH + 2 * self.settings.offset_x

    def top_languages(self) -> List[Tuple[LanguageStat, float]]:
        a = DEFAULT_SIZE_WEIGHT if self.size_weight is None else self.size_weight
        b = DEFAULT_COUNT_WEIGHT if self.count_weight is None else self.count_weight
        n = MAX_LANGUAGES if self.max_languages is None else min(self.max_languages, MAX_LANGUAGES)
        return top_percentages(self.stats, a, b, n)

    # ------------------ Vertical ------------------
    def render_vertical_row(self, index: int, name: str, percent: float) -> etree._Element:
        x = self.settings.offset_x
        y = self.settings.offset_y + self.header + index * ROW_Y_STEP
        row = element("g", {"class": "row"})
        sub(row, "text", {"x": x + 2, "y": y + 18, "class": "label"}, name)
        sub(
            row,
            "text",
            {"x": x + PROGRESS_BAR_WIDTH + VALUE_X_OFFSET, "y": y + ROW_Y_STEP - 2, "class": "value"},
            format_percent(percent),
        )
        bar = sub(row, "svg", {"x": x, "y": y + 25, "width": PROGRESS_BAR_WIDTH, "height": PROGRESS_BAR_HEIGHT})
        sub(bar, "rect", {
            "class": "progressBarBackground", "rx": 5, "ry": 5,
            "width": PROGRESS_BAR_WIDTH, "height": PROGRESS_BAR_HEIGHT,
        })
        sub(bar, "rect", {
            "rx": 5, "ry": 5,
            "width": round_half_up(PROGRESS_BAR_WIDTH * percent / 100), "height": PROGRESS_BAR_HEIGHT,
            "fill": language_color(name),
        })
        return row

    def render_vertical(self, entries: List[Tuple[LanguageStat, float]]) -> Tuple[List[etree._Element], int]:
        body = [self.render_vertical_row(i, stat.name, pct) for i, (stat, pct) in enumerate(entries)]
        height = self.header + len(entries) * ROW_Y_STEP + 2 * self.settings.offset_y
        return body, height

    # ------------------ Horizontal ------------------
    def render_horizontal(self, entries: List[Tuple[LanguageStat, float]]) -> Tuple[List[etree._Element], int]:
        x = self.settings.offset_x
        bar_y = self.settings.offset_y + self.header
        body = []

        defs = element("defs")
        mask = sub(defs, "mask", {"id": MASK_ID})
        sub(mask, "rect", {
            "x": x, "y": bar_y, "width": CONTENT_WIDTH, "height": BAR_HEIGHT,
            "rx": BAR_RADIUS, "fill": "white",
        })
        body.append(defs)

        bar = element("g", {"class": "bar", "mask": f"url(#{MASK_ID})"})
        sub(bar, "rect", {
            "class": "progressBarBackground", "x": x, "y": bar_y,
            "width": CONTENT_WIDTH, "height": BAR_HEIGHT,
        })
        segments = bar_segments([pct for _, pct in entries], CONTENT_WIDTH)
        for (stat, _), (left, width) in zip(entries, segments):
            sub(bar, "rect", {
                "x": x + left, "y": bar_y, "width": width, "height": BAR_HEIGHT,
                "fill": language_color(stat.name),
            })
        body.append(bar)

        legend = element("g", {"class": "legend-group"})
        for i, (stat, pct) in enumerate(entries):
            col, row = i % LEGEND_COLUMNS, i // LEGEND_COLUMNS
            item_x = x + col * LEGEND_COLUMN_WIDTH
            baseline = bar_y + LEGEND_TOP + row * LEGEND_ROW_STEP
            item = sub(legend, "g", {"class": "row"})
            sub(item, "circle", {
                "cx": item_x + DOT_RADIUS, "cy": baseline - 4, "r": DOT_RADIUS,
                "fill": language_color(stat.name),
            })
            sub(item, "text", {"x": item_x + 2 * DOT_RADIUS + 4, "y": baseline, "class": "legend"}, stat.name)
            sub(item, "text", {
                "x": item_x + LEGEND_COLUMN_WIDTH - 8, "y": baseline, "class": "value",
                "text-anchor": "end",
            }, format_percent(pct))
        body.append(legend)

        rows = (len(entries) + LEGEND_COLUMNS - 1) // LEGEND_COLUMNS
        height = bar_y + LEGEND_TOP + (rows - 1) * LEGEND_ROW_STEP + LEGEND_BOTTOM + self.settings.offset_y
        return body, height

    def render_empty(self) -> Tuple[List[etree._Element], int]:
        y = self.settings.offset_y + self.header
        row = element("g", {"class": "row"})
        sub(row, "text", {"x": self.settings.offset_x + 2, "y": y + 18, "class": "label"}, EMPTY_MESSAGE)
        return [row], self.header + ROW_Y_STEP + 2 * self.settings.offset_y

    def render(self) -> str:
        entries = self.top_languages()
        if not entries:
            body, height = self.render_empty()
        elif self.layout is LayoutType.HORIZONTAL:
            body, height = self.render_horizontal(entries)
        else:
            body, height = self.render_vertical(entries)
        card = Card(
            width=self.width,
            height=max(height, Card.MIN_HEIGHT),
            title="Most used languages",
            description="GitHub top languages",
            body=body,
            outer_class="langsCard",
            settings=self.settings,
        )
        return card.render()
