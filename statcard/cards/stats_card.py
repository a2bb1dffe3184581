"""
Stats card: one row per visible counter.

Rows are laid out top to bottom in a fixed order; each row is an icon,
a label and a compact value (``format_value``).
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

from lxml import etree

from ..errors import QueryError
from ..github.types import GitHubStats
from . import icons
from .card import Card, CardSettings
from .helpers import format_value, username_title
from .svg import element, sub

ICON_SIZE = 16
ICON_OFFSET = 8
LABEL_SIZE = 180
VALUE_SIZE = 60
ROW_STEP = 27
TITLE_BODY_OFFSET = 10
TEXT_BASELINE = 13
MIN_VISIBLE = 2

# (hide token, label, icon, GitHubStats attribute)
STAT_ROWS: List[Tuple[str, str, str, str]] = [
    ("stars_count", "Stars:", icons.STAR, "total_stars"),
    ("commits_ytd_count", "Commits YTD:", icons.COMMIT, "total_commits_ytd"),
    ("issues_count", "Issues:", icons.ISSUE, "total_issues"),
    ("pull_requests_count", "Pull Requests:", icons.PULL_REQUEST, "total_prs"),
    ("merge_requests_count", "Merged PRs:", icons.MERGE, "total_merged_prs"),
    ("reviews_count", "Reviews:", icons.REVIEW, "total_reviews"),
    ("started_discussions_count", "Started Discussions:", icons.DISCUSSION, "total_discussions_started"),
    ("answered_discussions_count", "Answered Discussions:", icons.ANSWERED, "total_discussions_answered"),
]
HIDE_TOKENS = [row[0] for row in STAT_ROWS]


def parse_hidden(raw: Optional[str]) -> FrozenSet[str]:
    """Decode the comma-separated ``hide`` option; raises QueryError."""
    tokens = [t.strip() for t in (raw or "").split(",")]
    hidden = set()
    for token in tokens:
        if not token:
            continue
        if token not in HIDE_TOKENS:
            raise QueryError(f"invalid hide value: {token}")
        hidden.add(token)
    if len(HIDE_TOKENS) - len(hidden) < MIN_VISIBLE:
        raise QueryError("hide would remove too many stats; at least 2 must remain")
    return frozenset(hidden)


@dataclass
class StatsCard:
    settings: CardSettings
    username: str
    # token -> value; None or absent means the row is not shown
    values: Dict[str, Optional[int]] = field(default_factory=dict)

    @classmethod
    def from_stats(
        cls,
        stats: GitHubStats,
        settings: CardSettings,
        hidden: Iterable[str] = (),
        username: Optional[str] = None,
    ) -> "StatsCard":
        hidden = set(hidden)
        values = {
            token: (None if token in hidden else getattr(stats, attr))
            for token, _, _, attr in STAT_ROWS
        }
        return cls(settings=settings, username=stats.login if username is None else username, values=values)

    def visible_rows(self) -> List[Tuple[str, str, int]]:
        rows = []
        for token, label, icon, _ in STAT_ROWS:
            value = self.values.get(token)
            if value is not None:
                rows.append((label, icon, value))
        return rows

    @property
    def header(self) -> int:
        if self.settings.hide_title:
            return 0
        return Card.TITLE_FONT_SIZE + TITLE_BODY_OFFSET

    @property
    def width(self) -> int:
        return 2 * self.settings.offset_x + ICON_SIZE + ICON_OFFSET + LABEL_SIZE + VALUE_SIZE

    def height(self, rows: int) -> int:
        oy = self.settings.offset_y
        if self.settings.hide_title:
            return 2 * oy + ICON_SIZE + (rows - 1) * ROW_STEP
        return self.header + rows * ROW_STEP + 2 * oy

    def render_row(self, index: int, label: str, icon: str, value: int) -> etree._Element:
        top = self.settings.offset_y + self.header + index * ROW_STEP
        label_x = self.settings.offset_x + ICON_SIZE + ICON_OFFSET
        row = element("g", {"class": "row"})
        row.append(icons.place_icon(icon, self.settings.offset_x, top, ICON_SIZE))
        sub(row, "text", {"x": label_x, "y": top + TEXT_BASELINE, "class": "label"}, label)
        sub(row, "text", {"x": label_x + LABEL_SIZE, "y": top + TEXT_BASELINE, "class": "value"}, format_value(value))
        return row

    def render(self) -> str:
        rows = self.visible_rows()
        body = [self.render_row(i, *row) for i, row in enumerate(rows)]
        card = Card(
            width=self.width,
            height=self.height(len(rows)),
            title=username_title(self.username),
            description="GitHub statistics summary",
            body=body,
            outer_class="statsCard",
            settings=self.settings,
        )
        return card.render()
