from __future__ import annotations
import logging
from typing import List, Optional

from lxml import etree

from .. import config
from ..errors import CardError
from ..themes import ERROR_THEME
from .card import Card, CardSettings, fallback_svg
from .helpers import wrap_text
from .svg import element, sub

logger = logging.getLogger(__name__)

WIDTH = 400
PADDING = 16
MAX_LINE_CHARS = 45
LINE_HEIGHT = 16
ICON_RADIUS = 10
ICON_COLOR = "#ef4444"
TITLE_BODY_OFFSET = 12
PILL_HEIGHT = 20
PILL_GAP = 14
PILL_CHAR_WIDTH = 6.5
LINK_TEXT = "Read the docs"
UNKNOWN_ERROR = "Unknown error"


class ErrorCard:
    """A light-themed card explaining why the requested card is unavailable."""

    def __init__(self, message: str, docs_url: Optional[str] = None):
        self.message = message.strip() or UNKNOWN_ERROR
        self.docs_url = docs_url or config.docs_url()
        self.settings = CardSettings(offset_x=PADDING, offset_y=PADDING, theme=ERROR_THEME)

    def lines(self) -> List[str]:
        return wrap_text(self.message, MAX_LINE_CHARS)

    def build(self) -> Card:
        lines = self.lines()
        top = PADDING + Card.TITLE_FONT_SIZE + TITLE_BODY_OFFSET
        cx, cy = PADDING + ICON_RADIUS, top + ICON_RADIUS
        text_x = cx + ICON_RADIUS + 10

        icon = element("g", {"class": "error-icon"})
        sub(icon, "circle", {"cx": cx, "cy": cy, "r": ICON_RADIUS, "fill": ICON_COLOR})
        sub(icon, "text", {
            "x": cx, "y": cy + 4, "text-anchor": "middle", "fill": "#ffffff",
            "font-weight": "bold", "font-size": 12,
        }, "!")

        message = element("g", {"class": "error-message-group"})
        baseline = cy + 4
        for i, line in enumerate(lines):
            sub(message, "text", {"x": text_x, "y": baseline + i * LINE_HEIGHT, "class": "error-message"}, line)

        pill_y = baseline + (len(lines) - 1) * LINE_HEIGHT + PILL_GAP
        link = element("a", {"href": self.docs_url, "target": "_blank"})
        sub(link, "rect", {
            "x": text_x, "y": pill_y, "width": len(LINK_TEXT) * PILL_CHAR_WIDTH + 16,
            "height": PILL_HEIGHT, "rx": PILL_HEIGHT / 2, "fill": "#e0f2fe", "class": "error-link-pill",
        })
        sub(link, "text", {"x": text_x + 8, "y": pill_y + 14, "class": "error-link"}, LINK_TEXT)

        body: List[etree._Element] = [icon, message, link]
        return Card(
            width=WIDTH,
            height=pill_y + PILL_HEIGHT + PADDING,
            title="Something went wrong",
            description=self.message,
            body=body,
            outer_class="errorCard",
            settings=self.settings,
        )

    def render(self) -> str:
        try:
            return self.build().render()
        except CardError as e:
            logger.error("error card could not be framed: %s", e)
            return fallback_svg()
