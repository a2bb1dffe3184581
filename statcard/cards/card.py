"""
Card frame: the outer <svg> envelope shared by every card.

Layout of the rendered document, in order:
  <svg> root with accessibility attributes
  <style> base stylesheet followed by the theme stylesheet
  <title>, <desc>
  optional background <rect class="background">
  optional visible title, translated by (offset_x, TITLE_FONT_SIZE + offset_y)
  body group carrying the card-specific class
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Optional

from lxml import etree

from ..errors import CardError
from ..themes import DEFAULT_THEME, base_css, get_theme_css
from .svg import SVG_NS, element, sub, to_string

TITLE_ID = "title-id"
DESCRIPTION_ID = "description-id"

FALLBACK_WIDTH = 400
FALLBACK_HEIGHT = 160


@dataclass
class CardSettings:
    offset_x: int = 12
    offset_y: int = 12
    theme: str = DEFAULT_THEME
    hide_title: bool = False
    hide_background: bool = False
    hide_background_stroke: bool = False


class Card:
    TITLE_FONT_SIZE = 18
    MIN_WIDTH = 100
    MIN_HEIGHT = 60
    MAX_OFFSET_RATIO = 0.3
    BACKGROUND_RADIUS = 4.5

    def __init__(
        self,
        width: int,
        height: int,
        title: str,
        description: str,
        body: Iterable[etree._Element],
        outer_class: str,
        settings: Optional[CardSettings] = None,
    ):
        self.settings = settings or CardSettings()
        self.width = width
        self.height = height
        self.title = title
        self.description = description
        self.body = list(body)
        self.outer_class = outer_class
        self.validate()
        self.style = base_css() + "\n" + get_theme_css(self.settings.theme)

    def validate(self) -> None:
        s = self.settings
        if self.width < self.MIN_WIDTH:
            raise CardError(f"width must be at least {self.MIN_WIDTH}, got {self.width}")
        if self.height < self.MIN_HEIGHT:
            raise CardError(f"height must be at least {self.MIN_HEIGHT}, got {self.height}")
        if s.offset_x < 0 or s.offset_y < 0:
            raise CardError("offsets must not be negative")
        if s.offset_x > self.width * self.MAX_OFFSET_RATIO or s.offset_x * 2 >= self.width:
            raise CardError(f"offset_x {s.offset_x} is too large for width {self.width}")
        if s.offset_y > self.height * self.MAX_OFFSET_RATIO or s.offset_y * 2 >= self.height:
            raise CardError(f"offset_y {s.offset_y} is too large for height {self.height}")

    def render(self) -> str:
        root = element(
            "svg",
            {
                "width": self.width,
                "height": self.height,
                "viewBox": f"0 0 {self.width} {self.height}",
                "fill": "none",
                "role": "img",
                "aria-labelledby": TITLE_ID,
                "aria-describedby": DESCRIPTION_ID,
            },
        )
        sub(root, "style", text="\n" + self.style)
        sub(root, "title", {"id": TITLE_ID}, self.title)
        sub(root, "desc", {"id": DESCRIPTION_ID}, self.description)
        if not self.settings.hide_background:
            root.append(self.render_background())
        if not self.settings.hide_title:
            root.append(self.render_title())
        body = sub(root, "g", {"class": self.outer_class})
        for child in self.body:
            body.append(child)
        return to_string(root)

    def render_background(self) -> etree._Element:
        if self.settings.hide_background_stroke:
            x, y, w, h, opacity = 0, 0, self.width, self.height, 0
        else:
            # Inset by half the stroke so the border is not clipped.
            x, y, w, h, opacity = 0.5, 0.5, self.width - 1, self.height - 1, 1
        return element(
            "rect",
            {
                "class": "background",
                "x": x,
                "y": y,
                "rx": self.BACKGROUND_RADIUS,
                "width": w,
                "height": h,
                "stroke-opacity": opacity,
            },
        )

    def render_title(self) -> etree._Element:
        group = element(
            "g",
            {
                "class": "title-group",
                "transform": f"translate({self.settings.offset_x}, {self.TITLE_FONT_SIZE + self.settings.offset_y})",
            },
        )
        sub(group, "text", {"x": 0, "y": 0, "class": "title"}, self.title)
        return group


def fallback_svg(width: int = FALLBACK_WIDTH, height: int = FALLBACK_HEIGHT) -> str:
    return (
        f'<svg width="{width}" height="{height}" viewBox="0 0 {width} {height}" xmlns="{SVG_NS}">'
        '<rect width="100%" height="100%" fill="#ff6b6b" rx="5"/>'
        '<text x="50%" y="50%" text-anchor="middle" dominant-baseline="middle" '
        'fill="white" font-family="Arial" font-size="14">'
        "Error: Failed to generate card"
        "</text>"
        "</svg>"
    )
