"""Small helpers for building SVG trees with lxml."""

from __future__ import annotations
import math
from typing import Any, Dict, Optional

from lxml import etree

SVG_NS = "http://www.w3.org/2000/svg"
NSMAP = {None: SVG_NS}


def fmt(value: Any) -> str:
    """Attribute text: integral floats lose their trailing '.0'."""
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return f"{value:.2f}".rstrip("0").rstrip(".")
    return str(value)


def _attrib(attrs: Optional[Dict[str, Any]]) -> Dict[str, str]:
    return {k: fmt(v) for k, v in (attrs or {}).items() if v is not None}


def element(tag: str, attrs: Optional[Dict[str, Any]] = None, text: Optional[str] = None) -> etree._Element:
    el = etree.Element(f"{{{SVG_NS}}}{tag}", _attrib(attrs), nsmap=NSMAP)
    if text is not None:
        el.text = text
    return el


def sub(parent: etree._Element, tag: str, attrs: Optional[Dict[str, Any]] = None, text: Optional[str] = None) -> etree._Element:
    el = etree.SubElement(parent, f"{{{SVG_NS}}}{tag}", _attrib(attrs))
    if text is not None:
        el.text = text
    return el


def parse(markup: str) -> etree._Element:
    return etree.fromstring(markup.encode("utf-8"))


def to_string(root: etree._Element) -> str:
    return etree.tostring(root, encoding="unicode", pretty_print=True)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))
