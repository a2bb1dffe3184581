"""Card frame: validation, document structure, background and title."""
import pytest
from lxml import etree

from statcard.cards import Card, CardSettings, fallback_svg
from statcard.cards.svg import element
from statcard.errors import CardError, UnknownTheme

NS = {"svg": "http://www.w3.org/2000/svg"}


def frame(width=300, height=200, **settings):
    body = [element("text", {"x": 0, "y": 0}, "hello")]
    return Card(width, height, "Title", "Description", body, "testCard", CardSettings(**settings))


def parse(svg):
    return etree.fromstring(svg.encode("utf-8"))


def test_structure_order():
    root = parse(frame().render())
    assert root.tag == "{http://www.w3.org/2000/svg}svg"
    assert root.get("viewBox") == "0 0 300 200"
    assert root.get("role") == "img"
    assert root.get("aria-labelledby") == "title-id"
    assert root.get("aria-describedby") == "description-id"
    tags = [etree.QName(child).localname for child in root]
    assert tags == ["style", "title", "desc", "rect", "g", "g"]
    assert root.find("svg:title", NS).get("id") == "title-id"
    assert root.find("svg:desc", NS).get("id") == "description-id"
    assert root[-1].get("class") == "testCard"
    assert root[-1][0].text == "hello"


def test_style_contains_base_and_theme_css():
    style = parse(frame(theme="dracula").render()).find("svg:style", NS).text
    assert ".title" in style
    assert ".background" in style


def test_unknown_theme():
    with pytest.raises(UnknownTheme):
        frame(theme="no_such_theme")


def test_background_with_stroke_is_inset():
    rect = parse(frame().render()).find("svg:rect", NS)
    assert rect.get("class") == "background"
    assert (rect.get("x"), rect.get("y")) == ("0.5", "0.5")
    assert (rect.get("width"), rect.get("height")) == ("299", "199")
    assert rect.get("stroke-opacity") == "1"


def test_background_without_stroke_spans_card():
    rect = parse(frame(hide_background_stroke=True).render()).find("svg:rect", NS)
    assert (rect.get("x"), rect.get("y")) == ("0", "0")
    assert (rect.get("width"), rect.get("height")) == ("300", "200")
    assert rect.get("stroke-opacity") == "0"


def test_hide_background_and_title():
    svg = frame(hide_background=True, hide_title=True).render()
    root = parse(svg)
    assert root.find("svg:rect", NS) is None
    assert 'class="title"' not in svg
    # the accessible title stays
    assert root.find("svg:title", NS).text == "Title"


def test_title_translate():
    svg = frame(offset_x=30, offset_y=25).render()
    assert 'transform="translate(30, 43)"' in svg
    text = parse(svg).find(".//svg:text[@class='title']", NS)
    assert text.text == "Title"


@pytest.mark.parametrize("width,height,ox,oy", [
    (99, 200, 12, 12),
    (300, 59, 12, 12),
    (100, 60, 31, 0),
    (300, 100, 12, 31),
    (300, 200, -1, 12),
])
def test_invalid_geometry(width, height, ox, oy):
    with pytest.raises(CardError):
        frame(width, height, offset_x=ox, offset_y=oy)


@pytest.mark.parametrize("width,height,ox,oy", [
    (100, 60, 30, 18),
    (100, 60, 0, 0),
    (400, 400, 120, 120),
])
def test_valid_geometry(width, height, ox, oy):
    parse(frame(width, height, offset_x=ox, offset_y=oy).render())


def test_text_is_escaped():
    svg = Card(200, 100, "<b>&", "d", [], "c", CardSettings()).render()
    assert parse(svg).find("svg:title", NS).text == "<b>&"


def test_fallback_svg():
    root = parse(fallback_svg())
    assert root.get("width") == "400"
    assert "Error: Failed to generate card" in fallback_svg()
