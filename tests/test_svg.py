from latmap.core import build_heatmap
from latmap.models import CellHover, HeatmapConfig
from latmap.svg import Document, Line, Rect, Text


def test_document_serialization(end_to_end_lines, end_to_end_config):
    svg = build_heatmap(end_to_end_lines, end_to_end_config).svg
    assert svg.startswith('<?xml version="1.0" standalone="no"?>')
    assert 'width="36" height="106"' in svg
    assert 'viewBox="0 0 36 106"' in svg
    assert "function s(s, l, c, acc, total)" in svg
    assert "function c()" in svg
    assert 'onmouseover="s(&#x27;0-9&#x27;,&#x27;10-20&#x27;,1,1,1)" onmouseout="c()"' in svg
    assert svg.endswith("</svg>\n")


def test_primitives_serialized_in_order():
    doc = Document(100, 50)
    doc.add(Rect(0, 0, 100, 50, "rgb(255,255,255)"))
    doc.add(Line(0, 10, 100, 10, "rgb(230,230,230)"))
    doc.add(Text(5, 20, "hello", 12, "Verdana", "rgb(0,0,0)"))
    svg = doc.to_svg()
    assert svg.index("<rect") < svg.index("<line") < svg.index("<text")
    assert len(doc) == 3


def test_rect_markup():
    rect = Rect(10, 44, 18, 52.0, "rgb(255,0,0)", CellHover("0", "0-10us", 2, 2, 4))
    assert rect.to_svg() == (
        '<rect x="10.0" y="44" width="8.0" height="8.0" fill="rgb(255,0,0)" '
        'onmouseover="s(&#x27;0&#x27;,&#x27;0-10us&#x27;,2,2,4)" onmouseout="c()" />\n'
    )


def test_text_is_escaped():
    text = Text(1, 2, "<b>&", 12, "Verdana", "rgb(0,0,0)", extra={"id": "details"})
    assert text.to_svg() == (
        '<text text-anchor="start" x="1" y="2" font-size="12" font-family="Verdana" '
        'fill="rgb(0,0,0)" id="details">&lt;b&gt;&amp;</text>\n'
    )


def test_hover_labels_escaped():
    config = HeatmapConfig(max_lat=10, step_lat=10, units_lat="<'us'>")
    svg = build_heatmap(["0 1"], config).svg
    assert "0-10&lt;\\&#x27;us\\&#x27;&gt;" in svg
    assert "<'us'>" not in svg
