import html
from dataclasses import dataclass, field
from typing import Optional, Union

from .models import CellHover
from .utils import escape_js_string, format_number

_HEADER = """<?xml version="1.0" standalone="no"?>
<!DOCTYPE svg PUBLIC "-//W3C//DTD SVG 1.1//EN" "http://www.w3.org/Graphics/SVG/1.1/DTD/svg11.dtd">
<svg version="1.1" width="{w}" height="{h}" onload="init(evt)" viewBox="0 0 {w} {h}" xmlns="http://www.w3.org/2000/svg" >
"""

# Hover handlers: s() fills the details element, c() clears it
SCRIPT = """<style type="text/css">
	.func_g:hover { stroke:black; stroke-width:0.5; }
</style>
<script type="text/ecmascript">
<![CDATA[
	var details;
	function init(evt) { details = document.getElementById("details").firstChild; }
	function s(s, l, c, acc, total) {
		var pct = Math.floor(c / total * 100);
		var apct = Math.floor(acc / total * 100);

		details.nodeValue = "time " + s + "s, range " + l + ", count: " + c + ", pct: " + pct + "%, acc: " + acc + ", acc pct: " + apct + "%";
	}
	function c() { details.nodeValue = ' '; }
]]>
</script>
"""


def _attrs(extra: dict[str, str]) -> str:
    return "".join(f' {k}="{html.escape(v)}"' for k, v in extra.items())


@dataclass(frozen=True)
class Rect:
    x1: float
    y1: float
    x2: float
    y2: float
    fill: str
    hover: Optional[CellHover] = None

    @property
    def width(self) -> float:
        return self.x2 - self.x1

    @property
    def height(self) -> float:
        return self.y2 - self.y1

    def to_svg(self) -> str:
        extra = {}
        if self.hover is not None:
            h = self.hover
            call = (
                f"s('{escape_js_string(h.time_label)}',"
                f"'{escape_js_string(h.latency_label)}',"
                f"{h.count},{h.acc},{h.total})"
            )
            extra = {"onmouseover": call, "onmouseout": "c()"}
        return (
            f'<rect x="{self.x1:.1f}" y="{format_number(self.y1)}" '
            f'width="{self.width:.1f}" height="{self.height:.1f}" '
            f'fill="{self.fill}"{_attrs(extra)} />\n'
        )


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    stroke: str

    def to_svg(self) -> str:
        return (
            f'<line x1="{format_number(self.x1)}" y1="{format_number(self.y1)}" '
            f'x2="{format_number(self.x2)}" y2="{format_number(self.y2)}" '
            f'stroke="{self.stroke}" stroke-width="1" />\n'
        )


@dataclass(frozen=True)
class Text:
    x: float
    y: float
    text: str
    size: float
    font: str
    color: str
    anchor: str = "start"
    extra: dict[str, str] = field(default_factory=dict)

    def to_svg(self) -> str:
        return (
            f'<text text-anchor="{self.anchor}" x="{format_number(self.x)}" '
            f'y="{format_number(self.y)}" font-size="{format_number(self.size)}" '
            f'font-family="{html.escape(self.font)}" fill="{self.color}"'
            f"{_attrs(self.extra)}>{html.escape(self.text)}</text>\n"
        )


Primitive = Union[Rect, Line, Text]


class Document:
    """Append-only list of primitives; later ones are painted on top."""

    def __init__(self, width: float, height: float):
        self.width = width
        self.height = height
        self._primitives: list[Primitive] = []

    def add(self, primitive: Primitive) -> None:
        self._primitives.append(primitive)

    def __iter__(self):
        return iter(self._primitives)

    def __len__(self) -> int:
        return len(self._primitives)

    def rects(self) -> list[Rect]:
        return [p for p in self._primitives if isinstance(p, Rect)]

    def to_svg(self) -> str:
        w, h = format_number(self.width), format_number(self.height)
        parts = [_HEADER.format(w=w, h=h), SCRIPT]
        parts.extend(p.to_svg() for p in self._primitives)
        parts.append("</svg>\n")
        return "".join(parts)
