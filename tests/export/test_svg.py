"""SVG export（`shapeseed.export.svg.export_svg`）のテスト。"""

from __future__ import annotations

import math
import xml.etree.ElementTree as ET

import pytest

from shapeseed.core.color import Color
from shapeseed.core.form import Form, RectangleForm, RotatedForm, StackedForm, TranslatedForm
from shapeseed.export.svg import export_svg

_SVG_NS = "http://www.w3.org/2000/svg"
_NS = {"svg": _SVG_NS}

_RED = Color.from_degrees(0, 1.0, 0.5, 0.5)
_GREEN = Color.from_degrees(120, 1.0, 0.5, 1.0)


def _rect(w: float, h: float, fill: Color = _RED) -> RectangleForm:
    return RectangleForm(width=w, height=h, fill=fill)


def _parse_svg(text: str) -> ET.Element:
    root = ET.fromstring(text)
    assert root.tag == f"{{{_SVG_NS}}}svg"
    return root


def test_export_svg_writes_valid_svg(tmp_path) -> None:
    forms: list[Form] = [TranslatedForm(dx=10.0, dy=20.0, child=_rect(4.0, 2.0))]
    out_path = tmp_path / "nested" / "out.svg"

    returned = export_svg(forms, out_path, canvas_size=(100, 200))
    assert returned == out_path
    assert out_path.exists()

    root = _parse_svg(out_path.read_text(encoding="utf-8"))
    assert root.attrib["viewBox"] == "0 0 100 200"
    assert root.attrib["width"] == "100"
    assert root.attrib["height"] == "200"
    assert root.findall("svg:rect", _NS) == []

    paths = root.findall("svg:path", _NS)
    assert len(paths) == 1
    path = paths[0]
    assert path.attrib["fill"] == "#FF0000"
    assert path.attrib["fill-opacity"] == "0.500"
    # 中心原点・y 上向きのワールド座標を SVG 座標へ写す。
    assert path.attrib["d"] == (
        "M 58.000 81.000 L 62.000 81.000 L 62.000 79.000 L 58.000 79.000 L 58.000 81.000 Z"
    )


def test_export_svg_draws_background_first(tmp_path) -> None:
    out_path = tmp_path / "out.svg"
    export_svg([_rect(1, 1)], out_path, canvas_size=(10, 10), background_color=(0.0, 0.0, 1.0))

    root = _parse_svg(out_path.read_text(encoding="utf-8"))
    children = list(root)
    assert children[0].tag == f"{{{_SVG_NS}}}rect"
    assert children[0].attrib["fill"] == "#0000FF"
    assert children[1].tag == f"{{{_SVG_NS}}}path"


def test_export_svg_composites_history_oldest_first(tmp_path) -> None:
    forms: list[Form] = [
        _rect(1, 1, _RED),
        StackedForm(children=(_rect(2, 2, _GREEN), RotatedForm(math.pi / 4, _rect(3, 3, _RED)))),
    ]
    out_path = tmp_path / "out.svg"
    export_svg(forms, out_path, canvas_size=(10, 10))

    paths = _parse_svg(out_path.read_text(encoding="utf-8")).findall("svg:path", _NS)
    assert [p.attrib["fill"] for p in paths] == ["#FF0000", "#00FF00", "#FF0000"]


def test_export_svg_is_deterministic(tmp_path) -> None:
    forms: list[Form] = [RotatedForm(0.3, _rect(5, 7))]

    a = tmp_path / "a.svg"
    b = tmp_path / "b.svg"
    export_svg(forms, a, canvas_size=(100, 100))
    export_svg(forms, b, canvas_size=(100, 100))

    assert a.read_bytes() == b.read_bytes()


def test_export_svg_rejects_bad_canvas_size(tmp_path) -> None:
    with pytest.raises(ValueError):
        export_svg([_rect(1, 1)], tmp_path / "out.svg", canvas_size=None)
    with pytest.raises(ValueError):
        export_svg([_rect(1, 1)], tmp_path / "out.svg", canvas_size=(0, 10))


def test_export_svg_tolerates_non_finite_color_channels(tmp_path) -> None:
    nan = float("nan")
    forms: list[Form] = [_rect(1, 1, Color.from_degrees(0, nan, 0.5, nan))]
    out_path = tmp_path / "out.svg"

    export_svg(forms, out_path, canvas_size=(10, 10))

    paths = _parse_svg(out_path.read_text(encoding="utf-8")).findall("svg:path", _NS)
    assert len(paths) == 1
    assert paths[0].attrib["fill"] == "#808080"
    assert paths[0].attrib["fill-opacity"] == "0.000"
