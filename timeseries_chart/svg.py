from __future__ import annotations

from pathlib import Path
import xml.etree.ElementTree as ET


SVG_NS = "http://www.w3.org/2000/svg"


def to_markup(element: ET.Element, *, xml_declaration: bool = False) -> str:
    markup = ET.tostring(element, encoding="unicode")
    if xml_declaration:
        return '<?xml version="1.0" encoding="utf-8"?>\n' + markup
    return markup


def write_svg(element: ET.Element, path: str | Path) -> Path:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(to_markup(element, xml_declaration=True) + "\n", encoding="utf-8")
    return out


def elements_equal(a: ET.Element, b: ET.Element) -> bool:
    if a.tag != b.tag or a.attrib != b.attrib or (a.text or "") != (b.text or ""):
        return False
    if len(a) != len(b):
        return False
    return all(elements_equal(x, y) for x, y in zip(a, b))
