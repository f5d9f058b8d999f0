"""
SVG drawing surface built on lxml.

The plot owns the document root, the style registry shared by every
visualization drawing into it, and one ``<g>`` layer per visualization.
Layers are kept in ascending level order inside the root.
"""

from pathlib import Path
from typing import Iterator, List, Optional

from lxml import etree

from overlay_core.logging import get_logger
from styling.registry import StyleRegistry

logger = get_logger("visualization.plot")

SVG_NS = "http://www.w3.org/2000/svg"
NSMAP = {None: SVG_NS}


def fmt_number(value) -> str:
    if isinstance(value, float):
        return f"{round(value, 4):g}"
    return str(value)


def svg_element(tag: str, **attrs) -> etree._Element:
    """Create an SVG element; ``css_class`` maps to ``class``, ``_`` to ``-``."""
    el = etree.Element(f"{{{SVG_NS}}}{tag}", nsmap=NSMAP)
    for key, value in attrs.items():
        if value is None:
            continue
        name = "class" if key == "css_class" else key.replace("_", "-")
        el.set(name, fmt_number(value))
    return el


class Layer:
    """A ``<g>`` subtree owned by exactly one visualization."""

    def __init__(self, marker: str, level: int):
        self.marker = marker
        self.level = level
        self.element = svg_element("g", css_class=marker)
        self.element.set("data-level", str(level))

    def append(self, element: etree._Element) -> None:
        self.element.append(element)

    def clear(self) -> None:
        for child in list(self.element):
            self.element.remove(child)

    @property
    def children(self) -> List[etree._Element]:
        return list(self.element)

    def __iter__(self) -> Iterator[etree._Element]:
        return iter(list(self.element))

    def __len__(self) -> int:
        return len(self.element)

    def __repr__(self) -> str:
        return f"<Layer {self.marker} level={self.level} children={len(self)}>"


class SVGPlot:
    """
    A scalable vector scene: named style classes plus ordered layers.

    Args:
        width: Render area width in user units.
        height: Render area height in user units.
        styles: Style registry to share; a new one is created when omitted.
    """

    def __init__(self, width: float, height: float, styles: Optional[StyleRegistry] = None):
        if width <= 0 or height <= 0:
            raise ValueError(f"Plot size must be positive, got {width}x{height}")
        self.width = float(width)
        self.height = float(height)
        self.styles = styles if styles is not None else StyleRegistry()
        self.root = svg_element(
            "svg",
            width=self.width,
            height=self.height,
            viewBox=f"0 0 {fmt_number(self.width)} {fmt_number(self.height)}",
        )
        self._style_el = etree.SubElement(self.root, f"{{{SVG_NS}}}style")
        self._layers: List[Layer] = []

    # -- layers --------------------------------------------------------------

    def add_layer(self, marker: str, level: int = 0) -> Layer:
        """Create a layer, placed after every layer with a level <= *level*."""
        layer = Layer(marker, level)
        position = len(self._layers)
        for i, existing in enumerate(self._layers):
            if existing.level > level:
                position = i
                break
        self._layers.insert(position, layer)
        # Offset by one for the <style> element.
        self.root.insert(position + 1, layer.element)
        return layer

    def remove_layer(self, layer: Layer) -> None:
        if layer not in self._layers:
            raise ValueError(f"{layer!r} does not belong to this plot")
        self._layers.remove(layer)
        self.root.remove(layer.element)

    @property
    def layers(self) -> List[Layer]:
        return list(self._layers)

    # -- output --------------------------------------------------------------

    def to_svg(self, pretty: bool = True) -> str:
        """Serialize the scene as an SVG document string."""
        self._style_el.text = self.styles.to_css()
        return etree.tostring(self.root, pretty_print=pretty, encoding="unicode")

    def save(self, path: str) -> str:
        filepath = Path(path)
        filepath.parent.mkdir(parents=True, exist_ok=True)
        filepath.write_text(self.to_svg(), encoding="utf-8")
        logger.info(f"Saved plot with {len(self._layers)} layers to {filepath}")
        return str(filepath)
