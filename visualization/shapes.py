"""Element factories for the drawable primitives."""

from lxml import etree

from overlay_core.types import RecordID, StyleID
from projection.range_projector import Polygon
from visualization.plot import fmt_number, svg_element


def filled_polygon(polygon: Polygon, css_class: StyleID) -> etree._Element:
    """Filled region as a ``<polygon>``."""
    return svg_element("polygon", points=polygon.svg_points(), css_class=css_class)


def frame_path(polygon: Polygon, css_class: StyleID) -> etree._Element:
    """Closed stroke-only outline as a ``<path>``."""
    head, *rest = polygon.points
    parts = [f"M{fmt_number(float(head[0]))},{fmt_number(float(head[1]))}"]
    parts.extend(f"L{fmt_number(float(x))},{fmt_number(float(y))}" for x, y in rest)
    parts.append("Z")
    return svg_element("path", d=" ".join(parts), css_class=css_class)


def bubble(x: float, y: float, radius: float, css_class: StyleID, record_id: RecordID) -> etree._Element:
    """Circle marker for one record."""
    # SVG rejects negative radii.
    r = max(float(radius), 0.0)
    el = svg_element("circle", cx=float(x), cy=float(y), r=r, css_class=css_class)
    el.set("data-record", str(record_id))
    return el
