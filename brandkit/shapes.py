# brandkit/shapes.py
# Procedural primitive shapes, each centred in a size x size box.
from .geometry import fmt


def _stroke_attrs(stroke) -> str:
    if stroke > 0:
        return f' stroke="white" stroke-width="{fmt(stroke)}"'
    return ""


def shape_rounded_square(size, color: str, corner_radius=0, stroke=0) -> str:
    pad = stroke if stroke > 0 else 0
    rect_size = max(size - pad * 2, 0)
    r = min(corner_radius, size / 2)
    return (
        f'<g><rect x="{fmt(pad)}" y="{fmt(pad)}" width="{fmt(rect_size)}" height="{fmt(rect_size)}" '
        f'rx="{fmt(r)}" ry="{fmt(r)}" fill="{color}"{_stroke_attrs(stroke)}/></g>'
    )


def shape_circle(size, color: str, corner_radius=0, stroke=0) -> str:
    pad = stroke if stroke > 0 else 0
    r = max(size / 2 - pad, 0)
    return (
        f'<g><circle cx="{fmt(size / 2)}" cy="{fmt(size / 2)}" r="{fmt(r)}" '
        f'fill="{color}"{_stroke_attrs(stroke)}/></g>'
    )


def shape_capsule(size, color: str, corner_radius=0, stroke=0) -> str:
    pad = stroke if stroke > 0 else 0
    width = size * 0.75
    height = size * 0.35
    x = (size - width) / 2 + pad
    y = (size - height) / 2 + pad
    r = height / 2
    return (
        f'<g><rect x="{fmt(x)}" y="{fmt(y)}" width="{fmt(max(width - pad * 2, 0))}" '
        f'height="{fmt(max(height - pad * 2, 0))}" rx="{fmt(r)}" ry="{fmt(r)}" '
        f'fill="{color}"{_stroke_attrs(stroke)}/></g>'
    )


SHAPE_KINDS = ("rounded-square", "circle", "capsule")


def render_shape(kind: str, size, color: str, corner_radius=0, stroke=0) -> str:
    """Unknown kinds fall back to the rounded square."""
    if kind == "circle":
        return shape_circle(size, color, 0, stroke)
    if kind == "capsule":
        return shape_capsule(size, color, 0, stroke)
    return shape_rounded_square(size, color, corner_radius, stroke)
