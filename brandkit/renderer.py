# brandkit/renderer.py
"""
Composition engine.

render_mark draws background + icon/shape content under a centred
rotate/scale group. render_lockup places that mark next to, above or
beside a label of the brand name in one of four templates. Every
function here is total: unknown icons, empty names and out-of-range
parameters all produce a renderable SVG.
"""

import logging
import math
import uuid
from dataclasses import replace

from .geometry import (
    clamp, clamp_legacy_spec, clamp_size, clamp_spec, escape_text,
    estimate_text_width, fmt, round_half_up, safe_color,
)
from .icons import IconCatalog, render_icon, resolve
from .marks import mark_angular, mark_minimal, mark_ribbon, mark_soft
from .models import (
    FONT_FAMILIES, THEME_COLORS, BrandSpec, Colors, Font, GradientStop, LegacySpec,
    LinearGradient, MarkStyle, RenderOptions, SolidBackground, Template, _enum,
)

log = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"
DEFAULT_OPTIONS = RenderOptions()

# ---------- Layout constants ----------
BOLD_MARK_RATIO = 1.18        # left lockup draws the mark larger than nominal
FONT_RATIO = 3.0              # wordmark font size = bold mark size / 3
FONT_WEIGHT = 600

TEXT_PAD_X = 64               # text-only composition
TEXT_PAD_Y = 48

LEFT_PAD = 8                  # left lockup
LEFT_PAD_RIGHT = 56
LEFT_GAP = 16
OPTICAL_SHIFT = 8

STACK_PAD_X = 48              # stacked
STACK_GAP = 64
STACK_PAD_BOTTOM = 32

BADGE_PAD = 24                # badge
BADGE_HEIGHT = 56
BADGE_FONT_SIZE = 24
BADGE_FILL = "#F3F4F6"
BADGE_TEXT = "#111827"

MONOGRAM_RATIO = 0.5


# ---------- Spec preparation ----------
def prepare_spec(spec: BrandSpec) -> BrandSpec:
    """Clamp params, coerce enums and screen colors before any geometry is emitted."""
    spec = clamp_spec(spec)
    colors = Colors(
        primary=safe_color(spec.colors.primary, "#FFF7ED"),
        background=safe_color(spec.colors.background, "#000000"),
        text=safe_color(spec.colors.text, "#FFF7ED"),
    )
    bg = spec.background
    if isinstance(bg, LinearGradient):
        stops = tuple(sorted(
            (GradientStop(safe_color(s.color, colors.background), clamp(s.at, 0, 1)) for s in bg.stops),
            key=lambda s: s.at,
        ))
        angle = bg.angle % 360 if math.isfinite(bg.angle) else 0
        bg = LinearGradient(angle=angle, stops=stops)
    elif isinstance(bg, SolidBackground):
        bg = SolidBackground(safe_color(bg.color, colors.background))
    else:
        bg = SolidBackground(colors.background)
    return replace(
        spec,
        colors=colors,
        background=bg,
        template=_enum(Template, spec.template, Template.LEFT_LOCKUP),
        font=_enum(Font, spec.font, Font.INTER),
        name=spec.name if isinstance(spec.name, str) else "",
        icon_id=spec.icon_id if isinstance(spec.icon_id, str) else "",
    )


# ---------- Fragments ----------
def _svg_open(width, height, options: RenderOptions, responsive: bool) -> str:
    if responsive:
        w = h = "100%"
    else:
        w, h = fmt(width), fmt(height)
    return (
        f'<svg width="{w}" height="{h}" viewBox="0 0 {fmt(width)} {fmt(height)}" '
        f'preserveAspectRatio="{options.preserve_aspect_ratio}" xmlns="{SVG_NS}">'
    )


def _gradient_id() -> str:
    return f"grad_{uuid.uuid4().hex[:8]}"


def render_background(bg, size, fallback_color: str = "#000000") -> str:
    if isinstance(bg, LinearGradient):
        if not bg.stops:
            return f'<rect width="{fmt(size)}" height="{fmt(size)}" fill="{fallback_color}"/>'
        grad_id = _gradient_id()
        stops = "".join(
            f'<stop offset="{round_half_up(s.at * 100)}%" stop-color="{s.color}"/>' for s in bg.stops
        )
        return (
            f'<defs><linearGradient id="{grad_id}" gradientTransform="rotate({fmt(bg.angle)})">'
            f"{stops}</linearGradient></defs>"
            f'<rect width="{fmt(size)}" height="{fmt(size)}" fill="url(#{grad_id})"/>'
        )
    return f'<rect width="{fmt(size)}" height="{fmt(size)}" fill="{bg.color}"/>'


def _flat_background(spec: BrandSpec) -> str:
    # lockup canvases are filled flat, gradients only ever cover the mark
    if isinstance(spec.background, SolidBackground):
        return spec.background.color
    return spec.colors.background


def _centered(size, rotate, inner: str) -> str:
    c = fmt(size / 2)
    transform = f"translate({c}, {c}) scale(1) rotate({fmt(rotate)}) translate(-{c}, -{c})"
    return f'<g transform="{transform}">{inner}</g>'


def _mark_body(spec: BrandSpec, size, options: RenderOptions, catalog: IconCatalog) -> str:
    bg = render_background(spec.background, size, spec.colors.background) if options.include_background else ""
    resolved = resolve(spec.icon_id, catalog)
    inner = render_icon(resolved, size, spec.colors.primary, spec.params)
    return bg + _centered(size, spec.params.rotate, inner)


def _text(x, y, text: str, spec: BrandSpec, font_size, anchor: bool = False) -> str:
    attrs = [
        f'x="{fmt(x)}"', f'y="{fmt(y)}"',
        f'font-family="{FONT_FAMILIES[spec.font]}"',
        f'font-size="{fmt(font_size)}"',
        f'font-weight="{FONT_WEIGHT}"',
        f'fill="{spec.colors.text}"',
        'dominant-baseline="middle"',
    ]
    if anchor:
        attrs.append('text-anchor="middle"')
    if spec.params.letter_spacing:
        attrs.append(f'letter-spacing="{fmt(spec.params.letter_spacing)}"')
    return f"<text {' '.join(attrs)}>{escape_text(text)}</text>"


def _label(spec: BrandSpec) -> str:
    return spec.name or spec.glyph


def _font_size(size) -> int:
    return round_half_up(round_half_up(size * BOLD_MARK_RATIO) / FONT_RATIO)


# ---------- Marks ----------
def render_mark(spec: BrandSpec, size=256, options: RenderOptions = None, catalog: IconCatalog = None) -> str:
    """Standalone mark on a size x size canvas."""
    options = options or DEFAULT_OPTIONS
    spec = prepare_spec(spec)
    size = clamp_size(size)
    return f"{_svg_open(size, size, options, options.responsive)}{_mark_body(spec, size, options, catalog)}</svg>"


def render_monogram(spec: BrandSpec, size=256, options: RenderOptions = None) -> str:
    """Mark built from the brand initial in place of icon content."""
    options = options or DEFAULT_OPTIONS
    spec = prepare_spec(spec)
    size = clamp_size(size)
    bg = render_background(spec.background, size, spec.colors.background) if options.include_background else ""
    c = fmt(size / 2)
    glyph = (
        f'<text x="{c}" y="{c}" font-family="{FONT_FAMILIES[spec.font]}" '
        f'font-size="{round_half_up(size * MONOGRAM_RATIO)}" font-weight="700" fill="{spec.colors.primary}" '
        f'dominant-baseline="central" text-anchor="middle">{escape_text(spec.glyph)}</text>'
    )
    return f"{_svg_open(size, size, options, options.responsive)}{bg}{_centered(size, spec.params.rotate, glyph)}</svg>"


# ---------- Wordmark / lockups ----------
def render_wordmark(spec: BrandSpec, size=256, options: RenderOptions = None) -> str:
    """
    Text-only composition. The canvas is sized from an estimated text
    width (fixed average glyph width, not real font metrics).
    """
    options = options or DEFAULT_OPTIONS
    spec = prepare_spec(spec)
    size = clamp_size(size)
    text = _label(spec)
    font_size = _font_size(size)
    width = estimate_text_width(text, font_size, spec.params.letter_spacing) + TEXT_PAD_X * 2
    width = max(width, font_size)
    height = font_size + TEXT_PAD_Y * 2
    parts = []
    if options.include_background:
        parts.append(f'<rect width="{fmt(width)}" height="{fmt(height)}" fill="{_flat_background(spec)}"/>')
    parts.append(_text(width / 2, height / 2, text, spec, font_size, anchor=True))
    return f"{_svg_open(width, height, options, True)}{''.join(parts)}</svg>"


def _nested_mark(spec, size, x, options, catalog) -> str:
    return f'<g transform="translate({fmt(x)}, 0)"><g>{_mark_body(spec, size, options, catalog)}</g></g>'


def _left_lockup(spec, size, options, catalog):
    mark_size = round_half_up(size * BOLD_MARK_RATIO)
    font_size = _font_size(size)
    text = _label(spec)
    text_width = estimate_text_width(text, font_size, spec.params.letter_spacing)
    width = LEFT_PAD + mark_size + LEFT_GAP + text_width + LEFT_PAD_RIGHT
    height = mark_size
    text_x = LEFT_PAD + mark_size + LEFT_GAP - OPTICAL_SHIFT
    content = (
        _nested_mark(spec, mark_size, LEFT_PAD, options, catalog)
        + _text(text_x, mark_size / 2, text, spec, font_size)
    )
    return width, height, content


def _stacked_lockup(spec, size, options, catalog):
    font_size = _font_size(size)
    width = size + STACK_PAD_X * 2
    height = size + STACK_GAP + font_size + STACK_PAD_BOTTOM
    content = (
        _nested_mark(spec, size, STACK_PAD_X, options, catalog)
        + _text(width / 2, size + STACK_GAP, _label(spec), spec, font_size, anchor=True)
    )
    return width, height, content


def _badge_lockup(spec, size, options, catalog):
    text = _label(spec)
    badge_x = BADGE_PAD + size + BADGE_PAD
    pill_width = max(size, estimate_text_width(text, BADGE_FONT_SIZE) + BADGE_HEIGHT)
    width = badge_x + pill_width + BADGE_PAD
    height = size
    r = BADGE_HEIGHT / 2
    pill = (
        f'<rect x="{fmt(badge_x)}" y="{fmt(size / 2 - r)}" width="{fmt(pill_width)}" '
        f'height="{BADGE_HEIGHT}" rx="{fmt(r)}" fill="{BADGE_FILL}"/>'
    )
    label = (
        f'<text x="{fmt(badge_x + r)}" y="{fmt(size / 2)}" font-family="{FONT_FAMILIES[spec.font]}" '
        f'font-size="{BADGE_FONT_SIZE}" font-weight="{FONT_WEIGHT}" fill="{BADGE_TEXT}" '
        f'dominant-baseline="middle">{escape_text(text)}</text>'
    )
    return width, height, _nested_mark(spec, size, BADGE_PAD, options, catalog) + pill + label


def render_lockup(spec: BrandSpec, size=256, options: RenderOptions = None, catalog: IconCatalog = None) -> str:
    """Mark + name composed per spec.template; lockup roots are always responsive."""
    options = options or DEFAULT_OPTIONS
    spec = prepare_spec(spec)
    size = clamp_size(size)
    template = spec.template
    log.debug("Rendering lockup template=%s icon=%r", template.value, spec.icon_id)

    if not spec.icon_id:
        return render_wordmark(spec, size, options)
    if template is Template.MARK_ONLY or not spec.name:
        return render_mark(spec, size, options, catalog)

    if template is Template.LEFT_LOCKUP:
        width, height, content = _left_lockup(spec, size, options, catalog)
    elif template is Template.STACKED:
        width, height, content = _stacked_lockup(spec, size, options, catalog)
    elif template is Template.BADGE:
        width, height, content = _badge_lockup(spec, size, options, catalog)
    else:
        raise AssertionError(f"unhandled template {template!r}")

    bg = ""
    if options.include_background:
        bg = f'<rect width="{fmt(width)}" height="{fmt(height)}" fill="{_flat_background(spec)}"/>'
    return f"{_svg_open(width, height, options, True)}{bg}{content}</svg>"


def render_svgs(spec: BrandSpec, catalog: IconCatalog = None):
    return {"mark": render_mark(spec, 256, catalog=catalog), "lockup": render_lockup(spec, 256, catalog=catalog)}


def inverse_spec(spec: BrandSpec) -> BrandSpec:
    """Swap background and text colors; the background becomes solid."""
    colors = Colors(primary=spec.colors.primary, background=spec.colors.text, text=spec.colors.background)
    return replace(spec, colors=colors, background=SolidBackground(spec.colors.text))


def render_formats(spec: BrandSpec, catalog: IconCatalog = None):
    left = replace(spec, template=Template.LEFT_LOCKUP)
    inverse = inverse_spec(left)
    return {
        "lockup": render_lockup(left, 256, catalog=catalog),
        "mark_only": render_mark(spec, 256, catalog=catalog),
        "inverse_lockup": render_lockup(inverse, 256, catalog=catalog),
        "inverse_mark_only": render_mark(inverse_spec(spec), 256, catalog=catalog),
    }


# ---------- Legacy family ----------
def select_mark_renderer(style: MarkStyle):
    if style is MarkStyle.MINIMAL:
        return mark_minimal
    elif style is MarkStyle.ANGULAR:
        return mark_angular
    elif style is MarkStyle.RIBBON:
        return mark_ribbon
    elif style is MarkStyle.SOFT:
        return mark_soft
    raise AssertionError(f"unhandled mark style {style!r}")


def _prepare_legacy(spec: LegacySpec) -> LegacySpec:
    spec = clamp_legacy_spec(spec)
    return replace(
        spec,
        style=_enum(MarkStyle, spec.style, MarkStyle.MINIMAL),
        color=safe_color(spec.color, "#6C5CE7"),
    )


def render_legacy_mark(spec: LegacySpec) -> str:
    spec = _prepare_legacy(spec)
    log.debug("Rendering legacy mark style=%s", spec.style.value)
    return select_mark_renderer(spec.style)(spec)


def lockup_horizontal(mark_svg: str, spec: LegacySpec) -> str:
    """1024x256 lockup: the 256 mark nested at x=24, name at (320, 160)."""
    spec = _prepare_legacy(spec)
    colors = THEME_COLORS[spec.theme]
    name = escape_text(spec.name or "Brand Name")
    return f"""<svg width="1024" height="256" viewBox="0 0 1024 256" xmlns="{SVG_NS}">
  <g transform="translate(24, 0)">
    {mark_svg}
  </g>
  <text x="320" y="160" font-family="{FONT_FAMILIES[spec.font]}" font-size="48" font-weight="{FONT_WEIGHT}" fill="{colors['text']}" dominant-baseline="middle">{name}</text>
</svg>"""


def render_legacy_svgs(spec: LegacySpec):
    mark = render_legacy_mark(spec)
    return {"mark": mark, "lockup": lockup_horizontal(mark, spec)}
