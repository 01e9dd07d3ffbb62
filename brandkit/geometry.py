# brandkit/geometry.py
"""
Numeric helpers shared by every mark generator.

The unit conversions are calibrated against a 256x256 canvas. Their
formulas are part of the rendering contract: changing one changes the
visual output of every consumer.
"""

import math
import re
from dataclasses import replace
from xml.sax.saxutils import escape
from typing import List

from .config import MAX_SIZE
from .models import BrandSpec, LegacyParams, LegacySpec, Params

# documented ranges for BrandSpec.params
PARAM_RANGES = {
    "scale": (0.5, 1.5),
    "icon_scale": (0.6, 1.6),
    "text_scale": (0.6, 1.6),
    "letter_spacing": (-2, 6),
    "rotate": (-45, 45),
    "stroke": (0, 8),
    "corner_radius": (0, 64),
    "padding": (0, 40),
    "lockup_gap": (0, 48),
}

LEGACY_RANGES = {
    "weight": (0.08, 0.20),
    "slant": (-20, 20),
    "radius": (0, 24),
    "gap": (0, 0.40),
}

# average advance of one glyph, in em, for the supported sans families
AVERAGE_EM_WIDTH = 0.56


# ---------- Clamping ----------
def clamp(value, lo, hi):
    """Bound value to [lo, hi]; NaN collapses to lo."""
    if value != value:
        return lo
    return min(max(value, lo), hi)


def clamp_size(size) -> int:
    try:
        size = float(size)
    except (TypeError, ValueError):
        return 256
    if not math.isfinite(size):
        return 256
    return round_half_up(clamp(size, 1, MAX_SIZE))


def clamp_params(params: Params) -> Params:
    changes = {}
    for name, (lo, hi) in PARAM_RANGES.items():
        changes[name] = clamp(getattr(params, name), lo, hi)
    return replace(params, **changes)


def clamp_spec(spec: BrandSpec) -> BrandSpec:
    return replace(spec, params=clamp_params(spec.params))


def clamp_legacy_spec(spec: LegacySpec) -> LegacySpec:
    p = spec.params
    return replace(spec, params=LegacyParams(
        weight=clamp(p.weight, *LEGACY_RANGES["weight"]),
        slant=clamp(p.slant, *LEGACY_RANGES["slant"]),
        radius=clamp(p.radius, *LEGACY_RANGES["radius"]),
        gap=clamp(p.gap, *LEGACY_RANGES["gap"]),
    ))


# ---------- Unit conversions (256 canvas) ----------
def round_half_up(value) -> int:
    return int(math.floor(value + 0.5))


def weight_to_bar_width(weight) -> int:
    return int(clamp(round_half_up(clamp(weight * 180, 0, 1e6)), 24, 200))


def gap_to_pixels(gap) -> float:
    return gap * 40


def slant_to_cut_size(slant) -> float:
    return 24 + abs(slant) * 2


def clamp_radius(radius):
    return clamp(radius, 0, 24)


# ---------- Text ----------
def estimate_text_width(text: str, font_size, letter_spacing=0) -> float:
    """
    Approximate rendered width of text. There are no real font metrics
    here: every glyph is assumed to be AVERAGE_EM_WIDTH em wide.
    """
    return len(text) * font_size * AVERAGE_EM_WIDTH + len(text) * letter_spacing


# code points outside the XML 1.0 Char production
_XML_INVALID = re.compile(r"[^\x09\x0A\x0D\x20-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]")


def escape_text(text: str) -> str:
    """Escape for element text or attribute values; characters XML cannot carry are dropped."""
    return escape(_XML_INVALID.sub("", text), {'"': "&quot;"})


def create_slug(name: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", name.lower())
    return slug.strip("-")


def initial_from_name(name: str) -> str:
    return name[:1].upper() or "B"


# ---------- Formatting ----------
def fmt(value) -> str:
    """Shortest stable text for an SVG number: 128 not 128.0, 0.3333 not 0.333333..."""
    value = float(value)
    if not math.isfinite(value):
        return "0"
    if value.is_integer():
        return str(int(value))
    text = f"{value:.4f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


# ---------- Variant grid (legacy) ----------
WEIGHT_STEPS = (0.08, 0.10, 0.12, 0.14, 0.16, 0.18, 0.20)
SLANT_STEPS = (-15, -10, -5, 0, 5, 10, 15)
RADIUS_STEPS = (0, 4, 8, 12, 16, 20, 24)
GAP_STEPS = (0.0, 0.10, 0.15, 0.20, 0.25, 0.30, 0.35, 0.40)


def build_variants(spec: LegacySpec, count: int = 12) -> List[LegacySpec]:
    """Deterministic parameter variations for the variant grid."""
    base = clamp_legacy_spec(spec)
    variants = []
    for i in range(count):
        variant = replace(base, params=LegacyParams(
            weight=WEIGHT_STEPS[i % len(WEIGHT_STEPS)],
            slant=SLANT_STEPS[(i + 2) % len(SLANT_STEPS)],
            radius=RADIUS_STEPS[(i + 4) % len(RADIUS_STEPS)],
            gap=GAP_STEPS[(i + 6) % len(GAP_STEPS)],
        ))
        variants.append(clamp_legacy_spec(variant))
    return variants


# ---------- Colors ----------
_SAFE_COLOR = re.compile(r"^(#[0-9a-fA-F]{3,8}|[a-zA-Z]+|rgba?\([0-9.,%\s]+\)|hsla?\([0-9.,%\s]+\))$")


def safe_color(value, fallback: str = "#000000") -> str:
    """Color text that is safe to drop into an attribute, else fallback."""
    if isinstance(value, str) and _SAFE_COLOR.match(value.strip()):
        return value.strip()
    return fallback
