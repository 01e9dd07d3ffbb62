# brandkit/marks.py
"""
Legacy mark family. Each generator synthesizes a standalone 256x256
glyph from weight/slant/radius/gap; none of them touch icon resolution.
"""

from .geometry import (
    clamp, clamp_radius, fmt, gap_to_pixels, slant_to_cut_size, weight_to_bar_width,
)
from .models import LegacySpec

CANVAS = 256
SVG_OPEN = f'<svg width="{CANVAS}" height="{CANVAS}" viewBox="0 0 {CANVAS} {CANVAS}" xmlns="http://www.w3.org/2000/svg">'


def _points(points) -> str:
    return " ".join(f"{fmt(x)},{fmt(y)}" for x, y in points)


# ---------- minimal: one strong rounded bar plus a smaller offset bar ----------
def mark_minimal(spec: LegacySpec) -> str:
    bar_width = weight_to_bar_width(spec.params.weight)
    radius = clamp_radius(spec.params.radius)
    gap = gap_to_pixels(spec.params.gap)

    main_height = 120
    main_y = (CANVAS - main_height) / 2
    second_height = 60
    second_width = max(bar_width * 0.6, 16)
    second_y = main_y + main_height + gap
    second_x = bar_width * 0.3
    x = (CANVAS - bar_width) / 2

    return f"""{SVG_OPEN}
  <rect x="{fmt(x)}" y="{fmt(main_y)}" width="{fmt(bar_width)}" height="{main_height}" rx="{fmt(radius)}" ry="{fmt(radius)}" fill="{spec.color}"/>
  <rect x="{fmt(x + second_x)}" y="{fmt(second_y)}" width="{fmt(second_width)}" height="{second_height}" rx="{fmt(radius)}" ry="{fmt(radius)}" fill="{spec.color}" opacity="0.7"/>
</svg>"""


# ---------- angular: two bars with diagonal cuts ----------
def mark_angular(spec: LegacySpec) -> str:
    bar_width = weight_to_bar_width(spec.params.weight)
    gap = gap_to_pixels(spec.params.gap)
    cut = slant_to_cut_size(spec.params.slant)

    total_width = bar_width * 2 + gap
    bar1_x = (CANVAS - total_width) / 2
    bar2_x = bar1_x + bar_width + gap
    bar_height = 140
    bar_y = (CANVAS - bar_height) / 2

    # bar 1 cut at top-right, bar 2 at bottom-left
    bar1 = [
        (bar1_x, bar_y),
        (bar1_x + bar_width - cut, bar_y),
        (bar1_x + bar_width, bar_y + cut),
        (bar1_x + bar_width, bar_y + bar_height),
        (bar1_x, bar_y + bar_height),
    ]
    bar2 = [
        (bar2_x, bar_y),
        (bar2_x + bar_width, bar_y),
        (bar2_x + bar_width, bar_y + bar_height),
        (bar2_x + cut, bar_y + bar_height),
        (bar2_x, bar_y + bar_height - cut),
    ]
    return f"""{SVG_OPEN}
  <polygon points="{_points(bar1)}" fill="{spec.color}"/>
  <polygon points="{_points(bar2)}" fill="{spec.color}" opacity="0.85"/>
</svg>"""


# ---------- ribbon: two tilted rounded strips ----------
def mark_ribbon(spec: LegacySpec) -> str:
    bar_width = weight_to_bar_width(spec.params.weight)
    radius = clamp_radius(spec.params.radius)
    gap = gap_to_pixels(spec.params.gap)
    slant = clamp(spec.params.slant, -20, 20)

    strip_height = 40
    strip_length = bar_width + 20
    cx = cy = CANVAS / 2
    strip1_y = cy - strip_height / 2 - gap / 2
    strip2_y = cy + strip_height / 2 + gap / 2
    x = cx - strip_length / 2

    return f"""{SVG_OPEN}
  <g transform="rotate({fmt(slant)} {fmt(cx)} {fmt(cy)})">
    <rect x="{fmt(x)}" y="{fmt(strip1_y)}" width="{fmt(strip_length)}" height="{strip_height}" rx="{fmt(radius)}" ry="{fmt(radius)}" fill="{spec.color}"/>
    <rect x="{fmt(x + gap)}" y="{fmt(strip2_y)}" width="{fmt(strip_length * 0.8)}" height="{strip_height}" rx="{fmt(radius)}" ry="{fmt(radius)}" fill="{spec.color}" opacity="0.75"/>
  </g>
</svg>"""


# ---------- soft: minimal with heavier rounding and an accent dot ----------
def mark_soft(spec: LegacySpec) -> str:
    bar_width = weight_to_bar_width(spec.params.weight)
    radius = clamp(clamp_radius(spec.params.radius) + 8, 8, 32)
    gap = gap_to_pixels(spec.params.gap)

    main_height = 100
    main_y = (CANVAS - main_height) / 2 - gap * 0.5
    second_height = 80
    second_width = max(bar_width * 0.7, 20)
    second_y = main_y + main_height + gap * 1.5
    second_x = -bar_width * 0.2
    accent = 24
    accent_x = bar_width * 0.4
    accent_y = main_y - gap - accent
    x = (CANVAS - bar_width) / 2

    return f"""{SVG_OPEN}
  <rect x="{fmt(x)}" y="{fmt(main_y)}" width="{fmt(bar_width)}" height="{main_height}" rx="{fmt(radius)}" ry="{fmt(radius)}" fill="{spec.color}"/>
  <rect x="{fmt(x + second_x)}" y="{fmt(second_y)}" width="{fmt(second_width)}" height="{second_height}" rx="{fmt(radius * 0.8)}" ry="{fmt(radius * 0.8)}" fill="{spec.color}" opacity="0.65"/>
  <circle cx="{fmt(x + bar_width / 2 + accent_x)}" cy="{fmt(accent_y + accent / 2)}" r="{fmt(accent / 2)}" fill="{spec.color}" opacity="0.4"/>
</svg>"""
