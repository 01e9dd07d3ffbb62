# brandkit/exporter.py
"""
Export companions: the list of files a brand kit is made of, text
documents (manifest, tokens, tailwind snippet) and the favicon ICO.

Rasterizing SVG is left to a caller-supplied rasterizer with the contract
``rasterize(svg: str, width: int) -> bytes`` (PNG). Archiving the result
is the caller's business too.
"""

import io
import json
import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Union

from PIL import Image, ImageColor

from .assets import select_for_context
from .geometry import create_slug, escape_text, round_half_up
from .models import AssetBundle, AssetContext, BrandSpec

log = logging.getLogger(__name__)

Rasterizer = Callable[[str, int], bytes]

TARGETS = ("web", "ios", "android", "og")
FORMATS = ("svg", "png")

EXPORT_SIZES = {
    "logo": (256, 512),
    "web": (16, 32, 48, 180, 192, 512),
    "ios": (20, 29, 40, 60, 76, 83.5, 1024),
    "android": (48, 72, 96, 144, 192, 512),
}
ANDROID_DENSITIES = {48: "mdpi", 72: "hdpi", 96: "xhdpi", 144: "xxhdpi", 192: "xxxhdpi"}
ICO_SIZES = (16, 32, 48)
OG_WIDTH, OG_HEIGHT = 1200, 630
LOCKUP_PNG_WIDTH = 1200


@dataclass(frozen=True)
class ExportItem:
    path: str
    svg: str
    width: Optional[int] = None   # None: write the SVG itself


def _web_name(size) -> str:
    if size == 180:
        return "web/apple-touch-icon.png"
    return f"web/favicon-{size}.png"


def _ios_name(size) -> str:
    label = str(size).replace(".", "_")
    return f"ios/icon-{label}.png"


def _android_name(size) -> str:
    if size == 512:
        return "android/maskable-icon-512.png"
    return f"android/icon-{size}-{ANDROID_DENSITIES[size]}.png"


def export_plan(bundle: AssetBundle, spec: BrandSpec, targets: Sequence[str] = TARGETS,
                formats: Sequence[str] = FORMATS) -> List[ExportItem]:
    """Ordered files of a brand kit, each an SVG plus the pixel width to rasterize it at."""
    mark = select_for_context(bundle, AssetContext.FAVICON)
    lockup = bundle.lockups.left
    items = []
    if "svg" in formats:
        items.append(ExportItem("logo/logo-mark.svg", mark))
        items.append(ExportItem("logo/logo-horizontal.svg", lockup))
        if bundle.wordmark:
            items.append(ExportItem("logo/logo-wordmark.svg", bundle.wordmark))
    if "png" in formats:
        for size in EXPORT_SIZES["logo"]:
            items.append(ExportItem(f"logo/logo-mark-{size}.png", mark, size))
        items.append(ExportItem(f"logo/logo-horizontal-{LOCKUP_PNG_WIDTH}.png", lockup, LOCKUP_PNG_WIDTH))
    if "web" in targets:
        items += [ExportItem(_web_name(s), mark, s) for s in EXPORT_SIZES["web"]]
    if "ios" in targets:
        items += [ExportItem(_ios_name(s), mark, round_half_up(s)) for s in EXPORT_SIZES["ios"]]
    if "android" in targets:
        items += [ExportItem(_android_name(s), mark, s) for s in EXPORT_SIZES["android"]]
    if "og" in targets:
        items.append(ExportItem("web/og-image.png", create_og_image_svg(lockup, spec), OG_WIDTH))
    return items


def build_export(bundle: AssetBundle, spec: BrandSpec, rasterize: Rasterizer,
                 targets: Sequence[str] = TARGETS, formats: Sequence[str] = FORMATS) -> Dict[str, Union[str, bytes]]:
    """Run the plan through the rasterizer and add the text documents and favicon.ico."""
    files: Dict[str, Union[str, bytes]] = {}
    for item in export_plan(bundle, spec, targets, formats):
        files[item.path] = item.svg if item.width is None else rasterize(item.svg, item.width)
    if "web" in targets:
        icons = [files.get(f"web/favicon-{s}.png") for s in ICO_SIZES]
        files["web/favicon.ico"] = create_favicon_ico([b for b in icons if b])
        files["web/site.webmanifest"] = create_web_manifest(spec)
    files["tokens/brand.json"] = create_brand_tokens(spec)
    files["tokens/tailwind.brand.config.snippet.js"] = create_tailwind_config(spec)
    log.info("Built %d export files for %r", len(files), spec.name)
    return files


# ---------- Raster ----------
def create_favicon_ico(png_buffers: Sequence[bytes]) -> bytes:
    """Multi-resolution ICO from PNG buffers (largest image is the base)."""
    images = [Image.open(io.BytesIO(b)).convert("RGBA") for b in png_buffers]
    if not images:
        raise ValueError("at least one PNG is required to build an ICO")
    images.sort(key=lambda im: im.width, reverse=True)
    out = io.BytesIO()
    images[0].save(out, format="ICO", sizes=[(im.width, im.height) for im in images], append_images=images[1:])
    return out.getvalue()


# ---------- Colors ----------
def hex_color(value: str) -> str:
    """Normalize any Pillow-parsable color to #RRGGBB."""
    r, g, b = ImageColor.getrgb(value)[:3]
    return f"#{r:02X}{g:02X}{b:02X}"


def relative_luminance(value: str) -> float:
    def channel(c):
        c = c / 255.0
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4
    r, g, b = ImageColor.getrgb(value)[:3]
    return 0.2126 * channel(r) + 0.7152 * channel(g) + 0.0722 * channel(b)


def readable_text_color(background: str) -> str:
    return "#111827" if relative_luminance(background) > 0.5 else "#FFFFFF"


# ---------- Documents ----------
def create_web_manifest(spec: BrandSpec) -> str:
    icons = [
        {"src": "favicon-192.png", "sizes": "192x192", "type": "image/png"},
        {"src": "favicon-512.png", "sizes": "512x512", "type": "image/png"},
        {"src": "favicon-512.png", "sizes": "512x512", "type": "image/png", "purpose": "maskable"},
    ]
    return json.dumps({
        "name": spec.name,
        "short_name": spec.name,
        "description": f"{spec.name} brand assets",
        "start_url": "/",
        "display": "standalone",
        "theme_color": hex_color(spec.colors.primary),
        "background_color": hex_color(spec.colors.background),
        "icons": icons,
    }, indent=2)


def create_brand_tokens(spec: BrandSpec) -> str:
    colors = spec.colors
    return json.dumps({
        "version": 2,
        "name": spec.name,
        "slug": create_slug(spec.name),
        "initial": spec.glyph,
        "color": {
            "primary": hex_color(colors.primary),
            "background": hex_color(colors.background),
            "text": hex_color(colors.text),
            "on_primary": readable_text_color(colors.primary),
        },
        "font": spec.font.value,
        "template": spec.template.value,
        "icon_id": spec.icon_id,
        "params": spec.to_dict()["params"],
    }, indent=2)


def create_tailwind_config(spec: BrandSpec) -> str:
    c = spec.colors
    return f"""// Brand-specific Tailwind CSS configuration
// Add this to your tailwind.config.js theme.extend section

module.exports = {{
  theme: {{
    extend: {{
      colors: {{
        brand: {{
          primary: '{hex_color(c.primary)}',
          background: '{hex_color(c.background)}',
          text: '{hex_color(c.text)}'
        }}
      }},
      fontFamily: {{
        brand: ['{spec.font.value}', 'system-ui', 'sans-serif']
      }}
    }}
  }}
}};
"""


def create_og_image_svg(lockup_svg: str, spec: BrandSpec) -> str:
    """1200x630 social card; the lockup scales into a centred viewport."""
    margin_x, margin_y = 100, 115
    return (
        f'<svg width="{OG_WIDTH}" height="{OG_HEIGHT}" viewBox="0 0 {OG_WIDTH} {OG_HEIGHT}" '
        f'xmlns="http://www.w3.org/2000/svg">'
        f'<title>{escape_text(spec.name)}</title>'
        f'<rect width="{OG_WIDTH}" height="{OG_HEIGHT}" fill="{hex_color(spec.colors.background)}"/>'
        f'<svg x="{margin_x}" y="{margin_y}" width="{OG_WIDTH - 2 * margin_x}" height="{OG_HEIGHT - 2 * margin_y}">'
        f"{lockup_svg}</svg></svg>"
    )
