# brandkit/icons.py
"""
Icon/shape resolution.

Lookup is layered: runtime-registered icons win over the curated
built-ins, which win over the externally loaded icon set. Every id
resolves to something renderable; unknown ids resolve to empty content.
"""

import json
import logging
import re
import threading
import time
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Any

import requests

from . import config
from .geometry import escape_text, fmt
from .models import IconDef, IconPath, Params
from .shapes import render_shape

log = logging.getLogger(__name__)

SHAPE_PREFIX = "shape:"
CURRENT_COLOR = "currentColor"
RAW_STROKE_WIDTH = 2

# ---------- Curated built-ins ----------
BUILTIN_ICONS: Mapping[str, IconDef] = MappingProxyType({
    "lucide:sparkles": IconDef(
        view_box="0 0 24 24",
        paths=(IconPath(
            d="M12 3v3m0 12v3m9-9h-3M6 12H3m12.5-6.5l-2 2m-5 10l-2 2m9 0l-2-2m-5-10l-2-2",
            stroke=CURRENT_COLOR, stroke_width=2,
        ),),
    ),
    "lucide:bolt": IconDef(
        view_box="0 0 24 24",
        paths=(IconPath(d="M13 3L4 14h7l-1 7 9-11h-7l1-7z", fill=CURRENT_COLOR),),
    ),
})


# ---------- Markup safety ----------
DANGEROUS_PATTERNS = [
    re.compile(r"javascript:", re.I),
    re.compile(r"data:", re.I),
    re.compile(r"url\(", re.I),
    re.compile(r"<script", re.I),
    re.compile(r"<image", re.I),
    re.compile(r"<foreignObject", re.I),
    re.compile(r"\son\w+\s*=", re.I),
]
_SVG_OPEN = re.compile(r"<svg[^>]*>", re.I)
_SVG_CLOSE = re.compile(r"</svg>\s*$", re.I)


def is_safe_markup(text: str) -> bool:
    return not any(p.search(text) for p in DANGEROUS_PATTERNS)


def strip_svg_wrapper(raw: str) -> str:
    return _SVG_CLOSE.sub("", _SVG_OPEN.sub("", raw, count=1)).strip()


def clean_definition(icon_id: str, definition: IconDef) -> Optional[IconDef]:
    """Screen a definition from an untrusted source; None when it must be dropped."""
    texts = [p.d for p in definition.paths]
    texts += [v for p in definition.paths for v in (p.fill, p.stroke) if v]
    if definition.raw:
        texts.append(definition.raw)
    if not all(is_safe_markup(t) for t in texts):
        log.warning("Dropping icon %s: unsafe markup", icon_id)
        return None
    if definition.raw:
        return replace(definition, raw=strip_svg_wrapper(definition.raw))
    return definition


def parse_icon_set(data: Any, namespace: str) -> Dict[str, IconDef]:
    """
    Parse a JSON icon set ({key: {viewBox, paths?|raw?}}) into namespaced
    definitions. Keys that already carry a namespace are kept as they are.
    """
    icons = {}
    if not isinstance(data, dict):
        return icons
    for key, value in data.items():
        if not isinstance(value, dict):
            continue
        icon_id = key if ":" in key else f"{namespace}:{key}"
        definition = clean_definition(icon_id, IconDef.from_dict(value))
        if definition is not None:
            icons[icon_id] = definition
    return icons


# ---------- Catalog ----------
@dataclass(frozen=True, eq=False)
class IconCatalog:
    """Immutable snapshot of the three lookup layers."""
    runtime: Mapping[str, IconDef] = field(default_factory=lambda: MappingProxyType({}))
    builtin: Mapping[str, IconDef] = field(default_factory=lambda: BUILTIN_ICONS)
    external: Mapping[str, IconDef] = field(default_factory=lambda: MappingProxyType({}))

    def get(self, icon_id: str) -> Optional[IconDef]:
        for layer in (self.runtime, self.builtin, self.external):
            definition = layer.get(icon_id)
            if definition is not None:
                return definition
        return None

    def __contains__(self, icon_id) -> bool:
        return self.get(icon_id) is not None

    def ids(self):
        seen = dict.fromkeys(self.builtin)
        seen.update(dict.fromkeys(self.external))
        seen.update(dict.fromkeys(self.runtime))
        return sorted(seen)

    def with_runtime(self, icons: Mapping[str, Any]) -> "IconCatalog":
        """New catalog with icons (IconDef or plain dicts) added to the runtime layer."""
        merged = dict(self.runtime)
        for icon_id, value in icons.items():
            definition = value if isinstance(value, IconDef) else IconDef.from_dict(value)
            definition = clean_definition(icon_id, definition)
            if definition is not None:
                merged[icon_id] = definition
        return replace(self, runtime=MappingProxyType(merged))

    def with_external(self, icons: Mapping[str, IconDef]) -> "IconCatalog":
        return replace(self, external=MappingProxyType(dict(icons)))


DEFAULT_CATALOG = IconCatalog()


# ---------- External icon set loader ----------
_NO_ICONS: Mapping[str, IconDef] = MappingProxyType({})


class IconSetLoader:
    """
    Fetches the external icon set at most once per session. A failed
    fetch is logged and leaves the set unloaded; for retry_after seconds
    afterwards load() answers with no icons without touching the source,
    then the next call tries again. Lookups meanwhile behave as if the
    icons do not exist.
    """

    def __init__(self, source: str = None, namespace: str = None, timeout: float = None, session=None,
                 retry_after: float = None, clock=time.monotonic):
        self.source = source or config.ICONSET_SOURCE
        self.namespace = namespace or config.ICONSET_NAMESPACE
        self.timeout = config.ICONSET_TIMEOUT if timeout is None else timeout
        self.retry_after = config.ICONSET_RETRY_SECONDS if retry_after is None else retry_after
        self.session = session or requests.Session()
        self._clock = clock
        self._icons: Optional[Mapping[str, IconDef]] = None
        self._failed_at: Optional[float] = None
        self._lock = threading.Lock()

    @property
    def loaded(self) -> bool:
        return self._icons is not None

    def _cooling_down(self) -> bool:
        return self._failed_at is not None and self._clock() - self._failed_at < self.retry_after

    def _fetch(self):
        if self.source.startswith(("http://", "https://")):
            r = self.session.get(self.source, timeout=self.timeout)
            r.raise_for_status()
            return r.json()
        with open(Path(self.source), "r", encoding="utf-8") as f:
            return json.load(f)

    def load(self) -> Mapping[str, IconDef]:
        if self._icons is not None:
            return self._icons
        if self._cooling_down():
            return _NO_ICONS
        # callers arriving while a fetch is in flight get no icons instead of queueing
        if not self._lock.acquire(blocking=False):
            return self._icons if self._icons is not None else _NO_ICONS
        try:
            if self._icons is not None:
                return self._icons
            if self._cooling_down():
                return _NO_ICONS
            try:
                data = self._fetch()
            except (requests.RequestException, OSError, ValueError) as e:
                self._failed_at = self._clock()
                log.warning("Icon set %s not loaded, retrying in %ss: %s", self.source, fmt(self.retry_after), e)
                return _NO_ICONS
            self._icons = MappingProxyType(parse_icon_set(data, self.namespace))
            self._failed_at = None
            log.info("Loaded %d icons from %s", len(self._icons), self.source)
            return self._icons
        finally:
            self._lock.release()

    def catalog(self, base: IconCatalog = DEFAULT_CATALOG) -> IconCatalog:
        return base.with_external(self.load())


def runtime_catalog(source: str = None, namespace: str = None) -> IconCatalog:
    """Built-ins with the bundled raw-markup subset registered ahead of them."""
    loader = IconSetLoader(source or config.RUNTIME_ICONS_SOURCE, namespace or config.RUNTIME_ICONS_NAMESPACE)
    return DEFAULT_CATALOG.with_runtime(loader.load())


# ---------- Resolution ----------
@dataclass(frozen=True)
class ResolvedIcon:
    kind: str                      # "empty" | "shape" | "paths" | "raw"
    shape: Optional[str] = None
    definition: Optional[IconDef] = None


EMPTY = ResolvedIcon("empty")


def resolve(icon_id, catalog: IconCatalog = None) -> ResolvedIcon:
    if not icon_id or not isinstance(icon_id, str):
        return EMPTY
    if icon_id.startswith(SHAPE_PREFIX):
        return ResolvedIcon("shape", shape=icon_id[len(SHAPE_PREFIX):])
    definition = (catalog or DEFAULT_CATALOG).get(icon_id)
    if definition is None:
        log.debug("Unknown icon id %s", icon_id)
        return EMPTY
    if definition.paths:
        return ResolvedIcon("paths", definition=definition)
    if definition.raw:
        return ResolvedIcon("raw", definition=definition)
    return EMPTY


def _view_box_width(view_box: str) -> float:
    parts = view_box.replace(",", " ").split()
    try:
        width = float(parts[2])
    except (IndexError, ValueError):
        return 24.0
    if not width > 0 or width == float("inf"):
        return 24.0
    return width


def _paint(value: str, color: str) -> str:
    return color if value == CURRENT_COLOR else escape_text(value)


def _path_markup(p: IconPath, color: str) -> str:
    attrs = [f'd="{escape_text(p.d)}"']
    attrs.append(f'fill="{_paint(p.fill, color)}"' if p.fill else 'fill="none"')
    if p.stroke:
        attrs.append(f'stroke="{_paint(p.stroke, color)}"')
    if p.stroke_width:
        attrs.append(f'stroke-width="{fmt(p.stroke_width)}"')
    if p.fill_rule:
        attrs.append(f'fill-rule="{escape_text(p.fill_rule)}"')
    return f"<path {' '.join(attrs)}/>"


def render_icon(resolved: ResolvedIcon, size, color: str, params: Params) -> str:
    """
    Markup for resolved icon content inside a size x size mark. Padding is
    taken off the scalable area; the translation is divided by the scale
    factor so the padding stays uniform at any size.
    """
    padding = params.padding
    inner = size - padding * 2
    if resolved.kind == "empty" or inner <= 0:
        return ""

    if resolved.kind == "shape":
        shape = render_shape(resolved.shape, inner, color, params.corner_radius, params.stroke)
        return f'<g transform="translate({fmt(padding)}, {fmt(padding)})">{shape}</g>'

    definition = resolved.definition
    factor = inner / _view_box_width(definition.view_box)
    translate = fmt(padding / factor)
    transform = f"scale({fmt(factor)}) translate({translate}, {translate})"

    if resolved.kind == "paths":
        paths = "".join(_path_markup(p, color) for p in definition.paths)
        return f'<g transform="{transform}">{paths}</g>'

    # raw markup renders as an outline whose stroke does not scale with the mark
    return (
        f'<g transform="{transform}" fill="none" stroke="{color}" stroke-width="{RAW_STROKE_WIDTH}" '
        f'stroke-linecap="round" stroke-linejoin="round" vector-effect="non-scaling-stroke">'
        f'{definition.raw}</g>'
    )


_default_loader: Optional[IconSetLoader] = None


def default_loader() -> IconSetLoader:
    global _default_loader
    if _default_loader is None:
        _default_loader = IconSetLoader()
    return _default_loader
