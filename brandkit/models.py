from dataclasses import dataclass, field, replace, asdict
from enum import Enum
from typing import List, Dict, Any, Optional, Tuple, Union


# ---------- Enums ----------
class Template(str, Enum):
    MARK_ONLY = "mark-only"
    LEFT_LOCKUP = "left-lockup"
    STACKED = "stacked"
    BADGE = "badge"


class Font(str, Enum):
    INTER = "Inter"
    SORA = "Sora"
    MANROPE = "Manrope"
    OUTFIT = "Outfit"


class AssetContext(str, Enum):
    FAVICON = "favicon"
    SOCIAL_AVATAR = "social-avatar"
    APP_ICON = "app-icon"
    WEBSITE_HEADER = "website-header"
    BUSINESS_CARD = "business-card"
    HERO_PREVIEW = "hero-preview"
    EXPORT = "export"


class Fit(str, Enum):
    MEET = "meet"
    SLICE = "slice"


class MarkStyle(str, Enum):
    MINIMAL = "minimal"
    ANGULAR = "angular"
    RIBBON = "ribbon"
    SOFT = "soft"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


FONT_FAMILIES = {
    Font.INTER: "Inter, system-ui, sans-serif",
    Font.SORA: "Sora, system-ui, sans-serif",
    Font.MANROPE: "Manrope, system-ui, sans-serif",
    Font.OUTFIT: "Outfit, system-ui, sans-serif",
}

THEME_COLORS = {
    Theme.LIGHT: {"background": "#FFFFFF", "text": "#111827"},
    Theme.DARK: {"background": "#0B0F1A", "text": "#FFFFFF"},
}

COLOR_SWATCHES = ("#6C5CE7", "#22C55E", "#06B6D4", "#F43F5E", "#0EA5E9", "#111827")


# ---------- Coercion helpers (plain dicts -> dataclasses) ----------
def _enum(cls, value, default):
    if isinstance(value, cls):
        return value
    try:
        return cls(value)
    except ValueError:
        return default


def _number(value, default):
    if isinstance(value, bool):
        return float(value)
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _pick(data: Dict[str, Any], *keys, default=None):
    # accepts both snake_case and camelCase keys
    for k in keys:
        if k in data and data[k] is not None:
            return data[k]
    return default


# ---------- Background ----------
@dataclass(frozen=True)
class GradientStop:
    color: str
    at: float                     # fraction 0..1


@dataclass(frozen=True)
class SolidBackground:
    color: str
    type: str = "solid"


@dataclass(frozen=True)
class LinearGradient:
    angle: float                  # degrees
    stops: Tuple[GradientStop, ...] = ()
    type: str = "linear-gradient"


BackgroundSpec = Union[SolidBackground, LinearGradient]


def background_from_dict(data, fallback_color: str = "#000000") -> BackgroundSpec:
    if isinstance(data, (SolidBackground, LinearGradient)):
        return data
    if not isinstance(data, dict):
        return SolidBackground(fallback_color)
    if data.get("type") == "linear-gradient":
        stops = []
        for s in data.get("stops") or []:
            if isinstance(s, GradientStop):
                stops.append(s)
            elif isinstance(s, dict):
                stops.append(GradientStop(str(s.get("color", fallback_color)), _number(s.get("at"), 0.0)))
        return LinearGradient(angle=_number(data.get("angle"), 0.0), stops=tuple(stops))
    return SolidBackground(str(data.get("color") or fallback_color))


# ---------- BrandSpec (V2) ----------
@dataclass(frozen=True)
class Colors:
    primary: str = "#FFF7ED"
    background: str = "#000000"
    text: str = "#FFF7ED"


@dataclass(frozen=True)
class Effect:
    shadow: bool = False          # carried, not rendered


@dataclass(frozen=True)
class Params:
    scale: float = 0.8            # 0.5–1.5, legacy
    icon_scale: float = 1.0       # 0.6–1.6, advisory
    text_scale: float = 1.0       # 0.6–1.6, advisory
    letter_spacing: float = 0     # -2–6 px
    rotate: float = 0             # -45–45 deg
    stroke: float = 0             # 0–8 px
    corner_radius: float = 16     # 0–64 px, shapes only
    padding: float = 16           # 0–40 px
    lockup_gap: float = 12        # 0–48 px, advisory
    effect: Effect = field(default_factory=Effect)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Params":
        data = data or {}
        d = cls()
        effect = _pick(data, "effect", default={})
        return cls(
            scale=_number(_pick(data, "scale"), d.scale),
            icon_scale=_number(_pick(data, "icon_scale", "iconScale"), d.icon_scale),
            text_scale=_number(_pick(data, "text_scale", "textScale"), d.text_scale),
            letter_spacing=_number(_pick(data, "letter_spacing", "letterSpacing"), d.letter_spacing),
            rotate=_number(_pick(data, "rotate"), d.rotate),
            stroke=_number(_pick(data, "stroke"), d.stroke),
            corner_radius=_number(_pick(data, "corner_radius", "cornerRadius"), d.corner_radius),
            padding=_number(_pick(data, "padding"), d.padding),
            lockup_gap=_number(_pick(data, "lockup_gap", "lockupGap"), d.lockup_gap),
            effect=Effect(shadow=bool(effect.get("shadow", False)) if isinstance(effect, dict) else False),
        )


@dataclass(frozen=True)
class BrandSpec:
    name: str = ""
    initial: str = ""
    template: Template = Template.LEFT_LOCKUP      # also the hero preview style
    icon_id: str = ""             # "", "shape:<kind>" or "<namespace>:<key>"
    colors: Colors = field(default_factory=Colors)
    background: BackgroundSpec = field(default_factory=lambda: SolidBackground("#000000"))
    font: Font = Font.INTER
    params: Params = field(default_factory=Params)

    @property
    def glyph(self) -> str:
        """Single-letter fallback used by monograms."""
        if self.initial:
            return self.initial[:1].upper()
        return (self.name[:1] or "B").upper()

    def replace(self, **changes) -> "BrandSpec":
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["template"] = self.template.value
        data["font"] = self.font.value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BrandSpec":
        colors = _pick(data, "colors", default={})
        if isinstance(colors, Colors):
            colors = asdict(colors)
        c = Colors()
        colors = Colors(
            primary=str(colors.get("primary") or c.primary),
            background=str(colors.get("background") or c.background),
            text=str(colors.get("text") or c.text),
        )
        params = _pick(data, "params")
        return cls(
            name=str(_pick(data, "name", default="")),
            initial=str(_pick(data, "initial", default="")),
            template=_enum(Template, _pick(data, "template", "hero_style", "heroStyle"), Template.LEFT_LOCKUP),
            icon_id=str(_pick(data, "icon_id", "iconId", default="")),
            colors=colors,
            background=background_from_dict(_pick(data, "background"), colors.background),
            font=_enum(Font, _pick(data, "font"), Font.INTER),
            params=params if isinstance(params, Params) else Params.from_dict(params),
        )


# ---------- Icon definitions ----------
@dataclass(frozen=True)
class IconPath:
    d: str
    fill: Optional[str] = None
    stroke: Optional[str] = None
    stroke_width: Optional[float] = None
    fill_rule: Optional[str] = None


@dataclass(frozen=True)
class IconDef:
    view_box: str = "0 0 24 24"
    paths: Tuple[IconPath, ...] = ()
    raw: Optional[str] = None     # inner markup, no <svg> wrapper

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "IconDef":
        paths = []
        for p in data.get("paths") or []:
            if not isinstance(p, dict) or not p.get("d"):
                continue
            sw = _pick(p, "stroke_width", "strokeWidth")
            paths.append(IconPath(
                d=str(p["d"]),
                fill=p.get("fill"),
                stroke=p.get("stroke"),
                stroke_width=_number(sw, None) if sw is not None else None,
                fill_rule=_pick(p, "fill_rule", "fillRule"),
            ))
        raw = data.get("raw")
        return cls(
            view_box=str(_pick(data, "view_box", "viewBox", default="0 0 24 24")),
            paths=tuple(paths),
            raw=str(raw) if raw else None,
        )


# ---------- Render options / outputs ----------
@dataclass(frozen=True)
class RenderOptions:
    fit: Fit = Fit.MEET
    include_background: bool = True
    responsive: bool = False      # width/height="100%" on the root <svg>

    @property
    def preserve_aspect_ratio(self) -> str:
        return f"xMidYMid {self.fit.value}"


@dataclass(frozen=True)
class Lockups:
    left: str
    stacked: str
    badge: str


@dataclass(frozen=True)
class AssetBundle:
    wordmark: str
    lockups: Lockups
    icon: Optional[str] = None    # present when an icon id is set
    monogram: Optional[str] = None  # present when no icon id is set

    def as_dict(self) -> Dict[str, Optional[str]]:
        return {
            "icon": self.icon,
            "wordmark": self.wordmark,
            "monogram": self.monogram,
            "lockup-left": self.lockups.left,
            "lockup-stacked": self.lockups.stacked,
            "lockup-badge": self.lockups.badge,
        }


# ---------- Legacy spec (V1) ----------
@dataclass(frozen=True)
class LegacyParams:
    weight: float = 0.12          # 0.08–0.20
    slant: float = 0              # -20–20 deg
    radius: float = 8             # 0–24 px
    gap: float = 0.20             # 0–0.40 relative


@dataclass(frozen=True)
class LegacySpec:
    name: str = ""
    initial: str = ""
    style: MarkStyle = MarkStyle.MINIMAL
    color: str = "#6C5CE7"
    font: Font = Font.INTER
    theme: Theme = Theme.LIGHT
    params: LegacyParams = field(default_factory=LegacyParams)

    def replace(self, **changes) -> "LegacySpec":
        return replace(self, **changes)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LegacySpec":
        p = data.get("params") or {}
        d = LegacyParams()
        return cls(
            name=str(data.get("name") or ""),
            initial=str(data.get("initial") or ""),
            style=_enum(MarkStyle, data.get("style"), MarkStyle.MINIMAL),
            color=str(data.get("color") or "#6C5CE7"),
            font=_enum(Font, data.get("font"), Font.INTER),
            theme=_enum(Theme, data.get("theme"), Theme.LIGHT),
            params=LegacyParams(
                weight=_number(p.get("weight"), d.weight),
                slant=_number(p.get("slant"), d.slant),
                radius=_number(p.get("radius"), d.radius),
                gap=_number(p.get("gap"), d.gap),
            ),
        )


# ---------- Presets / defaults ----------
def _linear(angle, a, b) -> LinearGradient:
    return LinearGradient(angle=angle, stops=(GradientStop(a, 0), GradientStop(b, 1)))


GRADIENT_PRESETS: List[LinearGradient] = [
    _linear(45, "#FF6B6B", "#4ECDC4"),
    _linear(135, "#667eea", "#764ba2"),
    _linear(45, "#f093fb", "#f5576c"),
    _linear(90, "#4facfe", "#00f2fe"),
    _linear(45, "#43e97b", "#38f9d7"),
    _linear(135, "#fa709a", "#fee140"),
    _linear(90, "#a8edea", "#fed6e3"),
    _linear(45, "#000000", "#434343"),
]

DEFAULT_SPEC = BrandSpec()
DEFAULT_LEGACY_SPEC = LegacySpec()
