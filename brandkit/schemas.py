# brandkit/schemas.py
# Request validation for the HTTP layer; the core never sees unvalidated input.
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from . import config
from .geometry import initial_from_name
from .models import BrandSpec, Fit, Font, LegacySpec, MarkStyle, RenderOptions, Template, Theme

HEX_COLOR = r"^#[0-9A-Fa-f]{6}$"
Color = Annotated[str, Field(pattern=HEX_COLOR)]


class _Model(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


# ---------- V2 spec ----------
class StopIn(_Model):
    color: Color
    at: float = Field(ge=0, le=1)


class SolidIn(_Model):
    type: Literal["solid"]
    color: Color


class GradientIn(_Model):
    type: Literal["linear-gradient"]
    angle: float = Field(ge=-360, le=360)
    stops: List[StopIn] = Field(min_length=1)


BackgroundIn = Annotated[Union[SolidIn, GradientIn], Field(discriminator="type")]


class ColorsIn(_Model):
    primary: Color = "#FFF7ED"
    background: Color = "#000000"
    text: Color = "#FFF7ED"


class EffectIn(_Model):
    shadow: bool = False


class ParamsIn(_Model):
    scale: float = Field(0.8, ge=0.5, le=1.5)
    icon_scale: float = Field(1.0, ge=0.6, le=1.6, alias="iconScale")
    text_scale: float = Field(1.0, ge=0.6, le=1.6, alias="textScale")
    letter_spacing: float = Field(0, ge=-2, le=6, alias="letterSpacing")
    rotate: float = Field(0, ge=-45, le=45)
    stroke: float = Field(0, ge=0, le=8)
    corner_radius: float = Field(16, ge=0, le=64, alias="cornerRadius")
    padding: float = Field(16, ge=0, le=40)
    lockup_gap: float = Field(12, ge=0, le=48, alias="lockupGap")
    effect: EffectIn = Field(default_factory=EffectIn)


class BrandSpecIn(_Model):
    name: str = Field("", max_length=100)
    initial: str = Field("", max_length=5)
    template: Template = Field(Template.LEFT_LOCKUP, alias="heroStyle")
    icon_id: str = Field("", max_length=200, alias="iconId")
    colors: ColorsIn = Field(default_factory=ColorsIn)
    background: Optional[BackgroundIn] = None
    font: Font = Font.INTER
    params: ParamsIn = Field(default_factory=ParamsIn)

    def to_spec(self) -> BrandSpec:
        data = self.model_dump()
        data["initial"] = self.initial or initial_from_name(self.name)
        return BrandSpec.from_dict(data)


class RenderRequest(_Model):
    spec: BrandSpecIn
    size: int = Field(config.DEFAULT_SIZE, ge=16, le=2048)
    fit: Fit = Fit.MEET
    include_background: bool = Field(True, alias="includeBackground")
    responsive: bool = False

    def options(self) -> RenderOptions:
        return RenderOptions(fit=self.fit, include_background=self.include_background, responsive=self.responsive)


class AssetsRequest(_Model):
    spec: BrandSpecIn
    size: int = Field(config.DEFAULT_SIZE, ge=16, le=2048)
    hero_style: Optional[Template] = Field(None, alias="heroStyle")


class RuntimeIconsRequest(_Model):
    icons: Dict[str, Dict[str, Any]]


# ---------- V1 (legacy) spec ----------
class LegacyParamsIn(_Model):
    weight: float = Field(0.12, ge=0.08, le=0.20)
    slant: float = Field(0, ge=-20, le=20)
    radius: float = Field(8, ge=0, le=24)
    gap: float = Field(0.20, ge=0, le=0.40)


class LegacySpecIn(_Model):
    version: Literal[1] = 1
    name: str = Field("", max_length=100)
    initial: str = Field("", max_length=5)
    style: MarkStyle = MarkStyle.MINIMAL
    color: Color = "#6C5CE7"
    font: Font = Font.INTER
    theme: Theme = Theme.LIGHT
    params: LegacyParamsIn = Field(default_factory=LegacyParamsIn)

    def to_spec(self) -> LegacySpec:
        data = self.model_dump()
        data["initial"] = self.initial or initial_from_name(self.name)
        return LegacySpec.from_dict(data)


class LegacyRenderRequest(_Model):
    spec: LegacySpecIn
    variants: int = Field(0, ge=0, le=24)
