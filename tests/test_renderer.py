"""Tests for brandkit/renderer.py: marks, lockups, backgrounds, render options."""

import re
import xml.etree.ElementTree as ET

import pytest

from conftest import strip_ids, view_box

from brandkit.models import (
    BrandSpec, Colors, Fit, GradientStop, LegacySpec, LinearGradient, MarkStyle, Params,
    RenderOptions, SolidBackground, Template, Theme,
)
from brandkit.marks import mark_ribbon
from brandkit.renderer import (
    inverse_spec, lockup_horizontal, render_background, render_formats, render_legacy_mark,
    render_legacy_svgs, render_lockup, render_mark, render_monogram, render_svgs,
    render_wordmark, select_mark_renderer,
)

RED_TO_BLUE = LinearGradient(angle=90, stops=(GradientStop("#FF0000", 0), GradientStop("#0000FF", 1)))


class TestRenderMark:
    def test_mark_only_circle(self, spec):
        svg = render_lockup(spec, 256)
        assert svg.startswith('<svg width="256" height="256" viewBox="0 0 256 256" preserveAspectRatio="xMidYMid meet"')
        assert "<circle" in svg
        assert "<text" not in svg

    def test_deterministic(self, spec):
        s = spec.replace(background=RED_TO_BLUE, icon_id="lucide:bolt")
        assert strip_ids(render_mark(s, 256)) == strip_ids(render_mark(s, 256))

    def test_gradient_ids_unique_per_call(self, spec):
        s = spec.replace(background=RED_TO_BLUE)
        ids = {re.search(r'id="(grad_[0-9a-f]+)"', render_mark(s)).group(1) for _ in range(5)}
        assert len(ids) == 5

    def test_shape_centered_inside_padding(self, spec):
        svg = render_mark(spec, 256)
        assert '<g transform="translate(16, 16)"><g><circle cx="112" cy="112" r="112" fill="#FF8800"/></g></g>' in svg

    def test_rotation_group(self, spec):
        svg = render_mark(spec.replace(params=Params(rotate=30)), 200)
        assert 'transform="translate(100, 100) scale(1) rotate(30) translate(-100, -100)"' in svg

    def test_unknown_icon_renders_background_only(self, spec):
        svg = render_mark(spec.replace(icon_id="nope:missing"), 256)
        assert '<rect width="256" height="256" fill="#101010"/>' in svg
        assert "<path" not in svg and "<circle" not in svg
        assert svg.endswith("</svg>")

    def test_empty_icon_renders_background_only(self, spec):
        svg = render_mark(spec.replace(icon_id=""), 64)
        assert 'fill="#101010"' in svg
        assert "<circle" not in svg

    def test_out_of_range_params_clamped(self, spec):
        s = spec.replace(params=Params(rotate=200, stroke=100, padding=1000))
        svg = render_mark(s, 256)
        assert "rotate(45)" in svg
        assert 'stroke-width="8"' in svg
        assert "translate(40, 40)" in svg

    def test_nan_params(self, spec):
        svg = render_mark(spec.replace(params=Params(rotate=float("nan"), padding=float("nan"))), 256)
        assert "rotate(-45)" in svg
        assert "nan" not in svg.lower()

    def test_raw_icon_outline(self, raw_catalog, colors):
        s = BrandSpec(name="Acme", icon_id="lucide:sparkles", template=Template.MARK_ONLY, colors=colors)
        svg = render_mark(s, 256, catalog=raw_catalog)
        group = re.search(r'<g transform="scale\([^"]+\)[^>]*>', svg).group(0)
        assert 'fill="none"' in group
        assert 'stroke="#FF8800"' in group
        assert 'vector-effect="non-scaling-stroke"' in group

    def test_unsafe_color_never_emitted(self, spec):
        s = spec.replace(colors=Colors(primary='"/><script>', background="#000", text="#fff"))
        assert "<script" not in render_mark(s)


class TestRenderOptions:
    def test_slice_and_responsive(self, spec):
        svg = render_mark(spec, 128, RenderOptions(fit=Fit.SLICE, responsive=True))
        assert 'width="100%" height="100%" viewBox="0 0 128 128"' in svg
        assert 'preserveAspectRatio="xMidYMid slice"' in svg

    def test_without_background(self, spec):
        svg = render_mark(spec.replace(background=RED_TO_BLUE), 128, RenderOptions(include_background=False))
        assert "<rect" not in svg
        assert "linearGradient" not in svg
        assert "<circle" in svg

    def test_lockup_without_background(self, spec):
        s = spec.replace(template=Template.LEFT_LOCKUP)
        svg = render_lockup(s, 256, RenderOptions(include_background=False))
        assert "<rect" not in svg
        assert "<text" in svg


class TestBackground:
    def test_solid(self):
        assert render_background(SolidBackground("#ABCDEF"), 64) == '<rect width="64" height="64" fill="#ABCDEF"/>'

    def test_linear_gradient(self, spec):
        svg = render_mark(spec.replace(background=RED_TO_BLUE), 256)
        assert 'gradientTransform="rotate(90)"' in svg
        stops = re.findall(r'<stop offset="([0-9]+)%" stop-color="([^"]+)"/>', svg)
        assert stops == [("0", "#FF0000"), ("100", "#0000FF")]
        grad_id = re.search(r'id="(grad_[0-9a-f]+)"', svg).group(1)
        assert f'fill="url(#{grad_id})"' in svg

    def test_stops_sorted_and_clamped(self, spec):
        bg = LinearGradient(angle=45, stops=(GradientStop("#0000FF", 1.4), GradientStop("#FF0000", -0.2)))
        stops = re.findall(r'offset="([0-9]+)%" stop-color="([^"]+)"', render_mark(spec.replace(background=bg)))
        assert stops == [("0", "#FF0000"), ("100", "#0000FF")]

    def test_single_stop(self, spec):
        bg = LinearGradient(angle=0, stops=(GradientStop("#00FF00", 0.5),))
        svg = render_mark(spec.replace(background=bg))
        assert svg.count("<stop") == 1
        assert 'offset="50%"' in svg

    def test_no_stops_falls_back_to_solid(self, spec):
        svg = render_mark(spec.replace(background=LinearGradient(angle=10, stops=())), 256)
        assert "linearGradient" not in svg
        assert '<rect width="256" height="256" fill="#101010"/>' in svg


class TestRenderLockup:
    def test_text_only_when_no_icon(self, colors):
        svg = render_lockup(BrandSpec(name="Acme", icon_id="", colors=colors), 256)
        assert svg.count("<text") == 1
        assert "<g" not in svg
        # font 101px, 4 glyphs at 0.56em, 64px side padding, 48px top/bottom
        assert view_box(svg) == (pytest.approx(354.24), 197)
        assert 'x="177.12" y="98.5"' in svg
        assert 'text-anchor="middle"' in svg
        assert svg.startswith('<svg width="100%" height="100%"')

    def test_left_lockup(self, colors):
        s = BrandSpec(name="Foo", icon_id="shape:rounded-square", template=Template.LEFT_LOCKUP, colors=colors,
                      background=SolidBackground("#101010"))
        svg = render_lockup(s, 256)
        width, height = view_box(svg)
        mark_size = 302
        assert width > mark_size
        assert height == mark_size
        assert svg.count("<text") == 1
        assert '<g transform="translate(8, 0)">' in svg
        text_x = float(re.search(r'<text x="([0-9.]+)"', svg).group(1))
        assert text_x == 318
        assert text_x > 8 + mark_size - 8
        assert '<rect width="302" height="302" fill="#101010"/>' in svg

    def test_stacked(self, spec):
        svg = render_lockup(spec.replace(template=Template.STACKED), 256)
        assert view_box(svg) == (352, 453)
        assert '<g transform="translate(48, 0)">' in svg
        assert '<text x="176" y="320"' in svg

    def test_badge(self, spec):
        svg = render_lockup(spec.replace(template=Template.BADGE), 256)
        width, height = view_box(svg)
        assert (width, height) == (584, 256)
        assert 'rx="28" fill="#F3F4F6"' in svg
        pill = re.search(r'<rect x="([0-9.]+)" y="[0-9.]+" width="([0-9.]+)"', svg)
        assert float(pill.group(1)) + float(pill.group(2)) <= width

    def test_badge_grows_for_long_names(self, spec):
        svg = render_lockup(spec.replace(template=Template.BADGE, name="A" * 40), 256)
        width, _ = view_box(svg)
        assert width > 584

    def test_name_escaped(self, spec):
        svg = render_lockup(spec.replace(template=Template.LEFT_LOCKUP, name="R&D <Labs>"), 256)
        assert "R&amp;D &lt;Labs&gt;" in svg

    def test_no_name_with_icon_falls_back_to_mark(self, spec):
        svg = render_lockup(spec.replace(name="", template=Template.STACKED), 256)
        assert "<text" not in svg
        assert view_box(svg) == (256, 256)

    def test_string_template_accepted(self, spec):
        svg = render_lockup(spec.replace(template="stacked"), 256)
        assert view_box(svg) == (352, 453)

    def test_letter_spacing(self, colors):
        svg = render_wordmark(BrandSpec(name="Acme", colors=colors, params=Params(letter_spacing=4)), 256)
        assert 'letter-spacing="4"' in svg
        assert view_box(svg)[0] == pytest.approx(354.24 + 16)

    def test_gradient_lockup_canvas_uses_background_color(self, spec):
        svg = render_lockup(spec.replace(template=Template.LEFT_LOCKUP, background=RED_TO_BLUE), 256)
        assert svg.count('<rect width=') >= 2
        assert re.search(r'<svg [^>]*><rect width="[0-9.]+" height="302" fill="#101010"/>', svg)


class TestMonogramAndFormats:
    def test_monogram_uses_initial(self, colors):
        svg = render_monogram(BrandSpec(name="acme", colors=colors), 128)
        assert '>A</text>' in svg
        assert 'fill="#FF8800"' in svg
        assert 'width="128" height="128"' in svg

    def test_monogram_defaults_to_b(self):
        assert ">B</text>" in render_monogram(BrandSpec(), 64)

    def test_inverse_spec(self, spec):
        inv = inverse_spec(spec.replace(background=RED_TO_BLUE))
        assert inv.colors == Colors(primary="#FF8800", background="#FAFAFA", text="#101010")
        assert inv.background == SolidBackground("#FAFAFA")

    def test_render_formats(self, spec):
        formats = render_formats(spec)
        assert set(formats) == {"lockup", "mark_only", "inverse_lockup", "inverse_mark_only"}
        assert 'fill="#FAFAFA"' in formats["inverse_mark_only"]
        assert "<text" in formats["lockup"]

    def test_render_svgs(self, spec):
        result = render_svgs(spec)
        assert result["mark"] == result["lockup"]


class TestLegacy:
    def test_dispatch(self):
        assert select_mark_renderer(MarkStyle.RIBBON) is mark_ribbon

    @pytest.mark.parametrize("style", list(MarkStyle))
    def test_every_style_renders(self, style):
        svg = render_legacy_mark(LegacySpec(style=style, color="#22C55E"))
        assert svg.startswith('<svg width="256" height="256" viewBox="0 0 256 256"')
        assert 'fill="#22C55E"' in svg

    def test_unknown_style_string_falls_back(self):
        svg = render_legacy_mark(LegacySpec.from_dict({"style": "bogus"}))
        assert svg == render_legacy_mark(LegacySpec(style=MarkStyle.MINIMAL))

    def test_lockup_horizontal(self):
        spec = LegacySpec(theme=Theme.DARK)
        svg = lockup_horizontal(render_legacy_mark(spec), spec)
        assert 'viewBox="0 0 1024 256"' in svg
        assert ">Brand Name</text>" in svg
        assert 'fill="#FFFFFF"' in svg

    def test_render_legacy_svgs(self):
        result = render_legacy_svgs(LegacySpec(name="Acme"))
        assert result["mark"] in result["lockup"]


class TestWellFormed:
    NAME = "Ac\x0bme\x00 & <Co>"

    @pytest.mark.parametrize("template", list(Template))
    def test_lockups_parse_with_control_characters(self, spec, template):
        root = ET.fromstring(render_lockup(spec.replace(name=self.NAME, template=template), 256))
        assert root.tag == "{http://www.w3.org/2000/svg}svg"

    def test_wordmark_and_monogram_parse(self, colors):
        s = BrandSpec(name=self.NAME, initial="\x01", colors=colors)
        texts = [t.text for t in ET.fromstring(render_wordmark(s)).iter("{http://www.w3.org/2000/svg}text")]
        assert texts == ["Acme & <Co>"]
        ET.fromstring(render_monogram(s))
