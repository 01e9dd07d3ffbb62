"""Asset bundles and per-context selection."""

import pytest

from conftest import strip_ids, view_box

from brandkit.assets import generate_all_assets, generate_inverse_assets, render_for_context, select_for_context
from brandkit.models import AssetBundle, AssetContext, BrandSpec, LinearGradient, GradientStop, Lockups, Template

BUNDLE = AssetBundle(
    wordmark="WORD",
    lockups=Lockups(left="LEFT", stacked="STACKED", badge="BADGE"),
    icon="ICON",
)
MONOGRAM_BUNDLE = AssetBundle(
    wordmark="WORD",
    lockups=Lockups(left="WORD", stacked="WORD", badge="WORD"),
    monogram="MONO",
)


class TestGenerate:
    def test_icon_bundle(self, spec):
        bundle = generate_all_assets(spec, 256)
        assert bundle.icon is not None
        assert bundle.monogram is None
        assert "<circle" in bundle.icon
        assert view_box(bundle.lockups.stacked) == (352, 453)
        assert view_box(bundle.lockups.badge) == (584, 256)
        assert "<text" in bundle.wordmark and "<circle" not in bundle.wordmark

    def test_monogram_bundle(self, colors):
        bundle = generate_all_assets(BrandSpec(name="Zeta", colors=colors), 128)
        assert bundle.icon is None
        assert ">Z</text>" in bundle.monogram
        assert bundle.lockups.left == bundle.wordmark

    def test_as_dict_keys(self, spec):
        keys = set(generate_all_assets(spec).as_dict())
        assert keys == {"icon", "wordmark", "monogram", "lockup-left", "lockup-stacked", "lockup-badge"}

    def test_template_of_spec_is_ignored(self, spec):
        a = generate_all_assets(spec.replace(template=Template.BADGE))
        b = generate_all_assets(spec.replace(template=Template.STACKED))
        assert a == b

    def test_deterministic_with_gradient(self, spec):
        bg = LinearGradient(angle=135, stops=(GradientStop("#111111", 0), GradientStop("#333333", 1)))
        s = spec.replace(background=bg)
        first = {k: v and strip_ids(v) for k, v in generate_all_assets(s).as_dict().items()}
        second = {k: v and strip_ids(v) for k, v in generate_all_assets(s).as_dict().items()}
        assert first == second

    def test_inverse_swaps_colors(self, spec):
        inverse = generate_inverse_assets(spec, 256)
        assert '<rect width="256" height="256" fill="#FAFAFA"/>' in inverse.icon
        assert 'fill="#101010" dominant-baseline' in inverse.lockups.left
        # primary is kept
        assert 'fill="#FF8800"' in inverse.icon


class TestSelect:
    @pytest.mark.parametrize("context, expected", [
        (AssetContext.FAVICON, "ICON"),
        (AssetContext.APP_ICON, "ICON"),
        (AssetContext.SOCIAL_AVATAR, "ICON"),
        (AssetContext.WEBSITE_HEADER, "LEFT"),
        (AssetContext.BUSINESS_CARD, "LEFT"),
        (AssetContext.EXPORT, "LEFT"),
    ])
    def test_icon_bundle(self, context, expected):
        assert select_for_context(BUNDLE, context) == expected

    @pytest.mark.parametrize("context, expected", [
        ("favicon", "MONO"),
        ("app-icon", "MONO"),
        ("social-avatar", "MONO"),
        ("website-header", "WORD"),
    ])
    def test_monogram_bundle(self, context, expected):
        assert select_for_context(MONOGRAM_BUNDLE, context) == expected

    @pytest.mark.parametrize("style, expected", [
        (Template.MARK_ONLY, "ICON"),
        (Template.STACKED, "STACKED"),
        (Template.BADGE, "BADGE"),
        (Template.LEFT_LOCKUP, "LEFT"),
        (None, "LEFT"),
        ("bogus", "LEFT"),
    ])
    def test_hero_preview(self, style, expected):
        assert select_for_context(BUNDLE, AssetContext.HERO_PREVIEW, style) == expected

    def test_hero_mark_only_without_icon(self):
        assert select_for_context(MONOGRAM_BUNDLE, "hero-preview", "mark-only") == "MONO"

    def test_unknown_context_is_export(self):
        assert select_for_context(BUNDLE, "poster") == "LEFT"


class TestRenderForContext:
    def test_app_icon_fills_frame(self, spec):
        svg = render_for_context(spec, AssetContext.APP_ICON, 128)
        assert 'preserveAspectRatio="xMidYMid slice"' in svg
        assert 'width="100%" height="100%" viewBox="0 0 128 128"' in svg

    def test_social_avatar_has_transparent_background(self, spec):
        svg = render_for_context(spec, AssetContext.SOCIAL_AVATAR, 128)
        assert "<rect" not in svg
        assert "<circle" in svg

    def test_favicon_fixed_size(self, spec):
        svg = render_for_context(spec, "favicon", 64)
        assert svg.startswith('<svg width="64" height="64"')

    def test_hero_follows_spec_template(self, spec):
        svg = render_for_context(spec.replace(template=Template.STACKED), AssetContext.HERO_PREVIEW, 256)
        assert view_box(svg) == (352, 453)

    def test_hero_style_override(self, spec):
        svg = render_for_context(spec, AssetContext.HERO_PREVIEW, 256, hero_style=Template.BADGE)
        assert view_box(svg) == (584, 256)

    def test_app_icon_has_no_padding(self, spec):
        svg = render_for_context(spec, AssetContext.APP_ICON, 128)
        assert '<g transform="translate(0, 0)"><g><circle cx="64" cy="64" r="64"' in svg

    @pytest.mark.parametrize("context", [AssetContext.FAVICON, AssetContext.SOCIAL_AVATAR])
    def test_small_surfaces_use_tight_padding(self, spec, context):
        svg = render_for_context(spec, context, 64)
        assert '<g transform="translate(6, 6)"><g><circle cx="26" cy="26" r="26"' in svg

    def test_other_contexts_keep_spec_padding(self, spec):
        svg = render_for_context(spec.replace(template=Template.STACKED), AssetContext.HERO_PREVIEW, 256)
        assert '<g transform="translate(16, 16)">' in svg
