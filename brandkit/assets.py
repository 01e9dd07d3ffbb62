# brandkit/assets.py
"""Asset bundle generation and per-context asset selection."""

import logging
from dataclasses import replace

from .icons import IconCatalog
from .models import AssetBundle, AssetContext, BrandSpec, Fit, Lockups, RenderOptions, Template, _enum
from .renderer import (
    DEFAULT_OPTIONS, inverse_spec, render_lockup, render_mark, render_monogram, render_wordmark,
)

log = logging.getLogger(__name__)

# render-time presentation per consuming surface
CONTEXT_OPTIONS = {
    AssetContext.FAVICON: RenderOptions(),
    AssetContext.APP_ICON: RenderOptions(fit=Fit.SLICE, responsive=True),
    AssetContext.SOCIAL_AVATAR: RenderOptions(include_background=False, responsive=True),
    AssetContext.WEBSITE_HEADER: RenderOptions(responsive=True),
    AssetContext.BUSINESS_CARD: RenderOptions(responsive=True),
    AssetContext.HERO_PREVIEW: RenderOptions(responsive=True),
    AssetContext.EXPORT: RenderOptions(),
}

# mark padding per surface; contexts not listed keep the spec's own padding
CONTEXT_PADDING = {
    AssetContext.FAVICON: 6,
    AssetContext.SOCIAL_AVATAR: 6,
    AssetContext.APP_ICON: 0,
}


def generate_all_assets(spec: BrandSpec, size=256, options: RenderOptions = None,
                        catalog: IconCatalog = None) -> AssetBundle:
    """
    Render every named variant once: the icon when an icon id is set,
    otherwise a monogram from the initial; the wordmark; three lockups.
    """
    options = options or DEFAULT_OPTIONS
    icon = monogram = None
    if spec.icon_id:
        icon = render_mark(replace(spec, template=Template.MARK_ONLY), size, options, catalog)
    else:
        monogram = render_monogram(spec, size, options)
    lockups = Lockups(
        left=render_lockup(replace(spec, template=Template.LEFT_LOCKUP), size, options, catalog),
        stacked=render_lockup(replace(spec, template=Template.STACKED), size, options, catalog),
        badge=render_lockup(replace(spec, template=Template.BADGE), size, options, catalog),
    )
    return AssetBundle(
        wordmark=render_wordmark(spec, size, options),
        lockups=lockups,
        icon=icon,
        monogram=monogram,
    )


def generate_inverse_assets(spec: BrandSpec, size=256, options: RenderOptions = None,
                            catalog: IconCatalog = None) -> AssetBundle:
    return generate_all_assets(inverse_spec(spec), size, options, catalog)


def _first(*candidates):
    for c in candidates:
        if c:
            return c
    return None


def select_for_context(bundle: AssetBundle, context, hero_style=None) -> str:
    """
    Pick the asset a surface should show.

    favicon / app-icon:  icon, monogram, wordmark
    social-avatar:       icon, monogram
    website-header:      left lockup when there is an icon, else wordmark
    business-card:       left lockup
    hero-preview:        icon for mark-only, else the matching lockup
    export:              the left lockup stands in for the whole bundle
    """
    context = _enum(AssetContext, context, AssetContext.EXPORT)
    if context in (AssetContext.FAVICON, AssetContext.APP_ICON):
        return _first(bundle.icon, bundle.monogram, bundle.wordmark)
    elif context is AssetContext.SOCIAL_AVATAR:
        # a bundle always carries one of the two
        return _first(bundle.icon, bundle.monogram) or bundle.wordmark
    elif context is AssetContext.WEBSITE_HEADER:
        return bundle.lockups.left if bundle.icon else bundle.wordmark
    elif context is AssetContext.BUSINESS_CARD:
        return bundle.lockups.left
    elif context is AssetContext.HERO_PREVIEW:
        style = _enum(Template, hero_style, Template.LEFT_LOCKUP)
        if style is Template.MARK_ONLY:
            return _first(bundle.icon, bundle.monogram)
        elif style is Template.STACKED:
            return bundle.lockups.stacked
        elif style is Template.BADGE:
            return bundle.lockups.badge
        return bundle.lockups.left
    elif context is AssetContext.EXPORT:
        return bundle.lockups.left
    raise AssertionError(f"unhandled context {context!r}")


def render_for_context(spec: BrandSpec, context, size=256, hero_style=None,
                       catalog: IconCatalog = None) -> str:
    """Generate the bundle with the context's render options and select from it."""
    context = _enum(AssetContext, context, AssetContext.EXPORT)
    log.debug("Rendering for context=%s", context.value)
    if context in CONTEXT_PADDING:
        spec = replace(spec, params=replace(spec.params, padding=CONTEXT_PADDING[context]))
    bundle = generate_all_assets(spec, size, CONTEXT_OPTIONS[context], catalog)
    return select_for_context(bundle, context, hero_style or spec.template)
