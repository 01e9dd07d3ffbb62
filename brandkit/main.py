# brandkit/main.py
import logging
from dataclasses import asdict

import uvicorn
from fastapi import FastAPI, HTTPException, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from . import config
from .assets import generate_all_assets, generate_inverse_assets, render_for_context
from .exporter import create_brand_tokens, create_tailwind_config, create_web_manifest
from .geometry import build_variants
from .icons import IconCatalog, default_loader, runtime_catalog
from .models import (
    COLOR_SWATCHES, DEFAULT_LEGACY_SPEC, DEFAULT_SPEC, FONT_FAMILIES, GRADIENT_PRESETS, AssetContext,
)
from .renderer import render_legacy_mark, render_legacy_svgs, render_lockup, render_mark
from .schemas import AssetsRequest, BrandSpecIn, LegacyRenderRequest, RenderRequest, RuntimeIconsRequest
from .shapes import SHAPE_KINDS

logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
log = logging.getLogger(__name__)

app = FastAPI(title="Brand Kit Generator - SVG composition service")

# bundled lucide subset plus anything registered through POST /api/icons;
# replaced wholesale, never mutated
BASE_RUNTIME = runtime_catalog()
_runtime = BASE_RUNTIME


async def current_catalog() -> IconCatalog:
    """Runtime icons + built-ins + the external set (fetched once, off the event loop)."""
    loader = default_loader()
    if loader.loaded:
        return loader.catalog(_runtime)
    icons = await run_in_threadpool(loader.load)
    return _runtime.with_external(icons)


def svg_response(svg: str) -> Response:
    return Response(content=svg, media_type="image/svg+xml")


def error_response(e: Exception) -> JSONResponse:
    log.exception("Request failed")
    return JSONResponse(content={"status": "error", "message": str(e)}, status_code=500)


@app.get("/api/presets")
async def get_presets():
    """Defaults, gradient presets, font-family chains, shapes and swatches."""
    return JSONResponse(content={
        "status": "ok",
        "default_spec": DEFAULT_SPEC.to_dict(),
        "gradients": [
            {"type": g.type, "angle": g.angle, "stops": [{"color": s.color, "at": s.at} for s in g.stops]}
            for g in GRADIENT_PRESETS
        ],
        "fonts": {f.value: family for f, family in FONT_FAMILIES.items()},
        "contexts": [c.value for c in AssetContext],
        "shapes": [f"shape:{kind}" for kind in SHAPE_KINDS],
        "swatches": list(COLOR_SWATCHES),
        "legacy_default_spec": asdict(DEFAULT_LEGACY_SPEC),
    })


@app.get("/api/icons")
async def list_icons():
    catalog = await current_catalog()
    return JSONResponse(content={"status": "ok", "icons": catalog.ids()})


@app.post("/api/icons")
async def register_icons(req: RuntimeIconsRequest):
    """Inject icons (e.g. from a fetched catalog) ahead of every other layer."""
    global _runtime
    bad = [icon_id for icon_id in req.icons if ":" not in icon_id]
    if bad:
        raise HTTPException(status_code=400, detail=f"icon ids need a namespace: {', '.join(bad)}")
    before = len(_runtime.runtime)
    _runtime = _runtime.with_runtime(req.icons)
    added = len(_runtime.runtime) - before
    log.info("Registered %d runtime icons", added)
    return JSONResponse(content={"status": "ok", "registered": sorted(_runtime.runtime)})


@app.post("/api/render/mark")
async def mark(req: RenderRequest):
    try:
        catalog = await current_catalog()
        return svg_response(render_mark(req.spec.to_spec(), req.size, req.options(), catalog))
    except Exception as e:
        return error_response(e)


@app.post("/api/render/lockup")
async def lockup(req: RenderRequest):
    try:
        catalog = await current_catalog()
        return svg_response(render_lockup(req.spec.to_spec(), req.size, req.options(), catalog))
    except Exception as e:
        return error_response(e)


@app.post("/api/assets")
async def assets(req: AssetsRequest):
    """Full named asset set plus its inverse (background/text swapped)."""
    try:
        catalog = await current_catalog()
        spec = req.spec.to_spec()
        bundle = generate_all_assets(spec, req.size, catalog=catalog)
        inverse = generate_inverse_assets(spec, req.size, catalog=catalog)
        return JSONResponse(content={"status": "ok", "assets": bundle.as_dict(), "inverse": inverse.as_dict()})
    except Exception as e:
        return error_response(e)


@app.post("/api/assets/{context}")
async def asset_for_context(context: AssetContext, req: AssetsRequest):
    try:
        catalog = await current_catalog()
        svg = render_for_context(req.spec.to_spec(), context, req.size, req.hero_style, catalog)
        return svg_response(svg)
    except Exception as e:
        return error_response(e)


@app.post("/api/legacy/render")
async def legacy_render(req: LegacyRenderRequest):
    try:
        spec = req.spec.to_spec()
        result = render_legacy_svgs(spec)
        result["variants"] = [render_legacy_mark(v) for v in build_variants(spec, req.variants)]
        return JSONResponse(content={"status": "ok", **result})
    except Exception as e:
        return error_response(e)


@app.post("/api/export/documents")
async def export_documents(spec: BrandSpecIn):
    """Text documents of the brand kit (manifest, tokens, tailwind snippet)."""
    try:
        s = spec.to_spec()
        return JSONResponse(content={
            "status": "ok",
            "site.webmanifest": create_web_manifest(s),
            "brand.json": create_brand_tokens(s),
            "tailwind.brand.config.snippet.js": create_tailwind_config(s),
        })
    except Exception as e:
        return error_response(e)


def serve():
    """Console entry point: run the app under uvicorn."""
    uvicorn.run(app, host=config.HOST, port=config.PORT, log_level=config.LOG_LEVEL.lower())


if __name__ == "__main__":
    serve()
