"""Shared fixtures for brandkit tests."""

import re

import pytest

from brandkit.icons import DEFAULT_CATALOG
from brandkit.models import BrandSpec, Colors, SolidBackground, Template

SPARKLES_RAW = '<path d="M12 3l1.9 5.8L20 10l-6.1 1.9L12 18l-1.9-6.1L4 10l6.1-1.2z"/>'


@pytest.fixture
def colors():
    return Colors(primary="#FF8800", background="#101010", text="#FAFAFA")


@pytest.fixture
def spec(colors):
    """Named spec with a procedural circle."""
    return BrandSpec(name="Acme", icon_id="shape:circle", template=Template.MARK_ONLY, colors=colors,
                     background=SolidBackground(colors.background))


@pytest.fixture
def raw_catalog():
    """Catalog whose runtime layer overrides lucide:sparkles with raw outline markup."""
    return DEFAULT_CATALOG.with_runtime({"lucide:sparkles": {"viewBox": "0 0 24 24", "raw": SPARKLES_RAW}})


def strip_ids(svg):
    return re.sub(r"grad_[0-9a-f]+", "grad_X", svg)


def view_box(svg):
    m = re.search(r'viewBox="0 0 ([0-9.]+) ([0-9.]+)"', svg)
    return float(m.group(1)), float(m.group(2))
