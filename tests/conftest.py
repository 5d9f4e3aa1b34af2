import pytest

from glyphfield.core.fields import PatternParams
from glyphfield.core.palettes import Palette


@pytest.fixture
def params():
    return PatternParams(scale=0.2, speed=5.0, width=60, height=30, density=0.3)


@pytest.fixture
def small_params():
    return PatternParams(scale=0.35, speed=7.0, width=12, height=7, density=0.8)


@pytest.fixture
def blocks():
    return Palette.preset("blocks")
