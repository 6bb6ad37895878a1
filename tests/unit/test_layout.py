"""Unit tests for the auto-fit scale engine."""

import math

import pytest

from onepager.config import PADDING_BOTTOM, PADDING_TOP, PAGE_HEIGHT, SCALE_TOLERANCE
from onepager.resume.layout import AutoFit, available_height, compute_scale
from onepager.shared import MeasurementUnavailableError


@pytest.mark.unit
@pytest.mark.parametrize(
    "content, available",
    [(100, 800), (800, 800), (1600, 800), (12345.6, 791.9), (1e9, 1), (0.001, 5)],
)
def test_compute_scale_formula_and_range(content, available):
    scale = compute_scale(content, available)

    assert scale == min(1, available / content)
    assert 0 < scale <= 1
    assert scale * content <= available + 1e-9


@pytest.mark.unit
def test_content_that_fits_is_never_magnified():
    assert compute_scale(400, 800) == 1.0


@pytest.mark.unit
@pytest.mark.parametrize("content", [0, -5, None, math.nan, math.inf])
def test_compute_scale_rejects_unmeasurable_content(content):
    with pytest.raises(MeasurementUnavailableError):
        compute_scale(content, 800)


@pytest.mark.unit
def test_compute_scale_rejects_bad_available_height():
    with pytest.raises(ValueError):
        compute_scale(100, 0)


@pytest.mark.unit
def test_available_height_caps_container_at_one_page():
    padding = PADDING_TOP + PADDING_BOTTOM
    assert available_height() == pytest.approx(PAGE_HEIGHT - padding)
    assert available_height(PAGE_HEIGHT * 3) == pytest.approx(PAGE_HEIGHT - padding)
    assert available_height(600) == pytest.approx(600 - padding)


class FakeMeasure:
    """Returns queued heights, one per measurement."""

    def __init__(self, *heights):
        self.heights = list(heights)
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return self.heights.pop(0)


@pytest.mark.unit
def test_autofit_commits_significant_change():
    available = available_height()
    autofit = AutoFit(FakeMeasure(available * 2))

    assert autofit.scale == 1.0
    assert autofit.content_changed() is True
    assert autofit.scale == pytest.approx(0.5)


@pytest.mark.unit
def test_autofit_ignores_changes_within_tolerance():
    available = available_height()
    # Second measurement yields a scale 0.3% above the committed one.
    measure = FakeMeasure(available * 2, available / (0.5 * 1.003))
    autofit = AutoFit(measure)

    autofit.content_changed()
    committed = autofit.scale

    assert autofit.content_changed() is False
    assert autofit.scale == committed
    assert measure.calls == 2
    assert SCALE_TOLERANCE == 0.01


@pytest.mark.unit
def test_autofit_skips_update_without_measurement():
    available = available_height()
    autofit = AutoFit(FakeMeasure(available * 4, 0, None))
    autofit.recompute()
    committed = autofit.scale

    assert autofit.recompute() is False
    assert autofit.recompute() is False
    assert autofit.scale == committed
    assert math.isfinite(autofit.scale)


@pytest.mark.unit
def test_autofit_remeasures_on_resize():
    measure = FakeMeasure(1000.0, 1000.0)
    autofit = AutoFit(measure)
    autofit.content_changed()
    full_page_scale = autofit.scale

    assert autofit.viewport_resized(500) is True
    assert autofit.container_height == 500
    assert autofit.scale < full_page_scale
    assert autofit.scale == pytest.approx(available_height(500) / 1000.0)
    assert measure.calls == 2


@pytest.mark.unit
@pytest.mark.parametrize("container_height", [40, PADDING_TOP + PADDING_BOTTOM])
def test_autofit_keeps_scale_when_container_has_no_usable_height(container_height):
    measure = FakeMeasure(available_height() * 2)
    autofit = AutoFit(measure)
    autofit.content_changed()
    committed = autofit.scale

    assert autofit.viewport_resized(container_height) is False
    assert autofit.scale == committed
    assert measure.calls == 1
