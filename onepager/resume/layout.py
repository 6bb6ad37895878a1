"""Auto-fit scale computation.

The engine knows nothing about resumes: it turns a measured natural content
height and the usable page height into one uniform shrink factor, and keeps
the committed value stable against sub-pixel remeasurement noise.
"""

import math
from typing import Callable

from onepager.config import PADDING_BOTTOM, PADDING_TOP, PAGE_HEIGHT, SCALE_TOLERANCE
from onepager.shared import Color, MeasurementUnavailableError, echo


def compute_scale(content_height: float | None, available_height: float) -> float:
    """Largest scale in (0, 1] at which the content fits the available height."""
    if content_height is None or not math.isfinite(content_height) or content_height <= 0:
        raise MeasurementUnavailableError(content_height)
    if not math.isfinite(available_height) or available_height <= 0:
        raise ValueError(f"Available height must be positive, got {available_height}")

    return min(1.0, available_height / content_height)


def available_height(container_height: float | None = None) -> float:
    """Usable page height: the sheet (capped at one page) minus fixed padding."""
    sheet = PAGE_HEIGHT
    if container_height:
        sheet = min(container_height, PAGE_HEIGHT)
    return sheet - (PADDING_TOP + PADDING_BOTTOM)


class AutoFit:
    """Holds the single committed scale for the current document state.

    ``measure`` must return a fresh natural content height on every call; no
    height is cached between recomputations.
    """

    def __init__(
        self,
        measure: Callable[[], float | None],
        tolerance: float = SCALE_TOLERANCE,
        verbose: bool = False,
    ):
        self.measure = measure
        self.tolerance = tolerance
        self.verbose = verbose
        self.container_height: float | None = None
        self._scale = 1.0

    @property
    def scale(self) -> float:
        return self._scale

    def content_changed(self) -> bool:
        return self.recompute()

    def viewport_resized(self, container_height: float | None) -> bool:
        self.container_height = container_height
        return self.recompute()

    def recompute(self) -> bool:
        """Re-measure and commit a new scale if it moved past the tolerance."""
        available = available_height(self.container_height)
        if available <= 0:
            if self.verbose:
                echo(
                    f"Skipping auto-fit update: no usable height in a "
                    f"{self.container_height}pt container",
                    Color.WARNING,
                )
            return False

        try:
            candidate = compute_scale(self.measure(), available)
        except MeasurementUnavailableError as e:
            if self.verbose:
                echo(f"Skipping auto-fit update: {e}", Color.WARNING)
            return False

        return self.commit(candidate)

    def commit(self, candidate: float) -> bool:
        if abs(candidate - self._scale) <= self.tolerance:
            return False

        if self.verbose:
            echo(f"Auto-fit: {self._scale:.0%} -> {candidate:.0%}", Color.INFO)
        self._scale = candidate
        return True
