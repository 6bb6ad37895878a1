"""Rasterized PDF export.

A bitmap of the displayed preview is scaled to the page width and drawn once
per page, shifted up by one page height each time, so consecutive pages show
consecutive bands of the same image. This path never loses content, even
when the auto-fit scale could not compress the layout onto one page.
"""

import math
from dataclasses import dataclass
from io import BytesIO

from PIL import Image
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas
from tqdm import tqdm

from onepager.config import PAGE_HEIGHT, PAGE_WIDTH
from onepager.resume.models import ResumeDocument
from onepager.resume.preview import Preview
from onepager.resume.render import (
    PDF_MEDIA_TYPE,
    Artifact,
    ExportKind,
    LayoutHints,
    artifact_filename,
)
from onepager.shared import CaptureFailureError, Color, echo

# Overflow below this fraction of a page is rounding noise, not a new page.
BAND_FUZZ = 1e-6


@dataclass(frozen=True)
class Tile:
    page: int
    offset: float
    y: float
    width: float
    height: float


def plan_tiles(
    image_width: int,
    image_height: int,
    page_width: float = PAGE_WIDTH,
    page_height: float = PAGE_HEIGHT,
) -> list[Tile]:
    """Place an image of the given pixel size across page-height bands.

    ``offset`` is where the page's band starts in the page-width-scaled image,
    measured from its top; ``y`` is the image origin in PDF coordinates.
    """
    if image_width <= 0 or image_height <= 0:
        raise CaptureFailureError(f"invalid bitmap size {image_width}x{image_height}")

    scaled_height = image_height * page_width / image_width
    pages = max(1, math.ceil(scaled_height / page_height - BAND_FUZZ))

    return [
        Tile(
            page=k,
            offset=k * page_height,
            y=page_height - scaled_height + k * page_height,
            width=page_width,
            height=scaled_height,
        )
        for k in range(pages)
    ]


class RasterPacker:
    """Draws one bitmap across as many A4 pages as its height needs."""

    def __init__(
        self,
        page_width: float = PAGE_WIDTH,
        page_height: float = PAGE_HEIGHT,
        verbose: bool = False,
    ):
        self.page_width = page_width
        self.page_height = page_height
        self.verbose = verbose

    def pack(self, image: Image.Image, title: str = "") -> bytes:
        tiles = plan_tiles(image.width, image.height, self.page_width, self.page_height)
        reader = ImageReader(image.convert("RGB"))

        buffer = BytesIO()
        c = canvas.Canvas(buffer, pagesize=(self.page_width, self.page_height))
        if title:
            c.setTitle(f"{title} - Resume")
            c.setAuthor(title)

        for tile in tqdm(tiles, desc="Tiling pages", disable=not self.verbose):
            c.drawImage(reader, 0, tile.y, tile.width, tile.height)
            c.showPage()

        c.save()
        if self.verbose:
            echo(f"Raster PDF tiled across {len(tiles)} page(s)", Color.INFO)
        return buffer.getvalue()


def _capture(document: ResumeDocument, hints: LayoutHints) -> Image.Image:
    if hints.capture is not None:
        image = hints.capture()
    else:
        image = Preview(document, hints.scale).capture(hints.dpi)

    if image is None or image.width == 0 or image.height == 0:
        raise CaptureFailureError("empty bitmap")
    return image


def render_raster(document: ResumeDocument, hints: LayoutHints) -> Artifact:
    """Render the captured preview as an image-only PDF."""
    image = _capture(document, hints)
    data = RasterPacker(verbose=hints.verbose).pack(image, title=document.name.strip())
    return Artifact(
        artifact_filename(document.name, ExportKind.RASTER), data, PDF_MEDIA_TYPE
    )
