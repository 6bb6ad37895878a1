"""The live preview: what the editor shows next to the form.

The preview is the vector page tree laid out without pagination. It is the
measurement source for the auto-fit engine and the capture source for the
raster export.
"""

import fitz
from PIL import Image

from onepager.config import DEFAULT_DPI
from onepager.resume.models import ResumeDocument
from onepager.resume.vector import build_page, draw_page, measure_page
from onepager.shared import CaptureFailureError


class Preview:
    """Unpaginated rendering of a document at a given auto-fit scale."""

    def __init__(self, document: ResumeDocument, scale: float = 1.0):
        self.document = document
        self.scale = scale

    def measure(self) -> float:
        """Natural (scale 1) height of the content, excluding page padding."""
        return measure_page(build_page(self.document, 1.0))

    def region_height(self) -> float:
        """Height of the displayed sheet: one page, or taller if content overflows."""
        page = build_page(self.document, self.scale)
        content = measure_page(page)
        padding = page.metrics.padding_top + page.metrics.padding_bottom
        return max(page.height, content + padding)

    def capture(self, dpi: int = DEFAULT_DPI) -> Image.Image:
        """Rasterize the displayed sheet into an RGB bitmap."""
        try:
            page = build_page(self.document, self.scale)
            data, _ = draw_page(page, height=self.region_height())
            with fitz.open(stream=data, filetype="pdf") as doc:
                if doc.page_count == 0:
                    raise CaptureFailureError("preview produced no page")
                pix = doc[0].get_pixmap(dpi=dpi, alpha=False)
        except CaptureFailureError:
            raise
        except Exception as e:
            raise CaptureFailureError(str(e)) from e

        if pix.width == 0 or pix.height == 0:
            raise CaptureFailureError("empty bitmap")

        return Image.frombytes("RGB", (pix.width, pix.height), pix.samples)
