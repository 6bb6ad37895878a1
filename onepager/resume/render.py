"""Types shared by the three export adapters."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable

from PIL import Image

from onepager.config import DEFAULT_DPI
from onepager.resume.normalize import safe_filename


class ExportKind(str, Enum):
    PDF = "pdf"
    DOCX = "docx"
    RASTER = "raster"


PDF_MEDIA_TYPE = "application/pdf"
DOCX_MEDIA_TYPE = (
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
)

FILENAME_SUFFIXES = {
    ExportKind.PDF: "_Resume.pdf",
    ExportKind.DOCX: "_Resume.docx",
    ExportKind.RASTER: "_Resume_Image.pdf",
}


@dataclass
class LayoutHints:
    """What an adapter may know about the current layout besides the model.

    ``scale`` is the committed auto-fit scale; only the vector and raster
    paths use it. ``capture`` overrides how the raster path obtains its
    bitmap.
    """

    scale: float = 1.0
    dpi: int = DEFAULT_DPI
    capture: Callable[[], Image.Image | None] | None = None
    verbose: bool = False


@dataclass(frozen=True)
class Artifact:
    filename: str
    data: bytes
    media_type: str

    def write(self, directory: Path | str) -> Path:
        path = Path(directory) / self.filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.data)
        return path


def artifact_filename(name: str, kind: ExportKind) -> str:
    return f"{safe_filename(name)}{FILENAME_SUFFIXES[kind]}"
