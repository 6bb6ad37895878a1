"""Dispatch from export kind to renderer adapter."""

from typing import Callable

from onepager.resume.flow import render_flow
from onepager.resume.models import ResumeDocument
from onepager.resume.raster import render_raster
from onepager.resume.render import Artifact, ExportKind, LayoutHints
from onepager.resume.vector import render_vector
from onepager.shared import EncodingFailureError, ExportError

Renderer = Callable[[ResumeDocument, LayoutHints], Artifact]

RENDERERS: dict[ExportKind, Renderer] = {
    ExportKind.PDF: render_vector,
    ExportKind.DOCX: render_flow,
    ExportKind.RASTER: render_raster,
}


def run_renderer(kind: ExportKind, document: ResumeDocument, hints: LayoutHints) -> Artifact:
    """Run one adapter; packer failures surface as EncodingFailureError."""
    renderer = RENDERERS[ExportKind(kind)]
    try:
        artifact = renderer(document, hints)
    except ExportError:
        raise
    except Exception as e:
        raise EncodingFailureError(ExportKind(kind).value, str(e)) from e

    if not artifact.data:
        raise EncodingFailureError(ExportKind(kind).value, "empty output")
    return artifact
