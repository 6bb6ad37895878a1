"""Single-page resume layout and export.

Holds the editable document model, the auto-fit scale engine, and the
vector PDF, DOCX and raster PDF export adapters.
"""

from onepager.resume.models import ResumeDocument
from onepager.resume.layout import AutoFit, compute_scale
from onepager.resume.render import Artifact, ExportKind, LayoutHints
from onepager.resume.export import RENDERERS, run_renderer
from onepager.resume.session import EditingSession
from onepager.resume.assist import Assistant, AssistTarget

__all__ = [
    "ResumeDocument",
    "AutoFit",
    "compute_scale",
    "Artifact",
    "ExportKind",
    "LayoutHints",
    "RENDERERS",
    "run_renderer",
    "EditingSession",
    "Assistant",
    "AssistTarget",
]
