"""Editing session: the document, its auto-fit scale, and export control.

Edits mutate the document in place and trigger a fresh auto-fit pass. The
export and suggestion paths only read the document; exports run on a deep
copy in the default executor, one in-flight export per artifact kind.
"""

import asyncio

from pydantic import BaseModel

from onepager.config import DEFAULT_DPI
from onepager.resume.assist import Assistant, AssistTarget
from onepager.resume.export import run_renderer
from onepager.resume.layout import AutoFit
from onepager.resume.models import (
    REQUIRED_SECTIONS,
    SECTION_ENTRIES,
    TEXT_FIELDS,
    ResumeDocument,
)
from onepager.resume.normalize import split_lines
from onepager.resume.preview import Preview
from onepager.resume.render import Artifact, ExportKind, LayoutHints
from onepager.shared import (
    Color,
    CollaboratorFailureError,
    UnknownFieldError,
    UnknownSectionError,
    echo,
)

BULLET_SECTIONS = ("experiences", "projects")


class EditingSession:
    def __init__(
        self,
        document: ResumeDocument | None = None,
        assistant: Assistant | None = None,
        dpi: int = DEFAULT_DPI,
        verbose: bool = False,
    ):
        self.document = document if document is not None else ResumeDocument.default()
        self.assistant = assistant
        self.dpi = dpi
        self.verbose = verbose
        self.autofit = AutoFit(self.measure, verbose=verbose)
        self._in_flight: set[ExportKind] = set()
        self.autofit.content_changed()

    @property
    def scale(self) -> float:
        return self.autofit.scale

    def measure(self) -> float:
        """Fresh natural content height of the current document."""
        return Preview(self.document).measure()

    def resize(self, container_height: float | None) -> bool:
        return self.autofit.viewport_resized(container_height)

    def is_exporting(self, kind: ExportKind | str) -> bool:
        return ExportKind(kind) in self._in_flight

    # Field-level edits

    def set_field(self, name: str, value: str) -> None:
        if name not in TEXT_FIELDS:
            raise UnknownFieldError("ResumeDocument", name)
        setattr(self.document, name, value)
        self.autofit.content_changed()

    def _entries(self, section: str) -> list:
        if section not in SECTION_ENTRIES:
            raise UnknownSectionError(section)
        return getattr(self.document, section)

    def update_entry(self, section: str, index: int, field: str, value) -> None:
        """Replace one list element with a validated copy; siblings are untouched."""
        entries = self._entries(section)
        entry: BaseModel = entries[index]
        if field not in type(entry).model_fields:
            raise UnknownFieldError(type(entry).__name__, field)
        entries[index] = type(entry).model_validate({**entry.model_dump(), field: value})
        self.autofit.content_changed()

    def add_entry(self, section: str) -> int:
        entries = self._entries(section)
        entries.append(SECTION_ENTRIES[section]())
        self.autofit.content_changed()
        return len(entries) - 1

    def remove_entry(self, section: str, index: int) -> None:
        entries = self._entries(section)
        if section in REQUIRED_SECTIONS and len(entries) <= 1:
            raise ValueError(f"{section} must keep at least one entry")
        del entries[index]
        self.autofit.content_changed()

    def _bullets(self, section: str, index: int) -> list[str]:
        if section not in BULLET_SECTIONS:
            raise UnknownSectionError(section)
        return list(self._entries(section)[index].bullets)

    def update_bullet(self, section: str, index: int, bullet: int, value: str) -> None:
        bullets = self._bullets(section, index)
        bullets[bullet] = value
        self.update_entry(section, index, "bullets", bullets)

    def add_bullet(self, section: str, index: int, value: str = "") -> None:
        bullets = self._bullets(section, index)
        bullets.append(value)
        self.update_entry(section, index, "bullets", bullets)

    def remove_bullet(self, section: str, index: int, bullet: int) -> None:
        bullets = self._bullets(section, index)
        del bullets[bullet]
        self.update_entry(section, index, "bullets", bullets)

    # Export

    def hints(self) -> LayoutHints:
        return LayoutHints(scale=self.autofit.scale, dpi=self.dpi, verbose=self.verbose)

    async def export(self, kind: ExportKind | str) -> Artifact | None:
        """Produce one artifact, or None if an export of this kind is running."""
        kind = ExportKind(kind)
        if kind in self._in_flight:
            if self.verbose:
                echo(f"Ignoring {kind.value} export: one is already in progress", Color.WARNING)
            return None

        self._in_flight.add(kind)
        try:
            snapshot = self.document.model_copy(deep=True)
            hints = self.hints()
            loop = asyncio.get_running_loop()
            artifact = await loop.run_in_executor(None, run_renderer, kind, snapshot, hints)
        finally:
            self._in_flight.discard(kind)

        if self.verbose:
            echo(f"Exported {artifact.filename} ({len(artifact.data)} bytes)", Color.SUCCESS)
        return artifact

    # Suggestions

    async def suggest(self, target: AssistTarget | str, index: int = 0, extra: str = "") -> str:
        if self.assistant is None:
            raise CollaboratorFailureError("no assistant configured")

        snapshot = self.document.model_copy(deep=True)
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None, self.assistant.suggest, snapshot, AssistTarget(target), index, extra
        )

    def apply_suggestion(self, target: AssistTarget | str, text: str, index: int = 0) -> bool:
        """Write a suggestion into the document; blank suggestions are ignored."""
        target = AssistTarget(target)
        text = (text or "").strip()
        if not text:
            return False

        if target is AssistTarget.EXPERIENCE:
            self.update_entry("experiences", index, "bullets", split_lines(text))
        else:
            self.set_field(target.value, text)
        return True
