"""DOCX rendering as a flow of paragraph blocks.

The flow path has no page concept: headings are bold runs, list items are
literal bullet-prefixed lines, and pagination is left to the word processor.
"""

from dataclasses import dataclass, field
from io import BytesIO

import docx
from docx.shared import Mm, Pt

from onepager.resume.models import ResumeDocument
from onepager.resume.normalize import (
    award_list,
    bullet_list,
    contact_line,
    skill_list,
    split_lines,
    visible_custom_sections,
    visible_projects,
)
from onepager.resume.render import (
    DOCX_MEDIA_TYPE,
    Artifact,
    ExportKind,
    LayoutHints,
    artifact_filename,
)
from onepager.shared import Color, echo


A4_WIDTH = Mm(210)
A4_HEIGHT = Mm(297)
NAME_SIZE = 16
BULLET = "• "
DASH = " — "


@dataclass
class Run:
    text: str
    bold: bool = False
    size: float | None = None


@dataclass
class FlowBlock:
    kind: str
    runs: list[Run] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)


def _heading(label: str) -> FlowBlock:
    return FlowBlock("heading", [Run(label, bold=True)])


def _body(text: str) -> FlowBlock:
    return FlowBlock("body", [Run(text)])


def _bullet(text: str) -> FlowBlock:
    return FlowBlock("bullet", [Run(f"{BULLET}{text}")])


def _entry(primary: str, secondary: str, detail: str) -> FlowBlock:
    runs = [Run(primary, bold=True)]
    if secondary:
        runs.append(Run(f"{DASH}{secondary}"))
    if detail:
        runs.append(Run(f" ({detail})"))
    return FlowBlock("entry", runs)


def build_blocks(document: ResumeDocument) -> list[FlowBlock]:
    """Flatten the document into ordered paragraph blocks."""
    blocks = [FlowBlock("name", [Run(document.name.strip(), bold=True, size=NAME_SIZE)])]

    if document.title.strip():
        blocks.append(FlowBlock("title", [Run(document.title.strip(), bold=True)]))
    contact = contact_line(document)
    if contact:
        blocks.append(FlowBlock("contact", [Run(contact)]))

    if document.summary.strip():
        blocks += [_heading("Summary"), _body(document.summary.strip())]

    blocks += [_heading("Skills"), _body(", ".join(skill_list(document)))]

    blocks.append(_heading("Experience"))
    for experience in document.experiences:
        blocks.append(
            _entry(
                experience.title.strip() or "Role",
                experience.company.strip() or "Company",
                experience.dates.strip(),
            )
        )
        blocks += [_bullet(bullet) for bullet in bullet_list(experience.bullets)]

    projects = visible_projects(document)
    if projects:
        blocks.append(_heading("Projects"))
        for project in projects:
            blocks.append(_entry(project.name.strip() or "Project", project.link.strip(), ""))
            blocks += [_bullet(bullet) for bullet in bullet_list(project.bullets)]

    blocks.append(_heading("Education"))
    for education in document.education:
        blocks.append(
            _entry(
                education.school.strip() or "School",
                education.location.strip(),
                education.year.strip(),
            )
        )
        if education.degree.strip():
            blocks.append(_body(education.degree.strip()))

    for section in visible_custom_sections(document):
        blocks.append(_heading(section.title.strip() or "Additional Section"))
        lines = split_lines(section.content)
        if len(lines) > 1:
            blocks += [_bullet(line) for line in lines]
        elif lines:
            blocks.append(_body(lines[0]))

    awards = award_list(document)
    if awards:
        blocks.append(_heading("Awards"))
        blocks += [_bullet(award) for award in awards]

    return blocks


def section_labels(blocks: list[FlowBlock]) -> list[str]:
    return [block.text for block in blocks if block.kind == "heading"]


def pack_blocks(blocks: list[FlowBlock], title: str = "") -> bytes:
    """Write the blocks into an A4 .docx and return its bytes."""
    document = docx.Document()
    section = document.sections[0]
    section.page_width = A4_WIDTH
    section.page_height = A4_HEIGHT
    if title:
        document.core_properties.title = f"{title} - Resume"
        document.core_properties.author = title

    for block in blocks:
        paragraph = document.add_paragraph()
        for run in block.runs:
            docx_run = paragraph.add_run(run.text)
            docx_run.bold = run.bold
            if run.size:
                docx_run.font.size = Pt(run.size)

    buffer = BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def render_flow(document: ResumeDocument, hints: LayoutHints) -> Artifact:
    """Render the document as a DOCX flow; the auto-fit scale is ignored."""
    blocks = build_blocks(document)
    data = pack_blocks(blocks, title=document.name.strip())

    if hints.verbose:
        echo(f"DOCX packed with {len(blocks)} paragraph(s)", Color.INFO)

    return Artifact(artifact_filename(document.name, ExportKind.DOCX), data, DOCX_MEDIA_TYPE)
