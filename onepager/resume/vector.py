"""Vector PDF rendering for a single auto-fit page.

Builds a declarative page tree from the resume model, with every linear
dimension (font size, padding, gap, rule width) multiplied by the committed
scale, then draws that tree with reportlab onto exactly one A4 page. The
renderer trusts the scale it is given and never re-measures.
"""

from dataclasses import dataclass, field, fields, replace
from io import BytesIO
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_LEFT, TA_RIGHT
from reportlab.lib.styles import ParagraphStyle
from reportlab.pdfgen import canvas
from reportlab.platypus import Frame, Paragraph, Spacer, Table, TableStyle
from reportlab.platypus.flowables import Flowable, HRFlowable

from onepager.config import PADDING_BOTTOM, PADDING_H, PADDING_TOP, PAGE_HEIGHT, PAGE_WIDTH
from onepager.resume.models import CustomSection, Education, Experience, Project, ResumeDocument
from onepager.resume.normalize import (
    CONTACT_SEPARATOR,
    ContactItem,
    award_list,
    bullet_list,
    contact_items,
    normalize_link,
    skill_list,
    split_lines,
    visible_custom_sections,
    visible_projects,
)
from onepager.resume.render import (
    PDF_MEDIA_TYPE,
    Artifact,
    ExportKind,
    LayoutHints,
    artifact_filename,
)
from onepager.shared import Color, echo


FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
LINK_COLOR = "#2563eb"
RULE_COLOR = "#e2e8f0"

# Height handed to wrap() when measuring; large enough to never constrain.
UNBOUNDED = PAGE_HEIGHT * 1000


@dataclass(frozen=True)
class TextStyle:
    size: float
    line_height: float = 1.2
    color: str = "#0f172a"
    bold: bool = False
    space_before: float = 0
    space_after: float = 0
    indent: float = 0
    align: str = "left"
    uppercase: bool = False

    def scaled(self, scale: float) -> "TextStyle":
        return replace(
            self,
            size=self.size * scale,
            space_before=self.space_before * scale,
            space_after=self.space_after * scale,
            indent=self.indent * scale,
        )


@dataclass(frozen=True)
class Metrics:
    padding_top: float = PADDING_TOP
    padding_bottom: float = PADDING_BOTTOM
    padding_h: float = PADDING_H
    header_rule: float = 2
    header_padding: float = 8
    header_gap: float = 10
    section_gap: float = 8
    role_gap: float = 2
    education_gap: float = 5
    column_gap: float = 4

    def scaled(self, scale: float) -> "Metrics":
        return replace(self, **{f.name: getattr(self, f.name) * scale for f in fields(self)})


NOMINAL_STYLES = {
    "name": TextStyle(20, bold=True, space_after=4),
    "title": TextStyle(11, color="#1e293b", bold=True, space_after=4),
    "contact": TextStyle(9, color="#475569"),
    "section_title": TextStyle(10, color="#1e293b", bold=True, space_after=4, uppercase=True),
    "paragraph": TextStyle(9, line_height=1.4),
    "role": TextStyle(9),
    "role_detail": TextStyle(8.5, color="#64748b", space_before=2),
    "role_dates": TextStyle(8.5, color="#475569", bold=True, align="right"),
    "project_link": TextStyle(8.5, color=LINK_COLOR, align="right"),
    "list_item": TextStyle(8.5, line_height=1.3, space_after=0.5, indent=10),
}

NOMINAL_METRICS = Metrics()


def scaled_styles(scale: float) -> dict[str, TextStyle]:
    return {name: style.scaled(scale) for name, style in NOMINAL_STYLES.items()}


@dataclass
class Text:
    text: str
    style: str
    href: str | None = None


@dataclass
class Contact:
    items: list[ContactItem]
    style: str = "contact"


@dataclass
class BulletList:
    items: list[str]
    style: str = "list_item"


@dataclass
class Row:
    """Left-hand stacked lines paired with one right-aligned line."""

    left: list[Text]
    right: Text | None = None


@dataclass
class Entry:
    header: Row
    body: list[Text | BulletList] = field(default_factory=list)
    gap: str = "role_gap"


@dataclass
class Block:
    label: str
    nodes: list[Text | Contact | BulletList | Entry] = field(default_factory=list)


@dataclass
class Page:
    scale: float
    styles: dict[str, TextStyle]
    metrics: Metrics
    header: Block
    sections: list[Block]
    title: str = ""
    width: float = PAGE_WIDTH
    height: float = PAGE_HEIGHT

    @property
    def frame_width(self) -> float:
        return self.width - 2 * self.metrics.padding_h

    @property
    def labels(self) -> list[str]:
        return [block.label for block in self.sections]


def build_page(document: ResumeDocument, scale: float = 1.0) -> Page:
    """Map the document onto a page tree at the given auto-fit scale."""
    if not 0 < scale <= 1:
        raise ValueError(f"Scale must be in (0, 1], got {scale}")

    header = Block("Header", [Text(document.name.strip(), "name")])
    if document.title.strip():
        header.nodes.append(Text(document.title.strip(), "title"))
    items = contact_items(document)
    if items:
        header.nodes.append(Contact(items))

    sections = []
    if document.summary.strip():
        sections.append(Block("Summary", [Text(document.summary.strip(), "paragraph")]))

    sections.append(Block("Skills", [Text(", ".join(skill_list(document)), "paragraph")]))
    sections.append(
        Block("Experience", [_experience_entry(entry) for entry in document.experiences])
    )

    projects = visible_projects(document)
    if projects:
        sections.append(Block("Projects", [_project_entry(project) for project in projects]))

    sections.append(
        Block("Education", [_education_entry(entry) for entry in document.education])
    )

    for section in visible_custom_sections(document):
        sections.append(_custom_block(section))

    awards = award_list(document)
    if awards:
        sections.append(Block("Awards", [BulletList(awards)]))

    return Page(
        scale=scale,
        styles=scaled_styles(scale),
        metrics=NOMINAL_METRICS.scaled(scale),
        header=header,
        sections=sections,
        title=document.name.strip(),
    )


def _experience_entry(experience: Experience) -> Entry:
    dates = experience.dates.strip()
    row = Row(
        left=[
            Text(experience.title.strip() or "Role", "role"),
            Text(experience.company.strip() or "Company", "role_detail"),
        ],
        right=Text(dates, "role_dates") if dates else None,
    )
    bullets = bullet_list(experience.bullets)
    return Entry(row, [BulletList(bullets)] if bullets else [])


def _project_entry(project: Project) -> Entry:
    link = project.link.strip()
    row = Row(
        left=[Text(project.name.strip() or "Project", "role")],
        right=Text(link, "project_link", href=normalize_link(link)) if link else None,
    )
    bullets = bullet_list(project.bullets)
    return Entry(row, [BulletList(bullets)] if bullets else [])


def _education_entry(education: Education) -> Entry:
    left = [Text(education.school.strip() or "School", "role")]
    if education.location.strip():
        left.append(Text(education.location.strip(), "role_detail"))
    year = education.year.strip()
    body = []
    if education.degree.strip():
        body.append(Text(education.degree.strip(), "paragraph"))
    return Entry(
        Row(left, Text(year, "role_dates") if year else None),
        body,
        gap="education_gap",
    )


def _custom_block(section: CustomSection) -> Block:
    block = Block(section.title.strip() or "Additional Section")
    lines = split_lines(section.content)
    if len(lines) > 1:
        block.nodes.append(BulletList(lines))
    elif lines:
        block.nodes.append(Text(lines[0], "paragraph"))
    return block


class PageDrawer:
    """Turns a page tree into reportlab flowables."""

    def __init__(self, page: Page):
        self.page = page
        self.styles = {
            name: self._paragraph_style(name, style) for name, style in page.styles.items()
        }

    def _paragraph_style(self, name: str, style: TextStyle) -> ParagraphStyle:
        return ParagraphStyle(
            name,
            fontName=FONT_BOLD if style.bold else FONT,
            fontSize=style.size,
            leading=style.size * style.line_height,
            textColor=colors.HexColor(style.color),
            spaceBefore=style.space_before,
            spaceAfter=style.space_after,
            leftIndent=style.indent,
            alignment=TA_RIGHT if style.align == "right" else TA_LEFT,
        )

    def flowables(self) -> list[Flowable]:
        story: list[Flowable] = []
        metrics = self.page.metrics

        for node in self.page.header.nodes:
            self._add_node(story, node)
        story.append(
            HRFlowable(
                width="100%",
                thickness=metrics.header_rule,
                color=colors.HexColor(RULE_COLOR),
                spaceBefore=metrics.header_padding,
                spaceAfter=metrics.header_gap,
            )
        )

        for index, block in enumerate(self.page.sections):
            if index:
                story.append(Spacer(1, metrics.section_gap))
            story.append(self._paragraph(Text(block.label, "section_title")))
            for node in block.nodes:
                self._add_node(story, node)

        # A trailing gap takes frame space without drawing anything.
        while story and isinstance(story[-1], Spacer):
            story.pop()
        return story

    def _add_node(self, story: list, node) -> None:
        if isinstance(node, Text):
            story.append(self._paragraph(node))
        elif isinstance(node, Contact):
            story.append(self._contact(node))
        elif isinstance(node, BulletList):
            story.extend(self._bullets(node))
        elif isinstance(node, Entry):
            story.append(self._row(node.header))
            for child in node.body:
                self._add_node(story, child)
            story.append(Spacer(1, getattr(self.page.metrics, node.gap)))
        else:
            raise TypeError(f"Unsupported page node: {type(node).__name__}")

    def _markup(self, text: str, style: str, href: str | None = None) -> str:
        if self.page.styles[style].uppercase:
            text = text.upper()
        markup = escape(text)
        if href:
            target = escape(href, {'"': "&quot;"})
            markup = f'<a href="{target}" color="{LINK_COLOR}">{markup}</a>'
        return markup

    def _paragraph(self, node: Text) -> Paragraph:
        return Paragraph(self._markup(node.text, node.style, node.href), self.styles[node.style])

    def _contact(self, node: Contact) -> Paragraph:
        parts = [self._markup(item.label, node.style, item.href) for item in node.items]
        return Paragraph(escape(CONTACT_SEPARATOR).join(parts), self.styles[node.style])

    def _bullets(self, node: BulletList) -> list[Paragraph]:
        return [
            Paragraph(f"• {self._markup(item, node.style)}", self.styles[node.style])
            for item in node.items
        ]

    def _row(self, row: Row) -> Flowable:
        left = [self._paragraph(text) for text in row.left]
        if row.right is None:
            return _Stack(left)

        width = self.page.frame_width
        table = Table(
            [[left, self._paragraph(row.right)]],
            colWidths=[width * 0.7, width * 0.3],
        )
        table.setStyle(
            TableStyle(
                [
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("LEFTPADDING", (0, 0), (-1, -1), 0),
                    ("RIGHTPADDING", (0, 0), (-1, -1), 0),
                    ("RIGHTPADDING", (0, 0), (0, 0), self.page.metrics.column_gap),
                    ("TOPPADDING", (0, 0), (-1, -1), 0),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 0),
                ]
            )
        )
        return table


class _Stack(Flowable):
    """Vertically stacked paragraphs treated as one unit."""

    def __init__(self, paragraphs: list[Paragraph]):
        super().__init__()
        self.paragraphs = paragraphs
        self._heights: list[float] = []

    def wrap(self, availWidth, availHeight):
        self._heights = []
        self.width = availWidth
        for index, paragraph in enumerate(self.paragraphs):
            _, height = paragraph.wrap(availWidth, availHeight)
            before = paragraph.getSpaceBefore() if index else 0
            self._heights.append(before + height)
        self.height = sum(self._heights)
        return self.width, self.height

    def draw(self):
        y = self.height
        for paragraph, height in zip(self.paragraphs, self._heights):
            y -= height
            paragraph.drawOn(self.canv, 0, y)


def measure_story(story: list[Flowable], width: float) -> float:
    """Natural height of a story laid out without pagination."""
    total = 0.0
    for flowable in story:
        _, height = flowable.wrap(width, UNBOUNDED)
        total += flowable.getSpaceBefore() + height + flowable.getSpaceAfter()
    return total


def measure_page(page: Page) -> float:
    return measure_story(PageDrawer(page).flowables(), page.frame_width)


def draw_page(page: Page, height: float | None = None) -> tuple[bytes, int]:
    """Draw the page tree onto one canvas page.

    Returns the PDF bytes and the number of flowables that did not fit.
    """
    height = height or page.height
    metrics = page.metrics
    buffer = BytesIO()

    c = canvas.Canvas(buffer, pagesize=(page.width, height))
    if page.title:
        c.setTitle(f"{page.title} - Resume")
        c.setAuthor(page.title)

    frame = Frame(
        metrics.padding_h,
        metrics.padding_bottom,
        page.frame_width,
        height - metrics.padding_top - metrics.padding_bottom,
        leftPadding=0,
        bottomPadding=0,
        rightPadding=0,
        topPadding=0,
    )
    story = PageDrawer(page).flowables()
    frame.addFromList(story, c)

    c.showPage()
    c.save()
    return buffer.getvalue(), len(story)


def render_vector(document: ResumeDocument, hints: LayoutHints) -> Artifact:
    """Render the document as a one-page vector PDF at the committed scale."""
    page = build_page(document, hints.scale)
    data, leftover = draw_page(page)

    if leftover:
        echo(
            f"{leftover} element(s) did not fit on the page at scale {hints.scale:.2f}",
            Color.WARNING,
        )
    elif hints.verbose:
        echo(f"Vector PDF drawn at scale {hints.scale:.2f}", Color.INFO)

    return Artifact(artifact_filename(document.name, ExportKind.PDF), data, PDF_MEDIA_TYPE)
