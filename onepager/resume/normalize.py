"""Turn raw editable strings into render-ready collections.

All three renderers go through these helpers so their outputs stay
content-identical.
"""

import re
from dataclasses import dataclass

from onepager.resume.models import CustomSection, Project, ResumeDocument


CONTACT_SEPARATOR = " · "
DEFAULT_SCHEME = "https://"

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_SCHEME = re.compile(r"^(?:https?://|ftp://|mailto:)", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class ContactItem:
    label: str
    href: str | None = None


def split_lines(text: str | None) -> list[str]:
    if not text:
        return []
    return [line.strip() for line in _LINE_BREAK.split(text) if line.strip()]


def split_list(text: str | None, delimiter: str = ",") -> list[str]:
    if not text:
        return []
    return [item.strip() for item in text.split(delimiter) if item.strip()]


def normalize_link(text: str | None) -> str:
    """Prefix a link with https:// unless it already carries a scheme."""
    if not text or not text.strip():
        return ""
    link = text.strip()
    if _SCHEME.match(link):
        return link
    return f"{DEFAULT_SCHEME}{link}"


def contact_items(document: ResumeDocument) -> list[ContactItem]:
    """Contact channels in fixed order: phone, email, network link, location."""
    items = []
    if document.phone.strip():
        items.append(ContactItem(document.phone.strip()))
    if document.email.strip():
        items.append(ContactItem(document.email.strip()))
    if document.linkedin.strip():
        items.append(
            ContactItem(document.linkedin.strip(), normalize_link(document.linkedin))
        )
    if document.location.strip():
        items.append(ContactItem(document.location.strip()))
    return items


def contact_line(document: ResumeDocument) -> str:
    return CONTACT_SEPARATOR.join(item.label for item in contact_items(document))


def skill_list(document: ResumeDocument) -> list[str]:
    return split_list(document.skills)


def award_list(document: ResumeDocument) -> list[str]:
    return split_lines(document.awards)


def visible_projects(document: ResumeDocument) -> list[Project]:
    """Projects with at least a name, a link or one non-blank bullet."""
    return [
        project
        for project in document.projects
        if project.name.strip() or project.link.strip() or bullet_list(project.bullets)
    ]


def visible_custom_sections(document: ResumeDocument) -> list[CustomSection]:
    return [section for section in document.custom_sections if not section.is_blank()]


def safe_filename(name: str | None, default: str = "Resume") -> str:
    """Collapse whitespace runs to underscores for use in export filenames."""
    collapsed = _WHITESPACE.sub("_", (name or "").strip())
    return collapsed or default


def bullet_list(bullets: list[str]) -> list[str]:
    """Trimmed bullets with blank entries dropped."""
    return [bullet.strip() for bullet in bullets if bullet and bullet.strip()]
